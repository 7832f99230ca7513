"""Internal constants shared across the library."""

import re

USER_AGENT = "fleetdesk/1.0"

# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

FUEL_LEVEL_MIN = 0
FUEL_LEVEL_MAX = 100
MILEAGE_MIN = 0

# ------------------------------------------------------------------
# Avatar ingestion
# ------------------------------------------------------------------

MAX_AVATAR_BYTES = 5 * 1024 * 1024  # 5_242_880
IMAGE_CONTENT_PREFIX = "image/"

# ------------------------------------------------------------------
# REST backend defaults
# ------------------------------------------------------------------

DEFAULT_VEHICLES_TABLE = "vehicles"
DEFAULT_PROFILES_TABLE = "profiles"
DEFAULT_AVATAR_BUCKET = "avatars"

REST_PREFIX = "/rest/v1"
AUTH_PREFIX = "/auth/v1"
STORAGE_PREFIX = "/storage/v1"

# ------------------------------------------------------------------
# Sample fleet served by the in-memory repository
# ------------------------------------------------------------------

SAMPLE_VEHICLES: tuple[dict[str, object], ...] = (
    {
        "id": "1",
        "name": "Fleet Vehicle 001",
        "licensePlate": "ABC-123",
        "model": "Ford Transit",
        "status": "active",
        "location": "Downtown District",
        "fuelLevel": 75,
        "mileage": 45230,
        "lastMaintenance": "2024-01-15",
    },
    {
        "id": "2",
        "name": "Fleet Vehicle 002",
        "licensePlate": "XYZ-456",
        "model": "Mercedes Sprinter",
        "status": "maintenance",
        "location": "Service Center",
        "fuelLevel": 20,
        "mileage": 67890,
        "lastMaintenance": "2024-01-10",
    },
    {
        "id": "3",
        "name": "Fleet Vehicle 003",
        "licensePlate": "DEF-789",
        "model": "Iveco Daily",
        "status": "idle",
        "location": "Main Depot",
        "fuelLevel": 90,
        "mileage": 23456,
        "lastMaintenance": "2024-01-20",
    },
)
