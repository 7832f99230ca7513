"""fleetdesk - Client-side state core for a fleet management console."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("fleetdesk")
except PackageNotFoundError:
    __version__ = "0+local"
from fleetdesk.avatar import AvatarIngestor
from fleetdesk.client import FleetClient
from fleetdesk.config import FleetConfig
from fleetdesk.console import CommandResult, ConsoleSession, Notice, NoticeLevel
from fleetdesk.editing import DraftEditor
from fleetdesk.exceptions import (
    AvatarError,
    AvatarTooLargeError,
    CommitInProgressError,
    DraftStateError,
    DuplicateVehicleError,
    FleetAuthenticationError,
    FleetConfigError,
    FleetError,
    FleetValidationError,
    InvalidAvatarTypeError,
    InvalidEmailError,
    InvalidFieldError,
    InvalidNumberError,
    MissingFieldError,
    NavigationError,
    PersistenceError,
    SessionClosedError,
    VehicleNotFoundError,
)
from fleetdesk.models import (
    AuthToken,
    FleetAggregates,
    Profile,
    ProfileDraft,
    Vehicle,
    VehicleDraft,
    VehicleStatus,
)
from fleetdesk.repositories import InMemoryVehicleRepository
from fleetdesk.session import AuthSession
from fleetdesk.state.store import VehicleStore
from fleetdesk.state.view import Screen, ViewController, ViewState
from fleetdesk.validation import validate_profile_draft, validate_vehicle_draft

__all__ = [
    "__version__",
    "AuthSession",
    "AuthToken",
    "AvatarError",
    "AvatarIngestor",
    "AvatarTooLargeError",
    "CommandResult",
    "CommitInProgressError",
    "ConsoleSession",
    "DraftEditor",
    "DraftStateError",
    "DuplicateVehicleError",
    "FleetAggregates",
    "FleetAuthenticationError",
    "FleetClient",
    "FleetConfig",
    "FleetConfigError",
    "FleetError",
    "FleetValidationError",
    "InMemoryVehicleRepository",
    "InvalidAvatarTypeError",
    "InvalidEmailError",
    "InvalidFieldError",
    "InvalidNumberError",
    "MissingFieldError",
    "NavigationError",
    "Notice",
    "NoticeLevel",
    "PersistenceError",
    "Profile",
    "ProfileDraft",
    "Screen",
    "SessionClosedError",
    "Vehicle",
    "VehicleDraft",
    "VehicleNotFoundError",
    "VehicleStatus",
    "VehicleStore",
    "ViewController",
    "ViewState",
    "validate_profile_draft",
    "validate_vehicle_draft",
]
