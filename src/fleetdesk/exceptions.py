"""Custom exception hierarchy for fleetdesk."""

from __future__ import annotations


class FleetError(Exception):
    """Base exception for all fleetdesk errors."""


class FleetConfigError(FleetError):
    """Invalid or missing configuration."""


class FleetValidationError(FleetError):
    """A draft failed local validation before any persistence call."""

    def __init__(self, message: str, *, field: str = "") -> None:
        self.field = field
        super().__init__(message)


class MissingFieldError(FleetValidationError):
    """A required field is empty after trimming."""


class InvalidEmailError(FleetValidationError):
    """The email address does not look like ``local@domain.tld``."""


class InvalidNumberError(FleetValidationError):
    """A numeric field is outside its allowed range (strict mode only)."""


class InvalidFieldError(FleetValidationError):
    """A field holds a value that cannot be interpreted (bad enum, bad date)."""


class AvatarError(FleetError):
    """Uploaded avatar image was rejected."""


class InvalidAvatarTypeError(AvatarError):
    """Content type is not an ``image/*`` type."""

    def __init__(self, message: str, *, content_type: str = "") -> None:
        self.content_type = content_type
        super().__init__(message)


class AvatarTooLargeError(AvatarError):
    """Image exceeds the configured byte limit."""

    def __init__(self, message: str, *, size: int = 0, limit: int = 0) -> None:
        self.size = size
        self.limit = limit
        super().__init__(message)


class VehicleNotFoundError(FleetError):
    """No vehicle with the requested id exists in the store."""

    def __init__(self, message: str, *, vehicle_id: str = "") -> None:
        self.vehicle_id = vehicle_id
        super().__init__(message)


class DuplicateVehicleError(FleetError):
    """A loaded collection contained the same vehicle id twice."""

    def __init__(self, message: str, *, vehicle_id: str = "") -> None:
        self.vehicle_id = vehicle_id
        super().__init__(message)


class NavigationError(FleetError):
    """Requested screen is unknown or cannot be selected as a tab."""

    def __init__(self, message: str, *, screen: str = "") -> None:
        self.screen = screen
        super().__init__(message)


class DraftStateError(FleetError):
    """Draft operation called in the wrong editor state (e.g. edit without begin)."""


class CommitInProgressError(DraftStateError):
    """A commit for this draft is already in flight.

    Raised instead of issuing a second persistence call so that a double
    submit never creates duplicate records.
    """


class PersistenceError(FleetError):
    """A collaborator call failed (network, non-2xx, invalid JSON).

    The draft that triggered the call is kept so the user can retry.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class FleetAuthenticationError(PersistenceError):
    """Sign-in failed or the access token was rejected."""


class SessionClosedError(FleetError):
    """Console command issued after sign-out/teardown."""
