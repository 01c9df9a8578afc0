
class ConfigurationError(RuntimeError):
    """Raised when a required configuration value is missing."""

    def __init__(self, key: str) -> None:
        super().__init__(f"{key} is not configured")
        self.key = key


class InvalidTokenError(PermissionError):
    """Raised when an action link token does not validate for its appointment."""
    pass


class MissingParametersError(ValueError):
    """Raised when a respond request omits the action or the token."""
    pass


class InvalidActionError(ValueError):
    """Raised when a respond request names an unknown action."""
    pass


class AppointmentNotFoundError(LookupError):
    pass


class AppointmentNotPendingError(RuntimeError):
    """Raised when an action targets an appointment that is no longer pending."""

    def __init__(self, appointment_id: str, current_status: str) -> None:
        super().__init__(f"Appointment {appointment_id} is no longer pending")
        self.appointment_id = appointment_id
        self.current_status = current_status


class BackendUnavailableError(RuntimeError):
    """Raised when the managed backend fails (timeouts, network errors, 5xx)."""
    pass
