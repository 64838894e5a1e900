class ControlError(Exception):
    """Base exception for all intersection control errors."""
    pass

class InvalidPhaseError(ControlError, ValueError):
    """Raised when a value is not one of red, yellow or green."""
    pass

class ControllerClosedError(ControlError):
    """Raised when a command reaches a controller that has been closed."""
    pass

class ConfigurationError(ControlError):
    """Raised when configuration is invalid."""
    pass
