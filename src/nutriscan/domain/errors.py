"""Domain error types."""


class NutriScanError(ValueError):
    """Base error for contract violations raised by the domain core."""


class RecipeError(NutriScanError):
    """Raised when a recipe calculation receives structurally invalid input."""


class ProfileValidationError(NutriScanError):
    """Raised when body metrics are not positive numbers."""


class ProfileNotFoundError(NutriScanError):
    """Raised when a profile is required but has not been created yet."""


class IntakeError(NutriScanError):
    """Raised when a food log entry cannot be changed as requested."""
