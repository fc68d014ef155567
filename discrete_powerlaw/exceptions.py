"""Project-wide exception types."""

class PowerLawError(Exception):
    """Base exception for all discrete power-law errors."""


class DataSourceError(PowerLawError):
    """Raised when sample loading or parsing fails."""


class InsufficientDataError(DataSourceError):
    """Raised when a loaded sample holds no usable values."""


class SampleParseError(DataSourceError):
    """Raised when a sample token cannot be read as an integer."""


class DistributionFitError(PowerLawError):
    """Raised when a model is used in a way its fit state does not allow."""


class InvalidModelError(DistributionFitError):
    """Raised by ``require_valid`` when the model state is not VALID."""


class GoodnessOfFitError(PowerLawError):
    """Raised when a bootstrap run cannot be set up."""


class ConfigError(PowerLawError):
    """Raised when configuration is missing or malformed."""


class ConfigValidationError(ConfigError):
    """Raised when validation fails for supplied configuration."""


class ConfigConflictError(ConfigError):
    """Raised when incompatible configuration options are provided."""
