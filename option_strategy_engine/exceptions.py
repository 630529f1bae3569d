"""Project-wide exception types."""


class OptionStrategyError(Exception):
    """Base exception for all engine errors."""


class InvalidInputError(OptionStrategyError):
    """Raised when market inputs or strike quotes fail validation."""


class InsufficientStrikesError(OptionStrategyError):
    """Raised when the strike ladder is shorter than a family's leg count."""

    def __init__(self, family: str, required: int, available: int) -> None:
        self.family = family
        self.required = required
        self.available = available
        super().__init__(f"{family} needs at least {required} strikes; ladder has {available}")


class PricingError(OptionStrategyError):
    """Raised when option pricing fails or inputs are invalid."""


class ConfigError(OptionStrategyError):
    """Raised when configuration is missing or malformed."""


class ConfigValidationError(ConfigError):
    """Raised when validation fails for supplied configuration."""


class SchemaError(OptionStrategyError):
    """Raised when a strike ladder file does not match the expected schema."""
