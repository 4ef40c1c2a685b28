# ==============================================
# Errors
# ==============================================
#
# - ConfigurationError  → bad field definitions (fatal, raised at setup)
# - UnknownFieldError   → name is not a registered bitmask field
#
# ==============================================


class ConfigurationError(ValueError):
    """Raised when bitmask field definitions are missing or malformed."""


class UnknownFieldError(KeyError):
    """Raised when a flag registry is asked for a field it does not own."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Unknown bitmask field '{self.name}'"
