# ==============================================
# CORE: Bitmask codec and flag registry
# ==============================================
#
# Modules:
# --------
# - codec.py      → decode / encode / set_bit (pure functions)
# - field_set.py  → FieldDefinition, FieldSet (configuration parsing)
# - registry.py   → FlagRegistry, BitmaskHost, BitmaskValue
# - errors.py     → ConfigurationError, UnknownFieldError
#
# ==============================================

from .codec import decode, encode, set_bit
from .errors import ConfigurationError, UnknownFieldError
from .field_set import FieldDefinition, FieldSet
from .registry import BitmaskHost, BitmaskValue, FlagRegistry

__all__ = [
    "decode",
    "encode",
    "set_bit",
    "ConfigurationError",
    "UnknownFieldError",
    "FieldDefinition",
    "FieldSet",
    "BitmaskHost",
    "BitmaskValue",
    "FlagRegistry",
]
