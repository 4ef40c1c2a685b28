# ==============================================
# Bitmask Fields
# ==============================================
#
# Boolean virtual fields stored as bits of one integer column.
#
# Package Structure:
#
# bitmask_fields/
# ├── core/        # Codec, field configuration, flag registry
# ├── host/        # Record host object + BitmaskBehavior
# ├── storage/     # Load / save Records in MySQL and MongoDB
# └── config.py    # Configuration management
#
# ==============================================

from bitmask_fields.core import (
    BitmaskHost,
    BitmaskValue,
    ConfigurationError,
    FieldDefinition,
    FieldSet,
    FlagRegistry,
    UnknownFieldError,
    decode,
    encode,
    set_bit,
)
from bitmask_fields.host import BitmaskBehavior, Record

__version__ = "0.1.0"

__all__ = [
    "BitmaskBehavior",
    "BitmaskHost",
    "BitmaskValue",
    "ConfigurationError",
    "FieldDefinition",
    "FieldSet",
    "FlagRegistry",
    "Record",
    "UnknownFieldError",
    "decode",
    "encode",
    "set_bit",
]
