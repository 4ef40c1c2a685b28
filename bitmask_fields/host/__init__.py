# ==============================================
# HOST: Records and the bitmask behavior
# ==============================================
#
# This package provides the persistence object that owns the
# bitmask column and the behavior that exposes its flags.
#
# Modules:
# --------
# - record.py    → Record (attributes, events, property interception)
# - behavior.py  → BitmaskBehavior (Record <-> FlagRegistry)
#
# ==============================================

from .record import Record
from .behavior import BitmaskBehavior

__all__ = [
    "Record",
    "BitmaskBehavior",
]
