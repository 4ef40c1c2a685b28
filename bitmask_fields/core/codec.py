# ==============================================
# Bitmask Codec
# ==============================================
#
# PURPOSE:
#   Pure functions that map between a set of named boolean
#   flags and the single integer bitmask that stores them.
#
# FUNCTIONS:
# ----------
# - decode(bitmask: int, fields: dict[str, int]) -> dict[str, bool]
#     One boolean per field: True iff (bitmask & bit) != 0.
#
# - encode(values: dict[str, bool], fields: dict[str, int]) -> int
#     OR of the bit of every field whose value is True.
#     Names that are not in `fields` are ignored.
#
# - set_bit(bitmask: int, bit: int, present: bool) -> int
#     Set (present=True) or clear (present=False) one bit.
#
# NOTES:
# ------
#   Bits are caller-assigned and may overlap. A composite bit
#   (e.g. 0b110) is set and cleared as a whole.
#
#   encode(decode(b, f), f) only keeps the bits covered by f.
#   Any other bit in b is dropped on the round trip.
#
# ==============================================

from typing import Dict, Mapping


def decode(bitmask: int, fields: Mapping[str, int]) -> Dict[str, bool]:
    """
    Parse a bitmask into one boolean per field.

    Args:
        bitmask: Stored integer value
        fields: Mapping field_name -> bit

    Returns:
        Mapping field_name -> True if the field's bit is set
    """
    return {name: bool(bitmask & bit) for name, bit in fields.items()}


def encode(values: Mapping[str, bool], fields: Mapping[str, int]) -> int:
    """
    Build a bitmask from field values.

    Args:
        values: Mapping field_name -> bool
        fields: Mapping field_name -> bit

    Returns:
        The bitmask (0 when no known field is True)
    """
    bitmask = 0
    for name, checked in values.items():
        if checked and name in fields:
            bitmask |= fields[name]
    return bitmask


def set_bit(bitmask: int, bit: int, present: bool) -> int:
    """Add or remove `bit` from `bitmask`."""
    return bitmask | bit if present else bitmask & ~bit
