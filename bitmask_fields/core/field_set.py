# ==============================================
# FieldSet
# ==============================================
#
# PURPOSE:
#   Parse the bitmask field configuration once and hold it as
#   an immutable set of field definitions.
#
# CONFIGURATION FORMAT:
# ---------------------
#   {
#       "ban":    (OPT_BAN, True),   # default True
#       "admin":  [OPT_ADMIN, False],# default False
#       "notify": [OPT_NOTIFY],      # default False
#       "verify": OPT_VERIFY,        # bare bit, default False
#   }
#
# CLASSES:
# --------
# - FieldDefinition (frozen dataclass)
#     name: str
#     bit: int
#     default: bool
#
# - FieldSet
#     Ordered, read-only collection of FieldDefinitions.
#     Safe to share between any number of FlagRegistry instances
#     since nothing in it can change after parse().
#
# ==============================================

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import ConfigurationError


@dataclass(frozen=True)
class FieldDefinition:
    """A single named flag and the bit that stores it."""
    name: str
    bit: int
    default: bool = False


class FieldSet:
    """
    Immutable collection of bitmask field definitions.

    Build it with FieldSet.parse(config) rather than the constructor
    when starting from a raw configuration mapping.
    """

    def __init__(self, definitions: List[FieldDefinition]):
        self._definitions: Tuple[FieldDefinition, ...] = tuple(definitions)
        self._bits = MappingProxyType(
            {definition.name: definition.bit for definition in self._definitions}
        )

    @classmethod
    def parse(cls, fields: Optional[Mapping[str, Any]]) -> "FieldSet":
        """
        Build a FieldSet from a configuration mapping.

        Args:
            fields: Mapping field_name -> bit, or field_name -> (bit, default)

        Returns:
            FieldSet with one definition per entry, in configuration order

        Raises:
            ConfigurationError: if `fields` is missing or empty, if a pair
                entry has no bit, or if a bit is not a positive integer
                (0, negatives, bools and non-ints; a 0 mask could never be set)
        """
        if not fields:
            raise ConfigurationError('The "fields" property must be set.')

        definitions = []
        for name, spec in fields.items():
            if isinstance(spec, (list, tuple)):
                if not spec or spec[0] is None:
                    raise ConfigurationError(f'The "{name}" field MUST have bit mask.')
                bit = spec[0]
                default = bool(spec[1]) if len(spec) > 1 else False
            else:
                bit = spec
                default = False

            # bool is an int subclass; True/False are never meant as masks
            if isinstance(bit, bool) or not isinstance(bit, int) or bit <= 0:
                raise ConfigurationError(
                    f'The "{name}" field bit mask must be a positive integer, got {bit!r}.'
                )
            definitions.append(FieldDefinition(name=name, bit=bit, default=default))

        return cls(definitions)

    @property
    def bits(self) -> Mapping[str, int]:
        """Read-only mapping field_name -> bit."""
        return self._bits

    @property
    def names(self) -> List[str]:
        return [definition.name for definition in self._definitions]

    def defaults(self) -> Dict[str, bool]:
        """Fresh mapping field_name -> default value."""
        return {definition.name: definition.default for definition in self._definitions}

    def get(self, name: str) -> Optional[FieldDefinition]:
        for definition in self._definitions:
            if definition.name == name:
                return definition
        return None

    def __contains__(self, name: object) -> bool:
        return name in self._bits

    def __iter__(self) -> Iterator[FieldDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __repr__(self) -> str:
        return f"FieldSet({dict(self._bits)!r})"
