# ==============================================
# FlagRegistry
# ==============================================
#
# PURPOSE:
#   Per-record runtime state for bitmask fields: which bit each
#   field owns (shared, immutable) and the current boolean value
#   of each field (owned by this registry only).
#
# WHY THIS CLASS EXISTS:
#   The stored integer is the source of truth, but callers want
#   to read and write named booleans. The registry keeps a decoded
#   view of the integer and pushes every single-field write back
#   into it through its host.
#
# CLASS: FlagRegistry
# -------------------
#   Constructor:
#   ------------
#   - __init__(fields, host)
#       fields: raw configuration mapping or a prebuilt FieldSet
#       host:   anything implementing BitmaskHost
#       Values start at each field's default.
#
#   Methods:
#   --------
#   - on_load(raw_bitmask=None) -> None
#       Replace all values with decode(raw_bitmask). Reads the raw
#       value from the host when none is given.
#
#   - has(name) -> bool
#   - get(name) -> bool              (UnknownFieldError if not has(name))
#   - set(name, value) -> None       (UnknownFieldError if not has(name))
#       Stores the value, then writes set_bit(host value, bit, value)
#       back to the host.
#
#   - bitmask() -> int
#       encode() of the current values.
#
#   Properties:
#   -----------
#   - fields  → read-only mapping field_name -> bit
#   - values  → copy of field_name -> bool
#
# ==============================================

from typing import Any, Dict, Mapping, Optional, Protocol, Union

from .codec import decode, encode, set_bit
from .errors import UnknownFieldError
from .field_set import FieldSet


class BitmaskHost(Protocol):
    """Owner of the stored integer a FlagRegistry reads and writes."""

    def read_bitmask(self) -> int:
        ...

    def write_bitmask(self, value: int) -> None:
        ...


class BitmaskValue:
    """In-memory BitmaskHost holding a plain integer."""

    def __init__(self, value: int = 0):
        self.value = value

    def read_bitmask(self) -> int:
        return self.value

    def write_bitmask(self, value: int) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"BitmaskValue({self.value!r})"


class FlagRegistry:
    def __init__(
        self,
        fields: Union[FieldSet, Mapping[str, Any], None],
        host: BitmaskHost,
    ):
        self.field_set = fields if isinstance(fields, FieldSet) else FieldSet.parse(fields)
        self.host = host
        self._values: Dict[str, bool] = self.field_set.defaults()

    @property
    def fields(self) -> Mapping[str, int]:
        return self.field_set.bits

    @property
    def values(self) -> Dict[str, bool]:
        return dict(self._values)

    def on_load(self, raw_bitmask: Optional[int] = None) -> None:
        """
        Refresh every field value from the stored integer.

        Args:
            raw_bitmask: Value just loaded from storage. None means
                "read it from the host". A stored NULL counts as 0.
        """
        if raw_bitmask is None:
            raw_bitmask = self.host.read_bitmask()
        self._values = decode(int(raw_bitmask or 0), self.fields)

    def has(self, name: str) -> bool:
        return name in self.field_set

    def get(self, name: str) -> bool:
        if not self.has(name):
            raise UnknownFieldError(name)
        return self._values[name]

    def set(self, name: str, value: Any) -> None:
        """
        Update one field and write the new bitmask to the host.

        Args:
            name: Registered field name
            value: Truthy to set the field's bit, falsy to clear it
        """
        if not self.has(name):
            raise UnknownFieldError(name)
        present = bool(value)
        self._values[name] = present
        current = int(self.host.read_bitmask() or 0)
        self.host.write_bitmask(set_bit(current, self.fields[name], present))

    def bitmask(self) -> int:
        return encode(self._values, self.fields)

    def __repr__(self) -> str:
        return f"FlagRegistry(values={self._values!r})"
