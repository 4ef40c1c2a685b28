# ==============================================
# BitmaskBehavior
# ==============================================
#
# PURPOSE:
#   Attach bitmask-backed boolean fields to a Record.
#
#   class User(Record):
#       columns = {"id": "...", "options": "INT UNSIGNED NOT NULL DEFAULT 0"}
#
#       def behaviors(self):
#           return {
#               "bitmask": BitmaskBehavior({
#                   "ban": (OPT_BAN, True),
#                   "admin": OPT_ADMIN,
#               }),
#           }
#
#   user = User.instantiate({"id": 1, "options": 3})
#   user.ban            → True
#   user.admin = False  → user.options == 1
#
# HOW IT CONNECTS:
#   - Owns one FlagRegistry per record and acts as its BitmaskHost,
#     reading and writing owner.<bitmask_attribute>.
#   - EVENT_AFTER_FIND   → registry.on_load(stored integer)
#   - EVENT_BEFORE_INSERT → store the default flags if the bitmask
#     column was never set
#   - can_get_property / can_set_property tell the Record which
#     names belong to this behavior.
#
# ==============================================

from typing import Any, Callable, Dict, Mapping, Optional, Union

from bitmask_fields.config import get_config
from bitmask_fields.core.field_set import FieldSet
from bitmask_fields.core.registry import FlagRegistry
from bitmask_fields.host.record import Record


class BitmaskBehavior:
    def __init__(
        self,
        fields: Union[FieldSet, Mapping[str, Any], None],
        bitmask_attribute: Optional[str] = None,
    ):
        """
        Args:
            fields: Field configuration (name -> bit or (bit, default)),
                or a FieldSet shared between behaviors
            bitmask_attribute: Record attribute storing the bitmask.
                Defaults to config.bitmask.attribute ("options").

        Raises:
            ConfigurationError: if the field configuration is invalid
        """
        self.field_set = fields if isinstance(fields, FieldSet) else FieldSet.parse(fields)
        self.bitmask_attribute = bitmask_attribute or get_config().bitmask.attribute
        self.owner: Optional[Record] = None
        self.registry: Optional[FlagRegistry] = None

    def events(self) -> Dict[str, Callable[[], None]]:
        return {
            Record.EVENT_AFTER_FIND: self.after_find,
            Record.EVENT_BEFORE_INSERT: self.before_insert,
        }

    def attach(self, owner: Record) -> None:
        if self.owner is not None and self.owner is not owner:
            raise RuntimeError("BitmaskBehavior is already attached to another record")
        self.owner = owner
        self.registry = FlagRegistry(self.field_set, self)
        for event, handler in self.events().items():
            owner.on(event, handler)

    # --- BitmaskHost ---

    def read_bitmask(self) -> int:
        value = self.owner.get_attribute(self.bitmask_attribute)
        if value is None:
            # Never stored: the default flags are the current state
            return self.registry.bitmask()
        return int(value)

    def write_bitmask(self, value: int) -> None:
        self.owner.set_attribute(self.bitmask_attribute, value)

    # --- Event handlers ---

    def after_find(self) -> None:
        # A NULL column loads as 0, not as the defaults
        self.registry.on_load(int(self.owner.get_attribute(self.bitmask_attribute) or 0))

    def before_insert(self) -> None:
        if self.owner.get_attribute(self.bitmask_attribute) is None:
            self.write_bitmask(self.registry.bitmask())

    # --- Properties ---

    def can_get_property(self, name: str) -> bool:
        return self.registry is not None and self.registry.has(name)

    def can_set_property(self, name: str) -> bool:
        return self.registry is not None and self.registry.has(name)

    def get_property(self, name: str) -> bool:
        return self.registry.get(name)

    def set_property(self, name: str, value: Any) -> None:
        self.registry.set(name, value)

    @property
    def bitmask_fields(self) -> Mapping[str, int]:
        return self.field_set.bits

    @property
    def bitmask_values(self) -> Dict[str, bool]:
        return self.registry.values if self.registry is not None else self.field_set.defaults()
