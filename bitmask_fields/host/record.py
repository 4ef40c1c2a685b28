# ==============================================
# Record
# ==============================================
#
# PURPOSE:
#   A minimal persistence object: a bag of column attributes
#   with lifecycle events and pluggable behaviors that can add
#   virtual properties.
#
# WHY THIS CLASS EXISTS:
#   Bitmask fields are virtual properties layered on top of one
#   integer column. Something has to own that column, announce
#   when a row has been loaded, and route unknown property names
#   to the behavior that knows them. That is this class.
#
# CLASS: Record
# -------------
#   Class attributes (override in subclasses):
#   ------------------------------------------
#   - table_name: str          → MySQL table / MongoDB collection
#   - columns: dict[str, str]  → column name -> SQL column definition
#   - primary_key: str         → default "id"
#
#   Constructor:
#   ------------
#   - __init__(attributes: dict | None = None)
#       Every declared column starts as None. Behaviors returned
#       by behaviors() are attached immediately. Given attributes
#       that are not columns go through the behaviors, so
#       User({"admin": True}) sets the flag, not a stray attribute.
#
#   Lifecycle:
#   ----------
#   - instantiate(row) (classmethod)
#       Build a record from a stored row, mark it clean, then fire
#       EVENT_AFTER_FIND once.
#   - on(event, handler) / trigger(event)
#
#   Attribute access:
#   -----------------
#   - record.<name> reads a column/attribute first, then asks each
#     behavior (can_get_property / get_property).
#   - record.<name> = value writes a column/attribute first, then
#     asks each behavior (can_set_property / set_property), and
#     otherwise creates a new attribute (a typo is not caught here).
#     Names already stored as attributes, such as "_id", always
#     write the attribute.
#   - Unknown names raise AttributeError.
#
#   Dirty tracking:
#   ---------------
#   - dirty_attributes() → attributes changed since load / last save
#   - mark_clean()       → snapshot current attributes
#   - is_new             → True until loaded or saved once
#
# ==============================================

from typing import Any, Callable, Dict, Optional


class Record:
    EVENT_AFTER_FIND = "after_find"
    EVENT_BEFORE_INSERT = "before_insert"
    EVENT_AFTER_INSERT = "after_insert"
    EVENT_AFTER_UPDATE = "after_update"

    table_name: str = "records"
    columns: Dict[str, str] = {}
    primary_key: str = "id"

    def __init__(self, attributes: Optional[Dict[str, Any]] = None):
        # Internal state bypasses __setattr__ so it never lands in _attributes
        object.__setattr__(self, "_attributes", {name: None for name in self.columns})
        object.__setattr__(self, "_old_attributes", None)
        object.__setattr__(self, "_handlers", {})
        object.__setattr__(self, "_behaviors", {})

        # Columns first, so flag values below apply on top of a given bitmask
        pending = dict(attributes or {})
        for name in list(pending):
            if name in self._attributes:
                self._attributes[name] = pending.pop(name)

        for name, behavior in self.behaviors().items():
            self.attach_behavior(name, behavior)

        for name, value in pending.items():
            behavior = self._behavior_for(name)
            if behavior is not None:
                behavior.set_property(name, value)
            else:
                self._attributes[name] = value

    def behaviors(self) -> Dict[str, Any]:
        """Behaviors to attach to every new instance. Override in subclasses."""
        return {}

    @classmethod
    def instantiate(cls, row: Dict[str, Any]) -> "Record":
        """
        Create a record from stored data and fire the load event.

        Args:
            row: Column values as returned by the database

        Returns:
            A clean, non-new record whose behaviors have seen after_find
        """
        record = cls(row)
        record.mark_clean()
        record.trigger(cls.EVENT_AFTER_FIND)
        return record

    # --- Behaviors ---

    def attach_behavior(self, name: str, behavior: Any) -> None:
        behavior.attach(self)
        self._behaviors[name] = behavior

    def get_behavior(self, name: str) -> Optional[Any]:
        return self._behaviors.get(name)

    # --- Events ---

    def on(self, event: str, handler: Callable[[], None]) -> None:
        self._handlers.setdefault(event, []).append(handler)

    def trigger(self, event: str) -> None:
        for handler in list(self._handlers.get(event, [])):
            handler()

    # --- Attributes ---

    def has_attribute(self, name: str) -> bool:
        return name in self._attributes

    def get_attribute(self, name: str) -> Any:
        return self._attributes.get(name)

    def set_attribute(self, name: str, value: Any) -> None:
        self._attributes[name] = value

    @property
    def attributes(self) -> Dict[str, Any]:
        return dict(self._attributes)

    @property
    def is_new(self) -> bool:
        return self._old_attributes is None

    def mark_clean(self) -> None:
        object.__setattr__(self, "_old_attributes", dict(self._attributes))

    def dirty_attributes(self) -> Dict[str, Any]:
        """
        Attributes whose value changed since the record was loaded or saved.

        Returns:
            Mapping name -> new value (all attributes for a new record)
        """
        if self._old_attributes is None:
            return dict(self._attributes)
        return {
            name: value
            for name, value in self._attributes.items()
            if name not in self._old_attributes or self._old_attributes[name] != value
        }

    # --- Property interception ---

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails
        if name.startswith("__"):
            raise AttributeError(name)
        attributes = self.__dict__.get("_attributes")
        if attributes is None:
            raise AttributeError(name)
        if name in attributes:
            return attributes[name]
        for behavior in self.__dict__["_behaviors"].values():
            if behavior.can_get_property(name):
                return behavior.get_property(name)
        raise AttributeError(
            f"'{type(self).__name__}' record has no attribute or field '{name}'"
        )

    def _behavior_for(self, name: str) -> Optional[Any]:
        for behavior in self._behaviors.values():
            if behavior.can_set_property(name):
                return behavior
        return None

    def __setattr__(self, name: str, value: Any) -> None:
        # Stored attributes win, including underscored ones such as "_id"
        attributes = self.__dict__.get("_attributes")
        if attributes is not None and name in attributes:
            attributes[name] = value
            return
        if name.startswith("_") or hasattr(type(self), name):
            object.__setattr__(self, name, value)
            return
        behavior = self._behavior_for(name)
        if behavior is not None:
            behavior.set_property(name, value)
            return
        # Unknown names become new attributes; a misspelt field name only
        # surfaces when storage rejects the column
        self._attributes[name] = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._attributes!r})"
