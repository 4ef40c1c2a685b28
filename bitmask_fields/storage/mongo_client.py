# ==============================================
# MongoClient
# ==============================================
#
# PURPOSE:
#   Manages the MongoDB connection and loads / saves Records as
#   documents. Documents are turned into Records through
#   Record.instantiate(), so bitmask flags are decoded on load.
#
# CLASS: MongoClient
# ------------------
#   Stateful — holds connection to MongoDB.
#
#   Constructor:
#   ------------
#   - __init__(host, port, database, user=None, password=None)
#
#   Methods:
#   --------
#   - connect() -> None
#   - disconnect() -> None
#
#   - ensure_indexes(record_class, bitmask_attribute=None) -> None
#       Index the bitmask attribute of record_class's collection.
#
#   - find(record_class, query=None) -> list[Record]
#   - find_by_flags(record_class, set_bits=0, clear_bits=0,
#                   bitmask_attribute=None) -> list[Record]
#       Uses $bitsAllSet / $bitsAllClear.
#
#   - insert(record) -> ObjectId
#       Fires before_insert, inserts, stores _id, fires after_insert.
#
#   - update(record) -> int
#       $set of dirty attributes by _id. Returns modified count.
#       RuntimeError for a record that was never inserted.
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with MongoClient(...) as db:` usage.
#
# FUNCTION:
# ---------
# - flag_filter(attribute, set_bits=0, clear_bits=0) -> dict
#
# ==============================================

from typing import Any, Dict, Optional, Type

from pymongo import MongoClient as PyMongoClient
from pymongo.errors import ConnectionFailure, OperationFailure

from bitmask_fields.config import get_config
from bitmask_fields.host.record import Record


def flag_filter(attribute: str, set_bits: int = 0, clear_bits: int = 0) -> Dict[str, Any]:
    """
    Build a MongoDB query matching documents by flag state.

    Args:
        attribute: Bitmask field name
        set_bits: Bits that must all be set
        clear_bits: Bits that must all be cleared

    Returns:
        Query dict ({} when no bits are given)
    """
    condition: Dict[str, int] = {}
    if set_bits:
        condition["$bitsAllSet"] = set_bits
    if clear_bits:
        condition["$bitsAllClear"] = clear_bits
    return {attribute: condition} if condition else {}


class MongoClient:
    def __init__(self, host, port, database, user=None, password=None):
        # Store connection params. Don't connect yet.
        self.host = host
        self.port = port
        self.database = database
        self.user = user
        self.password = password
        self.client = None

    def connect(self):
        try:
            if self.user and self.password:
                uri = f"mongodb://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"
            else:
                uri = f"mongodb://{self.host}:{self.port}/{self.database}"
            self.client = PyMongoClient(uri)
            # Test connection
            self.client.admin.command('ping')
            print("Connected to MongoDB successfully.")
        except ConnectionFailure as e:
            print(f"Could not connect to MongoDB: {e}")
            raise
        except OperationFailure as e:
            print(f"Authentication failed: {e}")
            raise

    def disconnect(self):
        if self.client:
            self.client.close()
            print("Disconnected from MongoDB.")
            self.client = None

    def _collection(self, record_class: Type[Record]):
        if not self.client:
            raise RuntimeError("Not connected to MongoDB")
        return self.client[self.database][record_class.table_name]

    def ensure_indexes(self, record_class: Type[Record], bitmask_attribute: Optional[str] = None) -> None:
        collection = self._collection(record_class)
        attribute = bitmask_attribute or get_config().bitmask.attribute
        collection.create_index(attribute, unique=False)
        print(f"Created index on '{attribute}' in '{record_class.table_name}'.")

    def find(self, record_class: Type[Record], query: Optional[Dict[str, Any]] = None) -> list[Record]:
        collection = self._collection(record_class)
        return [record_class.instantiate(doc) for doc in collection.find(query or {})]

    def find_by_flags(
        self,
        record_class: Type[Record],
        set_bits: int = 0,
        clear_bits: int = 0,
        bitmask_attribute: Optional[str] = None
    ) -> list[Record]:
        attribute = bitmask_attribute or get_config().bitmask.attribute
        return self.find(record_class, flag_filter(attribute, set_bits, clear_bits))

    def insert(self, record: Record):
        collection = self._collection(type(record))
        record.trigger(Record.EVENT_BEFORE_INSERT)

        document = record.attributes
        if document.get("_id") is None:
            document.pop("_id", None)

        result = collection.insert_one(document)
        record.set_attribute("_id", result.inserted_id)
        record.mark_clean()
        record.trigger(Record.EVENT_AFTER_INSERT)
        return result.inserted_id

    def update(self, record: Record) -> int:
        collection = self._collection(type(record))
        if record.is_new or record.get_attribute("_id") is None:
            raise RuntimeError(
                f"Cannot update a {type(record).__name__} that was never inserted; call insert() first"
            )
        changes = record.dirty_attributes()
        changes.pop("_id", None)
        if not changes:
            return 0

        result = collection.update_one(
            {"_id": record.get_attribute("_id")},
            {"$set": changes}
        )
        record.mark_clean()
        record.trigger(Record.EVENT_AFTER_UPDATE)
        return result.modified_count

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
