# ==============================================
# MySQLClient
# ==============================================
#
# PURPOSE:
#   Manages the MySQL connection and loads / saves Records.
#   Loading a row always goes through Record.instantiate(), so
#   every attached BitmaskBehavior decodes its flags right after
#   the row arrives.
#
# CLASS: MySQLClient
# ------------------
#   Stateful — holds connection to MySQL.
#
#   Constructor:
#   ------------
#   - __init__(host, port, user, password, database)
#       Store connection params. Don't connect yet.
#
#   Methods:
#   --------
#   - connect() -> None
#       Establish connection. Create database if it doesn't exist.
#
#   - disconnect() -> None
#
#   - ensure_table(record_class) -> None
#       CREATE TABLE from record_class.columns, or ALTER TABLE to
#       add any declared column the table is missing.
#
#   - find_all(record_class, where=None, params=None) -> list[Record]
#   - find_by_flags(record_class, set_bits=0, clear_bits=0,
#                   bitmask_attribute=None) -> list[Record]
#       Rows whose bitmask has every bit of set_bits set and every
#       bit of clear_bits cleared.
#
#   - insert(record) -> Any
#       Fires before_insert, INSERTs, stores the auto-increment id,
#       fires after_insert. Returns the primary key value.
#
#   - update(record) -> int
#       UPDATEs dirty columns only, by primary key. Fires
#       after_update. Returns affected row count. RuntimeError for
#       a record that was never inserted.
#
#   - execute(query, params=None) -> int
#   - fetch_all(query, params=None) -> list[dict]
#
#   Context Manager:
#   ----------------
#   - __enter__ / __exit__ for `with MySQLClient(...) as db:` usage.
#
# FUNCTION:
# ---------
# - flag_condition(attribute, set_bits=0, clear_bits=0) -> (str, tuple)
#     WHERE fragment + params for a bitmask flag query.
#
# ==============================================

from typing import Any, List, Optional, Tuple, Type, cast

import pymysql
import pymysql.cursors

from bitmask_fields.config import get_config
from bitmask_fields.host.record import Record


def flag_condition(attribute: str, set_bits: int = 0, clear_bits: int = 0) -> Tuple[str, tuple]:
    """
    Build a WHERE fragment matching rows by flag state.

    Args:
        attribute: Bitmask column name
        set_bits: Bits that must all be set
        clear_bits: Bits that must all be cleared

    Returns:
        (sql_fragment, params); "1 = 1" when no bits are given
    """
    parts = []
    params: List[int] = []
    if set_bits:
        parts.append(f"(`{attribute}` & %s) = %s")
        params.extend([set_bits, set_bits])
    if clear_bits:
        parts.append(f"(`{attribute}` & %s) = 0")
        params.append(clear_bits)
    return " AND ".join(parts) or "1 = 1", tuple(params)


class MySQLClient:
    def __init__(self, host, port, user, password, database):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.connection = None

    def connect(self) -> None:
        # Establish connection to MySQL, create database if it doesn't exist
        self.connection = pymysql.connect(
            host=self.host,
            port=self.port,
            user=self.user,
            password=self.password,
        )
        cursor = self.connection.cursor()
        cursor.execute(f"CREATE DATABASE IF NOT EXISTS `{self.database}`")
        cursor.execute(f"USE `{self.database}`")
        cursor.close()
        print(f"Connected to MySQL database '{self.database}'.")

    def disconnect(self) -> None:
        if self.connection:
            self.connection.close()
            self.connection = None
            print("Disconnected from MySQL.")

    def _require_connection(self):
        if self.connection is None:
            raise RuntimeError("Not connected to MySQL")
        return self.connection

    def ensure_table(self, record_class: Type[Record]) -> None:
        # Create table if it doesn't exist, or ALTER TABLE to add new columns
        connection = self._require_connection()
        table_name = record_class.table_name
        cursor = connection.cursor()
        cursor.execute(
            "SELECT COUNT(*) FROM INFORMATION_SCHEMA.TABLES "
            "WHERE TABLE_SCHEMA = %s AND TABLE_NAME = %s",
            (self.database, table_name)
        )
        cf = cursor.fetchone()
        if cf is None:
            raise RuntimeError("COUNT query returned no rows")
        if cf[0] == 0:
            columns_def = ", ".join(
                f"`{column}` {definition}" for column, definition in record_class.columns.items()
            )
            cursor.execute(f"CREATE TABLE `{table_name}` ({columns_def})")
            print(f"Created table '{table_name}'.")
        else:
            cursor.execute(
                "SELECT COLUMN_NAME FROM INFORMATION_SCHEMA.COLUMNS "
                "WHERE TABLE_SCHEMA = %s AND TABLE_NAME = %s",
                (self.database, table_name)
            )
            rows = cast(List[Tuple[Any, ...]], cursor.fetchall())
            existing_columns = set(row[0] for row in rows)
            for column, definition in record_class.columns.items():
                if column not in existing_columns:
                    cursor.execute(f"ALTER TABLE `{table_name}` ADD COLUMN `{column}` {definition}")
                    print(f"Added column '{column}' to '{table_name}'.")
        connection.commit()
        cursor.close()

    def execute(self, query: str, params: tuple | None = None) -> int:
        # Execute a raw SQL query, return affected row count
        connection = self._require_connection()
        cursor = connection.cursor()
        if params:
            affected = cursor.execute(query, params)
        else:
            affected = cursor.execute(query)
        connection.commit()
        cursor.close()
        return affected

    def fetch_all(self, query: str, params: tuple | None = None) -> list[dict]:
        # Execute SELECT and return rows as dicts
        connection = self._require_connection()
        cursor = connection.cursor(pymysql.cursors.DictCursor)
        if params:
            cursor.execute(query, params)
        else:
            cursor.execute(query)
        results = cast(list[dict[str, Any]], cursor.fetchall())
        cursor.close()
        return results

    def find_all(
        self,
        record_class: Type[Record],
        where: Optional[str] = None,
        params: tuple | None = None
    ) -> list[Record]:
        query = f"SELECT * FROM `{record_class.table_name}`"
        if where:
            query = f"{query} WHERE {where}"
        return [record_class.instantiate(row) for row in self.fetch_all(query, params)]

    def find_by_flags(
        self,
        record_class: Type[Record],
        set_bits: int = 0,
        clear_bits: int = 0,
        bitmask_attribute: Optional[str] = None
    ) -> list[Record]:
        attribute = bitmask_attribute or get_config().bitmask.attribute
        where, params = flag_condition(attribute, set_bits, clear_bits)
        return self.find_all(record_class, where, params)

    def insert(self, record: Record) -> Any:
        connection = self._require_connection()
        record.trigger(Record.EVENT_BEFORE_INSERT)

        primary_key = record.primary_key
        values = record.attributes
        if values.get(primary_key) is None:
            # Let AUTO_INCREMENT assign it
            values.pop(primary_key, None)

        columns = list(values.keys())
        column_names = ", ".join(f"`{column}`" for column in columns)
        placeholders = ", ".join(["%s"] * len(columns))
        query = f"INSERT INTO `{record.table_name}` ({column_names}) VALUES ({placeholders})"

        cursor = connection.cursor()
        try:
            cursor.execute(query, tuple(values.values()))
            connection.commit()
            inserted_id = cursor.lastrowid
        except pymysql.MySQLError:
            connection.rollback()
            raise
        finally:
            cursor.close()

        if record.get_attribute(primary_key) is None:
            record.set_attribute(primary_key, inserted_id)
        record.mark_clean()
        record.trigger(Record.EVENT_AFTER_INSERT)
        return record.get_attribute(primary_key)

    def update(self, record: Record) -> int:
        connection = self._require_connection()
        primary_key = record.primary_key
        if record.is_new or record.get_attribute(primary_key) is None:
            raise RuntimeError(
                f"Cannot update a {type(record).__name__} that was never inserted; call insert() first"
            )
        changes = record.dirty_attributes()
        changes.pop(primary_key, None)
        if not changes:
            return 0

        set_clause = ", ".join(f"`{column}` = %s" for column in changes)
        query = f"UPDATE `{record.table_name}` SET {set_clause} WHERE `{primary_key}` = %s"
        params = tuple(changes.values()) + (record.get_attribute(primary_key),)

        cursor = connection.cursor()
        try:
            affected = cursor.execute(query, params)
            connection.commit()
        except pymysql.MySQLError:
            connection.rollback()
            raise
        finally:
            cursor.close()

        record.mark_clean()
        record.trigger(Record.EVENT_AFTER_UPDATE)
        return affected

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
