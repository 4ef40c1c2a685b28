# ==============================================
# STORAGE: MySQL + MongoDB
# ==============================================
#
# This package loads and saves Records. Every load goes through
# Record.instantiate(), which fires the after_find event that
# bitmask behaviors decode their flags on.
#
# Modules:
# --------
# - mysql_client.py    → MySQL connection, CRUD, flag_condition()
# - mongo_client.py    → MongoDB connection, CRUD, flag_filter()
#
# ==============================================

from .mysql_client import MySQLClient, flag_condition
from .mongo_client import MongoClient, flag_filter

__all__ = [
    "MySQLClient",
    "MongoClient",
    "flag_condition",
    "flag_filter",
]
