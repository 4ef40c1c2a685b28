# ==============================================
# Pytest Configuration and Fixtures
# ==============================================
#
# Shared fixtures for all tests.
#
# - reset_config (autouse)   → fresh config singleton per test
# - user_fields              → {ban: (1, True), admin: 2, notify: [4]}
# - user_class               → Record with "options" bitmask column
# - profile_class            → Record storing flags in "flags"
#
# ==============================================

import pytest

from bitmask_fields import config
from bitmask_fields.host import BitmaskBehavior, Record

OPT_BAN = 1
OPT_ADMIN = 2
OPT_NOTIFY = 4


@pytest.fixture(autouse=True)
def reset_config(monkeypatch):
    """Drop the cached config so env changes in one test don't leak."""
    monkeypatch.setattr(config, "_config_instance", None)
    monkeypatch.delenv("BITMASK_ATTRIBUTE", raising=False)


@pytest.fixture
def user_fields():
    return {
        "ban": (OPT_BAN, True),
        "admin": OPT_ADMIN,
        "notify": [OPT_NOTIFY],
    }


@pytest.fixture
def user_class(user_fields):
    class User(Record):
        table_name = "users"
        columns = {
            "id": "BIGINT AUTO_INCREMENT PRIMARY KEY",
            "username": "VARCHAR(255)",
            "options": "INT UNSIGNED NOT NULL DEFAULT 0",
        }

        def behaviors(self):
            return {"bitmask": BitmaskBehavior(user_fields)}

    return User


@pytest.fixture
def profile_class(user_fields):
    class Profile(Record):
        table_name = "profiles"
        columns = {
            "username": "VARCHAR(255)",
            "flags": "INT UNSIGNED",
        }

        def behaviors(self):
            return {"bitmask": BitmaskBehavior(user_fields, bitmask_attribute="flags")}

    return Profile
