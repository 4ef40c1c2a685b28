# ==============================================
# Tests for MongoClient
# ==============================================
#
# The pymongo client is replaced with a MagicMock.
# ==============================================

from unittest.mock import MagicMock

import pytest

from bitmask_fields.storage import mongo_client
from bitmask_fields.storage.mongo_client import MongoClient, flag_filter


@pytest.fixture
def collection():
    return MagicMock()


@pytest.fixture
def client(collection):
    client = MongoClient("localhost", 27017, "test_db")
    client.client = MagicMock()
    client.client.__getitem__.return_value.__getitem__.return_value = collection
    return client


class TestFlagFilter:
    """Test flag_filter()."""

    def test_set_and_clear(self):
        assert flag_filter("options", 1, 2) == {
            "options": {"$bitsAllSet": 1, "$bitsAllClear": 2}
        }

    def test_clear_only(self):
        assert flag_filter("flags", clear_bits=4) == {"flags": {"$bitsAllClear": 4}}

    def test_no_bits(self):
        assert flag_filter("options") == {}


class TestConnection:
    """Test connect / disconnect."""

    def test_connect_builds_uri(self, monkeypatch):
        py_client = MagicMock()
        factory = MagicMock(return_value=py_client)
        monkeypatch.setattr(mongo_client, "PyMongoClient", factory)

        client = MongoClient("db", 27017, "flags", user="u", password="p")
        client.connect()

        factory.assert_called_once_with("mongodb://u:p@db:27017/flags")
        py_client.admin.command.assert_called_once_with("ping")

    def test_connect_failure_propagates(self, monkeypatch):
        py_client = MagicMock()
        py_client.admin.command.side_effect = mongo_client.ConnectionFailure("down")
        monkeypatch.setattr(mongo_client, "PyMongoClient", MagicMock(return_value=py_client))

        with pytest.raises(mongo_client.ConnectionFailure):
            MongoClient("db", 27017, "flags").connect()

    def test_disconnect(self, client):
        py_client = client.client
        client.disconnect()
        py_client.close.assert_called_once()
        assert client.client is None

    def test_not_connected(self, profile_class):
        with pytest.raises(RuntimeError, match="Not connected"):
            MongoClient("db", 27017, "flags").find(profile_class)


class TestFind:
    """Test loading records."""

    def test_find_decodes_flags(self, client, collection, profile_class):
        collection.find.return_value = [{"_id": "x1", "username": "a", "flags": 6}]
        profiles = client.find(profile_class)
        collection.find.assert_called_once_with({})
        assert profiles[0].admin is True
        assert profiles[0].notify is True
        assert profiles[0].ban is False

    def test_find_by_flags(self, client, collection, profile_class):
        collection.find.return_value = []
        client.find_by_flags(profile_class, set_bits=1, bitmask_attribute="flags")
        collection.find.assert_called_once_with({"flags": {"$bitsAllSet": 1}})

    def test_ensure_indexes(self, client, collection, user_class):
        client.ensure_indexes(user_class)
        collection.create_index.assert_called_once_with("options", unique=False)


class TestSave:
    """Test insert() and update()."""

    def test_insert(self, client, collection, profile_class):
        collection.insert_one.return_value.inserted_id = "new-id"
        profile = profile_class({"username": "a"})

        assert client.insert(profile) == "new-id"
        collection.insert_one.assert_called_once_with({"username": "a", "flags": 1})
        assert profile.get_attribute("_id") == "new-id"
        assert not profile.is_new

    def test_update_sets_dirty_fields(self, client, collection, profile_class):
        collection.update_one.return_value.modified_count = 1
        profile = profile_class.instantiate({"_id": "x1", "username": "a", "flags": 0})
        profile.notify = True

        assert client.update(profile) == 1
        collection.update_one.assert_called_once_with(
            {"_id": "x1"},
            {"$set": {"flags": 4}},
        )

    def test_update_without_changes(self, client, collection, profile_class):
        profile = profile_class.instantiate({"_id": "x1", "username": "a", "flags": 0})
        assert client.update(profile) == 0
        collection.update_one.assert_not_called()

    def test_update_refuses_record_never_inserted(self, client, collection, profile_class):
        """A new document has no _id to match; its pending changes stay dirty."""
        profile = profile_class({"username": "a"})
        profile.admin = True

        with pytest.raises(RuntimeError, match="never inserted"):
            client.update(profile)
        collection.update_one.assert_not_called()
        assert profile.is_new
        assert profile.dirty_attributes()["flags"] == 3

    def test_update_uses_reassigned_id(self, client, collection, profile_class):
        profile = profile_class.instantiate({"_id": "x1", "username": "a", "flags": 0})
        profile._id = "x2"
        profile.ban = True
        client.update(profile)
        assert collection.update_one.call_args.args[0] == {"_id": "x2"}
