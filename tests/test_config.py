# ==============================================
# Tests for Configuration Management
# ==============================================

from bitmask_fields.config import AppConfig, get_config


class TestGetConfig:
    """Test get_config()."""

    def test_defaults(self, monkeypatch):
        for name in ("MYSQL_HOST", "MYSQL_PORT", "MONGO_USER", "MONGO_DATABASE"):
            monkeypatch.delenv(name, raising=False)
        config = get_config()
        assert config.mysql.host == "localhost"
        assert config.mysql.port == 3306
        assert config.mongo.user is None
        assert config.mongo.database == "bitmask_fields"
        assert config.bitmask.attribute == "options"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("MYSQL_PORT", "3307")
        monkeypatch.setenv("MONGO_USER", "flags")
        monkeypatch.setenv("BITMASK_ATTRIBUTE", "permissions")
        config = get_config()
        assert config.mysql.port == 3307
        assert config.mongo.user == "flags"
        assert config.bitmask.attribute == "permissions"

    def test_singleton(self):
        assert get_config() is get_config()

    def test_app_config_defaults(self):
        config = AppConfig()
        assert config.bitmask.attribute == "options"
        assert config.mongo.port == 27017
