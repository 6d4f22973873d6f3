"""Unit tests for the application context and configuration overrides."""

import pytest

from blog_api.runtime.config import AppConfig, ConfigData, DatabaseConfig
from blog_api.runtime.context import get_config, set_config, with_context


class TestWithContext:
    """Test temporary configuration overrides."""

    def test_override_is_scoped(self):
        before = get_config().database.url

        with with_context(ConfigData(database=DatabaseConfig(url="sqlite://"))):
            assert get_config().database.url == "sqlite://"

        assert get_config().database.url == before

    def test_unset_fields_are_inherited(self):
        base = get_config()

        with with_context(ConfigData(database=DatabaseConfig(migrate_on_startup=True))):
            config = get_config()
            assert config.database.migrate_on_startup is True
            assert config.database.host == base.database.host
            assert config.app.port == base.app.port
            assert config.logging.level == base.logging.level

    def test_nested_overrides(self):
        with with_context(ConfigData(app=AppConfig(port=4000))):
            with with_context(ConfigData(app=AppConfig(environment="test"))):
                assert get_config().app.port == 4000
                assert get_config().app.environment == "test"
            assert get_config().app.port == 4000

    def test_none_is_a_no_op(self):
        before = get_config()
        with with_context(None):
            assert get_config() is before

    def test_rejects_other_types(self):
        with pytest.raises(ValueError, match="ConfigData"):
            with with_context({"app": {"port": 1}}):
                pass


class TestSetConfig:
    """Test replacing the whole configuration."""

    def test_set_config_replaces_current(self):
        replacement = ConfigData(app=AppConfig(port=5555))

        with with_context(ConfigData()):
            set_config(replacement)
            assert get_config() is replacement
