import pytest

from portal.config import AppConfig, ConfigError


def _env(**extra):
    env = {"APP_ENV": "development", "LOCAL_DATABASE_URL": "sqlite::memory:"}
    env.update(extra)
    return env


def test_missing_app_env_raises():
    with pytest.raises(ConfigError, match="APP_ENV"):
        AppConfig.from_env({})


def test_unsupported_environment_raises():
    with pytest.raises(ConfigError, match="Unsupported APP_ENV value 'staging'"):
        AppConfig.from_env({"APP_ENV": "staging"})


def test_missing_database_url_raises():
    with pytest.raises(ConfigError, match="PROD_DATABASE_URL"):
        AppConfig.from_env({"APP_ENV": "production", "LOCAL_DATABASE_URL": "x"})


def test_defaults_are_applied():
    config = AppConfig.from_env(_env())
    assert config.server.host == "127.0.0.1"
    assert config.server.port == 8080
    assert config.database.max_connections == 20
    assert config.database.min_connections == 5
    assert config.database.connection_timeout == 30
    assert config.database.idle_timeout == 600


def test_url_and_environment_come_from_app_env():
    config = AppConfig.from_env(
        {"APP_ENV": "production", "PROD_DATABASE_URL": "sqlite:prod.db"}
    )
    assert config.database.url == "sqlite:prod.db"
    assert config.environment == "production"


def test_prefixed_variables_override_defaults():
    config = AppConfig.from_env(
        _env(APP_SERVER__HOST="0.0.0.0", APP_SERVER__PORT="9090", APP_DATABASE__IDLE_TIMEOUT="5")
    )
    assert config.server.host == "0.0.0.0"
    assert config.server.port == 9090
    assert config.database.idle_timeout == 5


def test_database_url_cannot_be_overridden_by_prefix():
    config = AppConfig.from_env(_env(APP_DATABASE__URL="sqlite:other.db"))
    assert config.database.url == "sqlite::memory:"


def test_min_greater_than_max_raises():
    with pytest.raises(ConfigError, match="min_connections cannot be greater than max_connections"):
        AppConfig.from_env(
            _env(APP_DATABASE__MIN_CONNECTIONS="10", APP_DATABASE__MAX_CONNECTIONS="2")
        )


@pytest.mark.parametrize("port", ["abc", "-1", "70000"])
def test_invalid_port_raises(port):
    with pytest.raises(ConfigError):
        AppConfig.from_env(_env(APP_SERVER__PORT=port))