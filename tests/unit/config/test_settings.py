"""
Unit tests for Settings and load_config.

Usage:
    python -m tests.unit.config.test_settings
    pytest tests/unit/config/test_settings.py
"""

import pytest
from pydantic import ValidationError

from sceau.config.settings import Settings, get_settings, load_config
from sceau.domain.exceptions import ConfigError
from tests.helpers.factories import TEST_SECRET, make_settings
from tests.helpers.harness import SceauTest

CONFIG_ENV_VARS = (
    "ENV",
    "AUTH_DOMAIN",
    "AUTH_URI",
    "SUPPORTED_NETWORKS",
    "SESSION_SECRET",
    "REDIS_ENABLED",
    "SCEAU_CONFIG_DIR",
)


class TestSettings(SceauTest):
    """Unit tests for Settings validation."""

    # ================================================================
    # Required values
    # ================================================================

    def test_valid_settings(self):
        """Test complete settings pass validation."""
        settings = make_settings().validate_required()

        assert settings.SESSION_SECRET == TEST_SECRET
        assert settings.CHALLENGE_TIMEOUT_SECONDS == 120

    def test_missing_secret(self):
        """Test absent secret is a configuration error."""
        with pytest.raises(ConfigError) as exc_info:
            make_settings(SESSION_SECRET="").validate_required()

        assert exc_info.value.setting == "SESSION_SECRET"

    def test_short_secret(self):
        """Test secret shorter than 32 characters is refused."""
        with pytest.raises(ConfigError):
            make_settings(SESSION_SECRET="short-secret").validate_required()

    def test_missing_domain_and_uri(self):
        """Test domain and uri are required."""
        for name in ("AUTH_DOMAIN", "AUTH_URI"):
            with pytest.raises(ConfigError) as exc_info:
                make_settings(**{name: ""}).validate_required()
            assert exc_info.value.setting == name

    def test_whitespace_in_domain(self):
        """Test domain must be a single token."""
        with pytest.raises(ConfigError):
            make_settings(AUTH_DOMAIN="example test").validate_required()

    def test_multiline_statement(self):
        """Test statement must fit on one message line."""
        with pytest.raises(ConfigError):
            make_settings(AUTH_STATEMENT="line one\nline two").validate_required()

    # ================================================================
    # Field validators
    # ================================================================

    def test_networks_are_normalised(self):
        """Test network ids are lower-cased."""
        settings = make_settings(SUPPORTED_NETWORKS=["Solana-Devnet"])

        assert settings.SUPPORTED_NETWORKS == ["solana-devnet"]

    def test_unknown_network(self):
        """Test unknown network ids are refused."""
        with pytest.raises(ValidationError):
            make_settings(SUPPORTED_NETWORKS=["bitcoin-mainnet"])

    def test_empty_networks(self):
        """Test at least one network is required."""
        with pytest.raises(ValidationError):
            make_settings(SUPPORTED_NETWORKS=[])

    def test_retention_must_be_positive(self):
        """Test zero retention is refused so late attempts report EXPIRED."""
        with pytest.raises(ValidationError):
            make_settings(CHALLENGE_RETENTION_SECONDS=0)

    def test_log_level_upper_cased(self):
        """Test log level accepts any case."""
        assert make_settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_address_validation_needs_url_and_key(self):
        """Test delegated validation is off unless fully configured."""
        assert not make_settings().address_validation_enabled
        assert not make_settings(
            ADDRESS_VALIDATION_URL="https://validator.test"
        ).address_validation_enabled
        assert make_settings(
            ADDRESS_VALIDATION_URL="https://validator.test",
            ADDRESS_VALIDATION_API_KEY="key",
        ).address_validation_enabled


class TestLoadConfig(SceauTest):
    """Unit tests for YAML + environment loading."""

    @pytest.fixture(autouse=True)
    def clean_environment(self, monkeypatch):
        for name in CONFIG_ENV_VARS:
            monkeypatch.delenv(name, raising=False)
        self.monkeypatch = monkeypatch

    def test_load_test_environment(self):
        """Test YAML supplies values, environment supplies the secret."""
        self.reporter.info("Testing config loading", context="Test")

        self.monkeypatch.setenv("SESSION_SECRET", TEST_SECRET)

        settings = load_config(env="test")

        assert settings.ENV == "test"
        assert settings.AUTH_DOMAIN == "example.test"
        assert "ethereum-mainnet" in settings.SUPPORTED_NETWORKS
        assert settings.SESSION_SECRET == TEST_SECRET

    def test_environment_overrides_yaml(self):
        """Test environment variables win over YAML values."""
        self.monkeypatch.setenv("SESSION_SECRET", TEST_SECRET)
        self.monkeypatch.setenv("AUTH_DOMAIN", "override.test")

        settings = load_config(env="test")

        assert settings.AUTH_DOMAIN == "override.test"

    def test_missing_secret_fails_fast(self):
        """Test loading without a secret raises ConfigError."""
        with pytest.raises(ConfigError):
            load_config(env="test")

    def test_invalid_value_is_config_error(self):
        """Test validation failures surface as ConfigError."""
        self.monkeypatch.setenv("SESSION_SECRET", TEST_SECRET)
        self.monkeypatch.setenv("SUPPORTED_NETWORKS", '["bitcoin-mainnet"]')

        with pytest.raises(ConfigError):
            load_config(env="test")

    def test_config_dir_override(self, tmp_path):
        """Test SCEAU_CONFIG_DIR points loading at another directory."""
        (tmp_path / "default.yaml").write_text("AUTH_STATEMENT: Sign in to Other.\n")
        (tmp_path / "test.yaml").write_text(
            "AUTH_DOMAIN: other.test\nAUTH_URI: https://other.test/auth\n"
        )
        self.monkeypatch.setenv("SCEAU_CONFIG_DIR", str(tmp_path))
        self.monkeypatch.setenv("SESSION_SECRET", TEST_SECRET)

        settings = load_config(env="test")

        assert settings.AUTH_DOMAIN == "other.test"
        assert settings.AUTH_STATEMENT == "Sign in to Other."

    def test_unreadable_yaml_is_config_error(self, tmp_path):
        """Test YAML that is not a mapping is refused."""
        (tmp_path / "test.yaml").write_text("- just\n- a list\n")
        self.monkeypatch.setenv("SCEAU_CONFIG_DIR", str(tmp_path))
        self.monkeypatch.setenv("SESSION_SECRET", TEST_SECRET)

        with pytest.raises(ConfigError):
            load_config(env="test")

    def test_get_settings_is_cached(self):
        """Test global settings are loaded once."""
        self.monkeypatch.setenv("ENV", "test")
        self.monkeypatch.setenv("SESSION_SECRET", TEST_SECRET)

        assert get_settings() is get_settings()
        assert isinstance(get_settings(), Settings)


if __name__ == "__main__":
    TestSettings.run_as_main()
