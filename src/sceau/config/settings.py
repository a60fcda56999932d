"""
Application settings with environment-based configuration.

Priority (highest to lowest):
1. Environment variables (from .env or system)
2. Environment-specific YAML config file (development.yaml, production.yaml)
3. Default YAML config file (default.yaml)
4. Pydantic defaults

Settings are validated once at startup; missing security settings raise
ConfigError and the service must not start.
"""

import os
from pathlib import Path
from typing import List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from sceau.domain.exceptions import ConfigError

KNOWN_NETWORKS = (
    "solana-mainnet",
    "solana-devnet",
    "solana-testnet",
    "ethereum-mainnet",
    "ethereum-sepolia",
)

MIN_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All sensitive values (session secret, API keys) should come from
    environment variables, not from YAML files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Application
    APP_NAME: str = "Sceau"
    APP_VERSION: str = "0.1.0"
    ENV: str = Field(default="development", description="Environment name")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # API Server
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000, ge=1024, le=65535)

    # CORS Configuration
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Challenge (bound into every sign-in message)
    AUTH_DOMAIN: str = Field(
        default="",
        description="Trusted origin bound into every message (required)",
    )
    AUTH_URI: str = Field(
        default="",
        description="Verifying endpoint bound into every message (required)",
    )
    AUTH_STATEMENT: str = Field(
        default="Sign in to prove ownership of this wallet.",
        description="Human-readable purpose text",
    )
    MESSAGE_VERSION: str = Field(default="1")
    CHALLENGE_TIMEOUT_SECONDS: int = Field(
        default=120,
        ge=1,
        description="Challenge lifetime (issued_at to expiration_time)",
    )
    CHALLENGE_RETENTION_SECONDS: int = Field(
        default=300,
        ge=1,
        description="Extra retention so late attempts report EXPIRED",
    )
    SUPPORTED_NETWORKS: List[str] = Field(
        default=["solana-mainnet", "solana-devnet"],
        description="Networks accepted at issue, verify and decode",
    )

    # Session token (from environment - REQUIRED)
    SESSION_SECRET: str = Field(default="", description="Token encryption secret")
    SESSION_TTL_SECONDS: int = Field(default=86400, ge=1)
    SESSION_COOKIE_NAME: str = Field(default="sceau_session")
    SESSION_COOKIE_SECURE: bool = Field(default=True)
    REVOCATION_ENABLED: bool = Field(
        default=False,
        description="Keep a denylist of logged-out token ids",
    )

    # Delegated address validation (optional)
    ADDRESS_VALIDATION_URL: Optional[str] = Field(default=None)
    ADDRESS_VALIDATION_API_KEY: Optional[str] = Field(default=None)
    ADDRESS_VALIDATION_TIMEOUT: float = Field(default=5.0, gt=0)

    # Redis
    REDIS_ENABLED: bool = Field(default=False)
    REDIS_HOST: str = Field(default="localhost")
    REDIS_PORT: int = Field(default=6379, ge=1024, le=65535)
    REDIS_DB: int = Field(default=0, ge=0, le=15)
    REDIS_PASSWORD: Optional[str] = Field(default=None)

    # Observability - Metrics
    METRICS_ENABLED: bool = Field(
        default=True,
        description="Expose Prometheus metrics on /metrics",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Invalid LOG_LEVEL. Must be one of: {allowed}")
        return v_upper

    @field_validator("SUPPORTED_NETWORKS")
    @classmethod
    def validate_supported_networks(cls, v: List[str]) -> List[str]:
        """Validate network identifiers."""
        networks = [n.lower() for n in v]
        unknown = [n for n in networks if n not in KNOWN_NETWORKS]
        if unknown:
            raise ValueError(
                f"Unknown networks {unknown}. Must be among: {list(KNOWN_NETWORKS)}"
            )
        if not networks:
            raise ValueError("At least one network must be supported")
        return networks

    @property
    def address_validation_enabled(self) -> bool:
        """Delegated validation needs both endpoint and key."""
        return bool(self.ADDRESS_VALIDATION_URL and self.ADDRESS_VALIDATION_API_KEY)

    def validate_required(self) -> "Settings":
        """
        Fail fast on missing security settings.

        Raises:
            ConfigError: If secret, domain or uri is unusable
        """
        if not self.SESSION_SECRET.strip():
            raise ConfigError("SESSION_SECRET", "required")
        if len(self.SESSION_SECRET) < MIN_SECRET_LENGTH:
            raise ConfigError(
                "SESSION_SECRET", f"must be at least {MIN_SECRET_LENGTH} characters"
            )
        for name in ("AUTH_DOMAIN", "AUTH_URI"):
            value = getattr(self, name)
            if not value.strip():
                raise ConfigError(name, "required")
            if any(ch.isspace() for ch in value):
                raise ConfigError(name, "cannot contain whitespace")
        if "\n" in self.AUTH_STATEMENT or "\r" in self.AUTH_STATEMENT:
            raise ConfigError("AUTH_STATEMENT", "must be a single line")
        return self


# Environment name -> (.env file, YAML overlay)
ENVIRONMENT_FILES = {
    "production": (".env.production", "production.yaml"),
    "development": (".env.development", "development.yaml"),
    "test": (".env.test", "test.yaml"),
}

# Repository root when running from a checkout (src/sceau/config/settings.py)
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def _read_yaml(path: Path) -> dict:
    """Mapping stored in a YAML file ({} if missing or empty)."""
    if not path.exists():
        return {}
    try:
        with open(path, "r") as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(path.name, f"unreadable YAML: {e}") from e
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(path.name, "top level must be a mapping")
    return loaded


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    The config directory is SCEAU_CONFIG_DIR when set (installed
    deployments), otherwise config/ at the repository root; .env files
    are looked up next to it.

    Args:
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override (e.g., "development", "test")

    Returns:
        Validated Settings instance

    Raises:
        ConfigError: If settings are invalid or required values are missing
    """
    config_dir = Path(os.getenv("SCEAU_CONFIG_DIR", PROJECT_ROOT / "config"))
    environment = env or os.getenv("ENV", "production")
    default_env_file, default_config_file = ENVIRONMENT_FILES.get(
        environment, ENVIRONMENT_FILES["production"]
    )

    env_file_path = config_dir.parent / (env_file or default_env_file)
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    merged_config = _read_yaml(config_dir / "default.yaml")
    merged_config.update(_read_yaml(config_dir / (config_file or default_config_file)))

    # YAML values are defaults only: environment variables win
    merged_config = {k: v for k, v in merged_config.items() if k not in os.environ}

    try:
        settings = Settings(**merged_config)
    except ValidationError as e:
        raise ConfigError("settings", str(e)) from e

    return settings.validate_required()


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
