"""Application configuration loaded from environment variables.

Settings for the database pool, session tokens, one-time codes, mail delivery
and HTTP hardening. Uses pydantic-settings for validation and .env file support.
"""

import secrets

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Known insecure default password that must not be used in production
_INSECURE_DEFAULT_PASSWORD = "ucp_dev_password"  # nosec B105

# Minimum length for AUTH_SECRET in production (256 bits = 32 bytes)
_MIN_AUTH_SECRET_LENGTH = 32


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database (shared with the game server)
    database_driver: str = "postgresql+asyncpg"
    database_host: str = "localhost"
    database_port: int = 5432
    database_name: str = "ucp"
    database_user: str = "ucp_user"
    database_password: str = _INSECURE_DEFAULT_PASSWORD
    database_pool_size: int = 5
    database_pool_timeout: int = 30
    database_pool_recycle: int = 10

    # CORS
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Application
    environment: str = "development"
    log_level: str = "INFO"
    # Surfaces the message of unexpected exceptions in 500 responses
    expose_error_details: bool = True

    # Session tokens
    auth_secret: SecretStr = SecretStr("")
    auth_issuer: str = "ucp-backend"
    auth_header_name: str = "x-auth-token"
    session_token_ttl_hours: int = 24
    bcrypt_rounds: int = 12

    # One-time codes (password reset, email verification)
    # 0 disables expiry: codes stay valid until consumed
    one_time_code_ttl_minutes: int = 0
    one_time_code_revoke_on_reissue: bool = False

    # Email
    email_from: str = "UCP <no-reply@ucp.local>"
    resend_api_key: SecretStr = SecretStr("")

    # Frontend URL (links in password reset and verification emails)
    frontend_url: str = "http://localhost:3000"

    # Rate limiting on credential endpoints
    rate_limit_enabled: bool = True
    rate_limit_auth: str = "10/minute"

    @property
    def database_url(self) -> str:
        """Async database URL for SQLAlchemy."""
        return (
            f"{self.database_driver}://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @model_validator(mode="after")
    def check_production_security(self) -> "Settings":
        """Validate security requirements.

        Checks:
        - bcrypt rounds within the range the library accepts (all environments)
        - Token TTL and code TTL are not negative (all environments)
        - CORS must not use wildcard origin (all environments)
        - Database password must not be the default in production
        - AUTH_SECRET must be set and >= 32 chars in production
        - An unset AUTH_SECRET elsewhere gets a random per-process value, so
          tokens never sign with an empty key (they stop validating on restart)
        """
        if not 4 <= self.bcrypt_rounds <= 31:
            msg = f"BCRYPT_ROUNDS must be between 4 and 31. Got: {self.bcrypt_rounds}"
            raise ValueError(msg)

        if self.session_token_ttl_hours <= 0:
            msg = (
                "SESSION_TOKEN_TTL_HOURS must be positive. "
                f"Got: {self.session_token_ttl_hours}"
            )
            raise ValueError(msg)

        if self.one_time_code_ttl_minutes < 0:
            msg = (
                "ONE_TIME_CODE_TTL_MINUTES cannot be negative. "
                f"Got: {self.one_time_code_ttl_minutes}"
            )
            raise ValueError(msg)

        if "*" in self.allowed_origins:
            msg = (
                "ALLOWED_ORIGINS must not contain '*' (wildcard). "
                "Set explicit frontend origins instead."
            )
            raise ValueError(msg)

        is_production = self.environment == "production"
        if not is_production and not self.auth_secret.get_secret_value():
            self.auth_secret = SecretStr(secrets.token_hex(_MIN_AUTH_SECRET_LENGTH))

        if is_production:
            if self.database_password == _INSECURE_DEFAULT_PASSWORD:
                msg = (
                    "Cannot use default database password in production. "
                    "Set DATABASE_PASSWORD environment variable to a secure value."
                )
                raise ValueError(msg)

            secret_value = self.auth_secret.get_secret_value()
            if not secret_value:
                msg = (
                    "AUTH_SECRET must be set in production. "
                    'Generate with: python -c "import secrets; '
                    'print(secrets.token_hex(32))"'
                )
                raise ValueError(msg)
            if len(secret_value) < _MIN_AUTH_SECRET_LENGTH:
                msg = (
                    f"AUTH_SECRET must be at least {_MIN_AUTH_SECRET_LENGTH} "
                    "characters for adequate security."
                )
                raise ValueError(msg)

        return self


settings = Settings()
