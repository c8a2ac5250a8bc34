"""Application settings for the Grievance API."""

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from grievance_api.config.auth import AuthSettings
from grievance_api.config.database import DatabaseSettings
from grievance_api.config.redis import RedisSettings


class NotificationSettings(BaseSettings):
    """SMTP settings for grievance notification emails."""

    host: str = Field(
        default="", description="SMTP host (notifications disabled if empty)"
    )
    port: int = Field(default=587, description="SMTP port")
    username: str = Field(default="", description="SMTP username")
    password: str = Field(default="", description="SMTP password")
    use_tls: bool = Field(default=True, description="Upgrade with STARTTLS")
    from_address: str = Field(
        default="grievance-cell@localhost", description="Sender address"
    )
    timeout: float = Field(default=10.0, description="SMTP timeout in seconds")

    model_config = SettingsConfigDict(env_prefix="SMTP_", case_sensitive=False)

    @property
    def enabled(self) -> bool:
        return bool(self.host)


class EvidenceSettings(BaseSettings):
    """ImageKit settings for evidence attachments."""

    upload_url: str = Field(
        default="https://upload.imagekit.io/api/v1/files/upload",
        description="ImageKit upload endpoint",
    )
    private_key: str = Field(
        default="", description="ImageKit private key (uploads disabled if empty)"
    )
    folder: str = Field(default="/evidence", description="Upload folder")
    timeout: float = Field(default=30.0, description="Upload timeout in seconds")

    model_config = SettingsConfigDict(env_prefix="EVIDENCE_", case_sensitive=False)

    @property
    def enabled(self) -> bool:
        return bool(self.private_key)


class EscalationSettings(BaseSettings):
    """Escalation sweep scheduling."""

    sweep_interval_minutes: int = Field(
        default=15, ge=1, le=60, description="Minutes between automatic sweeps"
    )
    job_timeout: int = Field(default=300, description="Sweep job timeout in seconds")

    model_config = SettingsConfigDict(env_prefix="ESCALATION_", case_sensitive=False)


class AppSettings(BaseSettings):
    """Main application settings."""

    # App info
    app_name: str = Field(default="Grievance API", description="Application name")
    version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")

    # Server settings
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")

    # CORS settings
    cors_origins: list[str] = Field(
        default=["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Allowed CORS origins",
    )

    # Component settings
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    notifications: NotificationSettings = Field(default_factory=NotificationSettings)
    evidence: EvidenceSettings = Field(default_factory=EvidenceSettings)
    escalation: EscalationSettings = Field(default_factory=EscalationSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get application settings (singleton pattern)."""
    global _settings  # noqa: PLW0603
    if _settings is None:
        _settings = AppSettings()
    return _settings


def get_notification_settings() -> NotificationSettings:
    """Get SMTP notification settings."""
    return get_settings().notifications


def get_evidence_settings() -> EvidenceSettings:
    """Get evidence store settings."""
    return get_settings().evidence


def get_escalation_settings() -> EscalationSettings:
    """Get escalation sweep settings."""
    return get_settings().escalation
