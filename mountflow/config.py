from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Logging
    log_level: str = "INFO"
    log_file_path: str = "logs/mountflow.log"  # Empty disables the file handler
    log_retention_days: int = 30
    log_console_width: int = 120

    # Workflow defaults
    default_mount_category: str = "auth"
    wizard_feature: str = "authentication"  # secrets, authentication or replication

    # Notifications
    max_notifications: int = 50  # Flash messages kept in memory

    # Resource store
    seed_default_mounts: bool = True  # Pre-populate cubbyhole/identity/sys/token mounts

    # HTTP
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    model_config = SettingsConfigDict(env_file="settings.env", extra="ignore")

    @property
    def log_directory(self) -> Path:
        """Return the log directory as a Path"""
        return Path(self.log_file_path).parent
