"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from egghead_cli.exceptions import ConfigurationError

DEFAULT_PROBE_WORKERS = 10


class DownloadConfig(BaseModel):
    """A validated configuration model for the application."""

    # Authentication
    email: str = ""
    password: str = Field(default="", repr=False)

    # Download Settings
    download_path: str = ""
    probe_workers: int = DEFAULT_PROBE_WORKERS

    # Internal fields not loaded from INI file
    config_path: str = Field(default="", repr=False)

    class Config:
        """Pydantic model configuration."""

        validate_assignment = True
        str_strip_whitespace = True

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Rejects values that cannot be an email address."""
        if v and "@" not in v:
            raise ValueError(f"'{v}' is not a valid email address.")
        return v

    @field_validator("probe_workers")
    @classmethod
    def validate_probe_workers(cls, v: int) -> int:
        """Ensures a reasonable number of concurrent size probes."""
        if v < 1 or v > 32:
            raise ValueError("Probe workers must be between 1 and 32.")
        return v

    @field_validator("download_path")
    @classmethod
    def validate_download_path(cls, v: str) -> str:
        """Expands '~' so the path can be used as-is."""
        if v.startswith("~"):
            return str(Path(v).expanduser())
        return v

    def require_credentials(self) -> None:
        """Raises if the email or password has not been set."""
        if not self.email or not self.password:
            raise ConfigurationError(
                "Email and/or password have not been set. "
                "Set them with 'egghead-cli config -e <email> -p <password>'."
            )

    def require_download_path(self) -> None:
        """Raises if the download path has not been set."""
        if not self.download_path:
            raise ConfigurationError(
                "Download path has not been set. "
                "Set it with 'egghead-cli config -d <download-path>'."
            )

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}
