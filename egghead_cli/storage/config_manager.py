"""
Manages loading, validation, updating and migration of the INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from egghead_cli.exceptions import ConfigurationError
from egghead_cli.models.config import DownloadConfig

log = logging.getLogger(__name__)


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self) -> DownloadConfig:
        """
        Loads configuration from the INI file and validates it.

        A missing file is not an error: every setting falls back to its default.

        Returns:
            A validated DownloadConfig object.

        Raises:
            ConfigurationError: If the config file is unreadable or validation fails.
        """
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(
                    f"Error parsing configuration file: {e}"
                ) from e

            if self._migrate_if_needed():
                log.info(
                    "[yellow]Configuration file was updated with new default values."
                    "[/yellow]"
                )

        return self._validate(self._get_config_as_dict())

    def save_config(self, config: DownloadConfig) -> None:
        """
        Writes every INI key of a config to disk.

        Raises:
            ConfigurationError: If the file cannot be written.
        """
        parser = configparser.ConfigParser(interpolation=None)
        parser["DEFAULT"] = {
            key: str(getattr(config, key)) for key in sorted(DownloadConfig.get_ini_keys())
        }
        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                parser.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def update_config(self, updates: dict[str, Any]) -> DownloadConfig:
        """
        Applies a subset of settings on top of the stored ones and saves the result.

        Keys whose value is None are left unchanged.
        """
        changes = {key: value for key, value in updates.items() if value is not None}
        current = self.load_config()
        merged = self._validate(
            {
                **{key: getattr(current, key) for key in DownloadConfig.get_ini_keys()},
                **changes,
            }
        )
        self.save_config(merged)
        return merged

    def _validate(self, values: dict[str, Any]) -> DownloadConfig:
        try:
            config_dir = self.config_file_path.parent
            return DownloadConfig(**values, config_path=str(config_dir))
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the 'DEFAULT' section of the INI file into a dictionary."""
        section = self._parser["DEFAULT"]
        try:
            probe_workers = section.getint(
                "probe_workers", DownloadConfig.model_fields["probe_workers"].default
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid 'probe_workers' value: {e}") from e
        return {
            "email": section.get("email", ""),
            "password": section.get("password", ""),
            "download_path": section.get("download_path", ""),
            "probe_workers": probe_workers,
        }

    def _migrate_if_needed(self) -> bool:
        """Adds missing default values to an existing config file."""
        defaults = DownloadConfig.model_construct()
        needs_saving = False

        config_section = self._parser["DEFAULT"]

        for key in sorted(DownloadConfig.get_ini_keys()):
            if key not in config_section:
                config_section[key] = str(getattr(defaults, key))
                needs_saving = True
                log.debug(
                    f"Migrating config: added missing key '{key}' with "
                    f"value '{config_section[key]}'."
                )

        if needs_saving:
            try:
                with open(self.config_file_path, "w", encoding="utf-8") as f:
                    self._parser.write(f)
            except OSError as e:
                log.error(f"Could not save migrated configuration file: {e}")
                return False

        return needs_saving
