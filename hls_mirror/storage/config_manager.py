"""
Manages loading, validation, and migration of the INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from hls_mirror.exceptions import ConfigurationError
from hls_mirror.models.config import MirrorConfig

log = logging.getLogger(__name__)

# Defaults for the keys stored in the INI file. Run inputs are never stored.
DEFAULT_SETTINGS: dict[str, Any] = {
    "workers": 1,
    "request_delay": 0.0,
    "max_attempts": 5,
    "retry_delay": 2.0,
    "request_timeout": 300.0,
    "name_prefix": "",
    "name_width": 5,
}


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(self, cli_options: dict[str, Any] | None = None) -> MirrorConfig:
        """
        Loads defaults from the INI file, applies CLI overrides, and validates them.

        A missing config file is not an error: built-in defaults are used instead.

        Args:
            cli_options: A dictionary of options provided via the command line.

        Returns:
            A validated MirrorConfig object.

        Raises:
            ConfigurationError: If the config file is unreadable or validation fails.
        """
        settings = self.load_settings()

        # Override with CLI options
        if cli_options:
            settings.update(cli_options)

        try:
            config_dir = self.config_file_path.parent
            return MirrorConfig(**settings, config_path=str(config_dir))
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def load_settings(self) -> dict[str, Any]:
        """Returns the stored defaults, or the built-in ones without a config file."""
        if not self.config_file_path.is_file():
            log.debug(
                f"No config file at '{self.config_file_path}', using built-in defaults."
            )
            return dict(DEFAULT_SETTINGS)

        try:
            self._parser.read(self.config_file_path, encoding="utf-8")
        except configparser.Error as e:
            raise ConfigurationError(f"Error parsing configuration file: {e}") from e

        if self._migrate_if_needed():
            log.info(
                "[yellow]Configuration file was updated with new default values."
                "[/yellow]"
            )

        return self._get_config_as_dict()

    def save_new_config(self, settings: dict[str, Any] | None = None) -> None:
        """
        Creates and saves a new configuration file.

        Args:
            settings: Values overriding the built-in defaults.
        """
        config = configparser.ConfigParser(interpolation=None)
        values = {**DEFAULT_SETTINGS, **(settings or {})}
        config["DEFAULT"] = {
            key: str(values[key]) for key in sorted(MirrorConfig.get_ini_keys())
        }

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the 'DEFAULT' section of the INI file into a dictionary."""
        section = self._parser["DEFAULT"]
        try:
            return {
                "workers": section.getint("workers", DEFAULT_SETTINGS["workers"]),
                "request_delay": section.getfloat(
                    "request_delay", DEFAULT_SETTINGS["request_delay"]
                ),
                "max_attempts": section.getint(
                    "max_attempts", DEFAULT_SETTINGS["max_attempts"]
                ),
                "retry_delay": section.getfloat(
                    "retry_delay", DEFAULT_SETTINGS["retry_delay"]
                ),
                "request_timeout": section.getfloat(
                    "request_timeout", DEFAULT_SETTINGS["request_timeout"]
                ),
                "name_prefix": section.get(
                    "name_prefix", DEFAULT_SETTINGS["name_prefix"]
                ),
                "name_width": section.getint(
                    "name_width", DEFAULT_SETTINGS["name_width"]
                ),
            }
        except ValueError as e:
            raise ConfigurationError(f"Invalid value in configuration file: {e}") from e

    def _migrate_if_needed(self) -> bool:
        """Adds missing default values to an existing config file."""
        needs_saving = False
        config_section = self._parser["DEFAULT"]

        for key in sorted(MirrorConfig.get_ini_keys()):
            if key not in config_section:
                config_section[key] = str(DEFAULT_SETTINGS[key])
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
