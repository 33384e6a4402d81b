"""Configuration management for tracksort."""

from __future__ import annotations

import json
import tomllib
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

from tracksort.config.file_ops import write_text_file
from tracksort.config.paths import default_config_path
from tracksort.platform.logging import logger
from tracksort.shared.errors import ConfigError

KNOWN_PROVIDERS: tuple[str, ...] = ("musicbrainz", "itunes", "lastfm")

DEFAULT_FOLDER_TEMPLATE: str = "{genre}/{artist}/{year} - {album}"
DEFAULT_FOLDER_TEMPLATE_NO_YEAR: str = "{genre}/{artist}/{album}"
DEFAULT_FILE_TEMPLATE: str = "{track} - {title}"


def _path_field(default: Path | None = None) -> Any:
    """Create a field for Path objects with proper conversion.

    Args:
        default: Default value for the field.

    Returns:
        Field with proper metadata for path handling.
    """
    return field(default=default, metadata={"path": True})


@dataclass
class ProviderSettings:
    """Enable flag and credentials for one online metadata provider."""

    enabled: bool = False
    api_key: str | None = None


def _default_providers() -> dict[str, ProviderSettings]:
    return {name: ProviderSettings() for name in KNOWN_PROVIDERS}


@dataclass
class Config:
    """Application configuration."""

    # Log file path
    log_file: Path | None = _path_field()

    # Batch behaviour
    workers: int = 1
    path_max_length: int = 250

    # Online correction
    prefer_online: bool = False
    provider_order: list[str] = field(default_factory=lambda: list(KNOWN_PROVIDERS))
    provider_timeout: float = 10.0
    provider_concurrency: int = 2
    provider_min_interval: float = 1.0
    providers: dict[str, ProviderSettings] = field(default_factory=_default_providers)

    # Naming templates
    folder_template: str = DEFAULT_FOLDER_TEMPLATE
    folder_template_no_year: str = DEFAULT_FOLDER_TEMPLATE_NO_YEAR
    file_template: str = DEFAULT_FILE_TEMPLATE

    # Classification table overrides
    genre_keywords: dict[str, list[str]] = field(default_factory=dict)
    artist_genres: dict[str, str] = field(default_factory=dict)

    # MusicBrainz application identity
    mb_app_name: str | None = None
    mb_app_version: str | None = None
    mb_contact: str | None = None

    _instance: ClassVar["Config | None"] = None
    _loaded_from: ClassVar[Path | None] = None

    def __post_init__(self) -> None:
        """Coerce loaded values and validate ranges.

        Raises:
            ConfigError: If a value is out of range or a provider is unknown.
        """
        for f in fields(self):
            if not f.metadata.get("path", False):
                continue
            value = getattr(self, f.name)
            if isinstance(value, str):
                setattr(self, f.name, Path(value) if value else None)

        providers = _default_providers()
        for name, raw in self.providers.items():
            if name not in KNOWN_PROVIDERS:
                raise ConfigError(f"Unknown provider: {name}")
            if isinstance(raw, ProviderSettings):
                providers[name] = raw
            elif isinstance(raw, dict):
                providers[name] = ProviderSettings(
                    enabled=bool(raw.get("enabled", False)),
                    api_key=raw.get("api_key") or None,
                )
            else:
                raise ConfigError(f"Provider settings for {name} must be a table")
        self.providers = providers

        for name in self.provider_order:
            if name not in KNOWN_PROVIDERS:
                raise ConfigError(f"Unknown provider in provider_order: {name}")

        if self.workers < 1:
            raise ConfigError("workers must be at least 1")
        if self.path_max_length < 64:
            raise ConfigError("path_max_length must be at least 64")
        if self.provider_timeout <= 0:
            raise ConfigError("provider_timeout must be positive")
        if self.provider_concurrency < 1:
            raise ConfigError("provider_concurrency must be at least 1")
        if self.provider_min_interval < 0:
            raise ConfigError("provider_min_interval cannot be negative")

    def enabled_providers(self) -> list[str]:
        """Return enabled provider names in priority order."""

        return [name for name in self.provider_order if self.providers[name].enabled]

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        config_dict = asdict(self)

        for key, value in config_dict.items():
            if isinstance(value, Path):
                config_dict[key] = str(value)

        target = path or default_config_path()
        try:
            write_text_file(target, self._render_toml(config_dict))
            logger.info("Configuration saved to %s", target)
        except Exception as e:
            logger.error("Failed to save configuration: %s", e)
            raise

    def _render_toml(self, config: dict[str, Any]) -> str:
        """Render configuration as TOML with inline guidance."""

        lines: list[str] = []

        lines.append("# tracksort configuration file")
        lines.append("")

        lines.append("# Log file path (optional)")
        lines.append('# Example: log_file = "/path/to/logs/tracksort.log"')
        if config["log_file"] is not None:
            lines.append(f"log_file = {self._format_toml_value(config['log_file'])}")
        lines.append("")

        lines.append("# Number of worker threads used to read and resolve metadata")
        lines.append(f"workers = {self._format_toml_value(config['workers'])}")
        lines.append("# Longest destination path (characters) before titles are truncated")
        lines.append(f"path_max_length = {self._format_toml_value(config['path_max_length'])}")
        lines.append("")

        lines.append("# Online correction")
        lines.append("# prefer_online = true lets provider values win over embedded tags")
        lines.append(f"prefer_online = {self._format_toml_value(config['prefer_online'])}")
        lines.append(f"provider_order = {self._format_toml_value(config['provider_order'])}")
        lines.append(f"provider_timeout = {self._format_toml_value(config['provider_timeout'])}")
        lines.append(
            f"provider_concurrency = {self._format_toml_value(config['provider_concurrency'])}"
        )
        lines.append(
            f"provider_min_interval = {self._format_toml_value(config['provider_min_interval'])}"
        )
        lines.append("")

        lines.append("# Naming templates; placeholders: genre, artist, album, year, track, title")
        lines.append(f"folder_template = {self._format_toml_value(config['folder_template'])}")
        lines.append(
            "folder_template_no_year = "
            f"{self._format_toml_value(config['folder_template_no_year'])}"
        )
        lines.append(f"file_template = {self._format_toml_value(config['file_template'])}")
        lines.append("")

        lines.append("# MusicBrainz application identity (optional)")
        if config.get("mb_app_name"):
            lines.append(f"mb_app_name = {self._format_toml_value(config['mb_app_name'])}")
        if config.get("mb_app_version"):
            lines.append(f"mb_app_version = {self._format_toml_value(config['mb_app_version'])}")
        if config.get("mb_contact"):
            lines.append(f"mb_contact = {self._format_toml_value(config['mb_contact'])}")
        lines.append("")

        for name, settings in config["providers"].items():
            lines.append(f"[providers.{name}]")
            lines.append(f"enabled = {self._format_toml_value(settings['enabled'])}")
            if settings.get("api_key"):
                lines.append(f"api_key = {self._format_toml_value(settings['api_key'])}")
            lines.append("")

        lines.append("# Extra genre keywords, e.g. \"Electronic\" = [\"chiptune\"]")
        lines.append("[genre_keywords]")
        for genre, keywords in config["genre_keywords"].items():
            lines.append(f"{self._format_toml_value(genre)} = {self._format_toml_value(keywords)}")
        lines.append("")

        lines.append("# Artist to genre mappings, e.g. \"Daft Punk\" = \"Electronic\"")
        lines.append("[artist_genres]")
        for artist, genre in config["artist_genres"].items():
            lines.append(f"{self._format_toml_value(artist)} = {self._format_toml_value(genre)}")
        lines.append("")

        return "\n".join(lines)

    def _format_toml_value(self, value: Any) -> str:
        """Format a value for TOML serialization.

        Args:
            value: Value to format

        Returns:
            str: Formatted value
        """
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, (str, Path)):
            return json.dumps(str(value), ensure_ascii=False)
        if isinstance(value, list):
            return "[" + ", ".join(self._format_toml_value(item) for item in value) + "]"
        return str(value)

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load configuration from file, creating a default one when missing.

        Args:
            path: Explicit config file. Defaults to the portable repository location.

        Returns:
            Config: Loaded configuration object.

        Raises:
            ConfigError: If the file is not valid TOML or holds invalid values.
        """
        config_file = path or default_config_path()
        if cls._instance is not None and cls._loaded_from == config_file:
            return cls._instance

        if not config_file.exists():
            config = cls()
            config.save(config_file)
            logger.info("Created default configuration at %s", config_file)
            cls._instance = config
            cls._loaded_from = config_file
            return config

        try:
            with open(config_file, "rb") as f:
                config_dict = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Invalid TOML in {config_file}: {e}") from e

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        try:
            instance = cls(**config_dict)
        except TypeError as e:
            raise ConfigError(f"Invalid configuration in {config_file}: {e}") from e

        logger.info("Configuration loaded from %s", config_file)
        cls._instance = instance
        cls._loaded_from = config_file
        return instance

    @classmethod
    def reset(cls) -> None:
        """Forget the cached instance so the next ``load`` reads from disk."""

        cls._instance = None
        cls._loaded_from = None


__all__ = [
    "Config",
    "DEFAULT_FILE_TEMPLATE",
    "DEFAULT_FOLDER_TEMPLATE",
    "DEFAULT_FOLDER_TEMPLATE_NO_YEAR",
    "KNOWN_PROVIDERS",
    "ProviderSettings",
]
