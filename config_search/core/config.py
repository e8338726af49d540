"""Configuration management for the configuration file search tool."""

import logging
from pathlib import Path
from typing import Optional, Tuple
from dataclasses import dataclass, field
import configparser

from .exceptions import ConfigurationError, ValidationError
from .models import DEFAULT_EXCLUDE_PATHS, FormatOptions, SearchOptions


DEFAULT_CONFIG_DIR = Path.home() / ".config_search"
OUTPUT_FORMATS = ("text", "table", "json")


@dataclass
class SearchConfig:
    """Default search settings."""
    default_recursive: bool = True
    default_max_depth: int = 3
    default_exclude_paths: Tuple[str, ...] = DEFAULT_EXCLUDE_PATHS
    default_categorize: bool = True

    def to_search_options(self) -> SearchOptions:
        """Build the default SearchOptions from these settings."""
        return SearchOptions(
            recursive=self.default_recursive,
            max_depth=self.default_max_depth,
            exclude_paths=tuple(self.default_exclude_paths),
            group_by_category=self.default_categorize,
        )


@dataclass
class OutputConfig:
    """Default output settings."""
    show_paths: bool = True
    show_summary: bool = True
    format: str = "text"

    def to_format_options(self, group_by_category: bool = True) -> FormatOptions:
        return FormatOptions(
            show_paths=self.show_paths,
            show_summary=self.show_summary,
            group_by_category=group_by_category,
        )


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    file_enabled: bool = False
    file_path: Optional[Path] = None
    file_max_size_mb: int = 10
    file_backup_count: int = 5
    console_enabled: bool = True

    def __post_init__(self):
        if self.file_path is None:
            self.file_path = DEFAULT_CONFIG_DIR / "logs" / "config_search.log"


@dataclass
class AppConfig:
    """Main application configuration."""
    search: SearchConfig = field(default_factory=SearchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    app_name: str = "config-search"


def _split_paths(value: str) -> Tuple[str, ...]:
    """Split a comma or newline separated list of paths."""
    parts = value.replace("\n", ",").split(",")
    return tuple(part.strip() for part in parts if part.strip())


class ConfigManager:
    """Loads application configuration from an INI file."""

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to configuration file. If None, uses default location.
                         A missing file leaves the defaults in place.
        """
        if config_file is None:
            config_file = DEFAULT_CONFIG_DIR / "config.ini"

        self.config_file = Path(config_file)
        self.config = AppConfig()
        self.logger = logging.getLogger(__name__)

        if self.config_file.exists():
            self.load_from_file()

    def load_from_file(self) -> None:
        """
        Load configuration from INI file.

        Raises:
            ConfigurationError: If the file cannot be parsed or holds invalid values
        """
        try:
            parser = configparser.ConfigParser(interpolation=None)
            parser.read(self.config_file, encoding="utf-8")

            if 'search' in parser:
                search_section = parser['search']
                if 'default_recursive' in search_section:
                    self.config.search.default_recursive = search_section.getboolean('default_recursive')
                if 'default_max_depth' in search_section:
                    self.config.search.default_max_depth = search_section.getint('default_max_depth')
                if 'default_exclude_paths' in search_section:
                    self.config.search.default_exclude_paths = _split_paths(search_section.get('default_exclude_paths'))
                if 'default_categorize' in search_section:
                    self.config.search.default_categorize = search_section.getboolean('default_categorize')

            if 'output' in parser:
                output_section = parser['output']
                if 'show_paths' in output_section:
                    self.config.output.show_paths = output_section.getboolean('show_paths')
                if 'show_summary' in output_section:
                    self.config.output.show_summary = output_section.getboolean('show_summary')
                if 'format' in output_section:
                    output_format = output_section.get('format').strip().lower()
                    if output_format not in OUTPUT_FORMATS:
                        raise ValueError(f"unknown output format '{output_format}'")
                    self.config.output.format = output_format

            if 'logging' in parser:
                log_section = parser['logging']
                if 'level' in log_section:
                    self.config.logging.level = log_section.get('level').upper()
                if 'format' in log_section:
                    self.config.logging.format = log_section.get('format')
                if 'file_enabled' in log_section:
                    self.config.logging.file_enabled = log_section.getboolean('file_enabled')
                if 'file_path' in log_section:
                    self.config.logging.file_path = Path(log_section.get('file_path')).expanduser()
                if 'file_max_size_mb' in log_section:
                    self.config.logging.file_max_size_mb = log_section.getint('file_max_size_mb')
                if 'file_backup_count' in log_section:
                    self.config.logging.file_backup_count = log_section.getint('file_backup_count')
                if 'console_enabled' in log_section:
                    self.config.logging.console_enabled = log_section.getboolean('console_enabled')

            # Validate search defaults eagerly so a bad file fails at load time
            self.config.search.to_search_options()

        except (configparser.Error, ValueError, ValidationError) as e:
            raise ConfigurationError(f"Invalid configuration in {self.config_file}: {e}") from e

        self.logger.info(f"Configuration loaded from {self.config_file}")

    def save_to_file(self) -> None:
        """Save current configuration to INI file."""
        self.config_file.parent.mkdir(parents=True, exist_ok=True)

        parser = configparser.ConfigParser(interpolation=None)

        parser['search'] = {
            'default_recursive': str(self.config.search.default_recursive),
            'default_max_depth': str(self.config.search.default_max_depth),
            'default_exclude_paths': ', '.join(self.config.search.default_exclude_paths),
            'default_categorize': str(self.config.search.default_categorize),
        }

        parser['output'] = {
            'show_paths': str(self.config.output.show_paths),
            'show_summary': str(self.config.output.show_summary),
            'format': self.config.output.format,
        }

        parser['logging'] = {
            'level': self.config.logging.level,
            'format': self.config.logging.format,
            'file_enabled': str(self.config.logging.file_enabled),
            'file_path': str(self.config.logging.file_path),
            'file_max_size_mb': str(self.config.logging.file_max_size_mb),
            'file_backup_count': str(self.config.logging.file_backup_count),
            'console_enabled': str(self.config.logging.console_enabled),
        }

        with open(self.config_file, 'w', encoding="utf-8") as f:
            parser.write(f)

        self.logger.info(f"Configuration saved to {self.config_file}")

    def get_config(self) -> AppConfig:
        """Get the current configuration."""
        return self.config


# Global configuration instance
_config_manager = None


def get_config() -> AppConfig:
    """Get the global application configuration."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager.get_config()


def setup_config(config_file: Optional[Path] = None) -> ConfigManager:
    """
    Set up global configuration.

    Args:
        config_file: Optional path to configuration file

    Returns:
        ConfigManager instance
    """
    global _config_manager
    _config_manager = ConfigManager(config_file)
    return _config_manager
