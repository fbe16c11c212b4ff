#!/usr/bin/env python3
"""
Build Configuration

Explicit configuration for a registry build, passed into the builder instead
of module-level path constants.

Sources, lowest to highest precedence:
    1. Dataclass defaults
    2. [build] section of an INI file
    3. Command-line overrides

INI Format:
    [build]
    server_archive = ./server.jar
    work_directory = ./temp_data
    output_directory = ./registries
    java = java
    namespace = minecraft
    generator_timeout = 600
    log = build.log
"""

import configparser
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

from ..constants import GENERATED_DATA_DIRECTORY

BUILD_SECTION = "build"

# INI key -> BuildConfig field
_INI_KEYS = {
    'server_archive': 'server_archive_path',
    'work_directory': 'work_directory',
    'output_directory': 'output_directory',
    'java': 'java_executable',
    'namespace': 'namespace',
    'generator_timeout': 'generator_timeout',
    'log': 'log_path',
}

_PATH_FIELDS = ('server_archive_path', 'work_directory', 'output_directory', 'log_path')


@dataclass(frozen=True)
class BuildConfig:
    """Configuration for a single build run"""
    server_archive_path: Path = Path("./server.jar")  # Bundled server archive with the data generator
    work_directory: Path = Path("./temp_data")  # Generator cwd, recreated on each generation
    output_directory: Path = Path("./registries")  # Recreated on each build
    java_executable: str = "java"
    namespace: str = "minecraft"
    generator_timeout: Optional[float] = None  # Seconds, None waits forever
    log_path: Path = Path("build.log")

    def __post_init__(self):
        """Validate configuration"""
        for name in _PATH_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, Path):
                object.__setattr__(self, name, Path(value))

        if not self.namespace or ':' in self.namespace:
            raise ValueError(f"Invalid namespace: {self.namespace!r}")

        if not self.java_executable:
            raise ValueError("java executable must not be empty")

        if self.generator_timeout is not None:
            timeout = float(self.generator_timeout)
            if timeout <= 0:
                raise ValueError(f"generator_timeout must be positive, got {self.generator_timeout}")
            object.__setattr__(self, 'generator_timeout', timeout)

    @property
    def generated_data_path(self) -> Path:
        """Root of the generated JSON tree for the configured namespace."""
        return self.work_directory / GENERATED_DATA_DIRECTORY / self.namespace

    @classmethod
    def from_ini(cls, config_path: Path) -> 'BuildConfig':
        """
        Load configuration from the [build] section of an INI file.

        Relative paths are resolved against the INI file's directory.

        Args:
            config_path: Path to the INI file

        Returns:
            BuildConfig with INI values over the defaults
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        # No interpolation: paths may contain '%'
        parser = configparser.ConfigParser(interpolation=None)
        try:
            parser.read(config_path, encoding='utf-8')
        except configparser.Error as e:
            raise ValueError(f"Invalid config file {config_path}: {e}") from e

        if not parser.has_section(BUILD_SECTION):
            raise ValueError(f"Missing [{BUILD_SECTION}] section in {config_path}")

        section = parser[BUILD_SECTION]
        values: Dict[str, Any] = {}

        for key, field_name in _INI_KEYS.items():
            raw = section.get(key)
            if raw is None or not raw.strip():
                continue
            raw = raw.strip()

            if field_name in _PATH_FIELDS:
                path = Path(raw)
                values[field_name] = path if path.is_absolute() else config_path.parent / path
            elif field_name == 'generator_timeout':
                try:
                    values[field_name] = float(raw)
                except ValueError as e:
                    raise ValueError(f"Invalid generator_timeout: {raw}") from e
            else:
                values[field_name] = raw

        unknown = set(section.keys()) - set(_INI_KEYS)
        if unknown:
            raise ValueError(f"Unknown keys in [{BUILD_SECTION}]: {', '.join(sorted(unknown))}")

        return cls(**values)

    def with_overrides(self, **overrides: Any) -> 'BuildConfig':
        """
        Copy with the given fields replaced. None values are ignored so
        unset command-line flags keep the current value.
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown config options: {', '.join(sorted(unknown))}")

        changes = {name: value for name, value in overrides.items() if value is not None}
        return replace(self, **changes) if changes else self
