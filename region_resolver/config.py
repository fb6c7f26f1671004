"""
Configuration management for the region resolver application.

This module provides the ResolverConfig dataclass holding reference data
paths, matching options, realtime and server settings, and logging options.
"""

import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Mapping, Optional

from .exceptions import ConfigurationError

DATA_DIRECTORY = Path(__file__).parent / 'data'

LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

ENV_PREFIX = 'REGION_RESOLVER_'


@dataclass
class ResolverConfig:
    """Configuration class for the region resolver."""

    # Reference data files
    divisions_file: str = str(DATA_DIRECTORY / 'divisions.csv')
    districts_file: str = str(DATA_DIRECTORY / 'districts.csv')
    upazilas_file: str = str(DATA_DIRECTORY / 'upazilas.csv')

    # Fuzzy fallback for name hints; None keeps plain substring matching
    hint_fuzzy_threshold: Optional[int] = None

    # Realtime channels
    channel_prefix: str = 'user:'

    # HTTP server
    host: str = '127.0.0.1'
    port: int = 5000

    # Batch output
    output_directory: Optional[str] = None

    # Logging configuration
    log_level: str = 'INFO'
    log_file: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_paths()
        self._validate_values()
        if self.output_directory:
            Path(self.output_directory).mkdir(parents=True, exist_ok=True)

    def _validate_paths(self):
        """Validate that reference data files exist."""
        for name in ('divisions_file', 'districts_file', 'upazilas_file'):
            path = getattr(self, name)
            if not os.path.exists(path):
                raise FileNotFoundError(f"Reference data file not found: {path}")

    def _validate_values(self):
        if self.hint_fuzzy_threshold is not None and not 0 <= self.hint_fuzzy_threshold <= 100:
            raise ConfigurationError(
                f"Hint fuzzy threshold must be between 0 and 100: {self.hint_fuzzy_threshold}",
                config_key='hint_fuzzy_threshold',
                config_value=self.hint_fuzzy_threshold
            )

        if not 0 < self.port < 65536:
            raise ConfigurationError(
                f"Port must be between 1 and 65535: {self.port}",
                config_key='port',
                config_value=self.port
            )

        if not self.channel_prefix:
            raise ConfigurationError(
                "Channel prefix must not be empty", config_key='channel_prefix'
            )

        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}",
                config_key='log_level',
                config_value=self.log_level,
                valid_values=LOG_LEVELS
            )

    @classmethod
    def from_dict(cls, config_dict: Dict) -> 'ResolverConfig':
        """Create configuration from dictionary."""
        return cls(**config_dict)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ResolverConfig':
        """
        Create configuration from ``REGION_RESOLVER_*`` environment variables.

        Unset variables keep their defaults.

        Args:
            environ: Mapping to read from, defaults to ``os.environ``

        Returns:
            ResolverConfig instance

        Raises:
            ConfigurationError: If a numeric variable cannot be parsed
        """
        environ = os.environ if environ is None else environ
        values = {}

        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == '':
                continue
            if f.name in ('hint_fuzzy_threshold', 'port'):
                try:
                    values[f.name] = int(raw)
                except ValueError:
                    raise ConfigurationError(
                        f"{ENV_PREFIX + f.name.upper()} must be an integer: {raw}",
                        config_key=f.name,
                        config_value=raw
                    )
            else:
                values[f.name] = raw

        return cls(**values)

    def to_dict(self) -> Dict:
        """Convert configuration to dictionary."""
        return {
            'divisions_file': self.divisions_file,
            'districts_file': self.districts_file,
            'upazilas_file': self.upazilas_file,
            'hint_fuzzy_threshold': self.hint_fuzzy_threshold,
            'channel_prefix': self.channel_prefix,
            'host': self.host,
            'port': self.port,
            'output_directory': self.output_directory,
            'log_level': self.log_level,
            'log_file': self.log_file
        }
