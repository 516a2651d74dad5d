"""
Configuration management for Benchwarmer.
Handles loading, validation, and access to application settings.
"""

import logging
import yaml
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, field
from pathlib import Path


logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "INFO"
    file: str = "benchwarmer.log"
    max_size_mb: int = 10
    backup_count: int = 5


@dataclass
class AnalysisConfig:
    """Lineup analysis settings."""
    # None means scale the bound with the number of lineup slots
    max_chain_depth: Optional[int] = None


@dataclass
class PayloadConfig:
    """Corrections applied to provider player payloads."""
    invalid_positions: List[str] = field(
        default_factory=lambda: ["RB/WR", "RB/WR/TE", "WR/TE", "OP"]
    )
    default_position_fixes: Dict[str, str] = field(
        default_factory=lambda: {"RB/WR": "WR"}
    )


@dataclass
class AppConfig:
    """Main application configuration settings."""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    analysis: AnalysisConfig = field(default_factory=AnalysisConfig)
    payload: PayloadConfig = field(default_factory=PayloadConfig)


class ConfigManager:
    """Manages application configuration loading and validation."""

    def __init__(self, config_path: str = "config.yaml", required: bool = False):
        self.config_path = Path(config_path)
        self.required = required
        self._config: Optional[AppConfig] = None

    def load_config(self) -> AppConfig:
        """Load configuration from YAML file."""
        if not self.config_path.exists():
            if self.required:
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
            logger.debug(f"No config file at {self.config_path}, using defaults")
            self._config = AppConfig()
            return self._config

        with open(self.config_path, 'r') as file:
            config_data = yaml.safe_load(file) or {}

        if not isinstance(config_data, dict):
            raise ValueError(f"Configuration root must be a mapping: {self.config_path}")

        self._config = self._build_config(config_data)
        return self._config

    def _build_config(self, config_data: Dict[str, Any]) -> AppConfig:
        logging_data = config_data.get('logging') or {}
        analysis_data = config_data.get('analysis') or {}
        payload_data = config_data.get('payload') or {}

        defaults = LoggingConfig()
        logging_config = LoggingConfig(
            level=str(logging_data.get('level', defaults.level)).upper(),
            file=logging_data.get('file', defaults.file),
            max_size_mb=logging_data.get('max_size_mb', defaults.max_size_mb),
            backup_count=logging_data.get('backup_count', defaults.backup_count)
        )

        if logging_config.level not in VALID_LOG_LEVELS:
            raise ValueError(f"Invalid logging level: {logging_config.level}")
        if not isinstance(logging_config.max_size_mb, int) or logging_config.max_size_mb <= 0:
            raise ValueError("logging.max_size_mb must be a positive integer")
        if not isinstance(logging_config.backup_count, int) or logging_config.backup_count < 0:
            raise ValueError("logging.backup_count must be a non-negative integer")

        max_chain_depth = analysis_data.get('max_chain_depth')
        if max_chain_depth is not None:
            if isinstance(max_chain_depth, bool) or not isinstance(max_chain_depth, int) \
                    or max_chain_depth <= 0:
                raise ValueError("analysis.max_chain_depth must be a positive integer or null")
        analysis_config = AnalysisConfig(max_chain_depth=max_chain_depth)

        payload_defaults = PayloadConfig()
        payload_config = PayloadConfig(
            invalid_positions=list(
                payload_data.get('invalid_positions', payload_defaults.invalid_positions)
            ),
            default_position_fixes=dict(
                payload_data.get('default_position_fixes', payload_defaults.default_position_fixes)
            )
        )

        return AppConfig(
            logging=logging_config,
            analysis=analysis_config,
            payload=payload_config
        )

    def get_config(self) -> AppConfig:
        """Get the current configuration, loading if necessary."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def reload_config(self) -> AppConfig:
        """Reload configuration from file."""
        self._config = None
        return self.get_config()


# Global config instance
config_manager = ConfigManager()


def get_config() -> AppConfig:
    """Get the current application configuration."""
    return config_manager.get_config()


def use_config_file(config_path: str) -> AppConfig:
    """Point the global config at an explicit file and load it."""
    global config_manager
    manager = ConfigManager(config_path, required=True)
    config = manager.get_config()
    config_manager = manager
    return config
