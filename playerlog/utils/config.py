"""
Configuration management for playerlog.

Handles loading and merging configuration from:
- Built-in defaults
- Default configuration file
- User configuration file
- Environment variables
"""

import copy
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG: Dict[str, Any] = {
    "batch": {
        "max_chunks": 10,
        "max_workers": None,
        "parallel": True,
    },
    "compression": {
        "level": 6,
    },
    "logging": {
        "level": "INFO",
        "format": "console",
    },
}

_TRUE_VALUES = {"1", "true", "yes", "on"}


class Config:
    """Configuration manager for playerlog."""
    
    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration.
        
        Args:
            config_file: Path to configuration file. If None, only defaults
                and environment variables apply.
        """
        self._config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
        self._load_default_config()
        
        if config_file:
            self._load_config_file(config_file)
        
        self._apply_env_overrides()
    
    def _load_default_config(self) -> None:
        """Load default configuration file if present."""
        default_config_path = Path(__file__).parent.parent.parent / "config" / "default.yaml"
        if default_config_path.exists():
            self._load_config_file(str(default_config_path))
    
    def _load_config_file(self, config_file: str) -> None:
        """
        Load configuration from YAML file.
        
        Args:
            config_file: Path to YAML configuration file
        """
        with open(config_file, "r") as f:
            file_config = yaml.safe_load(f)
        if file_config:
            self._merge_config(file_config)
    
    def _merge_config(self, new_config: Dict[str, Any]) -> None:
        self._config = self._deep_merge(self._config, new_config)
    
    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """
        Deep merge two dictionaries.
        
        Args:
            base: Base dictionary
            override: Override dictionary
        
        Returns:
            Merged dictionary
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
    
    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides."""
        if max_chunks := os.getenv("PLAYERLOG_MAX_CHUNKS"):
            self.set("batch.max_chunks", int(max_chunks))
        
        if max_workers := os.getenv("PLAYERLOG_MAX_WORKERS"):
            self.set("batch.max_workers", int(max_workers))
        
        if parallel := os.getenv("PLAYERLOG_PARALLEL"):
            self.set("batch.parallel", parallel.strip().lower() in _TRUE_VALUES)
        
        if level := os.getenv("PLAYERLOG_COMPRESSION_LEVEL"):
            self.set("compression.level", int(level))
        
        if log_level := os.getenv("LOG_LEVEL"):
            self.set("logging.level", log_level)
        
        if log_format := os.getenv("LOG_FORMAT"):
            self.set("logging.format", log_format)
    
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation.
        
        Args:
            key: Configuration key in dot notation (e.g., "batch.max_chunks")
            default: Default value if key not found
        
        Returns:
            Configuration value
        """
        keys = key.split(".")
        value = self._config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value
    
    def set(self, key: str, value: Any) -> None:
        """
        Set configuration value using dot notation.
        
        Args:
            key: Configuration key in dot notation
            value: Value to set
        """
        keys = key.split(".")
        config = self._config
        for k in keys[:-1]:
            if k not in config:
                config[k] = {}
            config = config[k]
        config[keys[-1]] = value
    
    def to_dict(self) -> Dict[str, Any]:
        return copy.deepcopy(self._config)


# Global configuration instance
_config: Optional[Config] = None


def get_config(config_file: Optional[str] = None) -> Config:
    """
    Get global configuration instance.
    
    Args:
        config_file: Optional configuration file path, used on first call
    
    Returns:
        Configuration instance
    """
    global _config
    if _config is None:
        _config = Config(config_file)
    return _config


def reset_config() -> None:
    """Reset global configuration (mainly for testing)."""
    global _config
    _config = None
