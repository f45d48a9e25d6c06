"""
Configuration loader with priority: env > CLI > TOML > defaults
"""
import os
import tomllib
from pathlib import Path
from typing import Dict, Any, Optional

from ...core.constants import DEFAULT_SETTINGS_PATH, ENV_PREFIX
from ...core.exceptions import ConfigError
from ...core.settings import Settings


class ConfigLoader:
    """Builds Settings from the TOML file, CLI overrides and VMPROV_* variables"""
    
    env_mappings = {
        "MIRROR_DIR": "mirror_dir",
        "REMOTE": "remote",
        "BRANCH": "branch",
        "FALLBACK_BRANCH": "fallback_branch",
        "REMOTE_SCRIPT_DIR": "remote_script_dir",
        "TRANSPORT": "transport",
        "PORT": "port",
        "CONNECT_TIMEOUT": "connect_timeout",
        "GITHUB_REPO": "github_repo",
        "SSH_DIR": "ssh_dir",
    }
    numeric_keys = ("port", "connect_timeout")
    
    def __init__(self, environ: Optional[Dict[str, str]] = None):
        self._env_prefix = ENV_PREFIX
        self._environ = os.environ if environ is None else environ
    
    def load_toml(self, path: Path) -> Dict[str, Any]:
        """Load TOML configuration file"""
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        
        try:
            return tomllib.loads(path.read_text(encoding='utf-8'))
        except (tomllib.TOMLDecodeError, OSError) as e:
            raise ConfigError(f"Failed to parse TOML configuration: {e}") from e
    
    def load_env(self) -> Dict[str, Any]:
        """Load configuration from VMPROV_* environment variables"""
        config = {}
        for suffix, config_key in self.env_mappings.items():
            value = self._environ.get(self._env_prefix + suffix)
            if value:
                if config_key in self.numeric_keys:
                    config[config_key] = self._convert_value(value)
                else:
                    config[config_key] = value
        return config
    
    def _convert_value(self, value: str) -> Any:
        """int, then float, else the string itself"""
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return float(value)
        except ValueError:
            pass
        return value
    
    def merge_configs(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge multiple configurations with priority.
        Later configs override earlier ones; None values never override.
        """
        result: Dict[str, Any] = {}
        for config in configs:
            for key, value in config.items():
                if value is not None:
                    result[key] = value
        return result
    
    def load(
        self,
        toml_path: Optional[Path] = None,
        cli_overrides: Optional[Dict[str, Any]] = None,
        use_env: bool = True,
    ) -> Settings:
        """
        Load settings with priority: env > CLI > TOML > defaults
        
        Args:
            toml_path: Path to TOML configuration file; the default location
                is read only when it exists
            cli_overrides: CLI parameter overrides
            use_env: Whether to load from environment variables
        
        Returns:
            Validated Settings
        """
        configs = []
        
        if toml_path is not None:
            configs.append(self.load_toml(Path(toml_path).expanduser()))
        else:
            default_path = Path(DEFAULT_SETTINGS_PATH).expanduser()
            if default_path.exists():
                configs.append(self.load_toml(default_path))
        
        if cli_overrides:
            configs.append(cli_overrides)
        
        if use_env:
            env_config = self.load_env()
            if env_config:
                configs.append(env_config)
        
        return Settings.from_dict(self.merge_configs(*configs))
