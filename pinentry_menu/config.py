"""
Configuration file support for pinentry-menu
"""

import os
import json
from pathlib import Path
from typing import Optional, Dict, Any

from .logger import get_logger


class Config:
    """Read-only view of ``config.json`` in the config directory"""
    
    def __init__(self, config_dir: Optional[Path] = None):
        if config_dir is None:
            config_dir = self._get_config_dir()
        self.config_dir = config_dir
        self.config_file = config_dir / "config.json"
        self._config: Optional[Dict[str, Any]] = None
    
    @staticmethod
    def _get_config_dir() -> Path:
        """Get pinentry-menu configuration directory"""
        # PINENTRY_MENU_HOME overrides everything
        home = os.environ.get("PINENTRY_MENU_HOME")
        if home:
            return Path(home)
        
        if "XDG_CONFIG_HOME" in os.environ:
            config_home = Path(os.environ["XDG_CONFIG_HOME"])
        else:
            config_home = Path.home() / ".config"
        return config_home / "pinentry-menu"
    
    def _load(self) -> Dict[str, Any]:
        """Load configuration from file"""
        if self._config is not None:
            return self._config
        
        if not self.config_file.exists():
            self._config = {}
            return self._config
        
        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (OSError, ValueError) as e:
            get_logger().warning("ignoring unreadable config %s: %s", self.config_file, e)
            loaded = {}
        
        if not isinstance(loaded, dict):
            get_logger().warning("ignoring config %s: not a JSON object", self.config_file)
            loaded = {}
        
        self._config = loaded
        return self._config
    
    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration value"""
        config = self._load()
        return config.get(key, default)
    
    def get_runner(self) -> Optional[str]:
        """Preferred runner name, if configured"""
        runner = self.get("runner")
        if isinstance(runner, str) and runner:
            return runner
        return None
    
    def get_runners(self) -> Dict[str, str]:
        """
        User-defined runner templates
        
        Entries whose name or template is not a string are skipped.
        """
        runners = self.get("runners", {})
        if not isinstance(runners, dict):
            get_logger().warning("ignoring 'runners' in config: not a JSON object")
            return {}
        
        result = {}
        for name, template in runners.items():
            if isinstance(name, str) and isinstance(template, str):
                result[name] = template
            else:
                get_logger().warning("ignoring runner entry %r in config", name)
        return result
