"""
Tests for configuration file support
"""

import pytest
import json
from pathlib import Path

from pinentry_menu.config import Config


class TestConfig:
    """Test configuration loading"""
    
    @pytest.fixture
    def temp_config(self, tmp_path):
        """Create temporary config directory"""
        config_dir = tmp_path / "pinentry_test"
        config_dir.mkdir()
        return Config(config_dir)
    
    def write(self, config, data):
        config.config_file.write_text(data if isinstance(data, str) else json.dumps(data))
    
    def test_default_dir(self, isolated_home):
        assert Config().config_dir == isolated_home
    
    def test_missing_file(self, temp_config):
        assert temp_config.get("runner", "default") == "default"
        assert temp_config.get_runner() is None
        assert temp_config.get_runners() == {}
    
    def test_get_runner(self, temp_config):
        self.write(temp_config, {"runner": "fuzzel"})
        assert temp_config.get_runner() == "fuzzel"
    
    def test_runner_wrong_type(self, temp_config):
        self.write(temp_config, {"runner": 3})
        assert temp_config.get_runner() is None
    
    def test_get_runners(self, temp_config):
        self.write(temp_config, {"runners": {"bemenu": "bemenu -p %s"}})
        assert temp_config.get_runners() == {"bemenu": "bemenu -p %s"}
    
    def test_runners_skips_bad_entries(self, temp_config):
        self.write(temp_config, {"runners": {"good": "good %s", "bad": ["x"]}})
        assert temp_config.get_runners() == {"good": "good %s"}
    
    def test_runners_not_object(self, temp_config):
        self.write(temp_config, {"runners": ["bemenu"]})
        assert temp_config.get_runners() == {}
    
    def test_malformed_json(self, temp_config):
        self.write(temp_config, "{not json")
        assert temp_config.get("runner") is None
    
    def test_top_level_not_object(self, temp_config):
        self.write(temp_config, "[1, 2]")
        assert temp_config.get("runner") is None
    
    def test_loaded_once(self, temp_config):
        self.write(temp_config, {"runner": "rofi"})
        assert temp_config.get_runner() == "rofi"
        self.write(temp_config, {"runner": "wofi"})
        assert temp_config.get_runner() == "rofi"
