"""
Tests for settings module.
"""

import pytest
import json
import tempfile
from pathlib import Path
from vatsim_status.config.settings import Settings
from vatsim_status.config.constants import DEFAULT_ENCODING


class TestSettings:
    """Test cases for Settings class."""

    @pytest.fixture
    def temp_config_dir(self):
        """Create a temporary directory for config files."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    @pytest.fixture
    def settings_instance(self, temp_config_dir):
        """Point the settings singleton to a temp directory, restore it afterwards."""
        settings = Settings()
        original_dir, original_file = settings.config_dir, settings.config_file

        settings.config_dir = temp_config_dir
        settings.config_file = temp_config_dir / "settings.json"
        settings.reload()

        yield settings

        settings.config_dir, settings.config_file = original_dir, original_file
        settings.reload()

    def test_singleton(self):
        """Test that only one settings instance exists."""
        assert Settings() is Settings()

    def test_default_settings(self, settings_instance):
        """Test that default settings are loaded correctly."""
        assert settings_instance.get('default_encoding') == DEFAULT_ENCODING
        assert settings_instance.get('min_supported_format_version') == 8
        assert settings_instance.get('max_supported_format_version') == 9
        assert settings_instance.get('show_faults') is False
        assert isinstance(settings_instance.get('top_airports'), int)

    def test_supported_format_versions(self, settings_instance):
        """Test the version range helper."""
        assert settings_instance.supported_format_versions() == (8, 9)

        settings_instance.set('max_supported_format_version', 10)
        assert settings_instance.supported_format_versions() == (8, 10)

    def test_get_nonexistent_setting(self, settings_instance):
        """Test getting a non-existent setting returns None."""
        assert settings_instance.get('nonexistent_key') is None

    def test_get_nonexistent_setting_with_default(self, settings_instance):
        """Test getting a non-existent setting with default value."""
        assert settings_instance.get('nonexistent_key', 'default_value') == 'default_value'

    def test_set_overwrite_existing(self, settings_instance):
        """Test overwriting an existing setting."""
        settings_instance.set('default_encoding', 'utf-8')
        assert settings_instance.get('default_encoding') == 'utf-8'

    def test_get_all_is_a_copy(self, settings_instance):
        """Test that get_all cannot modify the settings."""
        values = settings_instance.get_all()
        values['default_encoding'] = 'changed'

        assert settings_instance.get('default_encoding') == DEFAULT_ENCODING

    def test_save_and_reload_settings(self, settings_instance):
        """Test saving and loading settings from file."""
        settings_instance.set('top_airports', 10)
        settings_instance.set('show_faults', True)

        assert settings_instance.save_settings()
        assert settings_instance.config_file.exists()

        settings_instance.set('top_airports', 3)
        settings_instance.reload()

        assert settings_instance.get('top_airports') == 10
        assert settings_instance.get('show_faults') is True

    def test_save_creates_directory(self, settings_instance, temp_config_dir):
        """Test that save_settings creates config directory if needed."""
        new_dir = temp_config_dir / "subdir" / "config"
        settings_instance.config_dir = new_dir
        settings_instance.config_file = new_dir / "settings.json"

        settings_instance.save_settings()

        assert new_dir.exists()
        assert settings_instance.config_file.exists()

    def test_load_invalid_json(self, settings_instance):
        """Test loading settings from invalid JSON file."""
        settings_instance.config_file.write_text("invalid json {{{")

        settings_instance.reload()

        assert settings_instance.get('default_encoding') == DEFAULT_ENCODING

    def test_load_nonexistent_file(self, settings_instance):
        """Test that loading without a file keeps defaults and creates nothing."""
        settings_instance.reload()

        assert settings_instance.get('max_supported_format_version') == 9
        assert not settings_instance.config_file.exists()

    def test_json_file_format(self, settings_instance):
        """Test that saved JSON file is valid and readable."""
        settings_instance.set('log_level', 'DEBUG')
        settings_instance.save_settings()

        with open(settings_instance.config_file, 'r') as f:
            data = json.load(f)

        assert isinstance(data, dict)
        assert data['log_level'] == 'DEBUG'

    def test_reset_to_defaults(self, settings_instance):
        """Test resetting changed values."""
        settings_instance.set('default_encoding', 'utf-8')

        settings_instance.reset_to_defaults()

        assert settings_instance.get('default_encoding') == DEFAULT_ENCODING
        assert settings_instance.config_file.exists()
