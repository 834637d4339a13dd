"""Tests for mdi_signals/config_manager.py"""

import json
import pytest
from pathlib import Path

from mdi_signals.config_manager import ConfigManager, GeneratorPaths, GeneratorSettings, load_settings
from mdi_signals.errors import ConfigurationError, GeneratorError


def write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data))
    return path


BASE = {
    'repo': 'https://github.com/Templarian/MaterialDesign-SVG',
    'tag': 'v7.4.47',
    'zipPath': ['MaterialDesign-SVG-7.4.47', 'svg'],
}


class TestConfigManagerLoad:
    """Test cases for loading settings files"""

    def test_load_json_settings(self, tmp_path):
        """generator.json with camelCase zipPath is accepted"""
        settings = ConfigManager(str(write_json(tmp_path / 'generator.json', BASE))).load()

        assert settings.repo == BASE['repo']
        assert settings.tag == 'v7.4.47'
        assert settings.zip_path == ['MaterialDesign-SVG-7.4.47', 'svg']

    def test_defaults_applied(self, tmp_path):
        """Optional settings fall back to their defaults"""
        settings = load_settings(str(write_json(tmp_path / 'generator.json', BASE)))

        assert settings.mod_name == 'factorio-mdi-signals'
        assert settings.group_name == 'mdi-signals'
        assert settings.group_title == 'Material Design Icon Signals'
        assert settings.icon_prefix == 'mdi-'
        assert settings.signal_prefix == 'signal-'
        assert settings.sizes == [64, 32, 16, 8]
        assert settings.render_size == 1024
        assert settings.locale == 'en'

    def test_load_yaml_settings(self, tmp_path):
        """YAML settings with snake_case keys are accepted"""
        path = tmp_path / 'generator.yaml'
        path.write_text(
            "repo: https://example.com/icons\n"
            "tag: v1.0.0\n"
            "zip_path: [icons-1.0.0, svg]\n"
            "sizes: [32, 16]\n"
        )

        settings = ConfigManager(str(path)).load()

        assert settings.zip_path == ['icons-1.0.0', 'svg']
        assert settings.sizes == [32, 16]

    def test_overrides(self, tmp_path):
        """Non-None overrides replace file values"""
        path = write_json(tmp_path / 'generator.json', BASE)

        settings = ConfigManager(str(path)).load({'tag': 'v7.0.96', 'repo': None})

        assert settings.tag == 'v7.0.96'
        assert settings.repo == BASE['repo']

    def test_override_is_validated(self, tmp_path):
        """Overrides go through the same checks as file values"""
        path = write_json(tmp_path / 'generator.json', BASE)

        with pytest.raises(ConfigurationError, match="'tag' must be a non-empty string"):
            ConfigManager(str(path)).load({'tag': ''})

    def test_default_file_from_env(self, tmp_path, monkeypatch):
        """Settings file name comes from the environment"""
        monkeypatch.chdir(tmp_path)
        write_json(tmp_path / 'custom.json', BASE)
        monkeypatch.setenv('MDI_SIGNALS_SETTINGS_FILE', 'custom.json')

        assert ConfigManager().load().tag == 'v7.4.47'


class TestConfigManagerErrors:
    """Test cases for invalid settings"""

    def test_missing_file(self, tmp_path):
        """A missing settings file is a configuration error"""
        with pytest.raises(ConfigurationError, match='not found'):
            ConfigManager(str(tmp_path / 'missing.json')).load()

    def test_invalid_json(self, tmp_path):
        """Malformed JSON is reported with the file name"""
        path = tmp_path / 'generator.json'
        path.write_text('{"repo": ')

        with pytest.raises(ConfigurationError, match='Invalid JSON'):
            ConfigManager(str(path)).load()

    def test_invalid_yaml(self, tmp_path):
        """Malformed YAML is reported"""
        path = tmp_path / 'generator.yml'
        path.write_text('repo: [unclosed\n')

        with pytest.raises(ConfigurationError, match='Invalid YAML'):
            ConfigManager(str(path)).load()

    def test_invalid_encoding(self, tmp_path):
        """Bytes that are not UTF-8 are reported as a configuration error"""
        path = tmp_path / 'generator.json'
        path.write_bytes(b'{"repo": "\xff\xfe"}')

        with pytest.raises(ConfigurationError, match="Error reading config file"):
            ConfigManager(str(path)).load()

    def test_non_object_root(self, tmp_path):
        """The settings root must be an object"""
        with pytest.raises(ConfigurationError, match='must contain an object'):
            ConfigManager(str(write_json(tmp_path / 'generator.json', ['a']))).load()

    @pytest.mark.parametrize('missing', ['repo', 'tag', 'zipPath'])
    def test_required_settings(self, tmp_path, missing):
        """repo, tag and zipPath are required"""
        data = {k: v for k, v in BASE.items() if k != missing}

        with pytest.raises(ConfigurationError, match='Missing required setting'):
            ConfigManager(str(write_json(tmp_path / 'generator.json', data))).load()

    @pytest.mark.parametrize('key,value', [
        ('repo', ''),
        ('tag', 7),
        ('zipPath', 'svg'),
        ('zipPath', ['svg', 1]),
        ('sizes', []),
        ('sizes', [64, -1]),
        ('render_size', 0),
        ('render_size', True),
    ])
    def test_malformed_values(self, tmp_path, key, value):
        """Values of the wrong type or range are rejected"""
        data = dict(BASE, **{key: value})

        with pytest.raises(ConfigurationError):
            ConfigManager(str(write_json(tmp_path / 'generator.json', data))).load()

    def test_configuration_error_is_generator_error(self):
        """Configuration errors share the generator base class"""
        assert issubclass(ConfigurationError, GeneratorError)


class TestGeneratorPaths:
    """Test cases for path resolution"""

    def test_defaults_relative_to_cwd(self, tmp_path, monkeypatch):
        """Default directories resolve inside the working directory"""
        monkeypatch.chdir(tmp_path)
        for name in ('CACHE', 'TEMP', 'DIST', 'TEMPLATE'):
            monkeypatch.delenv(f'MDI_SIGNALS_PATHS_{name}_DIR', raising=False)

        paths = GeneratorPaths.from_env()

        assert paths.cache_dir == tmp_path / 'cache'
        assert paths.temp_dir == tmp_path / 'temp'
        assert paths.dist_dir == tmp_path / 'dist'
        assert paths.template_dir == tmp_path / 'template'

    def test_absolute_override(self, tmp_path, monkeypatch):
        """Absolute paths from the environment are kept"""
        monkeypatch.setenv('MDI_SIGNALS_PATHS_CACHE_DIR', str(tmp_path / 'shared-cache'))

        assert GeneratorPaths.from_env().cache_dir == tmp_path / 'shared-cache'

    def test_settings_dataclass_defaults(self):
        """GeneratorSettings carries the icon set defaults"""
        settings = GeneratorSettings(repo='r', tag='t', zip_path=[])
        assert settings.sizes == [64, 32, 16, 8]
