"""
Configuration Management Module

Loads and validates the generator settings file:
- JSON (generator.json) or YAML settings
- Schema-driven defaults and validation
- Path layout resolved from the environment
"""

import json
import yaml
from typing import Dict, Any, Optional, List
from pathlib import Path
from dataclasses import dataclass, field

from .env import env
from .errors import ConfigurationError


@dataclass
class ConfigSchema:
    """Configuration schema definition"""
    name: str
    type: str  # 'string', 'integer', 'list'
    default: Any
    description: str
    required: bool = False
    aliases: List[str] = field(default_factory=list)
    min_value: Optional[int] = None


SETTINGS_SCHEMA = [
    ConfigSchema('repo', 'string', None, 'Repository URL hosting the icon archive', required=True),
    ConfigSchema('tag', 'string', None, 'Release tag to download', required=True),
    ConfigSchema('zip_path', 'list', None, 'Path segments to the SVG folder inside the archive',
                 required=True, aliases=['zipPath']),
    ConfigSchema('mod_name', 'string', 'factorio-mdi-signals', 'Mod name used in icon paths',
                 aliases=['modName']),
    ConfigSchema('group_name', 'string', 'mdi-signals', 'Item group owning all subgroups',
                 aliases=['groupName']),
    ConfigSchema('group_title', 'string', 'Material Design Icon Signals', 'Localized item group title',
                 aliases=['groupTitle']),
    ConfigSchema('icon_prefix', 'string', 'mdi-', 'Prefix added to every icon name',
                 aliases=['iconPrefix']),
    ConfigSchema('signal_prefix', 'string', 'signal-', 'Prefix added to every signal name',
                 aliases=['signalPrefix']),
    ConfigSchema('sizes', 'list', [64, 32, 16, 8], 'Strip sizes in pixels, left to right'),
    ConfigSchema('render_size', 'integer', 1024, 'Resolution of the rasterized master image',
                 aliases=['renderSize'], min_value=1),
    ConfigSchema('locale', 'string', 'en', 'Locale folder name'),
]


@dataclass
class GeneratorSettings:
    """Validated generator settings"""
    repo: str
    tag: str
    zip_path: List[str]
    mod_name: str = 'factorio-mdi-signals'
    group_name: str = 'mdi-signals'
    group_title: str = 'Material Design Icon Signals'
    icon_prefix: str = 'mdi-'
    signal_prefix: str = 'signal-'
    sizes: List[int] = field(default_factory=lambda: [64, 32, 16, 8])
    render_size: int = 1024
    locale: str = 'en'


@dataclass
class GeneratorPaths:
    """Filesystem layout used by one run"""
    cache_dir: Path
    temp_dir: Path
    dist_dir: Path
    template_dir: Path

    @classmethod
    def from_env(cls) -> 'GeneratorPaths':
        return cls(
            cache_dir=Path(env.cache_dir),
            temp_dir=Path(env.temp_dir),
            dist_dir=Path(env.dist_dir),
            template_dir=Path(env.template_dir),
        )


class ConfigManager:
    """Settings file loading and validation"""

    def __init__(self, settings_file: Optional[str] = None):
        self.settings_file = Path(settings_file or env.settings_file)

    def _load_json_file(self, file_path: Path) -> Dict[str, Any]:
        """Load and parse a JSON file"""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON syntax in {file_path}: {e}")

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load and parse a YAML file"""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax in {file_path}: {e}")

    def load_raw(self) -> Dict[str, Any]:
        """Read the settings file without validation"""
        if not self.settings_file.exists():
            raise ConfigurationError(f"Settings file not found: {self.settings_file}")

        try:
            if self.settings_file.suffix.lower() in ('.yaml', '.yml'):
                data = self._load_yaml_file(self.settings_file)
            else:
                data = self._load_json_file(self.settings_file)
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Error reading config file {self.settings_file}: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Settings file {self.settings_file} must contain an object")
        return data

    def load(self, overrides: Optional[Dict[str, Any]] = None) -> GeneratorSettings:
        """Load, merge overrides and validate the settings file"""
        data = self.load_raw()
        for key, value in (overrides or {}).items():
            if value is not None:
                data[key] = value

        return GeneratorSettings(**self.validate(data))

    def validate(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Validate raw settings against the schema

        Returns:
            Dictionary keyed by canonical setting names, defaults applied

        Raises:
            ConfigurationError: on missing or malformed values
        """
        values = {}

        for schema in SETTINGS_SCHEMA:
            value = None
            for key in [schema.name] + schema.aliases:
                if key in data:
                    value = data[key]
                    break

            if value is None:
                if schema.required:
                    raise ConfigurationError(f"Missing required setting '{schema.name}'")
                values[schema.name] = list(schema.default) if isinstance(schema.default, list) else schema.default
                continue

            values[schema.name] = self._check_type(schema, value)

        return values

    def _check_type(self, schema: ConfigSchema, value: Any) -> Any:
        if schema.type == 'string':
            if not isinstance(value, str) or not value.strip():
                raise ConfigurationError(f"Setting '{schema.name}' must be a non-empty string")
            return value

        if schema.type == 'integer':
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"Setting '{schema.name}' must be an integer")
            if schema.min_value is not None and value < schema.min_value:
                raise ConfigurationError(f"Setting '{schema.name}' must be >= {schema.min_value}")
            return value

        if not isinstance(value, list):
            raise ConfigurationError(f"Setting '{schema.name}' must be a list")

        if schema.name == 'sizes':
            if not value or not all(isinstance(v, int) and not isinstance(v, bool) and v > 0 for v in value):
                raise ConfigurationError("Setting 'sizes' must be a non-empty list of positive integers")
        elif not all(isinstance(v, str) for v in value):
            raise ConfigurationError(f"Setting '{schema.name}' must be a list of strings")

        return list(value)


def load_settings(settings_file: Optional[str] = None,
                  overrides: Optional[Dict[str, Any]] = None) -> GeneratorSettings:
    """Convenience wrapper around ConfigManager.load"""
    return ConfigManager(settings_file).load(overrides)
