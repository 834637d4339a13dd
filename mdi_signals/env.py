"""
Environment Management Module for MDI Signals Generator

Uses python-dotenv for environment variable management.

Usage:
    from mdi_signals.env import env, get_env_var

    print(env.cache_dir)
    print(env.dist_dir)
    print(env.log_level)
"""

import os
from pathlib import Path
from typing import Any, Dict
from dotenv import load_dotenv, dotenv_values


# Global constants
GENERATOR_VERSION = '1.0.0'
GENERATOR_NAME = 'mdi-signals'

# Load .env from the working directory (generator runs from the mod checkout)
env_file = Path.cwd() / '.env'

if env_file.exists():
    load_dotenv(env_file)


def _resolve_path(value: str) -> str:
    """Resolve a configured path against the current working directory"""
    if not os.path.isabs(value):
        value = str(Path.cwd() / value)
    return value


class EnvConfig:
    """Environment configuration object"""

    @property
    def cache_dir(self) -> str:
        return _resolve_path(os.getenv('MDI_SIGNALS_PATHS_CACHE_DIR', 'cache'))

    @property
    def temp_dir(self) -> str:
        return _resolve_path(os.getenv('MDI_SIGNALS_PATHS_TEMP_DIR', 'temp'))

    @property
    def dist_dir(self) -> str:
        return _resolve_path(os.getenv('MDI_SIGNALS_PATHS_DIST_DIR', 'dist'))

    @property
    def template_dir(self) -> str:
        return _resolve_path(os.getenv('MDI_SIGNALS_PATHS_TEMPLATE_DIR', 'template'))

    @property
    def logs_dir(self) -> str:
        return _resolve_path(os.getenv('MDI_SIGNALS_PATHS_LOGS_DIR', 'logs'))

    @property
    def settings_file(self) -> str:
        return os.getenv('MDI_SIGNALS_SETTINGS_FILE', 'generator.json')

    @property
    def log_level(self) -> str:
        return os.getenv('MDI_SIGNALS_LOGGING_CONSOLE_LEVEL', 'INFO')

    @property
    def log_file_enabled(self) -> bool:
        return os.getenv('MDI_SIGNALS_LOGGING_FILE_ENABLED', 'false').lower() == 'true'

    @property
    def log_file_level(self) -> str:
        return os.getenv('MDI_SIGNALS_LOGGING_FILE_LEVEL', 'DEBUG')

    @property
    def log_simple_format(self) -> bool:
        return os.getenv('MDI_SIGNALS_LOGGING_CONSOLE_SIMPLE_FORMAT', 'true').lower() == 'true'

    @property
    def log_max_files(self) -> int:
        return int(os.getenv('MDI_SIGNALS_LOGGING_MAX_FILES', '5'))

    @property
    def log_max_size(self) -> str:
        return os.getenv('MDI_SIGNALS_LOGGING_MAX_SIZE', '10MB')

    @property
    def http_timeout(self) -> int:
        return get_env_var('MDI_SIGNALS_HTTP_TIMEOUT', 60, int)

    @property
    def progress_enabled(self) -> bool:
        return get_env_var('MDI_SIGNALS_PROGRESS', True, bool)

    @property
    def version(self) -> str:
        return GENERATOR_VERSION


# Global env object
env = EnvConfig()


def get_env_var(key: str, default: Any = None, var_type: type = str) -> Any:
    """
    Get environment variable with type conversion

    Args:
        key: Environment variable name
        default: Default value if not found
        var_type: Type to convert to (str, int, float, bool)

    Returns:
        Environment variable value converted to specified type
    """
    value = os.environ.get(key)

    if value is None:
        return default

    try:
        if var_type == bool:
            return value.lower() in ('true', '1', 'yes', 'on')
        elif var_type == int:
            return int(value)
        elif var_type == float:
            return float(value)
        else:
            return str(value)
    except (ValueError, TypeError):
        print(f"Warning: Cannot convert env var '{key}={value}' to {var_type.__name__}, using default")
        return default


def load_env_file(path: str, override: bool = False) -> Dict[str, str]:
    """Load an extra .env file into the process and return its values"""
    env_path = Path(path)

    if not env_path.exists():
        return {}

    load_dotenv(env_path, override=override)
    return {k: v for k, v in dotenv_values(env_path).items() if v is not None}

