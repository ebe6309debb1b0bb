"""
Client settings management.

Settings come from config/helpdesk.yaml (when present) overlaid by environment
variables, and are validated into a ClientSettings model.
"""
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml
from pydantic import BaseModel, ValidationError, field_validator

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path('config') / 'helpdesk.yaml'
DEFAULT_MOCK_URL = 'https://helpdesk.example.com'

# Environment variable backing each setting
ENV_VARS = {
    'url': 'HELPDESK_URL',
    'username': 'HELPDESK_USERNAME',
    'token': 'HELPDESK_TOKEN',
    'mock': 'STUB_API',
    'timeout': 'HELPDESK_TIMEOUT',
}


def is_truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('true', '1', 'yes', 'on')


class ClientSettings(BaseModel):
    """Validated client settings."""
    url: str
    username: Optional[str] = None
    token: Optional[str] = None
    mock: bool = False
    timeout: float = 30.0

    @field_validator('url')
    @classmethod
    def _normalize_url(cls, value: str) -> str:
        value = value.strip()
        if not value.startswith(('http://', 'https://')):
            raise ValueError(f"url must start with http:// or https://, got '{value}'")
        return value.rstrip('/')

    @field_validator('mock', mode='before')
    @classmethod
    def _parse_mock(cls, value: Any) -> bool:
        return is_truthy(value)

    @field_validator('timeout')
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @property
    def auth(self) -> Optional[Tuple[str, str]]:
        """Basic auth credentials for API token authentication."""
        if self.username and self.token:
            return f"{self.username}/token", self.token
        return None


def _load_config_file(config_path: Path) -> Dict[str, Any]:
    """Load settings from a YAML file."""
    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse {config_path}: {e}")

    if not isinstance(config_data, dict):
        raise ConfigurationError(f"{config_path} must contain a dictionary")

    logger.debug(f"Loaded settings from {config_path}")
    return config_data


def load_settings(config_path: Optional[Union[str, Path]] = None, **overrides) -> ClientSettings:
    """
    Load client settings.

    Layers, lowest priority first: the YAML config file, environment
    variables, then explicit keyword overrides.

    Args:
        config_path: YAML file to read; defaults to config/helpdesk.yaml in the
                     working directory (skipped when absent)
        **overrides: Setting values taking precedence over everything else

    Raises:
        ConfigurationError: If a setting is missing or invalid, or the
                            explicitly given config file does not exist
    """
    values: Dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(f"Settings file not found: {config_path}")
        values.update(_load_config_file(config_path))
    elif DEFAULT_CONFIG_PATH.exists():
        values.update(_load_config_file(DEFAULT_CONFIG_PATH))

    for name, env_var in ENV_VARS.items():
        env_value = os.environ.get(env_var)
        if env_value is not None and env_value.strip():
            values[name] = env_value.strip()

    values.update({name: value for name, value in overrides.items() if value is not None})

    if not values.get('url') and is_truthy(values.get('mock', False)):
        values['url'] = DEFAULT_MOCK_URL

    if not values.get('url'):
        raise ConfigurationError("No service URL configured", setting_name=ENV_VARS['url'])

    try:
        return ClientSettings(**values)
    except ValidationError as e:
        first = e.errors()[0]
        name = str(first['loc'][0]) if first.get('loc') else None
        raise ConfigurationError(f"Invalid settings: {first['msg']}", setting_name=ENV_VARS.get(name, name))


# Global settings cache
_settings: Optional[ClientSettings] = None


def get_settings() -> ClientSettings:
    """Get the cached client settings, loading them on first use."""
    global _settings

    if _settings is None:
        _settings = load_settings()
        logger.debug(f"Settings loaded (url={_settings.url}, mock={_settings.mock})")
    return _settings


def reset_settings() -> None:
    """Clear the settings cache so the next get_settings() reloads."""
    global _settings
    _settings = None


def is_api_mocked() -> bool:
    """Check if the client is configured to simulate the API in memory."""
    return get_settings().mock
