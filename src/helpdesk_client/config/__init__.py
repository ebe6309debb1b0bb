"""
Client configuration: settings and logging.
"""

from .logging import bootstrap_logging
from .settings import ClientSettings, get_settings, is_api_mocked, load_settings, reset_settings

__all__ = [
    'bootstrap_logging',
    'ClientSettings',
    'get_settings',
    'is_api_mocked',
    'load_settings',
    'reset_settings',
]
