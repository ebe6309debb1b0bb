"""
Logging setup for helpdesk-client.

Library modules only call logging.getLogger(__name__). Entry points (test
suites, scripts) call bootstrap_logging() once to install handlers from a
logging.ini file, falling back to basicConfig when none is found.

LOG_LEVEL in the environment sets the level of the helpdesk_client logger and
is available to the INI file as %(log_level)s.
"""

import configparser
import logging
import logging.config
import os
import sys
from pathlib import Path
from typing import Optional

PACKAGE_LOGGER = 'helpdesk_client'
LOG_FORMAT = '%(levelname)s: %(name)s: %(message)s'
CONFIG_CANDIDATES = (Path('logging.ini'), Path('config') / 'logging.ini')
VALID_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def _log_level() -> str:
    level = os.environ.get('LOG_LEVEL', 'INFO').strip().upper()
    if level not in VALID_LEVELS:
        print(f"Warning: Invalid LOG_LEVEL '{level}', using INFO", file=sys.stderr)
        return 'INFO'
    return level


def _config_file() -> Optional[Path]:
    return next((path for path in CONFIG_CANDIDATES if path.exists()), None)


def _basic_config(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


def bootstrap_logging(config_path: Optional[Path] = None) -> None:
    """Configure logging for the current process.

    Args:
        config_path: INI file to load; looked up in the working directory
                     (logging.ini, then config/logging.ini) when omitted.
    """
    level = _log_level()
    config_path = config_path or _config_file()

    if config_path is None:
        _basic_config(level)
    else:
        try:
            logging.config.fileConfig(
                str(config_path),
                defaults={'log_level': level},
                disable_existing_loggers=False,
            )
        except (configparser.Error, KeyError, ValueError, RuntimeError, OSError) as e:
            print(f"Warning: Failed to load logging config from {config_path}: {e}", file=sys.stderr)
            _basic_config(level)

    logging.getLogger(PACKAGE_LOGGER).setLevel(level)
    logging.getLogger(__name__).debug(f"Logging configured at {level} from {config_path or 'defaults'}")
