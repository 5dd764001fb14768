"""
Loguru setup for the library and the CLI.

stdout carries results, so console logs always go to stderr.
"""

import os
import sys
from pathlib import Path

from loguru import logger

LOG_DIR = Path(".stereocode") / "logs"

_CONSOLE_FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"

_configured = False


def _env_flag(key: str) -> bool:
    return os.getenv(key, "").lower() in ("1", "true", "yes")


def setup_logging(level="INFO", suppress_console=None, enable_file_logging=None, force=False):
    """
    Configure the global logger once; force=True reconfigures it.

    Console logs are dropped when suppress_console is set or, if it is None,
    when STEREOCODE_MACHINE_MODE is. A rotating log file under .stereocode/logs
    is added when enable_file_logging is set or STEREOCODE_FILE_LOGGING is.
    """
    global _configured
    if _configured and not force:
        return
    _configured = True

    logger.remove()

    if suppress_console is None:
        suppress_console = _env_flag("STEREOCODE_MACHINE_MODE")
    if not suppress_console:
        logger.add(sys.stderr, level=level, format=_CONSOLE_FORMAT)

    if enable_file_logging is None:
        enable_file_logging = _env_flag("STEREOCODE_FILE_LOGGING")
    if enable_file_logging:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        logger.add(LOG_DIR / "stereocode.log", level=level, rotation="10 MB", retention=3)


setup_logging()
