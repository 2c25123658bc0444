# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Centralised logging configuration.

Handlers, formatters and levels are declared in  etc/logging.conf.  The only
thing that conf file cannot know is where the project lives on disk, so the
``%(log_file)s`` placeholder is filled in here before the text is handed to
``logging.config.fileConfig``.

``STARTPAGE_LOG_DIR`` moves the log directory (containers mount a volume
there); by default logs go to  <project root>/log/startpage.log.

Usage:
    from core.logger import logger
    logger.info("user %s logged in", username)
"""

import configparser
import logging
import logging.config
import os
from pathlib import Path

_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_LOGGING_CONF = _PROJECT_ROOT / "etc" / "logging.conf"
_LOG_DIR = Path(os.environ.get("STARTPAGE_LOG_DIR", _PROJECT_ROOT / "log"))
_LOG_FILE = _LOG_DIR / "startpage.log"


def _configure() -> None:
    # The rotating file handler opens its file at configuration time
    _LOG_DIR.mkdir(parents=True, exist_ok=True)

    raw = _LOGGING_CONF.read_text(encoding="utf-8")
    raw = raw.replace("%(log_file)s", _LOG_FILE.as_posix())

    # RawConfigParser: format strings such as %(asctime)s must reach the
    # logging module untouched, not be interpolated by configparser.
    parser = configparser.RawConfigParser()
    parser.read_string(raw)
    logging.config.fileConfig(parser, disable_existing_loggers=False)


_configure()

logger = logging.getLogger("startpage")
