"""
Process-wide logging setup for the User Orders API.

``create_app`` calls ``setup_logging`` every time an application is
built.  The root level follows the latest call, while the console and
file handlers are installed only by the first one.
"""

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Apply ``level`` to the root logger and install its handlers once.

    ``level`` is a level name such as ``"debug"`` or ``"WARNING"``;
    anything unknown means ``INFO``.  ``logfile`` (``LOG_FILE`` in the
    settings) adds a UTF-8 file handler next to the console one.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if root.handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(Path(logfile).resolve(), encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
