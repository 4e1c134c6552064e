"""
Root logger setup.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger the first time it is called; later calls are
no-ops so the app factory and the ``python -m adboard`` entry point can
both call it safely.
"""
import logging
from pathlib import Path

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO", logfile: str | None = None) -> None:
    """Configure the root logger once.

    *level* is a level name such as ``"DEBUG"`` (case-insensitive; unknown
    names fall back to INFO).  When *logfile* is given, records are also
    written to that path, resolved against the working directory.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=_LOG_FORMAT, datefmt=_DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)
