import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Third-party loggers that flood INFO with per-request or per-statement lines
_NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine", "multipart")


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        try:
            from search_portal.config import settings
            level = settings.log_level
        except Exception:
            return logging.INFO
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(level: int | str | None = None, stream=None) -> None:
    """Configure the root logger for the portal (stdout by default)."""
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))
    if root.handlers:
        root.handlers.clear()
    root.addHandler(handler)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
