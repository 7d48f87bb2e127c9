import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    """Configure the root logger once and return it.

    A stream handler is always installed; a rotating file handler is added
    when ``log_file`` is given. Repeated calls only update the level.
    """
    root = logging.getLogger()
    root.setLevel(level.upper())
    if getattr(root, "_mcp_relay_configured", False):
        return root

    fmt = logging.Formatter(LOG_FORMAT)

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    root.addHandler(ch)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(path, maxBytes=5_000_000, backupCount=3)
        fh.setFormatter(fmt)
        root.addHandler(fh)

    root._mcp_relay_configured = True  # type: ignore[attr-defined]
    return root
