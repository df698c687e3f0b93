import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "urllib3",
    "google_genai",
    "openai",
)


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure process-wide logging once.

    Idempotent: if the host (uvicorn, pytest) already attached handlers to the
    root logger, only the level of our package logger is adjusted.
    """
    effective = getattr(logging, (level or "INFO").upper(), logging.INFO)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=LOG_FORMAT)
    logging.getLogger("traveldesk").setLevel(effective)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
