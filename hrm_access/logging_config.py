from __future__ import annotations

import logging


def configure_app_logging(level: str = "INFO") -> None:
    """
    Minimal logging configuration for this package.

    Notes:
    - Plain stdlib logging; uvicorn already installs handlers.
    - Set ``HRM_LOG_LEVEL=DEBUG`` to see every allow/deny decision.
    """

    normalized = level.upper()
    logging.getLogger("hrm_access").setLevel(normalized)
    # Ensure child loggers under hrm_access.* inherit this level.
    logging.getLogger("hrm_access").propagate = True
