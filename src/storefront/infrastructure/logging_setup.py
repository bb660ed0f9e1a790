"""Logging set-up for the storefront process."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
    # httpx logs every request line at INFO, including gateway URLs.
    logging.getLogger("httpx").setLevel(logging.WARNING)
