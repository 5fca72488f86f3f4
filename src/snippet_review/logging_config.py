"""Logging setup shared by the API and the demo script."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a basic stream handler on the root logger.

    Calling it again only updates the level.

    Args:
        level: Level name such as "DEBUG" or "INFO"
    """
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT)
    root.setLevel(level.upper())
