import logging
import os
import sys

LOG_LEVEL_ENV = "AVSG_LOG_LEVEL"


def resolve_level(default_level: int = logging.WARNING) -> int:
    """Return the log level, letting the AVSG_LOG_LEVEL env var override ``default_level``."""
    level_name = os.getenv(LOG_LEVEL_ENV)
    if level_name:
        level = getattr(logging, level_name.upper(), None)
        # logging also exposes non-level constants such as BASIC_FORMAT
        if isinstance(level, int):
            return level
    return default_level


def configure_logging(level: int = logging.WARNING) -> None:
    # stderr, so log lines never end up in decrypted output written to stdout
    handler = logging.StreamHandler(stream=sys.stderr)
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(resolve_level(level))
    # Remove existing handlers to avoid duplicates in repeated test runs
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
