import logging
import os


def configure_logging(default_level: int = logging.WARNING) -> None:
    """Configure the root logger with the project's format.

    Respects the DELVE_LOG_LEVEL env var if present; names that are not a
    logging level fall back to ``default_level``.
    """
    level_name = os.getenv("DELVE_LOG_LEVEL")
    level = default_level
    if level_name:
        resolved = logging.getLevelName(level_name.strip().upper())
        if isinstance(resolved, int):
            level = resolved

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(asctime)s] [%(levelname)s] %(name)s: %(message)s"))

    root = logging.getLogger()
    root.setLevel(level)
    # Remove existing handlers to avoid duplicates in repeated test runs
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
