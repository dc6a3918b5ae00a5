"""
Logging configuration for the menu matcher.

The engine modules only create loggers; nothing is configured until an
application calls setup_logging(). The menu-matcher command line calls it
with its --log-level option, falling back to LOG_LEVEL.

Usage:
    from menu_matcher.logging_config import setup_logging
    setup_logging("DEBUG")  # show every match decision with its score

Environment variables:
    LOG_LEVEL: DEBUG, INFO, WARNING, ERROR, or CRITICAL (default: INFO)

At INFO the matcher reports special instruction classifications and
suggestions; DEBUG adds exact and fuzzy hits, misses and thresholds.
"""
import logging
import os
import sys

VALID_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def setup_logging(level: str = None) -> None:
    """
    Configure the root handler and the menu_matcher logger level.

    Args:
        level: Level name, case-insensitive. Defaults to the LOG_LEVEL env
               var; unknown names fall back to INFO.
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "INFO")
    level = level.upper()
    if level not in VALID_LEVELS:
        level = "INFO"

    numeric_level = getattr(logging, level)

    # stdout is reserved for the command line's JSON output
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    logging.getLogger("menu_matcher").setLevel(numeric_level)
    logging.getLogger(__name__).debug("Matcher logging configured at %s level", level)
