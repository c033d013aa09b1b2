import logging
import os
import sys

DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVEL_ENV = "RECIPES_LOG_LEVEL"

# Shared formatter
CONSOLE_FORMAT = logging.Formatter("%(levelname)s | %(name)s | %(message)s")

# The primary application logger
app_logger = logging.getLogger("recipe_index")
app_logger.propagate = True


def _resolve_level(level: str | None) -> int:
    name = str(level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None):
    """Sets up the 'recipe_index' logger with a single stderr console handler.

    Stdout is reserved for the build summary and no log file is written, so the
    index stays the only artifact of a run.
    """
    effective_level = _resolve_level(level)

    if app_logger.handlers:
        if app_logger.level != effective_level:
            app_logger.setLevel(effective_level)
            for h in app_logger.handlers:
                h.setLevel(effective_level)
        return

    app_logger.setLevel(effective_level)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(CONSOLE_FORMAT)
    console_handler.setLevel(effective_level)
    app_logger.addHandler(console_handler)

    app_logger.debug("Logging initialized (Level: %s)", logging.getLevelName(effective_level))


def get_logger(name: str):
    """Get a configured logger within the 'recipe_index' namespace."""
    setup_logging()
    if name != "recipe_index" and not name.startswith("recipe_index."):
        name = f"recipe_index.{name}"
    return logging.getLogger(name)
