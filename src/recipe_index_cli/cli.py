import argparse
import sys

from recipe_index_core import __version__
from recipe_index_core.config import IndexConfig
from recipe_index_core.index_builder import run
from recipe_index_core.logger import get_logger, setup_logging

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=(
            "Build recipes.json from the IIIF manifests in ./manifests. "
            "Set PAGES_BASE to change the public base URL of the generated links."
        )
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None):
    """CLI entry point."""
    _build_parser().parse_args(argv)

    config = IndexConfig.from_env()
    setup_logging(config.log_level)
    logger.debug("Pages base: %s", config.pages_base)

    try:
        result = run(config)
    except Exception as e:
        logger.debug("Fatal error while building the recipe index", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Wrote {result.output_path.name} with {result.count} recipes.")
