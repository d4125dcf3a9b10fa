"""
Command-line entry point: build the static page once and exit.
"""

import argparse
import sys
from typing import Optional, Sequence

import yaml
from pydantic import ValidationError

from feed_aggregator import __version__
from feed_aggregator.config import get_config, load_config_from_yaml, reload_config, set_config
from feed_aggregator.core.pipeline import create_pipeline
from feed_aggregator.core.registry import ConfigError
from feed_aggregator.logger import get_logger, setup_logger

logger = get_logger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="feed-aggregator",
        description="Aggregate RSS/Atom feeds into a static HTML page",
    )
    parser.add_argument("--sources", help="Feed source file (default: config sources_file)")
    parser.add_argument("--output", help="Output HTML path (default: <output.directory>/<output.filename>)")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--log-level", help="Log level (DEBUG, INFO, WARNING, ...)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one aggregation pass.

    Returns:
        Process exit status: 0 on success, 1 if the source registry is unusable
    """
    args = build_arg_parser().parse_args(argv)

    try:
        if args.config:
            set_config(load_config_from_yaml(args.config))
        else:
            reload_config()
    except (FileNotFoundError, yaml.YAMLError, ValidationError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logger(level=args.log_level)
    config = get_config()

    try:
        result = create_pipeline().build(sources_path=args.sources, output_path=args.output)
    except ConfigError as e:
        logger.error(f"Invalid source registry: {e}")
        return 1

    if result.failed_sources:
        logger.warning(f"{len(result.failed_sources)} source(s) failed: {', '.join(result.failed_sources)}")

    output = result.output_path or config.output.path
    print(f"Wrote {result.count} items to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
