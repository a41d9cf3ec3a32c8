#!/usr/bin/env python3
"""Main CLI entry point for kcluster."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

from kcluster import __version__
from kcluster.cli.commands import auto_command, fit_command, resolve_config, sweep_command
from kcluster.utils import setup_logger

logger = logging.getLogger(__name__)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "data",
        type=Path,
        help="Delimited text file, one point per row",
    )
    parser.add_argument(
        "--delimiter",
        default=",",
        help="Column delimiter (default: ',')",
    )
    parser.add_argument(
        "--strategy",
        choices=["min_distance", "max_count"],
        help="Restart selection strategy",
    )
    parser.add_argument(
        "--attempts",
        type=int,
        help="Clustering attempts per k",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Worker threads for clustering attempts",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="kcluster",
        description="K-means clustering with consensus restarts and elbow k selection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  kcluster fit points.csv -k 3 --strategy max_count --seed 7
  kcluster auto points.csv --min-k 2 --max-k 8
  kcluster sweep points.csv --max-k 10
  kcluster --version
        """,
    )
    
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase verbosity (can be repeated: -v, -vv)",
    )
    
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress all output except errors",
    )
    
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Path to log file",
    )
    
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        help="YAML configuration file",
    )
    
    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        help="Command to run",
    )
    
    fit_parser = subparsers.add_parser(
        "fit",
        help="Cluster with a fixed number of clusters",
    )
    _add_common_arguments(fit_parser)
    fit_parser.add_argument(
        "-k",
        type=int,
        required=True,
        help="Number of clusters",
    )
    fit_parser.set_defaults(func=fit_command)
    
    auto_parser = subparsers.add_parser(
        "auto",
        help="Choose the number of clusters by elbow search",
    )
    _add_common_arguments(auto_parser)
    auto_parser.add_argument("--min-k", type=int, default=2, help="Smallest k")
    auto_parser.add_argument("--max-k", type=int, required=True, help="Largest k")
    auto_parser.set_defaults(func=auto_command)
    
    sweep_parser = subparsers.add_parser(
        "sweep",
        help="Report average distance and timing for a range of k",
    )
    _add_common_arguments(sweep_parser)
    sweep_parser.add_argument("--min-k", type=int, default=2, help="Smallest k")
    sweep_parser.add_argument("--max-k", type=int, required=True, help="Largest k")
    sweep_parser.set_defaults(func=sweep_command)
    
    return parser


def setup_logging(
    verbose: int,
    quiet: bool,
    log_file: Optional[Path],
    default_level: Union[int, str] = logging.WARNING,
) -> None:
    """Set up logging configuration.
    
    ``-q`` and ``-v`` take precedence over ``default_level``.
    """
    if quiet:
        level = logging.ERROR
    elif verbose == 0:
        level = default_level
    elif verbose == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG
    
    setup_logger(level=level, log_file=log_file)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI.
    
    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])
        
    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    
    setup_logging(args.verbose, args.quiet, args.log_file)
    
    if not args.command:
        parser.print_help()
        return 0
    
    try:
        config = resolve_config(args)
        # Level from the config file applies unless set on the command line
        if "log_level" in config.model_fields_set:
            setup_logging(args.verbose, args.quiet, args.log_file, config.log_level)
        return args.func(args, config)
    except KeyboardInterrupt:
        logger.error("Interrupted by user")
        return 130
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=args.verbose > 1)
        return 1


if __name__ == "__main__":
    sys.exit(main())
