#!/usr/bin/env python3
"""
Tech Support Responder - Main Entry Point
=========================================

Command-line interface for the keyword-triggered support responder.

Usage:
    python main.py                         # Start the console conversation
    python main.py --test "it crashes"     # Print a single response
    python main.py --show-config           # Print the effective configuration
    python main.py --help                  # Show help
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

import yaml

# Add project directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from core.config import load_config, Config
from core.logging import setup_logging, get_logger
from core.exceptions import TechSupportError
from responder.generator import ResponseGenerator
from services.input_reader import tokenize
from services.support_system import SupportSystem

logger = get_logger("main")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Tech Support Responder - keyword-triggered canned responses",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                               Start the console conversation
  python main.py --test "my program crashes"   Print one response and exit
  python main.py --responses kb.txt --seed 7   Use another keyword file and a fixed seed
        """
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--test",
        type=str,
        metavar="MESSAGE",
        help="Print the response to a single message and exit"
    )
    mode_group.add_argument(
        "--show-config",
        action="store_true",
        help="Print the effective configuration as YAML and exit"
    )

    parser.add_argument(
        "--config",
        type=str,
        metavar="PATH",
        help="Path to configuration file (default: techsupport.yaml)"
    )
    parser.add_argument(
        "--responses",
        type=str,
        metavar="PATH",
        help="Keyword response file (default: responses.txt)"
    )
    parser.add_argument(
        "--defaults",
        type=str,
        metavar="PATH",
        help="Default response file (default: default.txt)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for default response selection"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser.parse_args(argv)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Apply command-line overrides on top of the loaded configuration."""
    if args.responses:
        config.responder.responses_file = args.responses
    if args.defaults:
        config.responder.defaults_file = args.defaults
    if args.seed is not None:
        config.responder.seed = args.seed
    if args.debug:
        config.debug = True

    config.validate()
    return config


def run_test_message(generator: ResponseGenerator, message: str) -> None:
    """Print the response for one message."""
    print(generator.generate_response(tokenize(message)))


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        config = apply_overrides(load_config(args.config), args)

        setup_logging(
            log_dir=config.log_dir or None,
            log_level="DEBUG" if config.debug else config.log_level,
            json_format=config.json_logs,
        )
        logger.debug(
            "Using responses=%s defaults=%s",
            config.responder.responses_file, config.responder.defaults_file,
        )

        if args.show_config:
            print(yaml.dump(config.to_dict(), default_flow_style=False, sort_keys=False), end="")
            return 0

        generator = ResponseGenerator(config.responder)

        if args.test is not None:
            run_test_message(generator, args.test)
        else:
            SupportSystem(generator, config.console).start()

        return 0

    except TechSupportError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 0


if __name__ == "__main__":
    sys.exit(main())
