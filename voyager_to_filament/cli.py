import argparse
import logging
import sys
from typing import List, Optional

from voyager_to_filament.config_validation import load_config
from voyager_to_filament.converter import VoyagerToFilamentConverter
from voyager_to_filament.exceptions import PreconditionError, VoyagerToFilamentError
from voyager_to_filament.introspection_django import setup_django

from voyager_to_filament.colored_logging import (
    setup_colored_logging,
    get_colored_logger,
    log_success,
    log_progress,
    log_section,
)

# Note: Colored logging will be configured after parsing args
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="voyager-to-filament",
        description="Convert Voyager BREAD configurations to Filament 4 resources.",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to the YAML configuration file (containing Django DATABASES dict).",
    )
    parser.add_argument(
        "-m",
        "--model",
        action="append",
        help="Voyager model to convert, e.g. 'Post' or 'App\\Models\\Post'. May be repeated.",
    )
    parser.add_argument(
        "--all",
        action="store_true",
        default=None,
        help="Convert all Voyager BREAD configurations.",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        default=None,
        help="Overwrite existing Filament resources.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Show what would be generated without creating files.",
    )
    parser.add_argument(
        "--with-relationships",
        action="store_true",
        default=None,
        help="Include relationship fields.",
    )
    parser.add_argument(
        "--panel",
        help="Filament panel name (default: admin).",
    )
    parser.add_argument(
        "--project-root",
        help="Root directory of the Laravel application. Overrides config file setting.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    # --- Logging Setup ---
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=not args.no_color)

    global logger
    logger = get_colored_logger(__name__)

    if args.verbose:
        logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    try:
        # 1. Load Configuration
        log_progress(logger, "Loading configuration...")
        config = load_config(args.config, args)
        logger.debug(f"Effective configuration: {config.model_dump(exclude={'databases', 'SECRET_KEY'})}")

        # 2. Connect Django to the Voyager database
        setup_django(config.databases, config.SECRET_KEY)

        # 3. Convert
        report = VoyagerToFilamentConverter(config).run()

        log_section(logger, "COMPLETION")
        if report.has_failures:
            logger.warning(
                f"Conversion finished with {len(report.failed)} failed resources."
            )
        else:
            log_success(logger, "Conversion process completed successfully!")
        return 0

    # --- Error Handling ---
    except PreconditionError as e:
        logger.error(f"{e.message}")
        for suggestion in e.suggestions:
            logger.error(f"   {suggestion}")
        logger.debug(str(e))
        return 1
    except VoyagerToFilamentError as e:
        logger.error(f"Error: {e}", exc_info=args.verbose)
        return 1
    except ImportError as e:
        logger.error(
            f"Import Error: {e}. Ensure Django and the database driver are installed.",
            exc_info=args.verbose,
        )
        logger.error("Example: pip install 'voyager-to-filament[mysql]'")
        return 1
    except Exception as e:
        logger.error(
            f"An unexpected error occurred during conversion: {e}", exc_info=True
        )
        return 1


# --- Script Entry Point ---
if __name__ == "__main__":
    sys.exit(main())
