import argparse
import logging
import sys
from typing import List, Optional

from model_auto_generator.codegen import generate_models_from_file
from model_auto_generator.config_validation import load_config
from model_auto_generator.exceptions import ModelAutoGeneratorError
from model_auto_generator.colored_logging import (
    setup_colored_logging,
    get_colored_logger,
    log_success,
    log_progress,
    log_section,
)

# Note: Colored logging will be configured after parsing args
logger = None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="model-auto-generator",
        description="Generate Django persistence models from annotated Python domain types.",
    )
    parser.add_argument(
        "source",
        help="Python file declaring the domain types (dataclasses or annotated classes).",
    )
    parser.add_argument(
        "-c",
        "--config",
        help="Path to the YAML configuration file.",
    )
    parser.add_argument(
        "-o",
        "--output-file",
        help="Path of the generated models module. Overrides config file setting.",
    )
    parser.add_argument(
        "--domain-module",
        help="Dotted module the generated models import the domain types from.",
    )
    parser.add_argument(
        "--app-label",
        help="Meta.app_label for the generated models.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose DEBUG logging for the generator tool.",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output (useful for CI/CD environments).",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated module to stdout instead of writing it.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)

    # --- Logging Setup ---
    log_level = logging.DEBUG if args.verbose else logging.INFO
    setup_colored_logging(level=log_level, use_colors=not args.no_color)

    global logger
    logger = get_colored_logger(__name__)

    if args.verbose:
        logger.debug("Verbose mode enabled. DEBUG level logging activated.")

    # --- Main Execution Pipeline ---
    try:
        log_progress(logger, "Loading configuration...")
        config = load_config(args.config, args)
        log_success(logger, "Configuration loaded and validated successfully.")
        logger.debug(f"Effective configuration loaded: {config}")

        log_section(logger, "Model Generation")
        log_progress(logger, f"Parsing domain types from {args.source}...")
        result = generate_models_from_file(args.source, config, write=not args.dry_run)

        if not result.models:
            sys.exit(0)

        if args.dry_run:
            sys.stdout.write(result.content)
            log_success(logger, f"Generated {len(result.models)} models (dry run, nothing written).")
        else:
            log_success(logger, f"Generated {len(result.models)} models into {result.output_path}")

    # --- Error Handling ---
    except ModelAutoGeneratorError as e:
        logger.error(f"{type(e).__name__}: {e}", exc_info=args.verbose)
        sys.exit(1)
    except Exception as e:
        # Catch any other unexpected exceptions
        logger.error(
            f"An unexpected error occurred during generation: {e}", exc_info=True
        )
        sys.exit(1)


# --- Script Entry Point ---
if __name__ == "__main__":
    main()
