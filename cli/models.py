#!/usr/bin/env python3

import sys

from llm.catalog import PROVIDERS, get_provider_preset
from logger import get_logger

logger = get_logger()


def cmd_list(args):
    """List the model presets for each provider."""
    if args.provider:
        preset = get_provider_preset(args.provider)
        if preset is None:
            logger.error(f"Unknown provider: {args.provider}")
            sys.exit(1)
        presets = [preset]
    else:
        presets = PROVIDERS

    for preset in presets:
        logger.info(f"\n{preset.name} ({preset.id}) - key looks like {preset.key_hint}")
        logger.info("-" * 80)
        for model in preset.models:
            logger.info(f"  {model.name}  (temperature {model.temperature})")

    logger.info("\nAny other model name is accepted and runs at temperature 0.")


def setup_parser(subparsers):
    """Setup models subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "models",
        help="Show supported providers and models",
        description="Show the model presets known for each provider",
    )

    models_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available model commands",
        dest="subcommand",
        required=True,
    )

    list_parser = models_subparsers.add_parser("list", help="List model presets")
    list_parser.add_argument(
        "--provider",
        help="Only show models for this provider (openai, anthropic, google)",
    )
    list_parser.set_defaults(func=cmd_list)
