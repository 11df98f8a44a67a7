#!/usr/bin/env python
"""CLI for finding articles that support a debate argument."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, field_validator

from evidence_sources.config import create_from_config, get_default_config_path, load_config
from evidence_sources.errors import ClientInputError, ConfigurationError

logger = logging.getLogger(__name__)


class CLIArgs(BaseModel):
    """Validated CLI arguments."""

    argument: str
    config: Path
    log: bool = False
    log_dir: str = "logs"
    json_output: bool = False

    @field_validator("argument")
    @classmethod
    def argument_must_not_be_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Argument must not be empty")
        return v

    @field_validator("config")
    @classmethod
    def config_must_exist(cls, v: Path) -> Path:
        if not v.exists():
            raise ValueError(f"Config file not found: {v}")
        return v


async def run(args: CLIArgs) -> None:
    """Execute the pipeline with the given configuration.

    Args:
        args: Validated CLI arguments.
    """
    config = load_config(args.config)
    pipeline, run_logger = create_from_config(
        config,
        log_override=args.log if args.log else None,
        log_dir_override=args.log_dir if args.log_dir != "logs" else None,
    )

    logger.info(f"Searching for sources supporting: {args.argument}")
    logger.info(f"Config: {args.config}")

    response, usage = await pipeline.run(args.argument)

    if args.json_output:
        print(json.dumps(response.to_dict(), indent=2))
    else:
        print(f"\nFound {len(response.results)} relevant articles:\n")
        for i, article in enumerate(response.results, 1):
            logger.info(f"{i}. {article.title}")
            logger.info(f"   Source: {article.source or 'Unknown'}")
            logger.info(f"   Author: {article.author or 'Unknown'}")
            logger.info(f"   URL: {article.url}")
            if article.publish_date:
                logger.info(f"   Published: {article.publish_date}")
            logger.info(f"   Content: {len(article.content)} chars")

        if response.recommended_article:
            rec = response.recommended_article
            logger.info(f"\nRecommended: #{rec.index + 1} - {rec.reason}")

    logger.info("\n--- Usage Summary ---")
    logger.info(f"Oracle calls: {len(usage.api_calls)}")
    logger.info(f"Input tokens: {usage.input_tokens:,}")
    logger.info(f"Output tokens: {usage.output_tokens:,}")
    if usage.newsapi_requests:
        logger.info(f"NewsAPI requests: {usage.newsapi_requests}")
    if usage.google_requests:
        logger.info(f"Google requests: {usage.google_requests}")
    if usage.exa_requests:
        logger.info(f"Exa requests: {usage.exa_requests}")

    if run_logger and run_logger.last_log_path:
        logger.info(f"\nRun log written to: {run_logger.last_log_path}")


def main() -> None:
    """Entry point for the CLI."""
    parser = argparse.ArgumentParser(description="Find articles that support a debate argument.")
    parser.add_argument(
        "argument",
        help="The claim to find supporting evidence for",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="Path to YAML config file (default: bundled default.yaml)",
    )
    parser.add_argument(
        "--log",
        action="store_true",
        default=False,
        help="Enable per-run diagnostic logging to JSON file",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default="logs",
        help="Directory for log files (default: logs/)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the search response as JSON",
    )

    logging.basicConfig(level=logging.INFO, format="%(message)s")

    ns = parser.parse_args()
    config_path: Path = ns.config if ns.config else get_default_config_path()

    try:
        args = CLIArgs(
            argument=ns.argument,
            config=config_path,
            log=ns.log,
            log_dir=ns.log_dir,
            json_output=ns.json,
        )
    except Exception as e:
        logger.error(str(e))
        sys.exit(1)

    try:
        asyncio.run(run(args))
    except (ClientInputError, ConfigurationError) as e:
        logger.error(str(e))
        sys.exit(2)
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
