"""Command line entry-point for coreference resolution over pre-annotated documents."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, TextIO

import click

from .core.configuration import BUILTIN_STRATEGY_SETS
from .core.exceptions import CoreferenceError
from .core.pipeline import CoreferencePipeline
from .loader import load_document
from .utils.config import ConfigManager
from .utils.logging import setup_logging

logger = logging.getLogger("biocoref.cli")


@click.command()
@click.option("--input", "-i", type=click.File("r"), default="-", help="Document JSON file (defaults to stdin)")
@click.option("--output", "-o", type=click.File("w"), default="-", help="Output destination (defaults to stdout)")
@click.option("--strategies", "-s", type=click.Choice(sorted(BUILTIN_STRATEGY_SETS)), default=None,
              help="Built-in strategy set (overrides the config file)")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="YAML configuration file")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def main(
    input: TextIO,
    output: TextIO,
    strategies: Optional[str],
    config_path: Optional[Path],
    verbose: bool,
) -> None:
    """Resolve coreference in a pre-annotated document and print the chains as JSON."""

    try:
        config = ConfigManager(config_path)
        setup_logging(level=config.get("logging.level"), verbose=verbose)
        if strategies:
            config.set("resolution.strategies", strategies)
            config.set("resolution.strategy_file", None)

        raw = input.read()
        if not raw.strip():
            raise click.ClickException("No document supplied")
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise click.ClickException(f"Input is not valid JSON: {e}") from e

        document = load_document(data)
        pipeline = CoreferencePipeline(config.strategies(), config.vocabulary())
        result = pipeline.run(document)
    except CoreferenceError as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        logger.info(f"Found {len(result.chains)} chains in document {document.id}")

    json.dump(result.to_dict(), output, indent=2)
    output.write("\n")


if __name__ == "__main__":  # pragma: no cover
    main()
