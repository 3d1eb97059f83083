"""
outparsers CLI - Main command-line interface.

Provides commands for:
- Parsing model output with a configured parser
- Printing a parser's format instructions
- Listing configured parsers
"""

import json
import sys
from typing import Optional

import click
import yaml

from outparsers.base import BaseOutputParser, ParseError
from outparsers.config_loader import ConfigLoader
from outparsers.parser_factory import create_parser
from outparsers.utils.logger import LogCategory, configure_logging, get_logger

logger = get_logger(__name__, category=LogCategory.CLI)


def get_version() -> str:
    """Get outparsers version."""
    try:
        from outparsers import __version__

        return __version__
    except ImportError:
        return "unknown"


def _load_config(config_path: Optional[str]) -> ConfigLoader:
    """Load the config file, exiting with status 2 if it cannot be read."""
    try:
        return ConfigLoader(config_path)
    except (OSError, yaml.YAMLError, ValueError) as e:
        click.echo(f"Error: could not load config: {e}", err=True)
        sys.exit(2)


def _load_parser(config_path: Optional[str], name: str) -> BaseOutputParser:
    """Build the named parser from config, exiting with status 2 on config errors."""
    loader = _load_config(config_path)
    logging_config = loader.get_logging_config()
    configure_logging(
        level=str(logging_config.get("level", "INFO")),
        json_logs=bool(logging_config.get("json_logs", False)),
    )

    try:
        settings = dict(loader.get_parser_config(name))
        parser_type = settings.pop("type", None)
        if parser_type is None:
            raise ValueError(f"Parser '{name}' config is missing 'type'")
        return create_parser(parser_type, **settings)
    except KeyError as e:
        click.echo(f"Error: {e.args[0]}", err=True)
        sys.exit(2)
    except (TypeError, ValueError) as e:
        click.echo(f"Error: invalid config for parser '{name}': {e}", err=True)
        sys.exit(2)


config_option = click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Path to config.yaml (default: OUTPARSERS_CONFIG or ./config.yaml)",
)


@click.group()
@click.version_option(version=get_version(), prog_name="outparsers")
def cli():
    """
    outparsers CLI - Extract structured values from LLM output

    \b
    Quick Start:
      outparsers list                        # Show configured parsers
      outparsers parse react -i output.txt   # Parse a file
      cat output.txt | outparsers parse react
    """
    pass


@cli.command("parse")
@click.argument("name")
@config_option
@click.option(
    "--input",
    "-i",
    "input_file",
    type=click.File("r"),
    default="-",
    help="File with model output (default: stdin)",
)
def parse(name: str, config_path: Optional[str], input_file):
    """
    Parse model output with the parser NAME and print the result as JSON.

    Exits with status 1 when the output does not match the expected format.

    \b
    Examples:
      outparsers parse react -i output.txt
      outparsers parse react -c ./parsers.yaml < output.txt
    """
    parser = _load_parser(config_path, name)
    text = input_file.read()

    try:
        result = parser.parse(text)
    except ParseError as e:
        logger.debug("Parse failed", parser=name, reason=e.reason)
        click.echo(f"Parse error: {e.reason}", err=True)
        sys.exit(1)

    click.echo(json.dumps(result, indent=2, ensure_ascii=False))


@cli.command("instructions")
@click.argument("name")
@config_option
def instructions(name: str, config_path: Optional[str]):
    """
    Print the format instructions of the parser NAME.

    \b
    Examples:
      outparsers instructions react
    """
    parser = _load_parser(config_path, name)
    click.echo(parser.get_format_instructions(), nl=False)


@cli.command("list")
@config_option
def list_parsers(config_path: Optional[str]):
    """
    List configured parsers.

    \b
    Examples:
      outparsers list -c ./parsers.yaml
    """
    loader = _load_config(config_path)
    parsers = loader.get_parsers_config()

    click.echo(f"Config file: {loader.config_path}")
    if not parsers:
        click.echo("No parsers configured")
        return

    for parser_name in sorted(parsers):
        settings = parsers[parser_name] or {}
        parser_type = settings.get("type", "?") if isinstance(settings, dict) else "?"
        click.echo(f"  {click.style(parser_name, fg='cyan')}: {parser_type}")


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
