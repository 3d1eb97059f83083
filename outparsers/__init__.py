"""outparsers: Output parsers for LLM text.

Turns free-text model output into structured values, failing loudly when
the output does not follow the expected format so the caller can re-prompt.

Quick Start:
------------
    from outparsers import RegexDictParser, ParseError

    parser = RegexDictParser(
        {"action": "Action", "input": "Action Input"},
        no_update_value="N/A",
    )

    try:
        values = parser.parse(llm_output)
    except ParseError as e:
        # e.text holds the raw output, e.reason says what went wrong
        ...

    # Build parsers from config.yaml
    from outparsers import ConfigLoader, create_parsers_from_config
    parsers = create_parsers_from_config(ConfigLoader().get_parsers_config())
"""

__version__ = "0.1.0"
__license__ = "MIT"

from .base import (
    AmbiguousMatchError,
    BaseOutputParser,
    NoMatchError,
    ParseError,
    PromptValue,
    StringPromptValue,
)
from .config_loader import ConfigLoader
from .parser_factory import (
    ParserType,
    create_parser,
    create_parsers_from_config,
    get_parser_type,
)
from .regex_dict import RegexDictParser
from .simple import SimpleParser
from .utils.logger import LogCategory, LogConfig, configure_logging, get_logger


__all__ = [
    # Parsers
    "BaseOutputParser",
    "RegexDictParser",
    "SimpleParser",
    # Prompt values
    "PromptValue",
    "StringPromptValue",
    # Errors
    "AmbiguousMatchError",
    "NoMatchError",
    "ParseError",
    # Factory
    "ParserType",
    "create_parser",
    "create_parsers_from_config",
    "get_parser_type",
    # Config
    "ConfigLoader",
    # Logging
    "LogCategory",
    "LogConfig",
    "configure_logging",
    "get_logger",
]
