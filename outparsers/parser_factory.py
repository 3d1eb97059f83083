"""
Parser factory for outparsers.

Maps kind tags to parser classes and builds parsers from configuration.
"""
from enum import Enum
from typing import Any, Dict, Union

from .base import BaseOutputParser
from .utils.logger import LogCategory, get_logger

logger = get_logger(__name__, category=LogCategory.CONFIG)


class ParserType(Enum):
    """Available parser types. Values are the parsers' kind tags."""
    REGEX_DICT = "regex_dict_parser"
    SIMPLE = "simple_parser"


def create_parser(
    parser_type: Union[ParserType, str] = ParserType.REGEX_DICT,
    **options: Any
) -> BaseOutputParser:
    """
    Factory function to create output parsers.

    Args:
        parser_type: Type of parser to create, as a ParserType or any name
            accepted by get_parser_type():
            - REGEX_DICT: one regex per key, returns a dict of strings
            - SIMPLE: returns the stripped text
        **options: Constructor arguments for the parser:
            - output_key_to_format (dict, required for REGEX_DICT)
            - no_update_value (str, required for REGEX_DICT)
            - escape_labels (bool): Match labels literally (default: True)

    Returns:
        Configured parser instance

    Raises:
        ValueError: If the type is unknown or required options are missing

    Example:
        >>> parser = create_parser(
        ...     "regex_dict",
        ...     output_key_to_format={"action": "Action"},
        ...     no_update_value="N/A",
        ... )
        >>> parser.type
        'regex_dict_parser'
    """
    if isinstance(parser_type, str):
        parser_type = get_parser_type(parser_type)

    # Import parsers here to avoid circular imports
    from .regex_dict import RegexDictParser
    from .simple import SimpleParser

    if parser_type == ParserType.REGEX_DICT:
        missing = [
            name for name in ("output_key_to_format", "no_update_value")
            if options.get(name) is None
        ]
        if missing:
            raise ValueError(
                f"Missing options for regex dict parser: {', '.join(missing)}"
            )
        parser = RegexDictParser(**options)

    elif parser_type == ParserType.SIMPLE:
        if options:
            raise ValueError(
                f"Simple parser takes no options, got: {', '.join(sorted(options))}"
            )
        parser = SimpleParser()

    else:
        raise ValueError(f"Unknown parser type: {parser_type}")

    logger.debug("Parser created", parser_type=parser.type)
    return parser


def get_parser_type(name: str) -> ParserType:
    """
    Convert a string parser name to the ParserType enum.

    Args:
        name: Kind tag or alias ("regex_dict_parser", "regex_dict", "simple", ...)

    Returns:
        Corresponding ParserType enum value
    """
    name_lower = name.lower().strip()
    mapping = {
        "regex_dict_parser": ParserType.REGEX_DICT,
        "regex_dict": ParserType.REGEX_DICT,
        "regex-dict": ParserType.REGEX_DICT,
        "simple_parser": ParserType.SIMPLE,
        "simple": ParserType.SIMPLE,
    }
    if name_lower in mapping:
        return mapping[name_lower]
    raise ValueError(
        f"Unknown parser type: {name}. "
        f"Valid options: {list(mapping.keys())}"
    )


def create_parsers_from_config(
    parsers_config: Dict[str, Dict[str, Any]]
) -> Dict[str, BaseOutputParser]:
    """
    Build named parsers from the ``parsers`` section of a config file.

    Each entry must have a ``type``; the remaining fields are passed to
    create_parser() as options.

    Args:
        parsers_config: Mapping of parser name to its settings

    Returns:
        Mapping of parser name to parser instance

    Raises:
        ValueError: If an entry is malformed or names an unknown type
    """
    parsers: Dict[str, BaseOutputParser] = {}

    for name, settings in parsers_config.items():
        if not isinstance(settings, dict):
            raise ValueError(f"Parser '{name}' config must be a mapping")
        if "type" not in settings:
            raise ValueError(f"Parser '{name}' config is missing 'type'")

        options = {k: v for k, v in settings.items() if k != "type"}
        try:
            parsers[name] = create_parser(settings["type"], **options)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid config for parser '{name}': {e}") from e

    logger.info("Parsers loaded from config", count=len(parsers))
    return parsers
