"""Regex dict parser - keyed value extraction from LLM output.

Pulls one value per configured key out of free text such as::

    Action: search
    Action Input: weather today

Each key has a label; the value is whatever follows ``<label>:`` on the
same line. Extraction fails closed: a missing or repeated label aborts the
whole parse, no partial result is returned.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from types import MappingProxyType

from .base import AmbiguousMatchError, BaseOutputParser, NoMatchError
from .utils.logger import LogCategory, get_logger

logger = get_logger(__name__, category=LogCategory.PARSING)

# Label, colon, optional spaces, then the value up to an apostrophe or line break.
# A single trailing period is consumed but kept out of the value.
REGEX_DICT_PATTERN = r"(?:{label}):[ \t]*(?P<value>[^'\r\n]*?)\.?(?=['\r\n]|$)"

REGEX_DICT_FORMAT_INSTRUCTIONS = (
    "Your output should be a map of strings. e.g.:\n"
    '{"key1": "value1", "key2": "value2"}\n'
)


class RegexDictParser(BaseOutputParser):
    """Parse LLM output into a dict of strings, one regex per key.

    Values equal to ``no_update_value`` mean "unchanged" and are left out
    of the result instead of being returned.

    Example:
        >>> parser = RegexDictParser(
        ...     {"action": "Action", "input": "Action Input"},
        ...     no_update_value="N/A",
        ... )
        >>> parser.parse("Action: search\\nAction Input: weather today\\n")
        {'action': 'search', 'input': 'weather today'}
    """

    def __init__(
        self,
        output_key_to_format: Mapping[str, str],
        no_update_value: str,
        escape_labels: bool = True,
    ):
        """
        Initialize the parser.

        Args:
            output_key_to_format: Mapping from result key to the label that
                precedes its value in the text
            no_update_value: Sentinel value meaning "field unchanged"
            escape_labels: Match labels literally. Set to False to treat labels
                as regex fragments (e.g. "Action|Act").

        Raises:
            TypeError: If the mapping, a key, a label or the sentinel has the wrong type
            ValueError: If a label is not a valid regex fragment (escape_labels=False)
        """
        if not isinstance(output_key_to_format, Mapping):
            raise TypeError(
                f"output_key_to_format must be a mapping, got "
                f"{type(output_key_to_format).__name__}"
            )
        if not isinstance(no_update_value, str):
            raise TypeError(
                f"no_update_value must be a string, got {type(no_update_value).__name__}"
            )

        for key, label in output_key_to_format.items():
            if not isinstance(key, str) or not isinstance(label, str):
                raise TypeError(f"Keys and labels must be strings, got {key!r}: {label!r}")

        self._output_key_to_format = MappingProxyType(dict(output_key_to_format))
        self.no_update_value = no_update_value
        self.escape_labels = escape_labels

        # Sorted so the first reported failure is the same on every run
        self._expressions: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
            (key, self._compile(key, self._output_key_to_format[key]))
            for key in sorted(self._output_key_to_format)
        )

    @property
    def output_key_to_format(self) -> Mapping[str, str]:
        """Read-only view of the key to label mapping."""
        return self._output_key_to_format

    def _compile(self, key: str, label: str) -> re.Pattern[str]:
        fragment = re.escape(label) if self.escape_labels else label
        try:
            return re.compile(REGEX_DICT_PATTERN.format(label=fragment))
        except re.error as e:
            raise ValueError(f"Invalid label for key {key!r}: {e}") from e

    def pattern_for(self, key: str) -> str:
        """Return the regex source used for a configured key."""
        for configured_key, expression in self._expressions:
            if configured_key == key:
                return expression.pattern
        raise KeyError(key)

    def parse(self, text: str) -> dict[str, str]:
        """Extract every configured key from the text.

        Args:
            text: Raw LLM output

        Returns:
            Dict of key to value. Keys whose value is the no-update sentinel
            are omitted.

        Raises:
            NoMatchError: If a key's label does not appear
            AmbiguousMatchError: If a key's label appears more than once
        """
        results: dict[str, str] = {}

        for key, expression in self._expressions:
            values = [match.group("value") for match in expression.finditer(text)]

            if not values:
                logger.debug("No match for key", key=key, pattern=expression.pattern)
                raise NoMatchError(
                    text, key, self._output_key_to_format[key], expression.pattern
                )

            if len(values) > 1:
                logger.debug(
                    "Ambiguous match for key",
                    key=key,
                    pattern=expression.pattern,
                    match_count=len(values),
                )
                raise AmbiguousMatchError(
                    text,
                    key,
                    self._output_key_to_format[key],
                    expression.pattern,
                    len(values),
                )

            value = values[0]
            if value == self.no_update_value:
                continue

            results[key] = value

        logger.debug(
            "Extracted values",
            keys=list(results),
            skipped=len(self._expressions) - len(results),
        )
        return results

    def get_format_instructions(self) -> str:
        return REGEX_DICT_FORMAT_INSTRUCTIONS

    @property
    def type(self) -> str:
        return "regex_dict_parser"

    def __repr__(self) -> str:
        return (
            f"RegexDictParser(output_key_to_format={dict(self._output_key_to_format)!r}, "
            f"no_update_value={self.no_update_value!r})"
        )
