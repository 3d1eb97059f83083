"""Base output parser interface for outparsers.

Every parser turns raw LLM output text into a Python value and reports a
fixed kind tag, so callers holding several parsers can dispatch over them
through one contract.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


class PromptValue(ABC):
    """A prompt as it was sent to the model.

    Parsers receive it through ``parse_with_prompt`` for context; most
    parsers ignore it.
    """

    @abstractmethod
    def to_string(self) -> str:
        """Return the prompt as a single string."""

    @abstractmethod
    def to_messages(self) -> list[dict[str, str]]:
        """Return the prompt as chat messages with 'role' and 'content' keys."""


@dataclass(frozen=True)
class StringPromptValue(PromptValue):
    """Prompt made of a single user string."""

    text: str

    def to_string(self) -> str:
        return self.text

    def to_messages(self) -> list[dict[str, str]]:
        return [{"role": "user", "content": self.text}]


class ParseError(Exception):
    """Raised when LLM output does not conform to the expected format.

    Attributes:
        text: The raw output that failed to parse
        reason: Human-readable description of the failure
    """

    def __init__(self, text: str, reason: str):
        super().__init__(reason)
        self.text = text
        self.reason = reason


class NoMatchError(ParseError):
    """Raised when a key's pattern finds nothing in the output."""

    def __init__(self, text: str, key: str, label: str, pattern: str):
        super().__init__(
            text,
            f"No match found for key {key!r} (label {label!r}), expression {pattern}",
        )
        self.key = key
        self.label = label
        self.pattern = pattern


class AmbiguousMatchError(ParseError):
    """Raised when a key's pattern matches more than once in the output."""

    def __init__(self, text: str, key: str, label: str, pattern: str, match_count: int):
        super().__init__(
            text,
            f"Multiple matches found for key {key!r} (label {label!r}), "
            f"expression {pattern} ({match_count} matches)",
        )
        self.key = key
        self.label = label
        self.pattern = pattern
        self.match_count = match_count


class BaseOutputParser(ABC):
    """Abstract base class for output parsers.

    Implementations should:
    - Be safe to call repeatedly; parsing must not mutate parser state
    - Raise ParseError (or a subclass) when the text cannot be parsed
    - Leave retry policy to the caller
    """

    @abstractmethod
    def parse(self, text: str) -> Any:
        """Parse raw LLM output.

        Args:
            text: Output text produced by the model

        Returns:
            The parsed value

        Raises:
            ParseError: If the text does not match the expected format
        """

    def parse_with_prompt(self, text: str, prompt_value: PromptValue | None) -> Any:
        """Parse raw LLM output with the prompt that produced it.

        The default implementation ignores the prompt and defers to parse().
        """
        return self.parse(text)

    @abstractmethod
    def get_format_instructions(self) -> str:
        """Instructions telling the model how its output should be shaped."""

    @property
    @abstractmethod
    def type(self) -> str:
        """Kind tag identifying this parser variant (e.g., "regex_dict_parser")."""

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(type={self.type!r})"
