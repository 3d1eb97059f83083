"""Simple parser - returns the model output as plain text."""

from .base import BaseOutputParser


class SimpleParser(BaseOutputParser):
    """Return the output with surrounding whitespace removed."""

    def parse(self, text: str) -> str:
        return text.strip()

    def get_format_instructions(self) -> str:
        return ""

    @property
    def type(self) -> str:
        return "simple_parser"
