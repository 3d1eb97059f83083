"""
Tests for the parser factory and the simple parser.
"""

import pytest

from outparsers import (
    BaseOutputParser,
    ParserType,
    RegexDictParser,
    SimpleParser,
    StringPromptValue,
    create_parser,
    create_parsers_from_config,
    get_parser_type,
)


class TestBaseOutputParser:
    """Test the abstract parser contract."""

    def test_abstract_class_cannot_instantiate(self):
        """BaseOutputParser is abstract and cannot be instantiated."""
        with pytest.raises(TypeError):
            BaseOutputParser()

    def test_custom_parser_implementation(self):
        """Custom parsers get parse_with_prompt for free."""

        class UpperParser(BaseOutputParser):
            def parse(self, text):
                return text.upper()

            def get_format_instructions(self):
                return "Answer in any case."

            @property
            def type(self):
                return "upper_parser"

        parser = UpperParser()
        assert parser.parse("abc") == "ABC"
        assert parser.parse_with_prompt("abc", StringPromptValue("q")) == "ABC"
        assert repr(parser) == "UpperParser(type='upper_parser')"


class TestStringPromptValue:
    """Test the string prompt value."""

    def test_to_string(self):
        assert StringPromptValue("hello").to_string() == "hello"

    def test_to_messages(self):
        """The prompt becomes a single user message."""
        assert StringPromptValue("hello").to_messages() == [
            {"role": "user", "content": "hello"}
        ]


class TestSimpleParser:
    """Test the simple pass-through parser."""

    def test_strips_whitespace(self):
        assert SimpleParser().parse("  final answer \n") == "final answer"

    def test_parse_with_prompt(self):
        parser = SimpleParser()
        assert parser.parse_with_prompt(" ok ", StringPromptValue("q")) == "ok"

    def test_type_and_instructions(self):
        parser = SimpleParser()
        assert parser.type == "simple_parser"
        assert parser.get_format_instructions() == ""


class TestGetParserType:
    """Test parser name resolution."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("regex_dict_parser", ParserType.REGEX_DICT),
            ("regex_dict", ParserType.REGEX_DICT),
            (" Regex-Dict ", ParserType.REGEX_DICT),
            ("simple_parser", ParserType.SIMPLE),
            ("simple", ParserType.SIMPLE),
        ],
    )
    def test_known_names(self, name, expected):
        assert get_parser_type(name) == expected

    def test_unknown_name(self):
        """Unknown names list the valid options."""
        with pytest.raises(ValueError, match="Valid options"):
            get_parser_type("json")

    def test_enum_values_are_kind_tags(self):
        """ParserType values match the parsers' type property."""
        assert ParserType.REGEX_DICT.value == RegexDictParser({}, "").type
        assert ParserType.SIMPLE.value == SimpleParser().type


class TestCreateParser:
    """Test create_parser()."""

    def test_regex_dict_from_enum(self):
        parser = create_parser(
            ParserType.REGEX_DICT,
            output_key_to_format={"action": "Action"},
            no_update_value="N/A",
        )

        assert isinstance(parser, RegexDictParser)
        assert parser.parse("Action: search\n") == {"action": "search"}

    def test_regex_dict_from_string(self):
        parser = create_parser(
            "regex_dict",
            output_key_to_format={"action": "Action|Act"},
            no_update_value="N/A",
            escape_labels=False,
        )

        assert parser.parse("Act: search\n") == {"action": "search"}

    def test_regex_dict_missing_options(self):
        """Both the mapping and the sentinel are required."""
        with pytest.raises(ValueError, match="no_update_value"):
            create_parser("regex_dict", output_key_to_format={"action": "Action"})

    def test_simple(self):
        assert isinstance(create_parser("simple"), SimpleParser)

    def test_simple_rejects_options(self):
        with pytest.raises(ValueError, match="no options"):
            create_parser(ParserType.SIMPLE, no_update_value="N/A")

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            create_parser("xml")


class TestCreateParsersFromConfig:
    """Test building named parsers from a config section."""

    def test_builds_named_parsers(self):
        parsers = create_parsers_from_config(
            {
                "react": {
                    "type": "regex_dict",
                    "output_key_to_format": {"action": "Action"},
                    "no_update_value": "N/A",
                },
                "plain": {"type": "simple"},
            }
        )

        assert set(parsers) == {"react", "plain"}
        assert parsers["react"].type == "regex_dict_parser"
        assert parsers["plain"].type == "simple_parser"

    def test_empty_section(self):
        assert create_parsers_from_config({}) == {}

    def test_missing_type(self):
        with pytest.raises(ValueError, match="missing 'type'"):
            create_parsers_from_config({"react": {"no_update_value": "N/A"}})

    def test_non_mapping_entry(self):
        with pytest.raises(ValueError, match="must be a mapping"):
            create_parsers_from_config({"react": "regex_dict"})

    def test_bad_options_name_the_parser(self):
        """Constructor errors are reported with the parser name."""
        with pytest.raises(ValueError, match="react"):
            create_parsers_from_config(
                {
                    "react": {
                        "type": "regex_dict",
                        "output_key_to_format": {"action": "Action"},
                        "no_update_value": "N/A",
                        "ignore_case": True,
                    }
                }
            )
