"""Tests for message templates and structured state extraction."""

import pytest

from logspy.templates import (
    ORIGINAL_FORMAT_KEY,
    FormattedLogValues,
    StructuredFields,
    TemplateHole,
    extract_properties,
    format_state,
    parse_template,
    render_template,
)


@pytest.mark.unit
class TestParseTemplate:
    def test_literal_and_holes(self) -> None:
        parts = parse_template("User {UserId} logged in")
        assert parts[0] == "User "
        assert isinstance(parts[1], TemplateHole)
        assert parts[1].name == "UserId"
        assert parts[2] == " logged in"

    def test_format_and_alignment(self) -> None:
        (hole,) = parse_template("{Amount,8:0.2f}")
        assert isinstance(hole, TemplateHole)
        assert hole.name == "Amount"
        assert hole.alignment == 8
        assert hole.format_spec == "0.2f"

    def test_destructuring_prefix_is_dropped(self) -> None:
        (hole,) = parse_template("{@Order}")
        assert isinstance(hole, TemplateHole)
        assert hole.name == "Order"

    def test_escaped_braces(self) -> None:
        assert render_template("{{literal}} {Value}", [1]) == "{literal} 1"

    def test_unterminated_brace_is_literal(self) -> None:
        assert render_template("open { brace", []) == "open { brace"


@pytest.mark.unit
class TestRenderTemplate:
    def test_positional_binding(self) -> None:
        assert (
            render_template("User {UserId} logged in from {IPAddress}", [123, "10.0.0.1"])
            == "User 123 logged in from 10.0.0.1"
        )

    def test_missing_argument_keeps_hole(self) -> None:
        assert render_template("{A} and {B}", [1]) == "1 and {B}"

    def test_none_and_sequences(self) -> None:
        assert render_template("{Value}", [None]) == "(null)"
        assert render_template("{Items}", [[1, 2, 3]]) == "1, 2, 3"

    def test_format_spec_and_alignment(self) -> None:
        assert render_template("[{Amount:.2f}]", [3.14159]) == "[3.14]"
        assert render_template("[{Name,6}]", ["ab"]) == "[    ab]"
        assert render_template("[{Name,-6}]", ["ab"]) == "[ab    ]"

    def test_bad_format_spec_falls_back_to_str(self) -> None:
        assert render_template("{Name:.2f}", ["text"]) == "text"


@pytest.mark.unit
class TestFormattedLogValues:
    def test_pairs_and_original_format(self) -> None:
        state = FormattedLogValues("User {UserId} from {IPAddress}", 123, "10.0.0.1")
        assert list(state) == [
            ("UserId", 123),
            ("IPAddress", "10.0.0.1"),
            (ORIGINAL_FORMAT_KEY, "User {UserId} from {IPAddress}"),
        ]
        assert str(state) == "User 123 from 10.0.0.1"

    def test_extra_arguments_are_ignored(self) -> None:
        state = FormattedLogValues("{A}", 1, 2)
        assert dict(state) == {"A": 1, ORIGINAL_FORMAT_KEY: "{A}"}


@pytest.mark.unit
class TestExtractProperties:
    def test_structured_fields(self) -> None:
        props = extract_properties(StructuredFields([("a", 1), ("A", 2)]))
        assert props["a"] == 2

    def test_sequence_of_pairs(self) -> None:
        props = extract_properties([("Key", "v"), ("Other", 5)])
        assert props["key"] == "v"
        assert props["OTHER"] == 5

    def test_mapping(self) -> None:
        assert extract_properties({"Name": "x"})["name"] == "x"

    @pytest.mark.parametrize(
        "state",
        [
            None,
            "plain string",
            42,
            object(),
            [("only-one",)],
            [(1, "non-string key")],
            {1: "non-string key"},
            ["a", "b"],
        ],
    )
    def test_opaque_or_malformed_state_yields_no_properties(self, state: object) -> None:
        assert len(extract_properties(state)) == 0

    def test_format_state_uses_str(self) -> None:
        assert format_state(42) == "42"
        assert format_state(None) == ""
