"""Tests for Markdown and plain-text rendering."""

from __future__ import annotations

import pytest

from gdocs_source.markdown import render_span, to_markdown, to_plain_text
from gdocs_source.types import (
    BulletedListItem,
    Heading,
    HorizontalRule,
    Image,
    NumberedListItem,
    Paragraph,
    Span,
    StyleFlags,
    Table,
    TableCell,
)


def para(text: str, style: StyleFlags | None = None) -> Paragraph:
    return Paragraph(spans=(Span(text, style or StyleFlags()),))


def test_heading_and_bold_paragraph() -> None:
    blocks = [
        Heading(level=2, spans=(Span("Intro"),)),
        para("Hello", StyleFlags(bold=True)),
    ]
    assert to_markdown(blocks) == "## Intro\n\n**Hello**\n"
    assert to_plain_text(blocks) == "Intro\nHello\n"


@pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
def test_heading_prefix_matches_level(level: int) -> None:
    markdown = to_markdown([Heading(level=level, spans=(Span("H"),))])
    assert markdown == "#" * level + " H\n"


def test_empty_document() -> None:
    assert to_markdown([]) == ""
    assert to_plain_text([]) == ""


def test_rendering_is_deterministic() -> None:
    blocks = [
        Heading(level=1, spans=(Span("T"),)),
        NumberedListItem(depth=0, list_id="l", number=1, spans=(Span("a"),)),
        Table(rows=((TableCell(blocks=(para("x"),)),),)),
    ]
    assert to_markdown(blocks) == to_markdown(list(blocks))
    assert to_plain_text(blocks) == to_plain_text(tuple(blocks))


# --- Inline styles ---


@pytest.mark.parametrize(
    ("style", "expected"),
    [
        (StyleFlags(bold=True), "**x**"),
        (StyleFlags(italic=True), "*x*"),
        (StyleFlags(strikethrough=True), "~~x~~"),
        (StyleFlags(code=True), "`x`"),
        (StyleFlags(bold=True, italic=True), "***x***"),
        (StyleFlags(link="https://example.com"), "[x](https://example.com)"),
        (StyleFlags(bold=True, link="#h.1"), "[**x**](#h.1)"),
    ],
)
def test_span_delimiters(style: StyleFlags, expected: str) -> None:
    assert render_span(Span("x", style)) == expected


def test_whitespace_stays_outside_delimiters() -> None:
    spans = (Span("Say "), Span(" hi ", StyleFlags(bold=True)), Span("now"))
    assert to_markdown([Paragraph(spans=spans)]) == "Say  **hi** now\n"


def test_code_containing_backtick() -> None:
    assert render_span(Span("a`b", StyleFlags(code=True))) == "`` a`b ``"


# --- Lists ---


def test_list_items_separated_by_single_newline() -> None:
    blocks = [
        para("Intro"),
        BulletedListItem(depth=0, list_id="b", spans=(Span("one"),)),
        BulletedListItem(depth=1, list_id="b", spans=(Span("nested"),)),
        NumberedListItem(depth=0, list_id="n", number=3, spans=(Span("three"),)),
        para("Outro"),
    ]
    assert to_markdown(blocks) == (
        "Intro\n\n- one\n  - nested\n3. three\n\nOutro\n"
    )
    assert to_plain_text(blocks) == "Intro\none\nnested\nthree\nOutro\n"


# --- Images and rules ---


def test_image_and_rule() -> None:
    blocks = [Image(reference="https://img.example/a.png", alt="Chart"), HorizontalRule()]
    assert to_markdown(blocks) == "![Chart](https://img.example/a.png)\n\n---\n"
    assert to_plain_text(blocks) == ""


# --- Tables ---


def cell(*blocks) -> TableCell:
    return TableCell(blocks=tuple(blocks))


def test_table_header_separator_after_first_row() -> None:
    table = Table(
        rows=(
            (cell(para("Name")), cell(para("Value"))),
            (cell(para("a")), cell()),
        )
    )
    assert to_markdown([table]) == (
        "| Name | Value |\n| --- | --- |\n| a |  |\n"
    )
    assert to_plain_text([table]) == "Name\tValue\na\t\n"


def test_table_cell_escapes_pipes_and_joins_blocks() -> None:
    table = Table(rows=((cell(para("a|b"), para("c", StyleFlags(bold=True))),),))
    assert to_markdown([table]) == "| a\\|b<br>**c** |\n| --- |\n"


def test_empty_table_renders_nothing() -> None:
    assert to_markdown([para("x"), Table(rows=()), para("y")]) == "x\n\ny\n"


def test_nested_table_flattens_to_text() -> None:
    inner = Table(rows=((cell(para("p")), cell(para("q"))),))
    outer = Table(rows=((cell(inner),),))
    assert to_markdown([outer]) == "| p q |\n| --- |\n"


# --- Escaping ---


def test_inline_metacharacters_are_escaped() -> None:
    blocks = [para("2*3*4 = 24"), para("snake_case and ~x~ with `tick` [a] <b>")]
    assert to_markdown(blocks) == (
        "2\\*3\\*4 = 24\n"
        "\n"
        "snake\\_case and \\~x\\~ with \\`tick\\` \\[a\\] \\<b\\>\n"
    )
    assert to_plain_text(blocks) == (
        "2*3*4 = 24\nsnake_case and ~x~ with `tick` [a] <b>\n"
    )


def test_backslash_is_escaped() -> None:
    assert render_span(Span("C:\\temp")) == "C:\\\\temp"


def test_escaping_happens_inside_delimiters() -> None:
    assert render_span(Span("a*b", StyleFlags(bold=True))) == "**a\\*b**"
    assert render_span(Span("a*b", StyleFlags(code=True))) == "`a*b`"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("# not a heading", "\\# not a heading"),
        ("- not a bullet", "\\- not a bullet"),
        ("+ plus", "\\+ plus"),
        ("---", "\\---"),
        ("1. not numbered", "1\\. not numbered"),
        ("12) also not", "12\\) also not"),
        ("Plain # text", "Plain # text"),
    ],
)
def test_paragraph_block_openers_are_escaped(text: str, expected: str) -> None:
    assert to_markdown([para(text)]) == expected + "\n"
    assert to_plain_text([para(text)]) == text + "\n"


def test_list_item_content_openers_are_escaped() -> None:
    item = BulletedListItem(depth=0, list_id="b", spans=(Span("- dash"),))
    assert to_markdown([item]) == "- \\- dash\n"


def test_image_alt_is_escaped() -> None:
    image = Image(reference="https://img.example/a.png", alt="[draft] chart")
    assert to_markdown([image]) == "![\\[draft\\] chart](https://img.example/a.png)\n"


def test_list_item_continued_after_image() -> None:
    blocks = [
        NumberedListItem(depth=0, list_id="n", number=1, spans=(Span("Step"),)),
        Image(reference="img", alt="image"),
        para("continues"),
        NumberedListItem(depth=0, list_id="n", number=2, spans=(Span("Two"),)),
    ]
    assert to_markdown(blocks) == (
        "1. Step\n\n![image](img)\n\ncontinues\n\n2. Two\n"
    )
