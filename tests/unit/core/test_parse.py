"""Unit tests for core/parse.py"""

import pytest

from mdcontent.core.models import ParsedDoc
from mdcontent.core.nodes import (
    BlockQuote,
    BulletedList,
    Code,
    CodeBlock,
    Emphasis,
    Heading,
    HTMLBlock,
    Image,
    LineBreak,
    Link,
    ListItem,
    NumberedList,
    Paragraph,
    SoftBreak,
    Strikethrough,
    Strong,
    Table,
    ThematicBreak,
)
from mdcontent.core.parse import build_frontmatter, blocks_from_tokens, parse_file, parse_markdown, strip_frontmatter


def test_strip_frontmatter_with_yaml():
    """strip_frontmatter extracts YAML header and returns body."""
    text = "---\ntitle: Hello\n---\n# Body\n"
    fm, body = strip_frontmatter(text)
    assert fm == {"title": "Hello"}
    assert body == "# Body\n"


def test_strip_frontmatter_no_frontmatter():
    """strip_frontmatter returns empty dict and full text when no header."""
    text = "# No frontmatter\n"
    fm, body = strip_frontmatter(text)
    assert fm == {}
    assert body == text


def test_strip_frontmatter_invalid_yaml():
    with pytest.raises(ValueError, match="Invalid YAML frontmatter"):
        strip_frontmatter("---\nkey: [unclosed\n---\nBody\n")


def test_strip_frontmatter_not_a_mapping():
    with pytest.raises(ValueError, match="expected a mapping"):
        strip_frontmatter("---\n- a\n- b\n---\nBody\n")


def test_parse_file_with_frontmatter(tmp_path, sample_fm_md):
    """parse_file separates frontmatter from the tokenized body."""
    f = tmp_path / "doc.md"
    f.write_text(sample_fm_md)
    doc = parse_file(f)
    assert isinstance(doc, ParsedDoc)
    assert doc.frontmatter == {"title": "Test Doc", "tags": ["a", "b"]}
    assert doc.path == f
    assert blocks_from_tokens(doc.tokens) == (Heading(1, "Title"), Paragraph("Body content."))


def test_build_frontmatter_round_trips():
    fm = {"title": "Caf\u00e9", "tags": ["a", "b"]}
    header = build_frontmatter(fm)
    assert header.startswith("---\ntitle: Caf\u00e9\n")
    assert strip_frontmatter(header + "Body\n") == (fm, "Body\n")


def test_build_frontmatter_empty():
    assert build_frontmatter({}) == ""


def test_parse_file_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        parse_file(tmp_path / "missing.md")


def test_sample_block_sequence(sample_md):
    """Each top-level construct becomes one block in document order."""
    blocks = parse_markdown(sample_md)
    assert blocks == (
        Heading(1, "Heading 1"),
        Paragraph("A paragraph with ", Strong("bold"), " text."),
        BlockQuote(
            Paragraph("Quoted ", Emphasis("words"), " here."),
            Paragraph("Second quoted paragraph."),
        ),
        BulletedList("item one", "item two"),
        CodeBlock('print("hello")\n', "python"),
        ThematicBreak(),
        Paragraph("Footer paragraph."),
    )


def test_blocks_from_tokens_uses_parser_tokens(parser):
    assert blocks_from_tokens(parser.parse("## Hi\n")) == (Heading(2, "Hi"),)


def test_setext_heading():
    assert parse_markdown("Title\n=====\n") == (Heading(1, "Title"),)


def test_inline_nodes():
    md = 'Some `code`, a [link](http://x.y "t"), ![img](p.png) and ~~gone~~\n'
    assert parse_markdown(md) == (
        Paragraph(
            "Some ", Code("code"), ", a ", Link("http://x.y", "link", title="t"),
            ", ", Image("p.png", "img"), " and ", Strikethrough("gone"),
        ),
    )


def test_breaks():
    assert parse_markdown("a\nb\n") == (Paragraph("a", SoftBreak(), "b"),)
    assert parse_markdown("a  \nb\n") == (Paragraph("a", LineBreak(), "b"),)


def test_escaped_characters_merge_into_text():
    assert parse_markdown("\\*not emphasis\\*\n") == (Paragraph("*not emphasis*"),)


def test_ordered_list_start():
    assert parse_markdown("3. a\n4. b\n") == (NumberedList("a", "b", start=3),)


def test_loose_list():
    (lst,) = parse_markdown("- a\n\n- b\n")
    assert lst.tight is False
    assert lst == BulletedList("a", "b", tight=False)


def test_nested_list():
    (lst,) = parse_markdown("- one\n  - two\n")
    assert lst == BulletedList(ListItem("one", BulletedList("two")))


def test_nested_blockquote():
    assert parse_markdown("> > deep\n") == (BlockQuote(BlockQuote("deep")),)


def test_indented_code_block():
    assert parse_markdown("    indented code\n") == (CodeBlock("indented code\n"),)


def test_html_block():
    assert parse_markdown("<div>raw html</div>\n") == (HTMLBlock("<div>raw html</div>\n"),)


def test_table():
    md = "| a | b |\n| :-- | --: |\n| 1 | 2 |\n"
    assert parse_markdown(md) == (Table([["a", "b"], ["1", "2"]], ["left", "right"]),)


def test_empty_document():
    assert parse_markdown("") == ()
