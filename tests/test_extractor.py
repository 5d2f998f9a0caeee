"""Tests for title and teaser extraction."""

import pytest

from og_extract import (
    ExtractionResult,
    MissingFieldError,
    MissingMarkerError,
    extract,
    extract_teaser,
    extract_title,
)
from og_extract.core.extractor import extract_field, parse_front_matter
from og_extract.core.scanner import scan


HELLO_WORLD = """---
title: Hello World
---
This is the intro.
<!--more-->
Rest of the article.
"""


def test_hello_world_title_and_teaser():
    """Basic document yields the title and the text before the marker."""
    assert extract_title(HELLO_WORLD) == "Hello World"
    assert extract_teaser(HELLO_WORLD) == "This is the intro."
    assert extract(HELLO_WORLD) == ExtractionResult(title="Hello World", teaser="This is the intro.")


def test_missing_marker_raises():
    doc = "---\ntitle: No Marker\n---\nJust a body without a teaser boundary.\n"
    with pytest.raises(MissingMarkerError) as excinfo:
        extract_teaser(doc)
    assert excinfo.value.marker == "<!--more-->"


def test_title_in_code_block_is_not_a_field():
    """A title: line inside a fenced code block in the body must be ignored."""
    doc = (
        "---\n"
        "date: 2023-05-01\n"
        "tags: [hugo]\n"
        "---\n"
        "Front-matter looks like this:\n"
        "```yaml\n"
        "title: Not The Title\n"
        "```\n"
        "<!--more-->\n"
    )
    with pytest.raises(MissingFieldError) as excinfo:
        extract_title(doc)
    assert excinfo.value.field == "title"


def test_blank_teaser_is_empty_string():
    doc = "---\ntitle: Straight To It\n---\n<!--more-->\nEverything is after the marker.\n"
    assert extract_teaser(doc) == ""


def test_whitespace_only_teaser_is_empty_string():
    doc = "---\ntitle: Spaces\n---\n\n   \n\t\n<!--more-->\n"
    assert extract_teaser(doc) == ""


def test_title_is_trimmed_and_prefix_removed():
    doc = "---\n  title:    Spaced Out Title   \n---\nIntro\n<!--more-->\n"
    assert extract_title(doc) == "Spaced Out Title"


def test_title_requires_space_after_colon():
    doc = "---\ntitle:NoSpace\n---\n"
    with pytest.raises(MissingFieldError):
        extract_title(doc)


def test_first_title_occurrence_wins():
    doc = "---\ntitle: First\ntitle: Second\n---\n"
    assert extract_title(doc) == "First"


def test_similar_field_names_do_not_match():
    doc = "---\nsubtitle: Sub\nseo_title: SEO\n---\n"
    with pytest.raises(MissingFieldError):
        extract_title(doc)


def test_quoted_title_is_unquoted():
    assert extract_title('---\ntitle: "Hello: World"\n---\n') == "Hello: World"
    assert extract_title("---\ntitle: 'Single'\n---\n") == "Single"


def test_quoted_title_decodes_yaml_escapes():
    doc = "---\ntitle: \"He said \\\"hi\\\"\"\n---\n"
    assert extract_title(doc) == 'He said "hi"'
    assert extract_title(doc) == parse_front_matter(doc)["title"]
    assert extract_title("---\ntitle: 'It''s here'\n---\n") == "It's here"


def test_empty_quoted_title_is_missing():
    with pytest.raises(MissingFieldError):
        extract_title('---\ntitle: ""\n---\n')


def test_multiline_teaser_keeps_internal_line_breaks():
    doc = "---\ntitle: T\n---\n\nFirst paragraph.\n\nSecond paragraph.\n\n<!--more-->\nRest\n"
    assert extract_teaser(doc) == "First paragraph.\n\nSecond paragraph."


def test_only_first_marker_is_used():
    doc = "---\ntitle: T\n---\nIntro\n<!--more-->\nMiddle\n<!--more-->\nEnd\n"
    assert extract_teaser(doc) == "Intro"


def test_marker_in_the_middle_of_a_line():
    doc = "---\ntitle: T\n---\nShort intro. <!--more--> Continued on the same line.\n"
    assert extract_teaser(doc) == "Short intro."


def test_teaser_has_no_delimiters_or_marker():
    doc = "---\ntitle: T\ndraft: false\n---\nIntro line\n---\nafter a rule\n<!--more-->\nrest\n"
    teaser = extract_teaser(doc)
    assert "<!--more-->" not in teaser
    assert not teaser.startswith("---")
    assert "title:" not in teaser
    # A horizontal rule in the body is ordinary body text.
    assert teaser == "Intro line\n---\nafter a rule"


def test_body_delimiter_is_not_front_matter():
    """Without a leading delimiter, later --- lines do not open a front-matter block."""
    doc = "Intro paragraph.\n---\ntitle: Fake\n---\n<!--more-->\n"
    with pytest.raises(MissingFieldError):
        extract_title(doc)
    assert extract_teaser(doc) == "Intro paragraph.\n---\ntitle: Fake\n---"


def test_document_without_front_matter_is_body_only():
    doc = "Plain intro.\n<!--more-->\nRest.\n"
    assert extract_teaser(doc) == "Plain intro."
    with pytest.raises(MissingFieldError):
        extract_title(doc)


def test_leading_blank_lines_before_front_matter():
    doc = "\n\n---\ntitle: After Blanks\n---\nIntro\n<!--more-->\n"
    assert extract(doc) == ExtractionResult(title="After Blanks", teaser="Intro")


def test_crlf_line_endings():
    doc = "---\r\ntitle: Windows\r\n---\r\nIntro\r\n<!--more-->\r\nRest\r\n"
    assert extract(doc) == ExtractionResult(title="Windows", teaser="Intro")


def test_marker_inside_front_matter_is_ignored():
    doc = "---\ntitle: T\nnote: <!--more-->\n---\nNo marker in body.\n"
    with pytest.raises(MissingMarkerError):
        extract_teaser(doc)


def test_extract_raises_for_missing_title_before_marker():
    doc = "---\ndate: 2024-01-01\n---\nIntro\n"
    with pytest.raises(MissingFieldError):
        extract(doc)


def test_extraction_is_idempotent():
    assert extract(HELLO_WORLD) == extract(HELLO_WORLD)
    assert extract_teaser(HELLO_WORLD) == extract_teaser(HELLO_WORLD)


def test_extract_field_reads_other_scalars():
    doc = "---\ntitle: T\nauthor: Jane Doe\n---\n"
    assert extract_field(doc, "author") == "Jane Doe"
    with pytest.raises(MissingFieldError) as excinfo:
        extract_field(doc, "description")
    assert excinfo.value.field == "description"


def test_errors_are_value_errors():
    with pytest.raises(ValueError):
        extract_title("no front matter")


def test_parse_front_matter_returns_pass_through_fields():
    doc = "---\ntitle: T\ntags:\n  - swift\n  - ios\ndraft: true\n---\nbody\n"
    fields = parse_front_matter(doc)
    assert fields["title"] == "T"
    assert fields["tags"] == ["swift", "ios"]
    assert fields["draft"] is True


def test_parse_front_matter_tolerates_malformed_yaml():
    doc = "---\ntitle: T\nbad: [unclosed\n---\nbody\n"
    assert parse_front_matter(doc) == {}
    # The line-based title rule still works on malformed blocks.
    assert extract_title(doc) == "T"


def test_parse_front_matter_without_block():
    assert parse_front_matter("just text") == {}


def test_parse_front_matter_ignores_non_mapping_block():
    assert parse_front_matter("---\n- a\n- b\n---\nbody\n") == {}


def test_functions_accept_a_scanned_document():
    scanned = scan(HELLO_WORLD)
    assert extract(scanned) == extract(HELLO_WORLD)
    assert extract_title(scanned) == "Hello World"
    assert extract_teaser(scanned) == "This is the intro."
    assert parse_front_matter(scanned) == {"title": "Hello World"}
