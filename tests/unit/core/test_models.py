"""Unit tests for core/models.py: document assembly and queries"""

import pytest
from pydantic import TypeAdapter, ValidationError

from docsect.core.models import (
    CodeSection,
    HeadingSection,
    ParagraphSection,
    ParsedDoc,
    Section,
    TableSection,
)


def _code(index, lang, code="x"):
    return CodeSection(index=index, lang=lang, code=code, raw=f"```{lang}\n{code}\n```")


@pytest.fixture(name="doc")
def doc_fixture():
    sections = [
        HeadingSection(index=0, level=2, text="Setup", slug="setup", raw="## Setup"),
        _code(1, "ts", "const a: number = 1;"),
        _code(2, "tsx", "<Component />"),
        _code(3, "css", ".a {}"),
        HeadingSection(index=4, level=1, text="Main", slug="main", raw="# Main"),
        ParagraphSection(index=5, text="A Component library.", raw="A Component library."),
        TableSection(index=6, headers=["A"], rows=[{"A": "1"}], raw="| A |\n| --- |\n| 1 |"),
    ]
    return ParsedDoc.assemble(sections, source="doc.md")


def test_assemble_views(doc):
    assert doc.total == 7
    assert [h.text for h in doc.headings] == ["Setup", "Main"]
    assert [c.lang for c in doc.code_blocks] == ["ts", "tsx", "css"]
    assert len(doc.tables) == 1
    assert doc.tables[0] is doc.sections[6]


def test_title_uses_first_level_one_heading(doc):
    """The title skips earlier non-h1 headings."""
    assert doc.title == "Main"


def test_by_type_preserves_order(doc):
    assert [s.index for s in doc.by_type("code")] == [1, 2, 3]
    assert doc.by_type("list") == []


def test_by_lang_prefix_match(doc):
    """A language query also matches languages it prefixes."""
    assert [c.lang for c in doc.by_lang("ts")] == ["ts", "tsx"]
    assert [c.lang for c in doc.by_lang("tsx")] == ["tsx"]
    assert [c.lang for c in doc.by_lang("css")] == ["css"]
    assert doc.by_lang("rust") == []


def test_search_case_insensitive(doc):
    """search matches substrings of raw regardless of case."""
    hits = doc.search("COMPONENT")
    assert [s.index for s in hits] == [2, 5]


def test_search_no_match(doc):
    assert doc.search("xyzzy_nonexistent") == []


def test_parsed_doc_is_frozen(doc):
    with pytest.raises(AttributeError):
        doc.source = "other.md"


def test_parsed_doc_is_unhashable(doc):
    """Frozen but holding a dict, so it cannot be hashed."""
    assert ParsedDoc.__hash__ is None
    with pytest.raises(TypeError):
        hash(doc)


def test_sections_are_frozen():
    h = HeadingSection(index=0, level=1, text="T", slug="t", raw="# T")
    with pytest.raises(ValidationError):
        h.text = "changed"


def test_heading_level_bounds():
    with pytest.raises(ValidationError):
        HeadingSection(index=0, level=7, text="T", slug="t", raw="####### T")


def test_section_union_discriminates_on_kind():
    """The Section union validates dicts into the model named by kind."""
    section = TypeAdapter(Section).validate_python(
        {"kind": "paragraph", "index": 3, "text": "hi", "raw": "hi"}
    )
    assert isinstance(section, ParagraphSection)
