"""Section models and the assembled, queryable ParsedDoc"""

from dataclasses import dataclass, field
from functools import cached_property
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


SectionKind = Literal['heading', 'code', 'table', 'list', 'paragraph']


class BaseSection(BaseModel):
    """Fields shared by every section; raw is a canonical markdown re-rendering."""
    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    raw: str


class HeadingSection(BaseSection):
    kind: Literal['heading'] = 'heading'
    level: int = Field(ge=1, le=6)
    text: str
    slug: str


class CodeSection(BaseSection):
    kind: Literal['code'] = 'code'
    lang: str = 'text'
    code: str
    filename: Optional[str] = None  # from a leading '// name.ext' or '# name.ext' line


class TableSection(BaseSection):
    kind: Literal['table'] = 'table'
    headers: list[str]
    rows: list[dict[str, str]]      # keyed by header; missing cells are ''


class ListSection(BaseSection):
    kind: Literal['list'] = 'list'
    ordered: bool
    items: list[str]


class ParagraphSection(BaseSection):
    kind: Literal['paragraph'] = 'paragraph'
    text: str


Section = Annotated[
    Union[HeadingSection, CodeSection, TableSection, ListSection, ParagraphSection],
    Field(discriminator='kind'),
]


@dataclass(frozen=True)
class ParsedDoc:
    """Immutable parse result: the authoritative section list plus derived views.

    headings / code_blocks / tables hold the same section objects as sections,
    in the same relative order.
    """
    source:      str
    sections:    tuple[Section, ...]
    frontmatter: dict[str, Any] = field(default_factory=dict)

    # frontmatter is a dict
    __hash__ = None

    @classmethod
    def assemble(
        cls,
        sections: list[Section],
        source: str = 'unknown',
        frontmatter: Optional[dict[str, Any]] = None,
        ) -> 'ParsedDoc':
        """Build a ParsedDoc from finalized sections (already in index order)."""
        return cls(source=source, sections=tuple(sections), frontmatter=dict(frontmatter or {}))

    @cached_property
    def headings(self) -> list[HeadingSection]:
        return self.by_type('heading')

    @cached_property
    def code_blocks(self) -> list[CodeSection]:
        return self.by_type('code')

    @cached_property
    def tables(self) -> list[TableSection]:
        return self.by_type('table')

    @property
    def total(self) -> int:
        return len(self.sections)

    @cached_property
    def title(self) -> str:
        """Text of the first level-1 heading, else the source identifier."""
        return next((h.text for h in self.headings if h.level == 1), self.source)

    def by_type(self, kind: SectionKind) -> list:
        """Return sections of the given kind in document order."""
        return [s for s in self.sections if s.kind == kind]

    def by_lang(self, lang: str) -> list[CodeSection]:
        """Return code blocks whose language equals lang or starts with it ('ts' matches 'tsx')."""
        return [c for c in self.code_blocks if c.lang == lang or c.lang.startswith(lang)]

    def search(self, query: str) -> list[Section]:
        """Case-insensitive substring search over each section's raw markdown."""
        q = query.lower()
        return [s for s in self.sections if q in s.raw.lower()]
