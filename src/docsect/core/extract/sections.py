"""Section state machine: HTML events to an ordered list of typed sections

Each section kind (heading, code, table, list, paragraph) keeps its own
accumulator on the extractor instance. An accumulator opens on its start tag,
collects text chunks and is finalized on its closing tag; finalization assigns
the next index from one counter shared by all kinds.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from docsect.core.extract.events import EndTag, Event, StartTag, TextChunk
from docsect.core.models import (
    CodeSection,
    HeadingSection,
    ListSection,
    ParagraphSection,
    Section,
    TableSection,
)
from docsect.core.utils.slug import slugify
from docsect.core.utils.tables import format_table_md


HEADING_TAGS = {'h1', 'h2', 'h3', 'h4', 'h5', 'h6'}
LIST_TAGS = {'ul', 'ol'}
CELL_TAGS = {'th', 'td'}

LANGUAGE_RE = re.compile(r'language-(\w+)')
FILENAME_RE = re.compile(r'^(?://|#)\s*(.+\.\w+)\s*$')


@dataclass
class _Heading:
    level: int
    parts: list[str] = field(default_factory=list)


@dataclass
class _Code:
    lang: str
    parts: list[str] = field(default_factory=list)
    in_code: bool = True            # inner <code> still open


@dataclass
class _Table:
    headers: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)
    within_head: bool = False
    row: Optional[list[str]] = None
    cell_pos: int = 0
    in_cell: bool = False
    cell_has_text: bool = False


@dataclass
class _List:
    ordered: bool
    items: list[str] = field(default_factory=list)
    item: Optional[list[str]] = None
    nested: int = 0                 # depth of lists opened inside this one


def detect_filename(code: str) -> Optional[str]:
    """Return 'name.ext' when a '// name.ext' or '# name.ext' comment line precedes the code.

    A block holding only the comment line has no filename.
    """
    first_line, sep, _ = code.partition('\n')
    if not sep:
        return None
    m = FILENAME_RE.match(first_line)
    return m.group(1) if m else None


def _list_raw(items: list[str], ordered: bool) -> str:
    if ordered:
        return '\n'.join(f"{i}. {item}" for i, item in enumerate(items, start=1))
    return '\n'.join(f"- {item}" for item in items)


class SectionExtractor:
    """Single-use consumer of one document's event stream.

    feed() accepts events in document order; sections holds finalized sections
    in index order. Unknown or unbalanced tags are ignored.
    """

    def __init__(self) -> None:
        self.sections: list[Section] = []
        self._next_index = 0
        self._heading: Optional[_Heading] = None
        self._code: Optional[_Code] = None
        self._in_pre = False
        self._table: Optional[_Table] = None
        self._list: Optional[_List] = None
        self._paragraph: Optional[list[str]] = None

    def feed(self, event: Event) -> None:
        if isinstance(event, StartTag):
            self._start(event.name, event.attrs)
        elif isinstance(event, TextChunk):
            self._text(event.text, event.last_in_text_node)
        elif isinstance(event, EndTag):
            self._end(event.name)

    def _emit(self, cls, **fields) -> None:
        self.sections.append(cls(index=self._next_index, **fields))
        self._next_index += 1

    # --- open ---

    def _start(self, name: str, attrs: dict[str, str]) -> None:
        if name in HEADING_TAGS:
            self._heading = _Heading(level=int(name[1]))
        elif name == 'pre':
            self._in_pre = True
        elif name == 'code':
            if self._in_pre and self._code is None:
                m = LANGUAGE_RE.search(attrs.get('class', ''))
                self._code = _Code(lang=m.group(1) if m else 'text')
        elif name == 'table':
            self._table = _Table()
        elif name == 'thead':
            if self._table:
                self._table.within_head = True
        elif name == 'tbody':
            if self._table:
                self._table.within_head = False
        elif name == 'tr':
            if self._table:
                self._table.row = []
                self._table.cell_pos = 0
        elif name in CELL_TAGS:
            if self._table and self._table.row is not None:
                self._table.in_cell = True
                self._table.cell_has_text = False
        elif name in LIST_TAGS:
            if self._list is None:
                self._list = _List(ordered=name == 'ol')
            else:
                self._list.nested += 1
        elif name == 'li':
            if self._list and not self._list.nested:
                self._list.item = []
        elif name == 'p':
            self._paragraph = []

    # --- accumulate ---

    def _text(self, text: str, last_in_text_node: bool) -> None:
        if self._heading:
            self._heading.parts.append(text)
        if self._code and self._code.in_code:
            self._code.parts.append(text)
        if self._table and self._table.in_cell:
            self._cell_text(self._table, text, last_in_text_node)
        if self._list and self._list.item is not None:
            self._list.item.append(text)
        if self._paragraph is not None:
            self._paragraph.append(text)

    @staticmethod
    def _cell_text(table: _Table, text: str, last_in_text_node: bool) -> None:
        row = table.row
        while len(row) <= table.cell_pos:
            row.append('')
        row[table.cell_pos] += text
        table.cell_has_text = True
        # a text node may arrive in several chunks; only its final chunk closes the slot
        if last_in_text_node:
            table.cell_pos += 1

    # --- close / finalize ---

    def _end(self, name: str) -> None:
        if name in HEADING_TAGS:
            self._finish_heading()
        elif name == 'code':
            if self._code:
                self._code.in_code = False
        elif name == 'pre':
            self._finish_code()
        elif name in CELL_TAGS:
            self._finish_cell()
        elif name == 'tr':
            self._finish_row()
        elif name == 'table':
            self._finish_table()
        elif name == 'li':
            if self._list and not self._list.nested and self._list.item is not None:
                self._list.items.append(''.join(self._list.item).strip())
                self._list.item = None
        elif name in LIST_TAGS:
            self._finish_list()
        elif name == 'p':
            self._finish_paragraph()

    def _finish_heading(self) -> None:
        if self._heading is None:
            return
        level, text = self._heading.level, ''.join(self._heading.parts).strip()
        self._heading = None
        self._emit(
            HeadingSection,
            level=level,
            text=text,
            slug=slugify(text),
            raw=f"{'#' * level} {text}",
        )

    def _finish_code(self) -> None:
        self._in_pre = False
        if self._code is None:
            return
        lang, code = self._code.lang, ''.join(self._code.parts).strip()
        self._code = None
        self._emit(
            CodeSection,
            lang=lang,
            code=code,
            filename=detect_filename(code),
            raw=f"```{lang}\n{code}\n```",
        )

    def _finish_cell(self) -> None:
        table = self._table
        if table is None or not table.in_cell:
            return
        if not table.cell_has_text:
            # empty cell still occupies its column
            while len(table.row) <= table.cell_pos:
                table.row.append('')
            table.cell_pos += 1
        table.in_cell = False

    def _finish_row(self) -> None:
        table = self._table
        if table is None or table.row is None:
            return
        cells = [c.strip() for c in table.row]
        if table.within_head or not table.headers:
            table.headers = cells
        else:
            table.rows.append(cells)
        table.row = None

    def _finish_table(self) -> None:
        table = self._table
        if table is None:
            return
        self._table = None
        headers = table.headers
        rows = [
            {h: row[i] if i < len(row) else '' for i, h in enumerate(headers)}
            for row in table.rows
        ]
        self._emit(
            TableSection,
            headers=headers,
            rows=rows,
            raw=format_table_md(headers, table.rows),
        )

    def _finish_list(self) -> None:
        lst = self._list
        if lst is None:
            return
        if lst.nested:
            lst.nested -= 1
            return
        self._list = None
        if lst.items:
            self._emit(
                ListSection,
                ordered=lst.ordered,
                items=lst.items,
                raw=_list_raw(lst.items, lst.ordered),
            )

    def _finish_paragraph(self) -> None:
        if self._paragraph is None:
            return
        text = ''.join(self._paragraph).strip()
        self._paragraph = None
        if text:
            self._emit(ParagraphSection, text=text, raw=text)


def extract_sections(events: Iterable[Event]) -> list[Section]:
    """Run a fresh SectionExtractor over events and return its finalized sections."""
    extractor = SectionExtractor()
    for event in events:
        extractor.feed(event)
    return extractor.sections
