"""Component metadata extraction: imports, usage examples, props and sub-components"""

import logging
import re
from typing import Optional

from pydantic import BaseModel, Field

from docsect.core.models import CodeSection, HeadingSection, ParsedDoc, TableSection


logger = logging.getLogger(__name__)

IMPORT_LANGS = {'ts', 'tsx', 'jsx'}
EXAMPLE_LANGS = {'ts', 'tsx', 'jsx', 'js'}
DEFAULT_EXAMPLE_TITLE = 'Example'

IMPORT_RE = re.compile(r'''import\s+\{([^}]+)\}\s+from\s+["']([^"']+)["']''')

NAME_HEADERS = {'prop', 'name', 'property'}
NAME_KEYS = ('Prop', 'Name', 'Property', 'prop')
TYPE_KEYS = ('Type', 'type')
DESCRIPTION_KEYS = ('Description', 'description', 'Desc')
DEFAULT_KEYS = ('Default', 'default')


class CodeExample(BaseModel):
    title: str
    lang: str
    code: str
    filename: Optional[str] = None


class PropDefinition(BaseModel):
    name: str
    type: str
    description: str = ''
    default: Optional[str] = None


class ExtractedComponent(BaseModel):
    """Metadata for the component documented by a page (named after its first h1)."""
    name: str
    slug: str
    imports: list[str] = Field(default_factory=list)
    examples: list[CodeExample] = Field(default_factory=list)
    props: list[PropDefinition] = Field(default_factory=list)
    sub_components: list[str] = Field(default_factory=list)


def _first(row: dict[str, str], keys: tuple[str, ...]) -> str:
    """Return the first non-empty value among keys, else ''."""
    return next((row[k] for k in keys if row.get(k)), '')


def extract_imports(code_blocks: list[CodeSection]) -> list[str]:
    """Collect normalized named imports from ts/tsx/jsx blocks, deduplicated in order."""
    imports: dict[str, None] = {}
    for block in code_blocks:
        if block.lang not in IMPORT_LANGS:
            continue
        for names, module in IMPORT_RE.findall(block.code):
            imports.setdefault(f'import {{ {names.strip()} }} from "{module}";')
    return list(imports)


def extract_examples(headings: list[HeadingSection], code_blocks: list[CodeSection]) -> list[CodeExample]:
    """Return ts/tsx/jsx/js blocks titled by the nearest heading before each one."""
    heading_text = {h.index: h.text for h in headings}
    title = DEFAULT_EXAMPLE_TITLE
    examples = []

    for block in code_blocks:
        for i in range(block.index - 1, -1, -1):
            if i in heading_text:
                title = heading_text[i]
                break
        if block.lang in EXAMPLE_LANGS:
            examples.append(CodeExample(
                title=title,
                lang=block.lang,
                code=block.code,
                filename=block.filename,
            ))
    return examples


def _is_props_table(table: TableSection) -> bool:
    lowered = {h.lower() for h in table.headers}
    return bool(lowered & NAME_HEADERS) and 'type' in lowered


def extract_props(tables: list[TableSection]) -> list[PropDefinition]:
    """Read prop definitions from tables that carry a name column and a Type column."""
    props = []
    for table in tables:
        if not _is_props_table(table):
            continue
        for row in table.rows:
            name = _first(row, NAME_KEYS)
            if not name:
                continue
            props.append(PropDefinition(
                name=name.replace('`', ''),
                type=_first(row, TYPE_KEYS).replace('`', ''),
                description=_first(row, DESCRIPTION_KEYS),
                default=_first(row, DEFAULT_KEYS) or None,
            ))
    return props


def detect_sub_components(imports: list[str], component: str) -> list[str]:
    """Return Sub names for every '<component>.<Sub>' reference in the import lines."""
    pattern = re.compile(rf'{re.escape(component)}\.(\w+)')
    subs: dict[str, None] = {}
    for imp in imports:
        for sub in pattern.findall(imp):
            subs.setdefault(sub)
    return list(subs)


def extract_components(doc: ParsedDoc) -> list[ExtractedComponent]:
    """Extract the main component of a doc; empty when the doc has no level-1 heading."""
    main = next((h for h in doc.headings if h.level == 1), None)
    if main is None:
        logger.debug("No h1 in %s; no component extracted", doc.source)
        return []

    name = re.sub(r'\s+', '', main.text)
    imports = extract_imports(doc.code_blocks)
    return [ExtractedComponent(
        name=name,
        slug=main.slug,
        imports=imports,
        examples=extract_examples(doc.headings, doc.code_blocks),
        props=extract_props(doc.tables),
        sub_components=detect_sub_components(imports, name),
    )]


def extract_code_by_lang(doc: ParsedDoc, lang: str) -> list[CodeSection]:
    """Code blocks matching lang, with the same prefix semantics as ParsedDoc.by_lang."""
    return doc.by_lang(lang)


def extract_snippets(doc: ParsedDoc) -> dict[str, str]:
    """Map each example's filename (or '<title>.<lang>') to its code."""
    return {
        ex.filename or f"{ex.title}.{ex.lang}": ex.code
        for ex in extract_examples(doc.headings, doc.code_blocks)
    }


def generate_types(component: ExtractedComponent) -> str:
    """Render a TypeScript props interface; props with a default are optional."""
    lines = [f"// Auto-generated types for {component.name}", '']
    if component.props:
        lines.append(f"export interface {component.name}Props {{")
        for prop in component.props:
            optional = '?' if prop.default is not None else ''
            if prop.description:
                lines.append(f"  /** {prop.description} */")
            lines.append(f"  {prop.name}{optional}: {prop.type};")
        lines.append('}')
    return '\n'.join(lines)
