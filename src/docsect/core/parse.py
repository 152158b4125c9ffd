"""Frontmatter extraction, markdown-it rendering, and the parse entry points"""

import logging
import re
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from markdown_it import MarkdownIt

from docsect.config import Settings, load_config
from docsect.core.extract.events import iter_events
from docsect.core.extract.sections import extract_sections
from docsect.core.models import ParsedDoc


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'^---\s*\n(.*?)\n---\s*\n', re.DOTALL)
DEFAULT_SOURCE = 'unknown'


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed.

    A leading '---' block that is not a YAML mapping is ordinary markdown
    (a rule followed by a setext heading, say) and is left in the body.
    """
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text
    try:
        fm = yaml.safe_load(m.group(1)) or {}
    except yaml.YAMLError:
        logger.debug("Leading '---' block is not YAML; treating it as markdown")
        return {}, text
    if not isinstance(fm, dict):
        return {}, text
    return fm, text[m.end():]


def render_html(markdown: str, parser_config: str = 'gfm-like') -> str:
    """Render markdown to HTML with the given markdown-it preset."""
    return _make_parser(parser_config).render(markdown)


def parse_markdown(
    content: str,
    source: str = DEFAULT_SOURCE,
    settings: Optional[Settings] = None,
    ) -> ParsedDoc:
    """Parse markdown/MDX text into a ParsedDoc of ordered, typed sections."""
    settings = settings or load_config()
    frontmatter, body = _strip_frontmatter(content)
    html = render_html(body, settings.parser_config)
    sections = extract_sections(iter_events(html, settings.chunk_size))
    logger.debug("Parsed %s: %d sections", source, len(sections))
    return ParsedDoc.assemble(sections, source=source, frontmatter=frontmatter)


def parse_file(path: Union[str, Path], settings: Optional[Settings] = None) -> ParsedDoc:
    """Read a local markdown file and parse it; source is the path as given."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"File not found: {path}")
    logger.info("Reading %s", p)
    return parse_markdown(p.read_text(encoding='utf-8'), source=str(path), settings=settings)
