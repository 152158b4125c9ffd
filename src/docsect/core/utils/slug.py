"""Slug generation for heading anchors"""

import re


_NON_SLUG_RE = re.compile(r'[^a-z0-9]+')


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated ASCII slug.

    Runs of anything outside [a-z0-9] (punctuation, whitespace, non-ASCII letters)
    collapse to a single hyphen. Identical text yields identical slugs.
    """
    return _NON_SLUG_RE.sub('-', text.lower()).strip('-')
