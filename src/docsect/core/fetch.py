"""Fetch remote markdown over HTTP and parse it"""

import logging
import urllib.error
import urllib.request
from typing import Optional

from docsect.config import Settings, load_config
from docsect.core.models import ParsedDoc
from docsect.core.parse import parse_markdown


logger = logging.getLogger(__name__)


class FetchError(RuntimeError):
    """A docs URL could not be fetched; status is None for network-level failures."""

    def __init__(self, url: str, status: Optional[int] = None, reason: str = ''):
        self.url = url
        self.status = status
        detail = status if status is not None else reason
        super().__init__(f"Failed to fetch {url}: {detail}")


def fetch_text(url: str, timeout: float = 30.0, user_agent: str = 'docsect') -> str:
    """GET url and return the decoded body; raise FetchError on non-2xx or network errors."""
    req = urllib.request.Request(url, headers={"User-Agent": user_agent})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            status = resp.status
            if not 200 <= status < 300:
                raise FetchError(url, status)
            charset = resp.headers.get_content_charset() or 'utf-8'
            return resp.read().decode(charset, errors='replace')
    except urllib.error.HTTPError as e:
        raise FetchError(url, e.code) from e
    except urllib.error.URLError as e:
        raise FetchError(url, reason=str(e.reason)) from e
    except TimeoutError as e:
        raise FetchError(url, reason="timed out") from e


def fetch_docs(url: str, settings: Optional[Settings] = None) -> ParsedDoc:
    """Fetch markdown from url and parse it with the URL as the document source."""
    settings = settings or load_config()
    logger.info("Fetching %s", url)
    content = fetch_text(url, timeout=settings.fetch_timeout, user_agent=settings.user_agent)
    return parse_markdown(content, source=url, settings=settings)
