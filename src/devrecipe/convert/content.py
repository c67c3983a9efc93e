#!/usr/bin/env python3
"""
DEVRECIPE CONTENT SOURCES
-------------------------
A content source turns a tool's local reference (e.g. `app.yaml`) into the
raw manifest text. Callers that cannot fetch anything (the bare conversion
API) pass NO_CONTENT_SOURCE instead of None, so "no provider" is an explicit
branch for the applier rather than a null check.

Author: DevRecipe Team
Date: 2026-10-18
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional, Union
from urllib.parse import urljoin
from urllib.request import urlopen

logger = logging.getLogger("devrecipe.content")


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one fetch: either `content` or an `error` text, never both."""
    content: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ContentSource:
    """Base capability. Subclasses implement fetch(); callers use resolve()."""

    available = True

    def fetch(self, reference: str) -> str:
        raise NotImplementedError

    def resolve(self, reference: str) -> FetchResult:
        """Runs fetch() and folds any failure, I/O included, into a FetchResult."""
        try:
            return FetchResult(content=self.fetch(reference))
        except Exception as e:
            logger.debug(f"Fetching '{reference}' failed: {e!r}")
            return FetchResult(error=str(e) or e.__class__.__name__)


class _NoContentSource(ContentSource):
    available = False

    def fetch(self, reference: str) -> str:
        raise RuntimeError("no content source available")

    def __repr__(self) -> str:
        return "NO_CONTENT_SOURCE"


NO_CONTENT_SOURCE: ContentSource = _NoContentSource()


class CallableContentSource(ContentSource):
    """Adapts any `reference -> text` callable."""

    def __init__(self, fn: Callable[[str], str]):
        self.fn = fn

    def fetch(self, reference: str) -> str:
        return self.fn(reference)


class FileContentSource(ContentSource):
    """
    Reads references as files relative to `base_dir` (usually the directory
    holding the devfile). References may not escape the base directory.
    """

    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir).resolve()

    def fetch(self, reference: str) -> str:
        target = (self.base_dir / reference).resolve()
        if target != self.base_dir and self.base_dir not in target.parents:
            raise PermissionError(f"Reference '{reference}' points outside of {self.base_dir}")
        # BOM-aware read
        return target.read_text(encoding='utf-8-sig')


class UrlContentSource(ContentSource):
    """Resolves references against a base URL, the way factory URLs do."""

    def __init__(self, base_url: str, timeout: float = 30.0):
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout

    def fetch(self, reference: str) -> str:
        url = urljoin(self.base_url, reference)
        logger.info(f"Fetching recipe content from {url}")
        with urlopen(url, timeout=self.timeout) as response:  # noqa: S310 - caller picks the base URL
            payload = response.read()
        return payload.decode('utf-8-sig')


def as_content_source(source: Any) -> ContentSource:
    """Normalizes None, a plain callable, or a ContentSource into a ContentSource."""
    if source is None:
        return NO_CONTENT_SOURCE
    if isinstance(source, ContentSource):
        return source
    if callable(source):
        return CallableContentSource(source)
    raise TypeError(f"Unsupported content source: {source!r}")
