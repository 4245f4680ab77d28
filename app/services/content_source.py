"""Backends that map a post slug to its raw markdown text."""

import logging
from pathlib import Path
from typing import Optional, Protocol
from urllib.parse import quote

import httpx
from starlette.concurrency import run_in_threadpool

from app.config import Settings
from app.errors import PostNotFound

logger = logging.getLogger(__name__)

CONTENT_EXTENSION = ".md"
MAX_CONTENT_SIZE = 2 * 1024 * 1024  # 2 MB
TIMEOUT = 10  # seconds


class ContentSource(Protocol):
    async def read(self, slug: str) -> str:
        """Return the raw text stored for *slug* or raise :class:`PostNotFound`."""
        ...


class FileContentSource:
    """Reads ``<root>/<slug>.md`` from the local filesystem on every call.

    Every access problem (missing file, permissions, I/O fault, invalid
    UTF-8) is reported as :class:`PostNotFound`; callers cannot tell them
    apart.
    """

    def __init__(self, root: Path = Path("."), extension: str = CONTENT_EXTENSION) -> None:
        self.root = Path(root)
        self.extension = extension

    def path_for(self, slug: str) -> Path:
        try:
            root = self.root.resolve()
            path = (root / f"{slug}{self.extension}").resolve()
        except (OSError, ValueError) as exc:
            raise PostNotFound(f"invalid slug {slug!r}: {exc}") from exc
        if root not in path.parents:
            raise PostNotFound(f"slug {slug!r} escapes the content directory")
        return path

    def _read_file(self, path: Path) -> str:
        try:
            with open(path, encoding="utf-8") as f:
                return f.read()
        except (OSError, ValueError) as exc:  # ValueError covers bad UTF-8 and NUL bytes
            raise PostNotFound(str(exc)) from exc

    async def read(self, slug: str) -> str:
        path = self.path_for(slug)
        return await run_in_threadpool(self._read_file, path)


class HttpContentSource:
    """Fetches ``<base_url>/<slug>.md`` from a remote content store.

    Any transport error, non-2xx status or oversized body is reported as
    :class:`PostNotFound`.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = TIMEOUT,
        max_size: int = MAX_CONTENT_SIZE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        extension: str = CONTENT_EXTENSION,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_size = max_size
        self.transport = transport
        self.extension = extension

    def url_for(self, slug: str) -> str:
        return f"{self.base_url}/{quote(slug, safe='')}{self.extension}"

    async def read(self, slug: str) -> str:
        url = self.url_for(slug)
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()

                    content_length = response.headers.get("content-length", "")
                    if content_length.isdigit() and int(content_length) > self.max_size:
                        raise PostNotFound(f"{url} exceeds the maximum allowed size")

                    chunks = []
                    total = 0
                    async for chunk in response.aiter_bytes():
                        total += len(chunk)
                        if total > self.max_size:
                            raise PostNotFound(f"{url} exceeds the maximum allowed size")
                        chunks.append(chunk)
        except httpx.HTTPError as exc:
            logger.info("Remote content unavailable for %s: %s", url, exc)
            raise PostNotFound(str(exc)) from exc

        try:
            return b"".join(chunks).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PostNotFound(f"{url} is not valid UTF-8") from exc


def build_content_source(settings: Settings) -> ContentSource:
    """Pick the backend configured in *settings*."""
    if settings.content_url:
        return HttpContentSource(settings.content_url)
    return FileContentSource(settings.content_dir)
