"""
Content acquisition: file uploads, URLs, and pasted text.

Each entry mode yields the same AcquiredContent (payload, format, source descriptor).
Validation failures raise before any ImportRecord exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

import httpx

from brandbook.core import get_settings
from brandbook.core.constants import DOCX_MEDIA_TYPE, PASTED_TEXT_FILENAME, DocumentFormat

from .errors import FetchFailed, InvalidUrl, UnsupportedFormat

logger = logging.getLogger(__name__)

ACCEPTED_MEDIA_TYPES: dict[str, DocumentFormat] = {
    "application/pdf": DocumentFormat.PDF,
    DOCX_MEDIA_TYPE: DocumentFormat.DOCX,
    "text/plain": DocumentFormat.TXT,
    "text/markdown": DocumentFormat.MD,
    "application/json": DocumentFormat.JSON,
}

# Extension fallback for clients that don't set correct MIME types (.md/.json especially)
EXTENSION_FORMATS: dict[str, DocumentFormat] = {
    ".md": DocumentFormat.MD,
    ".markdown": DocumentFormat.MD,
    ".json": DocumentFormat.JSON,
    ".txt": DocumentFormat.TXT,
    ".pdf": DocumentFormat.PDF,
    ".docx": DocumentFormat.DOCX,
}

# Content-type substrings checked (in order) when a URL path has no known extension
_CONTENT_TYPE_FORMATS: tuple[tuple[str, DocumentFormat], ...] = (
    ("application/pdf", DocumentFormat.PDF),
    (DOCX_MEDIA_TYPE, DocumentFormat.DOCX),
    ("text/plain", DocumentFormat.TXT),
    ("text/markdown", DocumentFormat.MD),
    ("application/json", DocumentFormat.JSON),
)

_ALLOWED_SCHEMES = ("http", "https")


@dataclass
class AcquiredContent:
    """Raw payload plus its detected format and where it came from."""
    payload: bytes | str
    format: DocumentFormat
    filename: str
    source_url: Optional[str] = None
    media_type: Optional[str] = None


@dataclass
class FetchedDocument:
    content: bytes
    content_type: Optional[str]
    text: str


def _extension_format(name: str) -> DocumentFormat | None:
    lowered = name.lower()
    for ext, fmt in EXTENSION_FORMATS.items():
        if lowered.endswith(ext):
            return fmt
    return None


def detect_upload_format(content_type: str | None, filename: str) -> DocumentFormat:
    """Format of an uploaded file: MIME type first, then filename extension. Raises UnsupportedFormat."""
    media_type = (content_type or "").split(";")[0].strip().lower()
    fmt = ACCEPTED_MEDIA_TYPES.get(media_type) or _extension_format(filename or "")
    if fmt is None:
        raise UnsupportedFormat(
            "Unsupported file type. Please upload PDF, DOCX, TXT, MD, or JSON files."
        )
    return fmt


def parse_format(value: str) -> DocumentFormat:
    """Parse a wire format tag. Raises UnsupportedFormat for anything outside the enumeration."""
    try:
        return DocumentFormat((value or "").strip().lower())
    except ValueError as e:
        allowed = ", ".join(f.value for f in DocumentFormat)
        raise UnsupportedFormat(f"Unsupported format '{value}'. Expected one of: {allowed}", e) from e


def detect_url_format(url: str, content_type: str | None) -> DocumentFormat:
    """URL path extension, else response content-type, else html."""
    fmt = _extension_format(urlparse(url).path)
    if fmt is not None:
        return fmt
    if content_type:
        lowered = content_type.lower()
        for needle, candidate in _CONTENT_TYPE_FORMATS:
            if needle in lowered:
                return candidate
    return DocumentFormat.HTML


def validate_url(url: str):
    """Parse and check an import URL. Only http/https are allowed. Raises InvalidUrl."""
    try:
        parsed = urlparse((url or "").strip())
    except ValueError as e:
        raise InvalidUrl("Invalid URL format", e) from e
    if not parsed.scheme or not (parsed.netloc or parsed.path):
        raise InvalidUrl("Invalid URL format")
    if parsed.scheme.lower() not in _ALLOWED_SCHEMES:
        raise InvalidUrl("Only HTTP and HTTPS URLs are supported")
    if not parsed.hostname:
        raise InvalidUrl("Invalid URL format")
    return parsed


def filename_from_url(url: str, fmt: DocumentFormat = DocumentFormat.HTML) -> str:
    """Synthetic filename: host + path with slashes turned into hyphens, plus .<fmt> if it has no dot."""
    parsed = urlparse(url)
    host = parsed.hostname or ""
    name = (host + parsed.path).replace("/", "-").strip("-") or host
    if "." not in name:
        name = f"{name}.{DocumentFormat(fmt).value}"
    return name


async def fetch_url(
    url: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FetchedDocument:
    """GET the URL with the bot user-agent. Non-2xx or transport errors raise FetchFailed."""
    s = get_settings()
    headers = {
        "User-Agent": s.fetch_user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    }
    try:
        async with httpx.AsyncClient(
            timeout=s.fetch_timeout_seconds,
            follow_redirects=True,
            transport=transport,
        ) as client:
            r = await client.get(url, headers=headers)
    except httpx.RequestError as e:
        raise FetchFailed(f"Failed to fetch URL: {e.__class__.__name__}", e) from e
    if not r.is_success:
        raise FetchFailed(f"Failed to fetch URL: {r.status_code} {r.reason_phrase}".rstrip())
    return FetchedDocument(
        content=r.content,
        content_type=r.headers.get("content-type"),
        text=r.text,
    )


async def acquire_url(
    url: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AcquiredContent:
    """Validate, fetch and classify a URL. Binary formats keep bytes; text formats keep decoded text."""
    validate_url(url)
    fetched = await fetch_url(url, transport=transport)
    fmt = detect_url_format(url, fetched.content_type)
    logger.info("Fetched %s (%s, %d bytes)", url, fmt.value, len(fetched.content))
    payload: bytes | str = fetched.content if fmt in (DocumentFormat.PDF, DocumentFormat.DOCX) else fetched.text
    media_type = (fetched.content_type or "").split(";")[0].strip() or None
    return AcquiredContent(
        payload=payload,
        format=fmt,
        filename=filename_from_url(url, fmt),
        source_url=url,
        media_type=media_type,
    )


def acquire_pasted_text(text: str, title: str | None = None) -> AcquiredContent:
    """Pasted text is already plain text: format txt, no parsing stage."""
    filename = (title or "").strip() or PASTED_TEXT_FILENAME
    return AcquiredContent(payload=text or "", format=DocumentFormat.TXT, filename=filename)
