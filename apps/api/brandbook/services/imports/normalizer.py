"""
Text normalization: (payload, format) -> plain text for the extraction prompt.

txt/md pass through, json is pretty-printed (raw text on parse failure), html is
tag-stripped with regexes, pdf/docx are delegated to pypdf / python-docx.
"""

import asyncio
import io
import json
import logging
import re

from docx import Document as DocxDocument
from pypdf import PdfReader

from brandbook.core.constants import MIN_HTML_TEXT_CHARS, DocumentFormat

from .errors import EmptyExtraction, NoTextFound, UnreadableDocument

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# HTML
# -----------------------------------------------------------------------------

_SCRIPT_RE = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_STYLE_RE = re.compile(r"<style\b[^<]*(?:(?!</style>)<[^<]*)*</style>", re.IGNORECASE)

# (pattern, replacement) applied in order after script/style removal
_BLOCK_RULES: tuple[tuple[re.Pattern, str], ...] = (
    (re.compile(r"<br\s*/?>", re.IGNORECASE), "\n"),
    (re.compile(r"</p>", re.IGNORECASE), "\n\n"),
    (re.compile(r"</div>", re.IGNORECASE), "\n"),
    (re.compile(r"</h[1-6]>", re.IGNORECASE), "\n\n"),
    (re.compile(r"</li>", re.IGNORECASE), "\n"),
    (re.compile(r"<li(?:\s[^>]*)?>", re.IGNORECASE), "• "),
)

_TAG_RE = re.compile(r"<[^>]+>")

HTML_ENTITIES: dict[str, str] = {
    "&nbsp;": " ",
    "&amp;": "&",
    "&lt;": "<",
    "&gt;": ">",
    "&quot;": '"',
    "&#39;": "'",
    "&rsquo;": "'",
    "&lsquo;": "'",
    "&rdquo;": '"',
    "&ldquo;": '"',
    "&mdash;": "—",
    "&ndash;": "–",
}
_NUMERIC_ENTITY_RE = re.compile(r"&#\d+;")


def _decode_entities(text: str) -> str:
    for entity, char in HTML_ENTITIES.items():
        text = text.replace(entity, char)
    # Numeric entities outside the fixed table are dropped
    return _NUMERIC_ENTITY_RE.sub("", text)


def _collapse_whitespace(text: str) -> str:
    text = text.replace("\t", " ")
    text = re.sub(r" +", " ", text)
    text = re.sub(r" *\n *", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def html_to_text(html: str) -> str:
    """Strip an HTML page down to readable text."""
    text = _SCRIPT_RE.sub("", html or "")
    text = _STYLE_RE.sub("", text)
    for pattern, replacement in _BLOCK_RULES:
        text = pattern.sub(replacement, text)
    text = _TAG_RE.sub("", text)
    return _collapse_whitespace(_decode_entities(text))


# -----------------------------------------------------------------------------
# JSON
# -----------------------------------------------------------------------------

def json_to_text(raw: str) -> str:
    """Pretty-print JSON with 2-space indent; unparseable input comes back unchanged."""
    try:
        parsed = json.loads(raw)
    except ValueError:
        return raw
    return json.dumps(parsed, indent=2, ensure_ascii=False)


# -----------------------------------------------------------------------------
# Binary documents
# -----------------------------------------------------------------------------

def pdf_to_text(content: bytes) -> str:
    """All pages in document order, one block per page."""
    try:
        reader = PdfReader(io.BytesIO(content))
        pages = [page.extract_text() or "" for page in reader.pages]
    except Exception as e:
        logger.warning("PDF parse failed: %s", e)
        raise UnreadableDocument(f"Could not read PDF: {e}", e) from e
    text = "\n".join(pages).strip()
    if not text:
        raise NoTextFound("No text content found in PDF")
    return text


def docx_to_text(content: bytes) -> str:
    """Body paragraphs, then table cell text."""
    try:
        doc = DocxDocument(io.BytesIO(content))
        parts = [p.text for p in doc.paragraphs if p.text]
        for table in doc.tables:
            for row in table.rows:
                for cell in row.cells:
                    if cell.text:
                        parts.append(cell.text)
    except Exception as e:
        logger.warning("DOCX parse failed: %s", e)
        raise UnreadableDocument(f"Could not read DOCX: {e}", e) from e
    text = "\n".join(parts).strip()
    if not text:
        raise NoTextFound("No text content found in DOCX")
    return text


def _as_text(payload: bytes | str) -> str:
    if isinstance(payload, bytes):
        return payload.decode("utf-8", errors="replace")
    return payload


def _as_bytes(payload: bytes | str) -> bytes:
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return payload


def normalize_text(payload: bytes | str, fmt: DocumentFormat) -> str:
    """Convert a raw payload of the given format into plain text."""
    fmt = DocumentFormat(fmt)
    if fmt in (DocumentFormat.TXT, DocumentFormat.MD):
        return _as_text(payload)
    if fmt == DocumentFormat.JSON:
        return json_to_text(_as_text(payload))
    if fmt == DocumentFormat.HTML:
        text = html_to_text(_as_text(payload))
        if len(text) < MIN_HTML_TEXT_CHARS:
            raise EmptyExtraction("Could not extract meaningful text from the webpage")
        return text
    if fmt == DocumentFormat.PDF:
        return pdf_to_text(_as_bytes(payload))
    return docx_to_text(_as_bytes(payload))


async def normalize_text_async(payload: bytes | str, fmt: DocumentFormat) -> str:
    """normalize_text off the event loop (PDF/DOCX parsing is blocking)."""
    return await asyncio.to_thread(normalize_text, payload, fmt)
