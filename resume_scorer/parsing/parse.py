from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from zipfile import BadZipFile

from docx import Document
from docx.opc.exceptions import PackageNotFoundError
from pypdf import PdfReader
from pypdf.errors import DependencyError, FileNotDecryptedError, PdfReadError

from resume_scorer.core.config import settings
from resume_scorer.core.errors import DecodeError, EncryptedFileError, UnsupportedFileTypeError

from .models import ParsedDoc

logger = logging.getLogger(__name__)

MAX_PDF_PAGES = 10
MAX_TEXT_CHARS = 100_000
TRUNCATION_NOTE = "\n\n... (内容过长，已截断)"

OLE_MAGIC = b"\xd0\xcf\x11\xe0"

RESUME_KEYWORDS = (
    "姓名", "电话", "邮箱", "教育", "经历", "技能", "工作", "实习",
    "项目", "学校", "专业", "大学", "学院", "毕业", "求职", "应聘",
    "奖学金", "获奖", "证书", "能力", "经验", "职位", "公司",
    "name", "phone", "email", "education", "experience", "skills",
    "work", "university", "college", "graduate", "internship", "project",
    "award", "certificate", "ability", "position", "company",
)


def looks_like_resume(text: str) -> bool:
    """At least a tenth of the résumé vocabulary (capped at five words) appears."""
    lowered = (text or "").lower()
    hits = sum(1 for keyword in RESUME_KEYWORDS if keyword in lowered)
    return hits >= min(len(RESUME_KEYWORDS) * 0.1, 5)


def _source_type(filename: str) -> str:
    extension = Path(filename).suffix.lower()
    if extension == ".pdf":
        return "pdf"
    if extension == ".docx":
        return "docx"
    if extension == ".txt":
        return "txt"
    raise UnsupportedFileTypeError(
        f"Unsupported file type '{extension or filename}'. Supported types: .pdf, .docx, .txt"
    )


def _parse_txt(content: bytes) -> tuple[str, int | None, list[str]]:
    # UTF-16 is only trusted with a byte-order mark; latin-1 accepts any byte string.
    if content.startswith((b"\xff\xfe", b"\xfe\xff")):
        try:
            return content.decode("utf-16"), None, []
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Text file could not be decoded: {exc}") from exc
    try:
        return content.decode("utf-8"), None, []
    except UnicodeDecodeError:
        return content.decode("latin-1"), None, ["Decoded text as latin-1."]


def _parse_pdf(content: bytes) -> tuple[str, int | None, list[str]]:
    warnings: list[str] = []
    try:
        reader = PdfReader(BytesIO(content))
        if reader.is_encrypted:
            try:
                decrypted = reader.decrypt("")
            except (DependencyError, NotImplementedError) as exc:
                raise EncryptedFileError("PDF is encrypted and cannot be opened.") from exc
            if not decrypted:
                raise EncryptedFileError("PDF is password protected; upload an unencrypted copy.")
        page_count = len(reader.pages)
        text_parts: list[str] = []
        for page in reader.pages[:MAX_PDF_PAGES]:
            page_text = (page.extract_text() or "").strip()
            if page_text:
                text_parts.append(page_text)
    except FileNotDecryptedError as exc:
        raise EncryptedFileError("PDF is password protected; upload an unencrypted copy.") from exc
    except PdfReadError as exc:
        raise DecodeError(f"PDF parsing failed: {exc}") from exc

    if page_count > MAX_PDF_PAGES:
        warnings.append(f"Only the first {MAX_PDF_PAGES} of {page_count} pages were read.")
    if not text_parts:
        warnings.append("No extractable text found in PDF.")
    return "\n".join(text_parts), page_count, warnings


def _parse_docx(content: bytes) -> tuple[str, int | None, list[str]]:
    if content.startswith(OLE_MAGIC):
        # Password-protected .docx files are wrapped in an OLE compound document.
        raise EncryptedFileError("DOCX is password protected; upload an unencrypted copy.")
    try:
        document = Document(BytesIO(content))
    except (BadZipFile, PackageNotFoundError, KeyError) as exc:
        raise DecodeError(f"DOCX parsing failed: {exc}") from exc

    lines = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text and cell.text.strip()]
            if cells:
                lines.append(" ".join(cells))
    warnings = [] if lines else ["No extractable text found in DOCX."]
    return "\n".join(lines), None, warnings


_PARSERS = {"txt": _parse_txt, "pdf": _parse_pdf, "docx": _parse_docx}


def parse_document_bytes(filename: str, content: bytes) -> ParsedDoc:
    source_type = _source_type(filename)
    if len(content) > settings.max_upload_bytes:
        raise DecodeError(
            f"File is too large ({len(content)} bytes; limit {settings.max_upload_bytes})."
        )

    text, page_count, warnings = _PARSERS[source_type](content)
    truncated = len(text) > MAX_TEXT_CHARS
    if truncated:
        logger.warning("document_truncated filename=%s chars=%s", filename, len(text))
        text = text[:MAX_TEXT_CHARS] + TRUNCATION_NOTE
        warnings.append(f"Text truncated to {MAX_TEXT_CHARS} characters.")

    resume_like = looks_like_resume(text)
    if not resume_like:
        logger.warning("document_not_resume_like filename=%s chars=%s", filename, len(text))

    logger.info(
        "document_parsed filename=%s source_type=%s chars=%s warnings=%s",
        filename,
        source_type,
        len(text),
        len(warnings),
    )
    return ParsedDoc(
        source_type=source_type,
        filename=filename,
        text=text,
        page_count=page_count,
        truncated=truncated,
        looks_like_resume=resume_like,
        parsing_warnings=warnings,
    )


def parse_document(file_path: str | Path) -> ParsedDoc:
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Input document not found: '{path}'")
    _source_type(path.name)
    return parse_document_bytes(path.name, path.read_bytes())


def extract_plain_text(source: str | Path | bytes, filename: str | None = None) -> str:
    """Decode a .pdf, .docx or .txt document into plain text.

    ``source`` is either a path or the raw bytes of an upload; raw bytes need
    ``filename`` to pick the decoder.
    """
    if isinstance(source, bytes):
        if not filename:
            raise UnsupportedFileTypeError("A filename is required to decode raw bytes.")
        return parse_document_bytes(filename, source).text
    return parse_document(source).text
