from .models import ParsedDoc
from .parse import extract_plain_text, looks_like_resume, parse_document, parse_document_bytes

__all__ = ["ParsedDoc", "extract_plain_text", "looks_like_resume", "parse_document", "parse_document_bytes"]
