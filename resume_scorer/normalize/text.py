from __future__ import annotations

import re
from dataclasses import dataclass

_SPACE_LIKE_RE = re.compile(r"[\t\u00a0\u2000-\u200b\u2028\u2029\u3000]")
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")
_CJK_DATE_RE = re.compile(r"(\d{4})\s*年\s*(\d{1,2})\s*月")
_DOTTED_DATE_RE = re.compile(r"(\d{4})\s*\.\s*(\d{1,2})(?!\d)")
_MULTI_SPACE_RE = re.compile(r" {2,}")
_MULTI_NEWLINE_RE = re.compile(r"\n{3,}")
_SENTENCE_RE = re.compile(r"[^。；;！!？?\n]+")

_PUNCTUATION = str.maketrans(
    {
        "：": ":",
        "；": ";",
        "（": "(",
        "）": ")",
        "\u201c": '"',
        "\u201d": '"',
        "\u2018": "'",
        "\u2019": "'",
        "\u2013": "-",
        "\u2014": "-",
        "\u2026": "...",
    }
)

_STRUCTURE_MARKERS = ("教育", "经历", "技能", "项目", "实习", "工作", "学习", "经验")


@dataclass(frozen=True, slots=True)
class Sentence:
    text: str
    start: int


def normalize_text(raw: str | None) -> str:
    """Canonicalise résumé text so the extraction patterns see one spelling.

    Line breaks become LF, exotic spaces become plain spaces, control
    characters other than LF are dropped and full-width punctuation is folded
    to ASCII. CJK dates are rewritten as a single ``YYYY年MM月`` token. Spaces
    collapse, every line is trimmed and blank runs shrink to one empty line.
    The function is total and idempotent.
    """
    if not raw:
        return ""

    text = str(raw).replace("\r\n", "\n").replace("\r", "\n")
    text = _SPACE_LIKE_RE.sub(" ", text)
    text = _CONTROL_RE.sub("", text)
    text = text.translate(_PUNCTUATION)
    text = _CJK_DATE_RE.sub(lambda m: f"{m.group(1)}年{int(m.group(2)):02d}月", text)
    text = _DOTTED_DATE_RE.sub(r"\1.\2", text)
    text = _MULTI_SPACE_RE.sub(" ", text)
    text = "\n".join(normalize_line(line) for line in text.split("\n"))
    text = _MULTI_NEWLINE_RE.sub("\n\n", text)
    return text.strip()


def normalize_line(line: str) -> str:
    return re.sub(r"[ ]+", " ", line).strip()


def split_sentences(
    text: str,
    *,
    min_chars: int = 6,
    max_sentences: int | None = None,
) -> list[Sentence]:
    sentences: list[Sentence] = []
    for match in _SENTENCE_RE.finditer(text or ""):
        segment = match.group(0)
        stripped = segment.strip()
        if len(stripped) < min_chars:
            continue
        offset = match.start() + (len(segment) - len(segment.lstrip()))
        sentences.append(Sentence(text=stripped, start=offset))
        if max_sentences is not None and len(sentences) >= max_sentences:
            break
    return sentences


def has_good_structure(text: str) -> bool:
    """True when at least three typical résumé section words appear."""
    return sum(1 for marker in _STRUCTURE_MARKERS if marker in (text or "")) >= 3
