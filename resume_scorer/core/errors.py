from __future__ import annotations


class ResumeScorerError(Exception):
    """Base class for errors raised outside the pure scoring engine."""


class InputTooShortError(ResumeScorerError):
    def __init__(self, length: int, minimum: int) -> None:
        super().__init__(
            f"Résumé text is too short to analyze ({length} < {minimum} characters)."
        )
        self.length = length
        self.minimum = minimum


class ClassifierUnavailable(ResumeScorerError):
    """The optional entity classifier cannot be used (library or model missing)."""


class DecodeError(ResumeScorerError):
    """A document could not be turned into plain text."""


class EncryptedFileError(DecodeError):
    """The document is password protected."""


class UnsupportedFileTypeError(DecodeError):
    """The file extension is not one of the supported document types."""
