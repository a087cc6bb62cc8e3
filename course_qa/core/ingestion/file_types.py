"""
Accepted upload formats.

Maps MIME types to the file extensions clients use for them. Uploads sent as
application/octet-stream (or with no type) are resolved by extension.

Dependencies: pathlib
System role: Shared allow-list for upload validation and parser selection
"""

from pathlib import Path

PDF = "application/pdf"
TEXT = "text/plain"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PPTX = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

ALLOWED_CONTENT_TYPES: dict[str, str] = {
    PDF: ".pdf",
    TEXT: ".txt",
    DOCX: ".docx",
    PPTX: ".pptx",
}

_EXTENSION_TO_TYPE = {ext: mime for mime, ext in ALLOWED_CONTENT_TYPES.items()}

_GENERIC_TYPES = {"", "application/octet-stream", "binary/octet-stream"}


def resolve_content_type(filename: str | None, declared: str | None) -> str | None:
    """
    Decide the effective MIME type of an upload.

    Args:
        filename: Client filename, used when the declared type is generic
        declared: Content-Type sent with the multipart part

    Returns:
        The allowed MIME type, or None if the upload is not an accepted format
    """
    mime = (declared or "").split(";")[0].strip().lower()
    if mime in ALLOWED_CONTENT_TYPES:
        return mime
    if mime in _GENERIC_TYPES and filename:
        return _EXTENSION_TO_TYPE.get(Path(filename).suffix.lower())
    return None


def shorten_filename(filename: str, max_chars: int) -> str:
    """
    Cut a filename to ``max_chars``, keeping its extension.

    Suffixes longer than a quarter of the budget are not treated as an
    extension and are cut with the rest of the name.
    """
    if len(filename) <= max_chars:
        return filename
    suffix = Path(filename).suffix
    if len(suffix) > max_chars // 4:
        suffix = ""
    return filename[: max_chars - len(suffix)] + suffix
