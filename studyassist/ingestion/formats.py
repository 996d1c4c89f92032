"""Maps a file name and a client-declared type to a canonical FormatTag."""

from studyassist.ingestion.models import FormatTag

DOCUMENT_EXTENSIONS = frozenset({"pdf", "doc", "docx", "ppt", "pptx", "xls", "xlsx"})
IMAGE_EXTENSIONS = frozenset({"png", "jpg", "jpeg", "webp"})
TEXT_EXTENSIONS = frozenset({"txt"})

MIME_TO_EXTENSION: dict[str, str] = {
    "application/pdf": "pdf",
    "application/msword": "doc",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/vnd.ms-powerpoint": "ppt",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation": "pptx",
    "application/vnd.ms-excel": "xls",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet": "xlsx",
    "image/png": "png",
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/webp": "webp",
    "text/plain": "txt",
}

_KNOWN_EXTENSIONS = DOCUMENT_EXTENSIONS | IMAGE_EXTENSIONS | TEXT_EXTENSIONS


def file_extension(file_name: str | None) -> str:
    """Return the lower-cased trailing extension of *file_name*, or ''."""
    base = (file_name or "").replace("\\", "/").rsplit("/", 1)[-1]
    stem, dot, ext = base.rpartition(".")
    if not dot or not stem or not ext:
        return ""
    return ext.strip().lower()


def resolve_extension(file_name: str | None, declared_type: str | None) -> str:
    """Return a recognized extension, preferring the file name over the declared type.

    The declared type may be a MIME string or a bare extension (with or
    without a leading dot). Returns '' when neither is recognized.
    """
    ext = file_extension(file_name)
    if ext in _KNOWN_EXTENSIONS:
        return ext
    declared = (declared_type or "").strip().lower()
    if not declared:
        return ""
    from_mime = MIME_TO_EXTENSION.get(declared.split(";", 1)[0].strip())
    if from_mime:
        return from_mime
    declared = declared.lstrip(".")
    return declared if declared in _KNOWN_EXTENSIONS else ""


def classify(file_name: str | None, declared_type: str | None = None) -> FormatTag:
    """Classify an upload. Total: unknown combinations yield FormatTag.UNKNOWN."""
    ext = resolve_extension(file_name, declared_type)
    if ext in DOCUMENT_EXTENSIONS:
        return FormatTag.DOCUMENT_PARSABLE
    if ext in IMAGE_EXTENSIONS:
        return FormatTag.IMAGE
    if ext in TEXT_EXTENSIONS:
        return FormatTag.PLAIN_TEXT
    return FormatTag.UNKNOWN


def image_mime_type(file_name: str | None, declared_type: str | None = None) -> str:
    """MIME type used when sending an image to the OCR service."""
    ext = resolve_extension(file_name, declared_type)
    if ext in ("jpg", "jpeg"):
        return "image/jpeg"
    if ext == "png":
        return "image/png"
    return "image/webp"
