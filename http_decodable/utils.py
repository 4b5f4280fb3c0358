import mimetypes

DEFAULT_MIME_TYPE = "application/octet-stream"


def suggested_mime_type(extension: str) -> str:
    extension = extension.strip().lstrip(".")
    if not extension:
        return DEFAULT_MIME_TYPE

    mime_type, _ = mimetypes.guess_type(f"file.{extension}", strict=False)
    return mime_type or DEFAULT_MIME_TYPE
