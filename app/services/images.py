import base64

from app.core.config import MAX_IMAGE_BYTES


class ImageTooLargeError(Exception):
    pass


class UnsupportedImageError(Exception):
    pass


def ingest_image(content: bytes, content_type: str, max_bytes: int = MAX_IMAGE_BYTES) -> str:
    """Encode an uploaded image as an inline data URL. Nothing is stored."""
    if not content_type or not content_type.startswith("image/"):
        raise UnsupportedImageError("Only image files are accepted.")
    if len(content) > max_bytes:
        raise ImageTooLargeError(f"Image must be at most {max_bytes // 1000}KB.")

    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{content_type};base64,{encoded}"
