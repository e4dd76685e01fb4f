"""
Image payloads: the two ways a client can send a picture, and the single
shape (bytes + mime type) they are stored as.

Reads render stored images as ``data:<mime>;base64,<payload>`` so clients
never see raw binary or a file path.
"""

import base64
import binascii
from dataclasses import dataclass

from petfinder.core.exceptions import ValidationError

_DATA_URI_PREFIX = "data:"


@dataclass(frozen=True)
class FileUpload:
    """Multipart file part."""

    data: bytes
    mime_type: str | None


@dataclass(frozen=True)
class Base64Payload:
    """JSON body field, optionally already prefixed with a data URI header."""

    data: str
    mime_type: str | None


ImagePayload = FileUpload | Base64Payload | None


@dataclass(frozen=True)
class StoredImage:
    data: bytes
    mime_type: str


def _split_data_uri(value: str) -> tuple[str | None, str]:
    """'data:image/png;base64,AAA' -> ('image/png', 'AAA'). Plain base64 passes through."""
    if value.startswith(_DATA_URI_PREFIX) and "," in value:
        header, payload = value.split(",", 1)
        mime = header[len(_DATA_URI_PREFIX):].split(";", 1)[0] or None
        return mime, payload
    return None, value


def _decode_base64(payload: str) -> bytes:
    try:
        return base64.b64decode("".join(payload.split()), validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError("Invalid image. Check the format.", details=str(exc)) from exc


def normalize_image(payload: ImagePayload, max_bytes: int) -> StoredImage | None:
    """Turn either payload variant into StoredImage, or None when no image was sent."""
    if payload is None:
        return None

    if isinstance(payload, FileUpload):
        data, mime_type = payload.data, payload.mime_type
    else:
        prefixed_mime, encoded = _split_data_uri(payload.data.strip())
        mime_type = payload.mime_type or prefixed_mime
        data = _decode_base64(encoded)

    if not data:
        raise ValidationError("Invalid image. Check the format.", details="empty image")
    if not mime_type or not mime_type.lower().startswith("image/"):
        raise ValidationError("Only image files are allowed")
    if len(data) > max_bytes:
        raise ValidationError(
            "Invalid image. Check the format.",
            details=f"image exceeds {max_bytes} bytes",
        )
    return StoredImage(data=data, mime_type=mime_type.lower())


def to_data_uri(data: bytes | None, mime_type: str | None) -> str | None:
    if not data:
        return None
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type or 'application/octet-stream'};base64,{encoded}"
