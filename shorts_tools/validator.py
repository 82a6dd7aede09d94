"""Input and response validation for the studio tools.

Two jobs:
- gate user input before a prompt is built (non-empty text, decodable image);
- check a parsed Gemini reply against the response schema it was asked for.
"""

import base64
import binascii
import io
import math
import re
from pathlib import Path
from typing import Optional, Union

from PIL import Image, UnidentifiedImageError

from shorts_tools.config import SUPPORTED_IMAGE_FORMATS
from shorts_tools.schemas import ImagePayload

DATA_URI_PATTERN = re.compile(r"^data:(image/[a-zA-Z0-9.+-]+);base64,")


class InvalidImageError(ValueError):
    """Selected file is not an image Gemini can read."""


def clean_text_input(value: Optional[str]) -> Optional[str]:
    """Return the trimmed input, or None when it is empty/whitespace."""
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def strip_data_uri(value: str) -> tuple[str, Optional[str]]:
    """Split an optional ``data:image/...;base64,`` header from a payload.

    Returns:
        Tuple of (base64_data, mime_type or None if there was no header).
    """
    match = DATA_URI_PATTERN.match(value)
    if not match:
        return value, None
    return value[match.end():], match.group(1).lower()


def parse_image_payload(value: Union[str, ImagePayload]) -> ImagePayload:
    """Decode and verify a base64 image (data-URI header optional).

    The MIME type comes from the decoded image itself, so a PNG mislabelled
    as JPEG is still sent as PNG.

    Raises:
        InvalidImageError: Not base64, not an image, or an unsupported format.
    """
    if isinstance(value, ImagePayload):
        value = value.data

    data, header_mime = strip_data_uri(value.strip())
    if not data:
        raise InvalidImageError("No image data provided")

    try:
        raw = base64.b64decode(data, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidImageError(f"Image is not valid base64: {e}") from e

    image_format = _detect_format(raw)
    if image_format not in SUPPORTED_IMAGE_FORMATS:
        raise InvalidImageError(
            f"Unsupported image format {image_format or header_mime}. Use PNG, JPEG or WEBP."
        )

    return ImagePayload(data=data, mime_type=SUPPORTED_IMAGE_FORMATS[image_format])


def load_image_file(path: Union[str, Path]) -> ImagePayload:
    """Read an image from disk and return a verified payload."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")
    encoded = base64.b64encode(path.read_bytes()).decode("utf-8")
    return parse_image_payload(encoded)


def _detect_format(raw: bytes) -> str:
    try:
        with Image.open(io.BytesIO(raw)) as img:
            image_format = img.format or ""
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise InvalidImageError(f"Could not read image: {e}") from e

    return image_format


# ---------------------------------------------------------------------------
# Response validation
# ---------------------------------------------------------------------------

def validate_against_schema(data, schema: dict, path: str = "$") -> list[str]:
    """Check parsed JSON against a Gemini response schema.

    Checks required fields, primitive kinds, and numeric ``minimum``/``maximum``.
    Extra keys are allowed. List lengths and enum-like strings are not checked.

    Returns:
        List of issues, empty when the data conforms.
    """
    issues = []
    kind = schema.get("type")

    if kind == "OBJECT":
        if not isinstance(data, dict):
            return [f"{path}: expected object, got {_type_name(data)}"]
        for name in schema.get("required", []):
            if name not in data or data[name] is None:
                issues.append(f"{path}.{name}: missing required field")
        for name, prop in schema.get("properties", {}).items():
            if data.get(name) is not None:
                issues.extend(validate_against_schema(data[name], prop, f"{path}.{name}"))

    elif kind == "ARRAY":
        if not isinstance(data, list):
            return [f"{path}: expected array, got {_type_name(data)}"]
        item_schema = schema.get("items")
        if item_schema:
            for i, item in enumerate(data):
                issues.extend(validate_against_schema(item, item_schema, f"{path}[{i}]"))

    elif kind == "STRING":
        if not isinstance(data, str):
            issues.append(f"{path}: expected string, got {_type_name(data)}")

    elif kind in ("NUMBER", "INTEGER"):
        if isinstance(data, bool) or not isinstance(data, (int, float)):
            return [f"{path}: expected number, got {_type_name(data)}"]
        if not math.isfinite(data):
            return [f"{path}: expected finite number, got {data}"]
        if kind == "INTEGER" and not float(data).is_integer():
            issues.append(f"{path}: expected integer, got {data}")
        minimum = schema.get("minimum")
        maximum = schema.get("maximum")
        if minimum is not None and data < minimum:
            issues.append(f"{path}: {data} is below minimum {minimum}")
        if maximum is not None and data > maximum:
            issues.append(f"{path}: {data} is above maximum {maximum}")

    elif kind == "BOOLEAN":
        if not isinstance(data, bool):
            issues.append(f"{path}: expected boolean, got {_type_name(data)}")

    return issues


def _type_name(value) -> str:
    if value is None:
        return "null"
    return type(value).__name__
