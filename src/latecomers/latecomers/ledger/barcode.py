from __future__ import annotations

from typing import BinaryIO

from PIL import Image, UnidentifiedImageError

from ..core.exceptions import ValidationError


def decode_roll_number(stream: BinaryIO) -> str:
    """Read the first barcode found on an ID-card photo.

    Returns the decoded text as-is; callers still run it through
    `validate_roll_number`.
    """

    # pyzbar loads the native zbar library on import.
    from pyzbar.pyzbar import decode as pyzbar_decode

    try:
        img = Image.open(stream).convert("RGB")
    except UnidentifiedImageError:
        raise ValidationError("Uploaded file is not an image")

    decoded = pyzbar_decode(img)
    if not decoded:
        raise ValidationError("No barcode detected in the image")
    return decoded[0].data.decode("utf-8").strip()
