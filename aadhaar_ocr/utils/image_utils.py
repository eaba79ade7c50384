"""
Image loading for the recognition passes.

Accepts whatever a caller is likely to hold: a path, encoded bytes, a
decoded numpy pixel buffer or a PIL image. Pixels are passed through
untouched apart from mode conversion; there is no deskew or denoise step.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..exceptions import ImageLoadError

ImageSource = Union[str, Path, bytes, bytearray, np.ndarray, Image.Image]

_RECOGNIZABLE_MODES = ("RGB", "L")


def load_image(source: ImageSource) -> Image.Image:
    """
    Load an image into a PIL image Tesseract can read.

    Args:
        source: File path, encoded bytes, HxW / HxWxC uint8 array, or PIL image

    Returns:
        RGB or grayscale PIL image

    Raises:
        ImageLoadError: if the source cannot be decoded
    """
    if isinstance(source, Image.Image):
        image = source
    elif isinstance(source, np.ndarray):
        image = _from_array(source)
    elif isinstance(source, (bytes, bytearray)):
        image = _open(io.BytesIO(source), "<bytes>")
    elif isinstance(source, (str, Path)):
        path = Path(source)
        if not path.is_file():
            raise ImageLoadError(f"Image file not found: {path}", source=str(path))
        image = _open(path, str(path))
    else:
        raise ImageLoadError(f"Unsupported image source: {type(source).__name__}")

    if image.mode not in _RECOGNIZABLE_MODES:
        image = image.convert("RGB")
    return image


def _open(fp, label: str) -> Image.Image:
    try:
        image = Image.open(fp)
        image.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ImageLoadError(f"Cannot decode image: {e}", source=label) from e
    return image


def _from_array(array: np.ndarray) -> Image.Image:
    if array.size == 0 or array.ndim not in (2, 3):
        raise ImageLoadError(f"Invalid pixel buffer shape: {array.shape}", source="<ndarray>")
    if array.ndim == 3 and array.shape[2] not in (1, 3, 4):
        raise ImageLoadError(f"Unsupported channel count: {array.shape[2]}", source="<ndarray>")

    if array.dtype != np.uint8:
        array = np.clip(array, 0, 255).astype(np.uint8)
    if array.ndim == 3 and array.shape[2] == 1:
        array = array[:, :, 0]

    try:
        return Image.fromarray(array)
    except (TypeError, ValueError) as e:
        raise ImageLoadError(f"Cannot convert pixel buffer: {e}", source="<ndarray>") from e
