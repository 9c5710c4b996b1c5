"""
I/O utilities for the ridge trace framework.

Decodes image files and uploads into RGBA rasters for the pipeline and
encodes traced rasters back to files or data URLs. Decoding and encoding
live here, outside the pipeline itself.
"""

import base64
import io
import json
from pathlib import Path
from typing import Any, List, Optional, Union

import cv2
import numpy as np
from PIL import Image

from ridgetrace.tracing.raster import Raster, raster_from_array


# Supported image extensions
SUPPORTED_EXTENSIONS = {'.tif', '.tiff', '.png', '.jpg', '.jpeg', '.bmp'}


def load_raster(path: Union[str, Path]) -> Raster:
    """
    Load an image file as an RGBA raster.

    Args:
        path: Path to the image file

    Returns:
        RGBA raster (alpha 255 when the file has no alpha channel)

    Raises:
        FileNotFoundError: If image file does not exist
        ValueError: If image cannot be decoded
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)

    if image is None:
        raise ValueError(f"Failed to load image: {path}")

    if image.dtype != np.uint8:
        # 16-bit sources are reduced to 8 bits per channel
        image = (image / 257).round().astype(np.uint8)

    if image.ndim == 2:
        rgba = cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    elif image.shape[2] == 4:
        rgba = cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)
    else:
        rgba = cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)

    return raster_from_array(rgba)


def save_raster(raster: Raster, path: Union[str, Path]) -> Path:
    """
    Save an RGBA raster to disk.

    Args:
        raster: Raster to save
        path: Output path; the extension selects the format

    Returns:
        The output path

    Raises:
        ValueError: If the image could not be written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    bgra = cv2.cvtColor(raster.data, cv2.COLOR_RGBA2BGRA)
    if not cv2.imwrite(str(path), bgra):
        raise ValueError(f"Failed to write image: {path}")

    return path


def decode_raster(data: bytes) -> Raster:
    """
    Decode an in-memory image (e.g. an upload) into an RGBA raster.

    Args:
        data: Encoded image bytes (PNG, JPEG, ...)

    Returns:
        RGBA raster

    Raises:
        ValueError: If the bytes cannot be decoded as an image
    """
    try:
        pil_image = Image.open(io.BytesIO(data))
        pil_image.load()
    except (OSError, Image.DecompressionBombError) as exc:
        raise ValueError(f"Failed to decode image: {exc}") from exc

    if pil_image.mode != "RGBA":
        pil_image = pil_image.convert("RGBA")

    return raster_from_array(np.array(pil_image, dtype=np.uint8))


def encode_png(raster: Raster) -> bytes:
    """Encode a raster as PNG bytes."""
    buffer = io.BytesIO()
    Image.fromarray(raster.data).save(buffer, format="PNG")
    return buffer.getvalue()


def encode_png_data_url(raster: Raster) -> str:
    """
    Encode a raster as a base64 PNG data URL.

    Args:
        raster: Raster to encode

    Returns:
        String of the form "data:image/png;base64,..."
    """
    payload = base64.b64encode(encode_png(raster)).decode("ascii")
    return f"data:image/png;base64,{payload}"


def discover_images(
    directory: Union[str, Path],
    extensions: Optional[set] = None,
    recursive: bool = True
) -> List[Path]:
    """
    Discover all images in a directory.

    Args:
        directory: Root directory to search
        extensions: Set of valid extensions (default: SUPPORTED_EXTENSIONS)
        recursive: Whether to search subdirectories

    Returns:
        Sorted list of paths to discovered images
    """
    directory = Path(directory)
    extensions = extensions or SUPPORTED_EXTENSIONS

    pattern = '**/*' if recursive else '*'

    return sorted(
        path for path in directory.glob(pattern)
        if path.is_file() and path.suffix.lower() in extensions
    )


def load_json(path: Union[str, Path]) -> Any:
    """Load a JSON file."""
    with open(path, 'r') as f:
        return json.load(f)


def save_json(data: Any, path: Union[str, Path], indent: int = 2) -> None:
    """Save data to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(data, f, indent=indent, default=str)
