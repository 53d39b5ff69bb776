"""
OCR Debug Utilities

Functions for saving annotated debug images and managing debug output.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from PIL import Image, ImageDraw, ImageFont

from ..vision.regions import Rectangle
from .result import ExtractedValue


logger = logging.getLogger(__name__)


# Debug settings
DEBUG_DIR = Path("./debug")
DEBUG_PREFIX = "debug_"
MAX_DEBUG_IMAGES = 10


def _load_font(size: int):
    try:
        return ImageFont.truetype("arial.ttf", size)
    except OSError:
        return ImageFont.load_default()


def save_debug_image(
    image: Image.Image,
    regions: Iterable[Rectangle],
    values: Optional[Iterable[ExtractedValue]],
    path: Union[str, Path],
) -> Path:
    """
    Save an annotated debug image showing detected islands and OCR results.

    Annotations include:
    - Region boxes
    - Recognized digits, unknown values highlighted in red

    Args:
        image: Original PIL Image
        regions: Surviving island rectangles
        values: Extracted values (can be None if extraction failed)
        path: Output file path

    Returns:
        Path of the written image
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    debug_img = image.convert("RGB")
    draw = ImageDraw.Draw(debug_img)
    font = _load_font(12)

    regions = list(regions)
    for rect in regions:
        draw.rectangle([rect.x, rect.y, rect.right, rect.bottom], outline="blue", width=2)

    values = list(values) if values is not None else []
    for v in values:
        color = "red" if v.is_unknown else "green"
        draw.text((v.x + 2, v.y - 14), v.value, fill=color, font=font)

    summary = f"Regions: {len(regions)}, Values: {len(values)}, " \
              f"Unknown: {sum(1 for v in values if v.is_unknown)}"
    draw.text((10, 10), summary, fill="blue", font=font)

    debug_img.save(path, "PNG")
    logger.debug(f"Debug image saved: {path}")

    _cleanup_debug_images(path.parent)
    return path


def _cleanup_debug_images(debug_dir: Path = DEBUG_DIR) -> None:
    """Remove old debug images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not debug_dir.exists():
        return

    # Get all debug images sorted by modification time
    debug_files = sorted(
        debug_dir.glob(f"{DEBUG_PREFIX}*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    for old_file in debug_files[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except OSError as e:
            logger.warning(f"Could not remove old debug image {old_file}: {e}")
