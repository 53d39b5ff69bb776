"""
Screen Capture Module

Grabs a board screenshot straight from the screen using mss, for reading a
puzzle that is open in a browser or app window.
"""

import logging
from typing import Optional, Tuple

import mss
from PIL import Image


logger = logging.getLogger(__name__)


def capture_screen(
    monitor: int = 1,
    region: Optional[Tuple[int, int, int, int]] = None
) -> Image.Image:
    """
    Capture a monitor, or a region of the virtual screen.

    Note: This captures screen pixels including any overlays.

    Args:
        monitor: mss monitor index (1 = primary, 0 = all monitors combined)
        region: Optional (x, y, width, height) overriding the monitor

    Returns:
        PIL Image in RGB

    Raises:
        ValueError: If the monitor index does not exist
    """
    with mss.mss() as sct:
        if region is not None:
            x, y, width, height = region
            area = {"left": x, "top": y, "width": width, "height": height}
        else:
            if not 0 <= monitor < len(sct.monitors):
                raise ValueError(
                    f"Monitor {monitor} not found ({len(sct.monitors) - 1} available)"
                )
            area = sct.monitors[monitor]

        screenshot = sct.grab(area)
        img = Image.frombytes(
            "RGB",
            (screenshot.width, screenshot.height),
            screenshot.rgb
        )

    logger.info(f"Captured screen {img.size[0]}x{img.size[1]}")
    return img
