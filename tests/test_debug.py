"""
Unit tests for debug image output.

Usage:
    python -m pytest tests/test_debug.py
"""

import os
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hashi_reader.ocr import ExtractedValue, save_debug_image
from hashi_reader.ocr import debug as debug_module
from hashi_reader.vision import Rectangle


REGIONS = [Rectangle(20, 20, 15, 15), Rectangle(60, 20, 15, 15)]
VALUES = [ExtractedValue(20, 20, "3"), ExtractedValue(60, 20, "?")]


def test_debug_image_written(tmp_path):
    image = Image.new("RGB", (120, 80), "white")

    path = save_debug_image(image, REGIONS, VALUES, tmp_path / "debug_run.png")

    assert path.exists()
    with Image.open(path) as saved:
        assert saved.size == (120, 80)
        assert saved.getpixel((20, 20)) != (255, 255, 255)  # box outline drawn
    assert image.getpixel((20, 20)) == (255, 255, 255)     # original untouched


def test_debug_image_without_values(tmp_path):
    image = Image.new("L", (50, 50), 255)
    path = save_debug_image(image, REGIONS[:1], None, tmp_path / "nested" / "debug_x.png")
    assert path.exists()


def test_old_debug_images_pruned(tmp_path, monkeypatch):
    monkeypatch.setattr(debug_module, "MAX_DEBUG_IMAGES", 2)
    for i in range(3):
        old = tmp_path / f"debug_old{i}.png"
        Image.new("RGB", (4, 4)).save(old)
        os.utime(old, (1000 + i, 1000 + i))

    save_debug_image(Image.new("RGB", (40, 40)), [], [], tmp_path / "debug_new.png")

    remaining = sorted(p.name for p in tmp_path.glob("debug_*.png"))
    assert remaining == ["debug_new.png", "debug_old2.png"]


if __name__ == "__main__":
    sys.exit(pytest.main([__file__]))
