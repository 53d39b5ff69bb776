"""
Unit tests for OCR engines: lifecycle, factory, template and Tesseract engines.

Usage:
    python -m pytest tests/test_ocr.py
"""

import sys
import threading
from pathlib import Path

import cv2
import numpy as np
import pytest
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fakes import FakeEngine
from hashi_reader.errors import EngineNotReadyError
from hashi_reader.ocr import (
    EngineState,
    OCREngine,
    available_engines,
    create_engine,
    register_engine,
)
from hashi_reader.ocr import tesseract_engine
from hashi_reader.ocr.template_engine import TEMPLATE_DIGITS, TemplateOCREngine


def render_digit(digit: int) -> np.ndarray:
    """Black digit on a white 40x40 grayscale tile."""
    tile = np.full((40, 40), 255, dtype=np.uint8)
    cv2.putText(tile, str(digit), (8, 32), cv2.FONT_HERSHEY_SIMPLEX, 1.0, 0, 2)
    return tile


@pytest.fixture
def template_dir(tmp_path):
    """Directory with one rendered template per digit."""
    for digit in TEMPLATE_DIGITS:
        cv2.imwrite(str(tmp_path / f"{digit}.png"), render_digit(digit))
    return tmp_path


@pytest.fixture
def patch():
    return Image.new("RGB", (20, 20), "white")


# ============================================================================
# Lifecycle
# ============================================================================

def test_engine_becomes_ready(patch):
    engine = FakeEngine(texts=["4"])
    assert engine.state == EngineState.UNINITIALIZED

    engine.await_ready(timeout=5)

    assert engine.state == EngineState.READY
    assert engine.recognize(patch) == "4"


def test_recognize_before_ready_is_rejected(patch):
    engine = FakeEngine()
    with pytest.raises(EngineNotReadyError):
        engine.recognize(patch)


def test_failed_initialization(patch):
    engine = FakeEngine(init_error=RuntimeError("binary missing"))

    with pytest.raises(EngineNotReadyError, match="binary missing"):
        engine.await_ready(timeout=5)

    assert engine.state == EngineState.FAILED
    with pytest.raises(EngineNotReadyError):
        engine.recognize(patch)


def test_await_ready_times_out():
    gate = threading.Event()
    engine = FakeEngine(init_gate=gate)

    engine.start()
    assert engine.state == EngineState.INITIALIZING
    with pytest.raises(EngineNotReadyError, match="not ready"):
        engine.await_ready(timeout=0.05)

    gate.set()
    engine.await_ready(timeout=5)
    assert engine.state == EngineState.READY


def test_start_is_idempotent():
    engine = FakeEngine()
    engine.start()
    engine.start()
    engine.await_ready(timeout=5)
    assert engine.state == EngineState.READY


def test_close_releases_resources(patch):
    with FakeEngine() as engine:
        engine.await_ready(timeout=5)

    assert engine.state == EngineState.CLOSED
    assert engine.released
    with pytest.raises(EngineNotReadyError):
        engine.recognize(patch)
    with pytest.raises(EngineNotReadyError):
        engine.start()


def test_close_without_start():
    engine = FakeEngine()
    engine.close()
    assert engine.state == EngineState.CLOSED
    assert not engine.released


def test_close_does_not_wait_for_hung_initialization():
    engine = FakeEngine(init_gate=threading.Event())  # never opens
    closed = threading.Event()

    def read_with_timeout():
        with pytest.raises(EngineNotReadyError, match="not ready"):
            with engine:
                engine.start()
                engine.await_ready(timeout=0.05)
        closed.set()

    worker = threading.Thread(target=read_with_timeout, daemon=True)
    worker.start()

    assert closed.wait(3), "leaving the with-block blocked on initialization"
    assert engine.state == EngineState.CLOSED


def test_late_initialization_released_after_close():
    gate = threading.Event()
    engine = FakeEngine(init_gate=gate)
    engine.start()
    engine.close()
    assert engine.state == EngineState.CLOSED

    gate.set()
    engine._init_thread.join(5)

    assert engine.state == EngineState.CLOSED
    assert engine.released


# ============================================================================
# Factory
# ============================================================================

def test_builtin_engines_available():
    names = available_engines()
    assert "tesseract" in names
    assert "template" in names


def test_unknown_engine_rejected():
    with pytest.raises(ValueError, match="Unknown engine type"):
        create_engine("does-not-exist")


def test_create_builtin_engines(tmp_path):
    assert isinstance(create_engine("template", template_dir=tmp_path), TemplateOCREngine)
    assert create_engine("tesseract", language="eng").name == "tesseract"


def test_register_custom_engine():
    register_engine("fake", FakeEngine)
    engine = create_engine("fake", texts=["8"])
    assert isinstance(engine, FakeEngine)
    assert "fake" in available_engines()


def test_register_rejects_non_engine():
    with pytest.raises(TypeError):
        register_engine("bogus", dict)


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        OCREngine()


# ============================================================================
# Template engine
# ============================================================================

@pytest.mark.parametrize("digit", [1, 4, 8])
def test_template_engine_recognizes_digits(template_dir, digit):
    with create_engine("template", template_dir=template_dir) as engine:
        engine.await_ready(timeout=5)
        patch = Image.fromarray(render_digit(digit))
        assert engine.recognize(patch) == str(digit)


def test_template_engine_matches_rgb_patch(template_dir):
    with TemplateOCREngine(template_dir=template_dir) as engine:
        engine.await_ready(timeout=5)
        rgb = Image.fromarray(render_digit(6)).convert("RGB")
        assert engine.recognize(rgb) == "6"


def test_template_engine_needs_all_templates(tmp_path):
    cv2.imwrite(str(tmp_path / "1.png"), render_digit(1))
    engine = TemplateOCREngine(template_dir=tmp_path)

    with pytest.raises(EngineNotReadyError, match="Missing digit templates"):
        engine.await_ready(timeout=5)


def test_template_engine_missing_directory(tmp_path):
    engine = TemplateOCREngine(template_dir=tmp_path / "nowhere")
    with pytest.raises(EngineNotReadyError):
        engine.await_ready(timeout=5)


# ============================================================================
# Tesseract engine
# ============================================================================

@pytest.fixture
def fake_tesseract(monkeypatch):
    """Replace the pytesseract calls with in-process fakes."""
    calls = {}

    def image_to_string(image, lang=None, config="", timeout=0):
        calls.update(lang=lang, config=config, timeout=timeout, size=image.size)
        return " 5\n\x0c"

    monkeypatch.setattr(tesseract_engine.pytesseract, "get_tesseract_version", lambda: "5.3.0")
    monkeypatch.setattr(tesseract_engine.pytesseract, "get_languages", lambda config="": ["eng", "osd"])
    monkeypatch.setattr(tesseract_engine.pytesseract, "image_to_string", image_to_string)
    return calls


def test_tesseract_engine_recognizes(fake_tesseract, patch):
    engine = tesseract_engine.TesseractOCREngine(timeout_sec=2.5)
    engine.await_ready(timeout=5)

    assert engine.version == "5.3.0"
    assert engine.recognize(patch) == "5"
    assert fake_tesseract == {"lang": "eng", "config": "--psm 7", "timeout": 2.5, "size": (20, 20)}


def test_tesseract_engine_configure(fake_tesseract, patch):
    engine = tesseract_engine.TesseractOCREngine()
    engine.configure(tesseract_config="--psm 10", timeout_sec=None)
    engine.await_ready(timeout=5)
    engine.recognize(patch)

    assert fake_tesseract["config"] == "--psm 10"
    assert fake_tesseract["timeout"] == 0


def test_tesseract_engine_missing_language(fake_tesseract):
    engine = tesseract_engine.TesseractOCREngine(language="deu")

    with pytest.raises(EngineNotReadyError, match="deu"):
        engine.await_ready(timeout=5)


def test_tesseract_engine_missing_binary(monkeypatch):
    def not_installed():
        raise tesseract_engine.pytesseract.TesseractNotFoundError()

    monkeypatch.setattr(tesseract_engine.pytesseract, "get_tesseract_version", not_installed)
    engine = tesseract_engine.TesseractOCREngine()

    with pytest.raises(EngineNotReadyError):
        engine.await_ready(timeout=5)
    assert engine.state == EngineState.FAILED


if __name__ == "__main__":
    sys.exit(pytest.main([__file__]))
