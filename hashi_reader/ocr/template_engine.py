"""
Template Matching OCR Engine

OCR implementation using OpenCV template matching for digit recognition.
Works offline on island patches once per-digit templates are captured.
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import cv2
import numpy as np
from PIL import Image

from .base import OCREngine


logger = logging.getLogger(__name__)


# Clue digits a template can represent
TEMPLATE_DIGITS = range(1, 10)

# Default template location
DEFAULT_TEMPLATE_DIR = Path("./assets/templates")

# Confidence threshold
CONFIDENCE_THRESHOLD = 0.7


def preprocess_patch(patch: np.ndarray) -> np.ndarray:
    """
    Binarize an island patch so templates and patches compare equally.

    Args:
        patch: Grayscale or BGR/RGB image

    Returns:
        Binary image, ink white on black
    """
    if patch.ndim == 3:
        patch = cv2.cvtColor(patch, cv2.COLOR_RGB2GRAY)
    _, binary = cv2.threshold(patch, 0, 255, cv2.THRESH_BINARY_INV + cv2.THRESH_OTSU)
    return binary


class DigitTemplates:
    """Manages digit templates for template matching."""

    def __init__(self):
        self.templates: dict[int, np.ndarray] = {}
        self._loaded = False

    def load_templates(self, template_dir: Path) -> bool:
        """
        Load digit templates from directory.

        Expected files: 1.png, 2.png, ... 9.png

        Args:
            template_dir: Path to directory containing template images

        Returns:
            True if templates loaded successfully
        """
        self.templates.clear()

        if not template_dir.exists():
            return False

        for digit in TEMPLATE_DIGITS:
            template_path = template_dir / f"{digit}.png"
            if template_path.exists():
                img = cv2.imread(str(template_path), cv2.IMREAD_GRAYSCALE)
                if img is not None:
                    self.templates[digit] = preprocess_patch(img)

        self._loaded = len(self.templates) == len(TEMPLATE_DIGITS)
        return self._loaded

    def is_loaded(self) -> bool:
        """Check if templates are loaded."""
        return self._loaded

    def match(self, cell_image: np.ndarray) -> Tuple[Optional[int], float, List[float]]:
        """
        Match a binary patch against digit templates.

        Args:
            cell_image: Binary patch (see preprocess_patch)

        Returns:
            Tuple of (best_digit, confidence, all_scores)
        """
        if not self._loaded:
            return None, 0.0, []

        scores = []

        for digit in TEMPLATE_DIGITS:
            template = self.templates[digit]

            if template.shape != cell_image.shape:
                template = cv2.resize(template, (cell_image.shape[1], cell_image.shape[0]))

            result = cv2.matchTemplate(cell_image, template, cv2.TM_CCOEFF_NORMED)
            score = float(np.nan_to_num(np.max(result), nan=-1.0, posinf=-1.0, neginf=-1.0))
            scores.append(score)

        best_idx = int(np.argmax(scores))
        best_digit = TEMPLATE_DIGITS[best_idx]
        best_score = scores[best_idx]

        # Calculate confidence (convert [-1, 1] to [0, 1])
        confidence = max(0.0, min(1.0, (best_score + 1) / 2))

        if confidence < CONFIDENCE_THRESHOLD:
            return None, confidence, scores

        return best_digit, confidence, scores


class TemplateOCREngine(OCREngine):
    """
    OCR engine using OpenCV template matching.

    Recognizes digits 1-9 by comparing each island patch against one
    captured template per digit. Returns an empty string when no
    template matches confidently.
    """

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize the template OCR engine.

        Args:
            template_dir: Optional path to custom digit templates.
                         If None, uses ./assets/templates.
        """
        super().__init__()
        self._templates = DigitTemplates()
        self._template_dir = Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR

    @property
    def name(self) -> str:
        return "template"

    def _initialize(self) -> None:
        if not self._templates.load_templates(self._template_dir):
            missing = [d for d in TEMPLATE_DIGITS if d not in self._templates.templates]
            raise FileNotFoundError(
                f"Missing digit templates {missing} in {self._template_dir}"
            )
        logger.debug(f"Loaded {len(self._templates.templates)} templates from {self._template_dir}")

    def _recognize(self, patch: Image.Image) -> str:
        binary = preprocess_patch(np.array(patch.convert("L")))
        digit, confidence, _ = self._templates.match(binary)
        if digit is None:
            logger.debug(f"No confident template match (confidence={confidence:.2f})")
            return ""
        return str(digit)

    def _release(self) -> None:
        self._templates.templates.clear()

    @property
    def templates(self) -> DigitTemplates:
        """Access to digit templates for external tools."""
        return self._templates
