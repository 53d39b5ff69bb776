"""
Tesseract OCR Engine

Recognizes island clue digits with the Tesseract binary via pytesseract.
"""

import logging
from typing import Optional

import pytesseract
from PIL import Image

from .base import OCREngine


logger = logging.getLogger(__name__)


DEFAULT_LANGUAGE = "eng"
# Treat each patch as a single text line
DEFAULT_TESSERACT_CONFIG = "--psm 7"
DEFAULT_TIMEOUT_SEC = 10.0


class TesseractOCREngine(OCREngine):
    """
    OCR engine backed by the Tesseract command line tool.

    Initialization checks that the binary is installed and that the
    requested language data is available.
    """

    def __init__(
        self,
        language: str = DEFAULT_LANGUAGE,
        tesseract_config: str = DEFAULT_TESSERACT_CONFIG,
        timeout_sec: Optional[float] = DEFAULT_TIMEOUT_SEC,
    ):
        super().__init__()
        self._language = language
        self._tesseract_config = tesseract_config
        self._timeout_sec = timeout_sec
        self._version: Optional[str] = None

    @property
    def name(self) -> str:
        return "tesseract"

    @property
    def version(self) -> Optional[str]:
        """Tesseract version found during initialization."""
        return self._version

    def _initialize(self) -> None:
        self._version = str(pytesseract.get_tesseract_version())
        logger.debug(f"Tesseract version: {self._version}")

        languages = pytesseract.get_languages(config="")
        if self._language not in languages:
            raise RuntimeError(
                f"Tesseract language '{self._language}' not installed "
                f"(available: {', '.join(languages)})"
            )

    def _recognize(self, patch: Image.Image) -> str:
        # pytesseract raises RuntimeError on timeout; 0 disables the limit
        text = pytesseract.image_to_string(
            patch,
            lang=self._language,
            config=self._tesseract_config,
            timeout=self._timeout_sec or 0,
        )
        return text.strip()

    def configure(self, **kwargs) -> None:
        """
        Configure engine parameters.

        Args:
            tesseract_config: Extra command line options for Tesseract
            timeout_sec: Per-call timeout in seconds
        """
        if 'tesseract_config' in kwargs:
            self._tesseract_config = kwargs['tesseract_config']
        if 'timeout_sec' in kwargs:
            self._timeout_sec = kwargs['timeout_sec']
