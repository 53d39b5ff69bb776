"""
OCR Engine Base Interface

Abstract base class defining the OCR engine contract and lifecycle.
"""

import logging
import threading
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from PIL import Image

from ..errors import EngineNotReadyError


logger = logging.getLogger(__name__)


class EngineState(Enum):
    """Lifecycle states of an OCR engine."""
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"
    CLOSED = "closed"


class OCREngine(ABC):
    """
    Abstract base class for OCR engines.

    Engines own external resources (binaries, language data, templates)
    that are loaded once, in the background, and reused for every
    recognition call until close().

    Subclasses implement _initialize() and _recognize(). Callers use:

        engine.start()          # optional, begins background init
        engine.await_ready()    # blocks until READY or raises
        text = engine.recognize(patch)
        engine.close()

    Engines are also context managers; leaving the block closes them.
    """

    def __init__(self):
        self._state = EngineState.UNINITIALIZED
        self._ready_event = threading.Event()
        self._lock = threading.Lock()
        self._init_thread: Optional[threading.Thread] = None
        self._init_error: Optional[BaseException] = None

    @property
    @abstractmethod
    def name(self) -> str:
        """
        Engine identifier.

        Returns:
            String name identifying this engine type (e.g., "template", "tesseract")
        """
        pass

    @abstractmethod
    def _initialize(self) -> None:
        """Acquire engine resources. Raise on failure."""
        pass

    @abstractmethod
    def _recognize(self, patch: Image.Image) -> str:
        """Recognize text in a small image patch."""
        pass

    def _release(self) -> None:
        """Release engine resources. Default implementation does nothing."""
        pass

    @property
    def state(self) -> EngineState:
        return self._state

    def start(self) -> None:
        """Begin initialization on a background thread (no-op if already started)."""
        with self._lock:
            if self._state == EngineState.CLOSED:
                raise EngineNotReadyError(f"{self.name} engine is closed")
            if self._state != EngineState.UNINITIALIZED:
                return
            self._state = EngineState.INITIALIZING
            self._ready_event.clear()
            self._init_thread = threading.Thread(
                target=self._run_initialize,
                name=f"{self.name}-ocr-init",
                daemon=True
            )
            self._init_thread.start()

    def _run_initialize(self) -> None:
        try:
            self._initialize()
        except Exception as e:
            logger.error(f"{self.name} engine failed to initialize: {e}")
            with self._lock:
                self._init_error = e
                if self._state != EngineState.CLOSED:
                    self._state = EngineState.FAILED
        else:
            with self._lock:
                if self._state == EngineState.CLOSED:
                    # Closed while initializing, nobody will use these resources
                    self._release()
                    logger.debug(f"{self.name} engine released after late initialization")
                else:
                    self._state = EngineState.READY
                    logger.info(f"{self.name} engine ready")
        finally:
            self._ready_event.set()

    def await_ready(self, timeout: Optional[float] = None) -> None:
        """
        Wait until the engine is READY.

        Starts initialization if it has not been started yet.

        Args:
            timeout: Seconds to wait, None waits indefinitely

        Raises:
            EngineNotReadyError: If initialization failed or timed out
        """
        self.start()

        if not self._ready_event.wait(timeout):
            raise EngineNotReadyError(
                f"{self.name} engine not ready after {timeout}s"
            )
        if self._state != EngineState.READY:
            raise EngineNotReadyError(
                f"{self.name} engine is {self._state.value}: {self._init_error}"
            )

    def recognize(self, patch: Image.Image) -> str:
        """
        Recognize the text in an image patch.

        Args:
            patch: PIL Image of a single island

        Returns:
            Best-effort recognized text (may be empty)

        Raises:
            EngineNotReadyError: If the engine is not READY
        """
        if self._state != EngineState.READY:
            raise EngineNotReadyError(
                f"{self.name} engine is {self._state.value}, call await_ready() first"
            )
        return self._recognize(patch)

    def close(self) -> None:
        """
        Release resources. The engine cannot be restarted afterwards.

        Does not wait for a pending initialization; resources it acquires
        later are released when it finishes.
        """
        with self._lock:
            if self._state == EngineState.CLOSED:
                return
            if self._state == EngineState.READY:
                self._release()
            self._state = EngineState.CLOSED
        logger.debug(f"{self.name} engine closed")

    def configure(self, **kwargs) -> None:
        """
        Configure engine parameters.

        Override in subclasses to support runtime configuration.
        Default implementation does nothing.

        Args:
            **kwargs: Engine-specific configuration options
        """
        pass

    def __enter__(self) -> 'OCREngine':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
