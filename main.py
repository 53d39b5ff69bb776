"""
Hashi Board Reader - Entry Point

Reads a Hashi (bridges) puzzle screenshot into a clue grid and optionally
hands it to an external solver.

Example:
    python main.py board.png
    python main.py board.png --engine template --templates ./assets/templates
    python main.py --capture --solve  # Read from the primary monitor and solve
"""

import sys
import logging
import argparse
from datetime import datetime
from typing import Any, Dict, List, Optional

import cv2
from PIL import Image

from hashi_reader.errors import ReaderError
from hashi_reader.ocr import DEBUG_DIR, DEBUG_PREFIX, OCREngine, create_engine, save_debug_image
from hashi_reader.reader import ReadResult, load_image, pil_to_bgr, read_board
from hashi_reader.screen_capture import capture_screen
from hashi_reader.settings import load_settings
from hashi_reader.solver import create_solver
from hashi_reader.vision import ContourRegionDetector


logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    """Log to both console and file."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stderr),  # Console output, stdout is for the grid
            logging.FileHandler("reader.log", mode='w', encoding='utf-8')  # File output
        ]
    )


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Hashi Board Reader - Convert a puzzle screenshot into a clue grid"
    )
    parser.add_argument(
        "image",
        nargs="?",
        help="Board image file (omit with --capture)"
    )
    parser.add_argument(
        "--capture", "-c",
        action="store_true",
        help="Read the board from a live screen capture instead of a file"
    )
    parser.add_argument(
        "--monitor",
        type=int,
        default=1,
        help="Monitor to capture with --capture (default: 1, the primary)"
    )
    parser.add_argument(
        "--engine", "-e",
        choices=["tesseract", "template"],
        help="OCR engine (default: from settings)"
    )
    parser.add_argument(
        "--templates",
        help="Digit template directory for the template engine"
    )
    parser.add_argument(
        "--config",
        help="Settings file (default: config.json)"
    )
    parser.add_argument(
        "--solve", "-s",
        action="store_true",
        help="Pass the recognized grid to the external solver"
    )
    parser.add_argument(
        "--max-bridges",
        type=int,
        help="Maximum bridges between two islands (default: from settings)"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug mode (verbose logging, annotated debug images)"
    )
    args = parser.parse_args(argv)
    if not args.image and not args.capture:
        parser.error("an image path or --capture is required")
    return args


def build_engine(settings: Dict[str, Any], engine_type: str) -> OCREngine:
    """Create the configured OCR engine."""
    if engine_type == "template":
        return create_engine("template", template_dir=settings.get("template_dir"))
    return create_engine(
        engine_type,
        language=settings["ocr_language"],
        tesseract_config=settings["ocr_config"],
        timeout_sec=settings["ocr_timeout_sec"],
    )


def run(args, settings: Dict[str, Any]) -> int:
    """
    Read one board and print the grid (and solution if requested).

    Returns:
        Exit code
    """
    if args.templates:
        settings["template_dir"] = args.templates
    engine_type = args.engine or settings["ocr_engine"]
    debug_mode = args.debug or settings.get("debug_enabled", False)

    if args.capture:
        pil_image = capture_screen(monitor=args.monitor)
        image = pil_to_bgr(pil_image)
    else:
        image = load_image(args.image)

    detector = ContourRegionDetector(
        threshold=settings["threshold"],
        mask_margin=settings["mask_margin"],
    )

    with build_engine(settings, engine_type) as engine:
        # Template/binary loading overlaps with region detection
        engine.start()
        result: ReadResult = read_board(
            image, detector, engine, ready_timeout=settings["ready_timeout_sec"]
        )

    logger.info(
        f"Read {result.grid.rows}x{result.grid.cols} grid, "
        f"{result.grid.island_count()} islands, {result.grid.unknown_count()} unknown, "
        f"{result.processing_time_ms:.1f}ms"
    )

    if debug_mode:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = DEBUG_DIR / f"{DEBUG_PREFIX}{stamp}.png"
        save_debug_image(
            Image.fromarray(cv2.cvtColor(image, cv2.COLOR_BGR2RGB)),
            result.regions,
            result.values,
            path
        )
        logger.info(f"Debug image saved: {path}")

    print(result.text)

    if args.solve:
        max_bridges = args.max_bridges
        if max_bridges is None:
            max_bridges = settings["max_bridges_per_edge"]
        solver = create_solver(
            settings["solver"],
            command=settings["solver_command"],
            timeout_sec=settings["solver_timeout_sec"],
        )
        print(solver.solve(result.text, max_bridges))

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the hashi-reader command."""
    args = parse_args(argv)
    settings = load_settings(args.config)
    configure_logging(args.debug or settings.get("debug_enabled", False))

    try:
        return run(args, settings)
    except ReaderError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1
    except FileNotFoundError as e:
        logger.error(f"Image not found: {e}")
        return 1
    except (ValueError, OSError) as e:
        # Bad monitor index, unreadable image, unknown engine or solver name
        logger.error(f"{type(e).__name__}: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
