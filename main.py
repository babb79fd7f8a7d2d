"""
Entry point and facade for the OCR layout pipeline.

Packages:
- ocrlayout.layout: Bounds, confidence filter, reading order, paragraph grouping and assembly
- ocrlayout.engines: OCR engines producing text regions (Tesseract, stored detector output)
- ocrlayout.llm: OpenRouter client, language detection and paragraph translation
- ocrlayout.pipeline: High-level orchestration (`ParagraphPipeline`, `process_image`)
"""

from __future__ import annotations

import logging

from ocrlayout.config import (
    LAYOUT_CONFIG_PATH,
    LAYOUT_MODES,
    configure_dependencies,
    load_layout_config,
)
from ocrlayout.engines import DetectionFileEngine, TesseractEngine
from ocrlayout.llm.language_detector import normalize_and_validate_target_language
from ocrlayout.pipeline import ParagraphPipeline, process_image

__all__ = [
    "ParagraphPipeline",
    "process_image",
]


def _cli() -> None:
    """CLI for recognizing paragraphs in an image or in stored detector output.

    --image / -i: Path to input image (recognized with Tesseract)
    --regions / -r: Path to JSON detector output (rotated rectangles)
    --config: Layout settings JSON (default: config/layout.json)
    --conf, --vertical, --overlap, --height: Override grouping thresholds
    --mode: paragraph|rows
    --lang: Tesseract languages (default: eng)
    --ocr-mode: 'auto' preprocesses the image, 'raw' uses it as is
    --debug: Print the per-region debug report
    --translate / --target / --timeout: Optional translation of the paragraphs
    --verbose: Log grouping decisions
    """
    import argparse

    parser = argparse.ArgumentParser(description="Reconstruct reading order and paragraphs from OCR output.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--image", "-i", type=str, help="Path to input image (Tesseract OCR)")
    source.add_argument("--regions", "-r", type=str, help="Path to JSON file with detector regions")
    parser.add_argument("--config", type=str, default=LAYOUT_CONFIG_PATH, help="Layout settings JSON file")
    parser.add_argument("--conf", type=float, help="Confidence threshold in [0, 1] (default: 0.90)")
    parser.add_argument("--vertical", type=float, help="Vertical break multiplier (default: 1.5)")
    parser.add_argument("--overlap", type=float, help="Horizontal overlap threshold (default: 0.3)")
    parser.add_argument("--height", type=float, help="Height difference multiplier (default: 1.5)")
    parser.add_argument("--mode", type=str, choices=list(LAYOUT_MODES), help="Layout mode (default: paragraph)")
    parser.add_argument("--lang", type=str, default="eng", help="Tesseract languages (default: eng)")
    parser.add_argument("--ocr-mode", type=str, choices=["auto", "raw"], help="Image preprocessing: 'auto' or 'raw'")
    parser.add_argument("--debug", action="store_true", help="Print the per-region debug report")
    parser.add_argument("--translate", action="store_true", help="Translate paragraphs via the configured model")
    parser.add_argument("--target", "-t", type=str, default="english", help="Target language for translation (default: english)")
    parser.add_argument("--timeout", type=float, default=60.0, help="Per-request timeout in seconds (0 or negative: none)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log bounds and grouping decisions")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.image and not args.regions:
        print("Please provide either --image or --regions.")
        print("Examples:\n  python main.py --image screenshot.png\n  python main.py --regions detections.json --mode rows")
        raise SystemExit(2)

    try:
        target = normalize_and_validate_target_language(args.target) if args.translate else args.target
        config = load_layout_config(args.config)
        preprocess = None if args.ocr_mode is None else args.ocr_mode == "auto"
        config = config.replace(
            confidence_threshold=args.conf,
            vertical_break_multiplier=args.vertical,
            horizontal_overlap_threshold=args.overlap,
            height_difference_multiplier=args.height,
            layout_mode=args.mode,
            preprocess=preprocess,
        )
    except ValueError as e:
        print(str(e))
        raise SystemExit(2)

    pipeline = ParagraphPipeline(config)
    if args.image:
        configure_dependencies()
        engine = TesseractEngine(lang=args.lang, preprocess=config.preprocess)
        source_path = args.image
    else:
        engine = DetectionFileEngine()
        source_path = args.regions

    timeout_value = None if args.timeout is not None and args.timeout <= 0 else args.timeout
    try:
        result = process_image(
            source_path,
            engine=engine,
            pipeline=pipeline,
            translate=args.translate,
            target_language=target,
            request_timeout=timeout_value,
            debug=args.debug,
        )
    except (FileNotFoundError, RuntimeError, ValueError) as e:
        print(f"Error: {e}")
        raise SystemExit(2)

    if result['debug']:
        print(result['debug'])
    print("\n\n".join(result['paragraphs']))
    if result['translations'] is not None:
        print("\n--- Translation ---\n")
        print("\n\n".join(result['translations']))


if __name__ == "__main__":
    _cli()
