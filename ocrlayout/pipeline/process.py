"""High-level pipeline: regions → reading order / paragraphs → optional translation.

`ParagraphPipeline` holds the adjustable thresholds and runs one layout pass
per recognition result. `process_image` wires an OCR engine, the layout pass
and the optional translation step together for scripts and the CLI.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ocrlayout.config import LayoutConfig
from ocrlayout.engines import OcrEngine, TesseractEngine
from ocrlayout.layout import (
    NO_TEXT_MEETING_CONFIDENCE,
    NO_TEXT_RECOGNIZED,
    BoundsResolver,
    TextRegion,
    assemble_paragraphs,
    cluster_rows,
    filter_by_confidence,
    generate_debug_info,
    group_paragraphs,
    join_rows,
    sort_by_center,
)


def recognize_paragraphs(regions: Iterable[TextRegion], config: Optional[LayoutConfig] = None) -> List[str]:
    """Run one layout pass over a recognition result.

    Doxygen:
    - @param regions: Regions reported by an OCR engine, in engine order.
    - @param config: Thresholds and layout mode; defaults to LayoutConfig().
    - @return: Ordered paragraph strings (or rows in 'rows' mode), or one sentinel.
    """
    cfg = config or LayoutConfig()
    regions = list(regions)
    if not regions:
        return [NO_TEXT_RECOGNIZED]

    kept = filter_by_confidence(regions, cfg.confidence_threshold)
    if not kept:
        return [NO_TEXT_MEETING_CONFIDENCE]

    resolver = BoundsResolver(kept)
    if cfg.layout_mode == "rows":
        return join_rows(cluster_rows(kept, resolver), resolver)

    order = sort_by_center(kept, resolver)
    groups = group_paragraphs(kept, cfg, resolver, order=order)
    return assemble_paragraphs(groups, resolver)


class ParagraphPipeline:
    """Layout pipeline with thresholds that can be changed between passes."""

    def __init__(self, config: Optional[LayoutConfig] = None):
        self._config = (config or LayoutConfig()).validate()

    @property
    def config(self) -> LayoutConfig:
        return self._config

    def set_grouping_parameters(
        self,
        vertical_multiplier: Optional[float] = None,
        horizontal_overlap_threshold: Optional[float] = None,
        confidence_threshold: Optional[float] = None,
        height_difference_multiplier: Optional[float] = None,
        layout_mode: Optional[str] = None,
    ) -> LayoutConfig:
        """Update thresholds; arguments left as None keep their current value.

        The new values apply from the next `run` on. Invalid values raise
        ValueError and leave the current configuration untouched.
        """
        self._config = self._config.replace(
            vertical_break_multiplier=vertical_multiplier,
            horizontal_overlap_threshold=horizontal_overlap_threshold,
            confidence_threshold=confidence_threshold,
            height_difference_multiplier=height_difference_multiplier,
            layout_mode=layout_mode,
        )
        return self._config

    def get_grouping_parameters(self) -> str:
        cfg = self._config
        return (
            "Paragraph grouping parameters:\n"
            f"  Vertical break multiplier: {cfg.vertical_break_multiplier}\n"
            f"  Horizontal overlap threshold: {cfg.horizontal_overlap_threshold}\n"
            f"  Confidence threshold: {cfg.confidence_threshold}\n"
            f"  Height difference multiplier: {cfg.height_difference_multiplier}\n"
            f"  Layout mode: {cfg.layout_mode}"
        )

    def run(self, regions: Iterable[TextRegion]) -> List[str]:
        return recognize_paragraphs(regions, self._config)

    def debug_info(self, regions: Optional[Iterable[TextRegion]]) -> str:
        return generate_debug_info(
            list(regions) if regions is not None else None,
            self._config.confidence_threshold,
        )


def _translate(paragraphs: List[str], target_language: str, request_timeout: float | None) -> List[str]:
    from ocrlayout.llm import (
        check_model_health,
        get_openrouter_client,
        get_picked_model,
        translate_paragraphs,
    )

    model, api_key = get_picked_model()
    client = get_openrouter_client(api_key)
    check_model_health(client, model, timeout=min(10.0, request_timeout) if request_timeout else 10.0)
    print("Model connectivity check succeeded")
    return translate_paragraphs(
        client,
        model,
        paragraphs,
        target_language=target_language,
        timeout=request_timeout,
    )


def process_image(
    image: Any,
    engine: Optional[OcrEngine] = None,
    pipeline: Optional[ParagraphPipeline] = None,
    translate: bool = False,
    target_language: str = 'english',
    request_timeout: float | None = 60.0,
    debug: bool = False,
) -> Dict[str, Any]:
    """Recognize an image and return its paragraphs.

    Doxygen:
    - @param image: Image path or BGR array, as accepted by `engine.recognize`.
    - @param engine: OCR engine; a TesseractEngine when omitted.
    - @param pipeline: Layout pipeline; default thresholds when omitted.
    - @param translate: Translate paragraphs with the model from config/models.json.
    - @param target_language: Target language name in English.
    - @param request_timeout: Timeout per LLM request.
    - @param debug: Include the per-region debug report.
    - @return: Dict with keys {'regions', 'paragraphs', 'translations', 'debug'}.
    - @throws RuntimeError: If the engine cannot be initialized.
    """
    pipe = pipeline or ParagraphPipeline()
    eng = engine or TesseractEngine(preprocess=pipe.config.preprocess)
    if not eng.initialize():
        raise RuntimeError(f"OCR engine '{eng.name}' could not be initialized")

    regions = eng.recognize(image)
    print(f"OCR completed with {eng.name}: {len(regions)} region(s)")
    paragraphs = pipe.run(regions)

    translations: Optional[List[str]] = None
    if translate:
        translations = _translate(paragraphs, target_language, request_timeout)

    return {
        'regions': regions,
        'paragraphs': paragraphs,
        'translations': translations,
        'debug': pipe.debug_info(regions) if debug else None,
    }
