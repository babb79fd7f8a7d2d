import pytest

from ocrlayout.config import LayoutConfig
from ocrlayout.engines.base import OcrEngine
from ocrlayout.pipeline.process import ParagraphPipeline, process_image, recognize_paragraphs


class _StaticEngine(OcrEngine):
    name = "static"

    def __init__(self, regions, ready=True):
        self.regions = regions
        self.ready = ready
        self.seen = []

    def initialize(self):
        return self.ready

    def recognize(self, image):
        self.seen.append(image)
        return list(self.regions)


def test_empty_input_reports_no_text():
    assert recognize_paragraphs([]) == ["No text recognized"]


def test_low_confidence_only_reports_threshold_sentinel(make_region):
    regions = [make_region("blurry", 0, 100, 10, confidence=0.5)]
    assert recognize_paragraphs(regions) == ["No text meeting confidence threshold"]


def test_paragraphs_in_reading_order(make_region):
    regions = [
        make_region("lower two", 0, 100, 212),
        make_region("upper one", 0, 100, 10),
        make_region("lower one", 0, 100, 200),
        make_region("noise", 0, 100, 100, confidence=0.2),
        make_region("upper two", 0, 100, 22),
    ]
    assert recognize_paragraphs(regions) == ["upper one upper two", "lower one lower two"]


def test_side_by_side_blocks_stay_apart(make_region):
    regions = [
        make_region("left a", 0, 100, 10),
        make_region("right a", 300, 400, 10),
        make_region("left b", 0, 90, 22),
        make_region("right b", 300, 380, 22),
    ]
    assert recognize_paragraphs(regions) == ["left a left b", "right a right b"]


def test_rows_mode(make_region):
    regions = [
        make_region("world", 60, 100, 10),
        make_region("hello", 0, 50, 12),
        make_region("next", 0, 50, 40),
    ]
    assert recognize_paragraphs(regions, LayoutConfig(layout_mode="rows")) == ["hello world", "next"]


def test_parameters_apply_to_next_run(make_region):
    regions = [make_region("a", 0, 100, 10), make_region("b", 0, 100, 24)]
    pipeline = ParagraphPipeline(LayoutConfig(vertical_break_multiplier=1.0))
    assert pipeline.run(regions) == ["a", "b"]

    pipeline.set_grouping_parameters(vertical_multiplier=1.5)
    assert pipeline.run(regions) == ["a b"]
    assert pipeline.config.horizontal_overlap_threshold == 0.3

    pipeline.set_grouping_parameters(confidence_threshold=1.0)
    assert pipeline.run(regions) == ["No text meeting confidence threshold"]


def test_invalid_parameters_leave_config_untouched():
    pipeline = ParagraphPipeline()
    with pytest.raises(ValueError):
        pipeline.set_grouping_parameters(confidence_threshold=1.5)
    assert pipeline.config == LayoutConfig()
    assert "Vertical break multiplier: 1.5" in pipeline.get_grouping_parameters()


def test_repeated_runs_are_identical(make_region):
    regions = [make_region(str(i), (i * 13) % 90, (i * 13) % 90 + 50, i * 9) for i in range(12)]
    pipeline = ParagraphPipeline()
    assert pipeline.run(regions) == pipeline.run(regions)


def test_process_image_with_engine(make_region):
    engine = _StaticEngine([make_region("only", 0, 100, 10)])
    result = process_image("frame.png", engine=engine, debug=True)
    assert engine.seen == ["frame.png"]
    assert result['paragraphs'] == ["only"]
    assert result['translations'] is None
    assert "Regions meeting threshold: 1" in result['debug']


def test_process_image_engine_not_ready():
    with pytest.raises(RuntimeError):
        process_image("frame.png", engine=_StaticEngine([], ready=False))
