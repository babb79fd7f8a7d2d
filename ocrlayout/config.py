import json
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Optional


PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
CONFIG_DIR = os.path.join(PROJECT_ROOT, "config")
LAYOUT_CONFIG_PATH = os.path.join(CONFIG_DIR, "layout.json")
DEPENDENCIES_PATH = os.path.join(CONFIG_DIR, "dependencies.json")

LAYOUT_MODES = ("paragraph", "rows")
NUMERIC_SETTINGS = (
    "confidence_threshold",
    "vertical_break_multiplier",
    "horizontal_overlap_threshold",
    "height_difference_multiplier",
)


def _coerce_numbers(values: Dict[str, Any]) -> Dict[str, Any]:
    """Convert numeric settings to float; values such as "0.8" from hand-edited JSON are accepted."""
    coerced = dict(values)
    for name in NUMERIC_SETTINGS:
        if name not in coerced or coerced[name] is None:
            continue
        value = coerced[name]
        if isinstance(value, bool):
            raise ValueError(f"'{name}' must be a number, got {value!r}")
        try:
            coerced[name] = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"'{name}' must be a number, got {value!r}") from exc
    return coerced


def _resolve_path(base: str, relative: str) -> str:
    return os.path.abspath(os.path.join(base, relative))


@dataclass(frozen=True)
class LayoutConfig:
    """Thresholds used by the layout pipeline.

    Doxygen:
    - @param confidence_threshold: Minimum region confidence in [0, 1].
    - @param vertical_break_multiplier: Max Y-center gap, relative to the pair's average height.
    - @param horizontal_overlap_threshold: Min overlap relative to the narrower region.
    - @param height_difference_multiplier: Max ratio between the taller and the shorter region.
    - @param layout_mode: 'paragraph' to group regions, 'rows' for one string per text row.
    - @param preprocess: Apply image cleanup before Tesseract OCR.
    """

    confidence_threshold: float = 0.90
    vertical_break_multiplier: float = 1.5
    horizontal_overlap_threshold: float = 0.3
    height_difference_multiplier: float = 1.5
    layout_mode: str = "paragraph"
    preprocess: bool = True

    def validate(self) -> "LayoutConfig":
        for name in NUMERIC_SETTINGS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"'{name}' must be a number, got {value!r}")
        if not 0.0 <= self.confidence_threshold <= 1.0:
            raise ValueError(f"'confidence_threshold' must be within [0, 1], got {self.confidence_threshold}")
        if self.vertical_break_multiplier < 0:
            raise ValueError("'vertical_break_multiplier' must not be negative.")
        if self.horizontal_overlap_threshold < 0:
            raise ValueError("'horizontal_overlap_threshold' must not be negative.")
        if self.height_difference_multiplier < 1.0:
            raise ValueError("'height_difference_multiplier' must be at least 1.0.")
        if self.layout_mode not in LAYOUT_MODES:
            raise ValueError(f"'layout_mode' must be one of {', '.join(LAYOUT_MODES)}, got '{self.layout_mode}'")
        return self

    def replace(self, **changes: Any) -> "LayoutConfig":
        """Return a validated copy with `changes` applied; None values are ignored."""
        changes = {k: v for k, v in changes.items() if v is not None}
        return replace(self, **_coerce_numbers(changes)).validate()

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            print(f"Warning: ignoring unknown layout settings: {', '.join(unknown)}")
        kwargs = {k: v for k, v in data.items() if k in known}
        return cls(**_coerce_numbers(kwargs)).validate()


def load_layout_config(path: str = LAYOUT_CONFIG_PATH) -> LayoutConfig:
    """Load layout thresholds from JSON, falling back to defaults.

    A missing or unreadable file yields the defaults with a warning; values
    that are present but invalid raise ValueError.
    """
    if not os.path.exists(path):
        print(f"Warning: layout.json not found at {path}; using default layout settings.")
        return LayoutConfig()
    try:
        with open(path, "r", encoding="utf-8") as cfg_file:
            data = json.load(cfg_file) or {}
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Warning: Could not read layout settings from {path}: {exc}")
        return LayoutConfig()
    if not isinstance(data, dict):
        print(f"Warning: layout settings in {path} must be a JSON object; using defaults.")
        return LayoutConfig()
    return LayoutConfig.from_dict(data)


def save_layout_config(config: LayoutConfig, path: str = LAYOUT_CONFIG_PATH) -> str:
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    with open(path, "w", encoding="utf-8") as cfg_file:
        json.dump(config.validate().to_dict(), cfg_file, indent=2)
    return path


def configure_dependencies(path: Optional[str] = None) -> Optional[str]:
    """Point pytesseract at the Tesseract executable from config/dependencies.json.

    Returns the configured executable path, or None when nothing was changed.
    """
    deps_path = path or DEPENDENCIES_PATH
    if not os.path.exists(deps_path):
        print(f"Warning: dependencies.json not found at {deps_path}")
        return None

    try:
        with open(deps_path, "r", encoding="utf-8") as deps_file:
            deps = json.load(deps_file) or {}
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Warning: Could not load dependencies from {deps_path}: {exc}")
        return None

    tess_rel = deps.get("tesseract_path")
    if not tess_rel:
        return None
    tess_abs = _resolve_path(PROJECT_ROOT, tess_rel)
    if not os.path.exists(tess_abs):
        print(f"Warning: Tesseract path from config does not exist: {tess_abs}")
        return None
    import pytesseract

    pytesseract.pytesseract.tesseract_cmd = tess_abs
    return tess_abs
