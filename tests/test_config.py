import json

import pytest

import ocrlayout.config
from ocrlayout.config import LayoutConfig, configure_dependencies, load_layout_config, save_layout_config


def test_defaults():
    cfg = LayoutConfig()
    assert cfg.confidence_threshold == 0.90
    assert cfg.vertical_break_multiplier == 1.5
    assert cfg.horizontal_overlap_threshold == 0.3
    assert cfg.height_difference_multiplier == 1.5
    assert cfg.layout_mode == "paragraph"


def test_missing_file_gives_defaults(tmp_path, capsys):
    assert load_layout_config(str(tmp_path / "absent.json")) == LayoutConfig()
    assert "Warning: layout.json not found" in capsys.readouterr().out


def test_load_from_json(tmp_path):
    path = tmp_path / "layout.json"
    path.write_text(json.dumps({"confidence_threshold": 0.75, "layout_mode": "rows"}), encoding="utf-8")
    cfg = load_layout_config(str(path))
    assert cfg.confidence_threshold == 0.75
    assert cfg.layout_mode == "rows"
    assert cfg.vertical_break_multiplier == 1.5


def test_unreadable_json_falls_back(tmp_path, capsys):
    path = tmp_path / "layout.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_layout_config(str(path)) == LayoutConfig()
    assert "Warning" in capsys.readouterr().out


def test_invalid_values_raise(tmp_path):
    path = tmp_path / "layout.json"
    path.write_text(json.dumps({"confidence_threshold": 2}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_layout_config(str(path))
    with pytest.raises(ValueError):
        LayoutConfig(layout_mode="columns").validate()
    with pytest.raises(ValueError):
        LayoutConfig(vertical_break_multiplier=-1).validate()


def test_replace_ignores_none():
    cfg = LayoutConfig().replace(vertical_break_multiplier=2.0, horizontal_overlap_threshold=None)
    assert cfg.vertical_break_multiplier == 2.0
    assert cfg.horizontal_overlap_threshold == 0.3


def test_save_then_load(tmp_path):
    path = str(tmp_path / "nested" / "layout.json")
    cfg = LayoutConfig(height_difference_multiplier=2.0)
    save_layout_config(cfg, path)
    assert load_layout_config(path) == cfg


def test_numeric_strings_are_accepted(tmp_path):
    path = tmp_path / "layout.json"
    path.write_text(json.dumps({"confidence_threshold": "0.8", "vertical_break_multiplier": 2}), encoding="utf-8")
    cfg = load_layout_config(str(path))
    assert cfg.confidence_threshold == 0.8
    assert cfg.vertical_break_multiplier == 2.0


def test_non_numeric_values_raise_value_error(tmp_path):
    path = tmp_path / "layout.json"
    path.write_text(json.dumps({"confidence_threshold": "abc"}), encoding="utf-8")
    with pytest.raises(ValueError, match="confidence_threshold"):
        load_layout_config(str(path))
    with pytest.raises(ValueError):
        LayoutConfig.from_dict({"horizontal_overlap_threshold": [0.3]})
    with pytest.raises(ValueError):
        LayoutConfig().replace(height_difference_multiplier="tall")
    with pytest.raises(ValueError):
        LayoutConfig(vertical_break_multiplier="1.5").validate()


def test_config_module_does_not_import_pytesseract():
    assert not hasattr(ocrlayout.config, "pytesseract")


def test_missing_dependencies_file_warns(tmp_path, capsys):
    assert configure_dependencies(str(tmp_path / "dependencies.json")) is None
    assert "Warning: dependencies.json not found" in capsys.readouterr().out
