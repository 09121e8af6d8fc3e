import json

import pytest

from theme_extractor.presets import DATA_FILE, ThemePresetStore


def test_presets_have_complete_palettes():
    store = ThemePresetStore()
    presets = store.list_presets()

    assert len(presets) == 7
    for preset in presets:
        assert len(preset.light.model_dump()) == 17
        assert len(preset.dark.model_dump()) == 17
        assert preset.preview.bg.startswith("#")


def test_lookup():
    store = ThemePresetStore()
    assert store.get_preset("midnight").preview.primary == "#6366f1"
    assert store.get_preset("missing") is None
    assert store.get_font("geist").name == "Geist"


def test_reserved_id_is_rejected(tmp_path):
    data = json.loads(DATA_FILE.read_text(encoding="utf-8"))
    data["presets"][0]["id"] = "custom-cloned"
    bad_file = tmp_path / "presets.json"
    bad_file.write_text(json.dumps(data), encoding="utf-8")

    with pytest.raises(ValueError):
        ThemePresetStore(bad_file).list_presets()
