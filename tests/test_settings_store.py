import json
import logging
import os
from pathlib import Path

import pytest

from typing_mascot.paths import FixedDirResolver
from typing_mascot.settings import (
    ConfigDirError,
    ImagePaths,
    Settings,
    SettingsIOError,
    SettingsParseError,
    SettingsStore,
    WindowPosition,
    WindowSize,
    default_settings,
)


def _store(directory: Path) -> SettingsStore:
    return SettingsStore(resolver=FixedDirResolver(directory))


def _example() -> Settings:
    return Settings(
        window_position=WindowPosition(x=150, y=250),
        window_size=WindowSize(width=300, height=300),
        animation_speed=150,
        images=ImagePaths(typing1="path1.png", typing2="path2.png", idle="idle.png"),
        opacity=0.8,
        always_on_top=False,
    )


def test_get_returns_defaults_when_missing(tmp_path: Path):
    config_dir = tmp_path / "config" / "nested"
    store = _store(config_dir)

    assert store.get() == default_settings()
    # Directory is created, the file is not.
    assert config_dir.is_dir()
    assert not (config_dir / "settings.json").exists()


def test_save_then_get_returns_saved_value(tmp_path: Path):
    store = _store(tmp_path)
    store.save(_example())

    assert store.get() == _example()


def test_save_writes_camel_case_pretty_json(tmp_path: Path):
    store = _store(tmp_path)
    store.save(_example())

    text = (tmp_path / "settings.json").read_text(encoding="utf-8")
    assert "\n  " in text
    data = json.loads(text)
    assert data == {
        "windowPosition": {"x": 150, "y": 250},
        "windowSize": {"width": 300, "height": 300},
        "animationSpeed": 150,
        "images": {"typing1": "path1.png", "typing2": "path2.png", "idle": "idle.png"},
        "opacity": 0.8,
        "alwaysOnTop": False,
    }
    # No temp file left behind.
    assert [p.name for p in tmp_path.iterdir()] == ["settings.json"]


def test_save_replaces_whole_file(tmp_path: Path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"stale": True, "opacity": 0.1}), encoding="utf-8")

    _store(tmp_path).save(default_settings())

    data = json.loads(path.read_text(encoding="utf-8"))
    assert "stale" not in data
    assert data["opacity"] == 1.0


def test_get_reads_file_on_every_call(tmp_path: Path):
    store = _store(tmp_path)
    store.save(_example())
    assert store.get().animation_speed == 150

    other = _store(tmp_path)
    other.save(default_settings())
    assert store.get() == default_settings()


def test_reset_deletes_file_and_returns_defaults(tmp_path: Path):
    store = _store(tmp_path)
    store.save(_example())

    assert store.reset() == default_settings()
    assert not (tmp_path / "settings.json").exists()
    assert store.get() == default_settings()
    assert not (tmp_path / "settings.json").exists()


def test_reset_without_file_does_not_create_directory(tmp_path: Path):
    config_dir = tmp_path / "never-created"
    store = _store(config_dir)

    assert store.reset() == default_settings()
    assert not config_dir.exists()


def test_get_corrupt_json_raises_parse_error(tmp_path: Path):
    (tmp_path / "settings.json").write_text("{not valid json", encoding="utf-8")

    with pytest.raises(SettingsParseError) as excinfo:
        _store(tmp_path).get()

    assert str(excinfo.value).startswith("Failed to parse settings: ")
    # The corrupt file is left for the host to deal with.
    assert (tmp_path / "settings.json").exists()


def test_get_wrong_shape_raises_parse_error(tmp_path: Path):
    data = default_settings().to_dict()
    del data["windowSize"]["height"]
    (tmp_path / "settings.json").write_text(json.dumps(data), encoding="utf-8")

    with pytest.raises(SettingsParseError, match="windowSize.height"):
        _store(tmp_path).get()


def test_get_unreadable_file_raises_io_error(tmp_path: Path):
    (tmp_path / "settings.json").mkdir()

    with pytest.raises(SettingsIOError, match="^Failed to read settings file: "):
        _store(tmp_path).get()


def test_save_write_failure_raises_io_error(tmp_path: Path, monkeypatch):
    def refuse(src, dst):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(os, "replace", refuse)

    with pytest.raises(SettingsIOError, match="^Failed to write settings file: "):
        _store(tmp_path).save(default_settings())
    # Neither the target nor a temp file is left behind.
    assert list(tmp_path.iterdir()) == []


def test_save_ignores_stale_temp_file(tmp_path: Path):
    (tmp_path / "settings.json.tmp").mkdir()

    store = _store(tmp_path)
    store.save(_example())
    assert store.get() == _example()


def test_save_unencodable_path_raises_io_error(tmp_path: Path):
    settings = default_settings()
    settings.images.idle = "\udc80.png"

    with pytest.raises(SettingsIOError, match="^Failed to serialize settings: "):
        _store(tmp_path).save(settings)
    assert list(tmp_path.iterdir()) == []


def test_save_rejects_values_get_would_reject(tmp_path: Path):
    store = _store(tmp_path)
    settings = default_settings()
    settings.animation_speed = 150.0

    with pytest.raises(SettingsIOError, match="animationSpeed"):
        store.save(settings)
    assert not (tmp_path / "settings.json").exists()

    settings.animation_speed = None
    with pytest.raises(SettingsIOError, match="^Failed to serialize settings: "):
        store.save(settings)


def test_save_accepts_integer_opacity(tmp_path: Path):
    store = _store(tmp_path)
    settings = default_settings()
    settings.opacity = 0

    store.save(settings)
    loaded = store.get()
    assert loaded.opacity == 0.0
    assert isinstance(loaded.opacity, float)


def test_save_unserializable_value_raises_io_error(tmp_path: Path):
    settings = default_settings()
    settings.opacity = float("nan")

    with pytest.raises(SettingsIOError, match="^Failed to serialize settings: "):
        _store(tmp_path).save(settings)


def test_reset_delete_failure_raises_io_error(tmp_path: Path):
    (tmp_path / "settings.json").mkdir()

    with pytest.raises(SettingsIOError, match="^Failed to delete settings file: "):
        _store(tmp_path).reset()


def test_config_dir_create_failure(tmp_path: Path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = _store(blocker / "config")

    with pytest.raises(ConfigDirError, match="^Failed to create config directory: "):
        store.get()
    # Directory failures are IO failures too.
    with pytest.raises(SettingsIOError):
        store.save(default_settings())


def test_config_dir_resolution_failure():
    def broken() -> Path:
        raise RuntimeError("no home directory")

    store = SettingsStore(resolver=broken)
    with pytest.raises(ConfigDirError, match="^Failed to get config directory: no home directory$"):
        store.get()
    with pytest.raises(ConfigDirError):
        store.reset()


def test_out_of_range_values_are_persisted_and_logged(tmp_path: Path, caplog):
    settings = default_settings()
    settings.animation_speed = 1000
    settings.opacity = 1.5
    store = _store(tmp_path)

    with caplog.at_level(logging.WARNING, logger="typing_mascot.settings.store"):
        store.save(settings)

    loaded = store.get()
    assert loaded.animation_speed == 1000
    assert loaded.opacity == 1.5
    assert any("animationSpeed 1000" in r.getMessage() for r in caplog.records)


def test_update_rewrites_whole_structure(tmp_path: Path):
    store = _store(tmp_path)
    store.save(_example())

    updated = store.update({"windowPosition": {"x": 10}, "alwaysOnTop": True})

    assert updated.window_position == WindowPosition(x=10, y=250)
    assert updated.always_on_top is True
    assert updated.images == _example().images
    assert store.get() == updated


def test_update_rejects_bad_shape_without_writing(tmp_path: Path):
    store = _store(tmp_path)
    store.save(_example())

    with pytest.raises(SettingsParseError, match="opacity"):
        store.update({"opacity": "opaque"})
    assert store.get() == _example()
