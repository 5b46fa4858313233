from pathlib import Path

from image_toolkit.storage.local import LocalStorage


def test_output_path_is_unique_prefixed_jpeg(tmp_path: Path) -> None:
    storage = LocalStorage(base_dir=tmp_path)

    first = storage.output_path("resized", "holiday.png")
    second = storage.output_path("resized", "holiday.png")

    assert first != second
    assert first.parent == storage.outputs_dir
    assert first.name.startswith("resized-")
    assert first.name.endswith("-holiday.jpg")


def test_find_download_searches_outputs_then_uploads(tmp_path: Path) -> None:
    storage = LocalStorage(base_dir=tmp_path)
    (storage.uploads_dir / "a.jpg").write_bytes(b"upload")
    (storage.outputs_dir / "b.jpg").write_bytes(b"output")

    assert storage.find_download("a.jpg") == storage.uploads_dir / "a.jpg"
    assert storage.find_download("b.jpg") == storage.outputs_dir / "b.jpg"
    assert storage.find_download("c.jpg") is None


def test_find_download_rejects_paths(tmp_path: Path) -> None:
    storage = LocalStorage(base_dir=tmp_path)
    (tmp_path / "secret.jpg").write_bytes(b"secret")

    assert storage.find_download("../secret.jpg") is None
    assert storage.find_download("..") is None
    assert storage.find_download("") is None


def test_discard_is_best_effort(tmp_path: Path) -> None:
    storage = LocalStorage(base_dir=tmp_path)
    victim = storage.uploads_dir / "victim.jpg"
    victim.write_bytes(b"data")

    storage.discard(victim)
    storage.discard(victim)
    storage.discard(None)
    # a directory cannot be unlinked; the failure is logged, not raised
    storage.discard(storage.outputs_dir)

    assert not victim.exists()
    assert storage.outputs_dir.is_dir()
