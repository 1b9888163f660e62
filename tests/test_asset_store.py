"""Tests for modules.asset_store"""

import io
import itertools

import pytest
from PIL import Image

from modules.asset_store import AssetStore
from utils.exceptions import AssetNotFoundError, UploadRejectedError


def _store(tmp_path):
    return AssetStore(upload_dir=tmp_path / "uploads", export_dir=tmp_path / "exports")


def test_save_upload_uses_unique_name(tmp_path) -> None:
    store = _store(tmp_path)

    asset = store.save_upload("shoe.png", "image/png", io.BytesIO(b"abc"))

    stored_name = asset.src.rsplit("/", 1)[1]
    assert asset.src.startswith("/uploads/")
    assert stored_name.endswith("-shoe.png")
    assert stored_name != "shoe.png"
    assert asset.name == "shoe.png"
    assert asset.type == "image/png"
    assert asset.size == 3
    assert (tmp_path / "uploads" / stored_name).read_bytes() == b"abc"
    assert asset.to_dict()["path"] == str(tmp_path / "uploads" / stored_name)


def test_non_image_upload_is_rejected(tmp_path) -> None:
    store = _store(tmp_path)

    with pytest.raises(UploadRejectedError):
        store.save_upload("notes.txt", "text/plain", io.BytesIO(b"hello"))

    assert list((tmp_path / "uploads").iterdir()) == []


def test_oversized_upload_is_removed(tmp_path) -> None:
    store = _store(tmp_path)
    store.max_size = 2

    with pytest.raises(UploadRejectedError) as excinfo:
        store.save_upload("big.png", "image/png", io.BytesIO(b"abcd"))

    assert "too large" in excinfo.value.message
    assert list((tmp_path / "uploads").iterdir()) == []


def test_resolve_accepts_urls_and_prefixes(tmp_path) -> None:
    store = _store(tmp_path)
    asset = store.save_upload("shoe.png", "image/png", io.BytesIO(b"abc"))
    name = asset.src.rsplit("/", 1)[1]
    expected = tmp_path / "uploads" / name

    assert store.resolve(f"http://localhost:3001/uploads/{name}") == expected
    assert store.resolve(f"/uploads/{name}") == expected
    assert store.resolve(f"uploads/{name}") == expected
    assert store.resolve(name) == expected


def test_resolve_stays_inside_directory(tmp_path) -> None:
    store = _store(tmp_path)
    (tmp_path / "secret.png").write_bytes(b"x")

    with pytest.raises(AssetNotFoundError):
        store.resolve("/uploads/../secret.png")
    with pytest.raises(AssetNotFoundError):
        store.resolve("")


def test_resolve_exports(tmp_path) -> None:
    store = _store(tmp_path)
    filename = store.save_render(Image.new("RGB", (10, 10), (0, 0, 0)))

    assert filename.startswith("rendered-") and filename.endswith(".png")
    assert store.resolve(f"/exports/{filename}", kind="exports") == tmp_path / "exports" / filename
    with pytest.raises(AssetNotFoundError):
        store.resolve(f"/exports/{filename}")


def test_delete(tmp_path) -> None:
    store = _store(tmp_path)
    asset = store.save_upload("shoe.png", "image/png", io.BytesIO(b"abc"))
    name = asset.src.rsplit("/", 1)[1]

    store.delete(name)

    assert not (tmp_path / "uploads" / name).exists()
    with pytest.raises(AssetNotFoundError) as excinfo:
        store.delete(name)
    assert excinfo.value.message == f"File not found: {name}"


def test_src_is_url_encoded_and_resolves(tmp_path) -> None:
    store = _store(tmp_path)

    asset = store.save_upload("sale%20now.png", "image/png", io.BytesIO(b"abc"))

    assert asset.src.endswith("-sale%2520now.png")
    assert store.resolve(asset.src) == tmp_path / "uploads" / asset.path.rsplit("/", 1)[1]
    assert store.resolve(asset.src).name.endswith("-sale%20now.png")


def test_delete_takes_decoded_name(tmp_path) -> None:
    store = _store(tmp_path)
    asset = store.save_upload("sale%20now.png", "image/png", io.BytesIO(b"abc"))
    name = asset.path.rsplit("/", 1)[1]

    store.delete(name)

    assert list((tmp_path / "uploads").iterdir()) == []


def test_discard_removes_saved_uploads(tmp_path) -> None:
    store = _store(tmp_path)
    saved = [store.save_upload(f"{i}.png", "image/png", io.BytesIO(b"abc")) for i in range(2)]
    (tmp_path / "uploads" / saved[0].path.rsplit("/", 1)[1]).unlink()

    store.discard(saved)

    assert list((tmp_path / "uploads").iterdir()) == []


def test_renders_in_same_millisecond_get_distinct_names(tmp_path, monkeypatch) -> None:
    store = _store(tmp_path)
    monkeypatch.setattr("modules.asset_store.time.time", lambda: 1700000000.0)
    suffixes = itertools.count()
    monkeypatch.setattr("modules.asset_store.random.randint", lambda a, b: next(suffixes))

    first = store.save_render(Image.new("RGB", (4, 4)))
    second = store.save_render(Image.new("RGB", (4, 4)))

    assert first != second
    assert len(list((tmp_path / "exports").iterdir())) == 2
