"""
Tests for output.downloads

Test Coverage:
- save_slice()/save_slices(): Files named after slices
- slice_previews(): Files exist inside the scope, removed after it
"""
import pytest

from slicemaster.core.models import SliceResult
from slicemaster.output.downloads import save_slice, save_slices, slice_previews


@pytest.fixture
def slices():
    return [
        SliceResult("m_1", "m_1.png", b"one", 240, 640, 80, 0),
        SliceResult("m_4", "m_4.png", b"four", 640, 480, 0, 640),
    ]


def test_save_slice_writes_bytes(tmp_path, slices):
    path = save_slice(slices[0], tmp_path)

    assert path == tmp_path / "m_1.png"
    assert path.read_bytes() == b"one"


def test_save_slice_overwrites_existing(tmp_path, slices):
    (tmp_path / "m_1.png").write_bytes(b"stale")

    save_slice(slices[0], tmp_path)

    assert (tmp_path / "m_1.png").read_bytes() == b"one"


def test_save_slices_creates_directory(tmp_path, slices):
    target = tmp_path / "nested" / "dir"

    paths = save_slices(slices, target)

    assert [p.name for p in paths] == ["m_1.png", "m_4.png"]
    assert all(p.exists() for p in paths)


def test_previews_exist_inside_scope(slices):
    with slice_previews(slices) as previews:
        assert set(previews) == {"m_1.png", "m_4.png"}
        assert previews["m_4.png"].read_bytes() == b"four"
        paths = list(previews.values())

    assert not any(p.exists() for p in paths)
    assert not paths[0].parent.exists()


def test_previews_released_on_error(slices):
    paths = []

    with pytest.raises(RuntimeError):
        with slice_previews(slices) as previews:
            paths.extend(previews.values())
            raise RuntimeError("viewer crashed")

    assert paths
    assert not any(p.exists() for p in paths)
