import pytest

from srsglass import fs


def test_ensure_dir(tmp_path):
    target = tmp_path / "a" / "b"
    assert fs.ensure_dir(target) == target
    assert target.is_dir()


def test_atomic_open_creates_parents(tmp_path):
    target = tmp_path / "nested" / "file.bin"
    with fs.atomic_open(target) as f:
        f.write(b"payload")

    assert target.read_bytes() == b"payload"
    assert not fs.tmp_path(target).exists()


def test_atomic_open_discards_on_error(tmp_path):
    target = tmp_path / "file.bin"
    target.write_bytes(b"old")

    with pytest.raises(RuntimeError):
        with fs.atomic_open(target) as f:
            f.write(b"half")
            raise RuntimeError("interrupted")

    # 原文件保持不变，临时文件被清理
    assert target.read_bytes() == b"old"
    assert not fs.tmp_path(target).exists()


def test_remove(tmp_path):
    d = tmp_path / "d"
    d.mkdir()
    (d / "x").write_text("x")
    f = tmp_path / "f"
    f.write_text("f")

    fs.remove(d)
    fs.remove(f)
    fs.remove(tmp_path / "missing")

    assert not d.exists()
    assert not f.exists()


@pytest.mark.parametrize(
    "size,expected",
    [(0, "0.00 B"), (1536, "1.50 KB"), (5 * 1024 * 1024, "5.00 MB")],
)
def test_format_size(size, expected):
    assert fs.format_size(size) == expected
