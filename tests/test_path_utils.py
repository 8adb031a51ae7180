from shared.path_utils import display_path, get_extension, is_directory
from shared.scanner import collect_files_filtered


def test_get_extension():
    assert get_extension("file.JPG") == "jpg"
    assert get_extension("file.JPG", lower=False) == "JPG"
    assert get_extension("archive.tar.gz") == "gz"
    assert get_extension("README") == ""
    assert get_extension("some.dir/README") == ""


def test_display_path():
    assert display_path(".", "a.file") == "a.file"
    assert display_path("dir", "a.file") == "dir/a.file"
    assert display_path("./dir", "a.file") == "./dir/a.file"


def test_is_directory(tmp_path):
    f = tmp_path / "f"
    f.write_text("x", encoding="utf-8")
    (tmp_path / "d").mkdir()

    assert is_directory(str(tmp_path / "d"))
    assert not is_directory(str(f))
    assert not is_directory(str(tmp_path / "missing"))


def test_scanner_filters(tmp_path):
    (tmp_path / "keep").mkdir()
    (tmp_path / "skip").mkdir()
    for rel in ("a.WAV", "b.wav", "c.txt", "keep/d.wav", "skip/e.wav"):
        (tmp_path / rel).write_bytes(b"")

    insensitive = collect_files_filtered(tmp_path, extensions=[".wav"], exclude_dirs=["skip"], as_path=False)
    assert [p[len(str(tmp_path)) + 1:] for p in insensitive] == ["a.WAV", "b.wav", "keep/d.wav"]

    sensitive = collect_files_filtered(tmp_path, extensions=["wav"], case_sensitive=True, recursive=False, as_path=False)
    assert [p[len(str(tmp_path)) + 1:] for p in sensitive] == ["b.wav"]
