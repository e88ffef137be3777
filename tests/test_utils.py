from pathlib import Path

from core.web_minifier.utils import (
    atomic_write,
    collapse_whitespace,
    iter_files,
    minified_name,
    size_within_limit,
    utf8_size,
)


def test_utf8_size_counts_bytes() -> None:
    assert utf8_size("abc") == 3
    assert utf8_size("é") == 2
    assert utf8_size("") == 0


def test_collapse_whitespace() -> None:
    assert collapse_whitespace("a \n\t b") == "a b"


def test_minified_name() -> None:
    assert minified_name(Path("assets/style.css")) == "minified-style.css"


def test_size_within_limit() -> None:
    assert size_within_limit("a" * 1024, 1)
    assert not size_within_limit("a" * 1025, 1)


def test_atomic_write_creates_parents(tmp_path: Path) -> None:
    target = tmp_path / "out" / "app.js"
    atomic_write(target, "x=1")
    assert target.read_text(encoding="utf-8") == "x=1"
    atomic_write(target, "x=2")
    assert target.read_text(encoding="utf-8") == "x=2"


def test_iter_files_expands_directories(tmp_path: Path) -> None:
    (tmp_path / "nested").mkdir()
    (tmp_path / "nested" / "b.css").write_text("b", encoding="utf-8")
    (tmp_path / "a.js").write_text("a", encoding="utf-8")
    single = tmp_path / "a.js"
    found = list(iter_files([tmp_path, tmp_path / "missing.txt"]))
    assert found == [single, tmp_path / "nested" / "b.css"]
