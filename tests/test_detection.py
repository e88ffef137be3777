import pytest

from core.web_minifier.detection import (
    DetectionError,
    Language,
    detect_language,
    language_for_filename,
)


def test_detect_language_boundaries() -> None:
    assert detect_language("<div>x</div>") is Language.HTML
    assert detect_language(".a{color:red}") is Language.CSS
    assert detect_language("let x=1;") is Language.JAVASCRIPT


def test_detect_language_ignores_leading_whitespace() -> None:
    assert detect_language("  \n\t<!doctype html><p>x</p>") is Language.HTML
    assert detect_language("\n  #main{margin:0}") is Language.CSS
    assert detect_language("@media print{a{color:red}}") is Language.CSS
    assert detect_language("{}") is Language.CSS


def test_detect_language_never_returns_auto() -> None:
    for sample in ("", "   ", "body{}", "a < b", "// comment"):
        assert detect_language(sample) is not Language.AUTO


def test_selector_without_marker_falls_back_to_javascript() -> None:
    # Element selectors carry no anchor character, so the heuristic guesses JS.
    assert detect_language("body { margin: 0 }") is Language.JAVASCRIPT


def test_language_for_filename() -> None:
    assert language_for_filename("app.js") is Language.JAVASCRIPT
    assert language_for_filename("theme.CSS") is Language.CSS
    assert language_for_filename("index.htm") is Language.HTML
    assert language_for_filename("notes.txt") is Language.AUTO
    assert language_for_filename("Makefile") is Language.AUTO


def test_language_parse() -> None:
    assert Language.parse(None) is Language.AUTO
    assert Language.parse("CSS") is Language.CSS
    with pytest.raises(DetectionError) as exc:
        Language.parse("python")
    assert "Unsupported language" in str(exc.value)
