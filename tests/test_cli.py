import csv
from pathlib import Path

from typer.testing import CliRunner

from core.web_minifier.cli import app

runner = CliRunner()


def write_config(tmp_path: Path) -> Path:
    path = tmp_path / "config.toml"
    path.write_text("[minify]\nadvanced_html = false\n", encoding="utf-8")
    return path


def test_minify_writes_prefixed_file(tmp_path: Path) -> None:
    source = tmp_path / "style.css"
    source.write_text(".a { color: #ffffff; }\n", encoding="utf-8")
    result = runner.invoke(app, ["minify", str(source), "--config", str(write_config(tmp_path))])
    assert result.exit_code == 0, result.output
    assert (tmp_path / "minified-style.css").read_text(encoding="utf-8") == ".a{color:#fff}"
    assert "Success" in result.output


def test_minify_to_stdout_with_language_flag(tmp_path: Path) -> None:
    source = tmp_path / "snippet.txt"
    source.write_text(".a { color: rgb(255, 0, 0); }", encoding="utf-8")
    result = runner.invoke(
        app,
        ["minify", str(source), "--stdout", "-l", "css", "--no-hex-colors", "--config", str(write_config(tmp_path))],
    )
    assert result.exit_code == 0, result.output
    assert result.output.strip() == ".a{color:rgb(255,0,0)}"
    assert not (tmp_path / "minified-snippet.txt").exists()


def test_minify_empty_file_fails(tmp_path: Path) -> None:
    source = tmp_path / "empty.js"
    source.write_text("   ", encoding="utf-8")
    result = runner.invoke(app, ["minify", str(source), "--config", str(write_config(tmp_path))])
    assert result.exit_code == 1
    assert "No code provided" in result.output


def test_minify_missing_file(tmp_path: Path) -> None:
    result = runner.invoke(app, ["minify", str(tmp_path / "nope.css")])
    assert result.exit_code == 1


def test_invalid_config_exits_with_code_two(tmp_path: Path) -> None:
    source = tmp_path / "a.css"
    source.write_text(".a{}", encoding="utf-8")
    config = tmp_path / "bad.toml"
    config.write_text('[minify]\nlanguage = "cobol"\n', encoding="utf-8")
    result = runner.invoke(app, ["minify", str(source), "--config", str(config)])
    assert result.exit_code == 2


def test_detect(tmp_path: Path) -> None:
    source = tmp_path / "page.txt"
    source.write_text("  <p>hi</p>", encoding="utf-8")
    result = runner.invoke(app, ["detect", str(source)])
    assert result.exit_code == 0
    assert result.output.strip() == "html"


def test_batch_writes_outputs_and_summary(tmp_path: Path) -> None:
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.css").write_text(".a { margin: 0px; }", encoding="utf-8")
    (src / "b.html").write_text("<div>  <b>x</b>  </div>", encoding="utf-8")
    (src / "c.js").write_text("", encoding="utf-8")
    out = tmp_path / "out"
    summary = tmp_path / "summary.csv"
    result = runner.invoke(
        app,
        [
            "batch",
            str(src),
            "--output-dir",
            str(out),
            "--summary",
            str(summary),
            "--config",
            str(write_config(tmp_path)),
        ],
    )
    assert result.exit_code == 0, result.output
    assert (out / "a.css").read_text(encoding="utf-8") == ".a{margin:0}"
    assert (out / "b.html").read_text(encoding="utf-8") == "<div><b>x</b></div>"
    assert not (out / "c.js").exists()
    assert "2 succeeded, 1 failed" in result.output
    with summary.open(encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))
    assert rows[1][2:5] == ["3", "2", "1"]


def test_show_config(tmp_path: Path) -> None:
    result = runner.invoke(app, ["show-config", "--config", str(write_config(tmp_path))])
    assert result.exit_code == 0
    assert '"advanced_html": false' in result.output
