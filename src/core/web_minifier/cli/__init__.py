from __future__ import annotations

import time
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ..config import AppConfig, ConfigError, dump_config, load_config
from ..detection import DetectionError, Language, detect_language, language_for_filename
from ..logging import BatchSummary, append_summary_csv
from ..models import FormatOptions, MinificationOptions, MinificationResult
from ..utils import atomic_write, iter_files, minified_name, size_within_limit
from ..worker import build_worker

console = Console()

app = typer.Typer(help="Local JavaScript, CSS and HTML minifier")


def _load_config(path: Path | None) -> AppConfig:
    try:
        return load_config(path)
    except ConfigError as exc:
        console.print(f"[red]Invalid configuration[/red]: {exc}")
        raise typer.Exit(2) from exc


def _read_source(file: Path) -> str:
    if not file.is_file():
        console.print(f"[red]File not found[/red]: {file}")
        raise typer.Exit(1)
    return file.read_text(encoding="utf-8")


def _build_options(
    cfg: AppConfig,
    file: Path,
    language: str | None,
    keep_comments: bool | None,
    mangle: bool | None,
    hex_colors: bool | None,
) -> MinificationOptions:
    defaults = cfg.minify.default_options()
    if language:
        try:
            resolved = Language.parse(language)
        except DetectionError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(2) from exc
    elif defaults.language is not Language.AUTO:
        resolved = defaults.language
    else:
        resolved = language_for_filename(file)
    return MinificationOptions(
        mangle=defaults.mangle if mangle is None else mangle,
        format=FormatOptions(
            comments=defaults.format.comments if keep_comments is None else keep_comments,
            convert_colors_to_hex=(
                defaults.format.convert_colors_to_hex if hex_colors is None else hex_colors
            ),
        ),
        language=resolved,
    )


def _describe(result: MinificationResult) -> str:
    return (
        f"{result.original_size} -> {result.minified_size} bytes "
        f"({result.compression_ratio:.1f}% smaller)"
    )


@app.command()
def minify(
    file: Path,
    output: Path | None = typer.Option(None, "--output", "-o", help="Where to write the result"),
    stdout: bool = typer.Option(False, "--stdout", help="Print the result instead of writing a file"),
    language: str | None = typer.Option(None, "--language", "-l", help="auto, javascript, css or html"),
    keep_comments: bool | None = typer.Option(None, "--keep-comments/--strip-comments"),
    mangle: bool | None = typer.Option(None, "--mangle/--no-mangle"),
    hex_colors: bool | None = typer.Option(None, "--hex-colors/--no-hex-colors"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    cfg = _load_config(config)
    source = _read_source(file)
    if not size_within_limit(source, cfg.runtime.max_input_size_kb):
        console.print(f"[red]Input exceeds {cfg.runtime.max_input_size_kb} KB[/red]: {file}")
        raise typer.Exit(1)
    options = _build_options(cfg, file, language, keep_comments, mangle, hex_colors)
    with build_worker(cfg) as worker:
        result = worker.submit(source, options).result().result
    if result.error:
        console.print(f"[red]Minification failed[/red]: {result.error}")
        raise typer.Exit(1)
    if stdout:
        typer.echo(result.code)
        return
    destination = output or file.with_name(minified_name(file))
    atomic_write(destination, result.code)
    label = result.detected_language.value if result.detected_language else options.language.value
    console.print(f"[green]Success[/green]: {file.name} ({label}) -> {destination}")
    console.print(_describe(result))


@app.command()
def detect(file: Path) -> None:
    source = _read_source(file)
    console.print(detect_language(source).value)


@app.command()
def batch(
    path: list[Path],
    output_dir: Path | None = typer.Option(None, "--output-dir", help="Directory for minified files"),
    summary: Path | None = typer.Option(None, "--summary", help="Append a row to this CSV file"),
    config: Path | None = typer.Option(None, "--config", help="Path to config.toml"),
) -> None:
    cfg = _load_config(config)
    files = list(iter_files(path))
    stats = BatchSummary(total=len(files))
    table = Table(title="Batch summary")
    table.add_column("File")
    table.add_column("Language")
    table.add_column("Original", justify="right")
    table.add_column("Minified", justify="right")
    table.add_column("Status")
    with build_worker(cfg) as worker:
        submitted = []
        for file in files:
            options = _build_options(cfg, file, None, None, None, None)
            source = file.read_text(encoding="utf-8", errors="replace")
            submitted.append((file, options, worker.submit(source, options)))
        for file, options, future in submitted:
            result = future.result().result
            label = result.detected_language.value if result.detected_language else options.language.value
            if result.error:
                stats.failures += 1
                table.add_row(str(file), label, str(result.original_size), "-", f"[red]{result.error}[/red]")
                continue
            destination = (output_dir / file.name) if output_dir else file.with_name(minified_name(file))
            atomic_write(destination, result.code)
            stats.successes += 1
            stats.original_bytes += result.original_size
            stats.minified_bytes += result.minified_size
            table.add_row(str(file), label, str(result.original_size), str(result.minified_size), "ok")
    console.print(table)
    console.print(
        f"Processed {stats.total} files: {stats.successes} succeeded, {stats.failures} failed, "
        f"{stats.bytes_saved} bytes saved."
    )
    if summary is not None:
        append_summary_csv(summary, stats, f"batch-{int(time.time() * 1000)}")


@app.command()
def show_config(config: Path | None = typer.Option(None, "--config", help="Path to config.toml")) -> None:
    console.print_json(dump_config(_load_config(config)))


@app.command()
def serve(config: Path | None = typer.Option(None, "--config", help="Path to config.toml")) -> None:
    import uvicorn

    from api.app import create_app

    cfg = _load_config(config)
    cfg.runtime.enable_local_api = True
    uvicorn.run(create_app(cfg), host=cfg.api.host, port=cfg.api.port)


if __name__ == "__main__":
    app()
