from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from core.constraint import DEFAULT_CONFIG_PATH

from .detection import DetectionError, Language
from .models import FormatOptions, MinificationOptions


class ConfigError(ValueError):
    """Raised when the configuration file holds unusable values."""


@dataclass(slots=True)
class RuntimeConfig:
    log_file: Path | None = None
    max_input_size_kb: int = 2048
    enable_local_api: bool = False


@dataclass(slots=True)
class MinifyConfig:
    mangle: bool = True
    comments: bool = False
    convert_colors_to_hex: bool = True
    language: Language = Language.AUTO
    advanced_html: bool = True

    def default_options(self) -> MinificationOptions:
        return MinificationOptions(
            mangle=self.mangle,
            format=FormatOptions(
                comments=self.comments,
                convert_colors_to_hex=self.convert_colors_to_hex,
            ),
            language=self.language,
        )


@dataclass(slots=True)
class APIConfig:
    host: str = "127.0.0.1"
    port: int = 8000


@dataclass(slots=True)
class AppConfig:
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    minify: MinifyConfig = field(default_factory=MinifyConfig)
    api: APIConfig = field(default_factory=APIConfig)


def _read_toml(path: Path) -> Mapping[str, object]:
    if not path.exists():
        return {}
    with path.open("rb") as handle:
        try:
            return tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid config file {path}: {exc}") from exc


def _build_runtime(data: Mapping[str, object] | None) -> RuntimeConfig:
    if not data:
        return RuntimeConfig()
    log_file = str(data.get("log_file", "") or "")
    max_kb = int(data.get("max_input_size_kb", 2048))
    if max_kb <= 0:
        raise ConfigError("runtime.max_input_size_kb must be positive")
    return RuntimeConfig(
        log_file=Path(log_file) if log_file else None,
        max_input_size_kb=max_kb,
        enable_local_api=bool(data.get("enable_local_api", False)),
    )


def _build_minify(data: Mapping[str, object] | None) -> MinifyConfig:
    if not data:
        return MinifyConfig()
    try:
        language = Language.parse(str(data.get("language", "auto")))
    except DetectionError as exc:
        raise ConfigError(str(exc)) from exc
    return MinifyConfig(
        mangle=bool(data.get("mangle", True)),
        comments=bool(data.get("comments", False)),
        convert_colors_to_hex=bool(data.get("convert_colors_to_hex", True)),
        language=language,
        advanced_html=bool(data.get("advanced_html", True)),
    )


def _build_api(data: Mapping[str, object] | None) -> APIConfig:
    if not data:
        return APIConfig()
    return APIConfig(host=str(data.get("host", "127.0.0.1")), port=int(data.get("port", 8000)))


def _section(raw: Mapping[str, object], name: str) -> Mapping[str, object] | None:
    value = raw.get(name)
    return value if isinstance(value, Mapping) else None


def load_config(path: Path | None = None) -> AppConfig:
    path = path or DEFAULT_CONFIG_PATH
    raw = _read_toml(path)
    return AppConfig(
        runtime=_build_runtime(_section(raw, "runtime")),
        minify=_build_minify(_section(raw, "minify")),
        api=_build_api(_section(raw, "api")),
    )


def dump_config(config: AppConfig) -> str:
    payload = {
        "runtime": {
            "log_file": str(config.runtime.log_file) if config.runtime.log_file else "",
            "max_input_size_kb": config.runtime.max_input_size_kb,
            "enable_local_api": config.runtime.enable_local_api,
        },
        "minify": {
            "mangle": config.minify.mangle,
            "comments": config.minify.comments,
            "convert_colors_to_hex": config.minify.convert_colors_to_hex,
            "language": config.minify.language.value,
            "advanced_html": config.minify.advanced_html,
        },
        "api": {
            "host": config.api.host,
            "port": config.api.port,
        },
    }
    return json.dumps(payload, indent=2)


__all__ = [
    "APIConfig",
    "AppConfig",
    "ConfigError",
    "MinifyConfig",
    "RuntimeConfig",
    "dump_config",
    "load_config",
]
