from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_PATH = Path("config.toml")
ENV_PREFIX = "WMIN_"
ADVANCED_HTML_RATIO = 0.8

__all__ = ["DEFAULT_CONFIG_PATH", "ENV_PREFIX", "ADVANCED_HTML_RATIO"]
