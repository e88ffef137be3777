"""Local JavaScript, CSS and HTML minification engine."""

from .config import AppConfig, load_config
from .core import MinificationService
from .detection import Language, detect_language
from .models import FormatOptions, MinificationOptions, MinificationResult
from .worker import MinifyWorker, build_worker

__all__ = [
    "AppConfig",
    "FormatOptions",
    "Language",
    "MinificationOptions",
    "MinificationResult",
    "MinificationService",
    "MinifyWorker",
    "build_worker",
    "detect_language",
    "load_config",
]
