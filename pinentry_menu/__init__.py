"""
pinentry-menu

A pinentry implementation that asks for secrets through dmenu-style
launchers such as rofi, wofi and fuzzel.
"""

__version__ = "0.1.0"

from .exceptions import (
    PinentryMenuException,
    ConfigurationException,
    DisplayNotSetException,
    UnsupportedRunnerException,
    NoRunnerAvailableException,
    InvalidTemplateException,
    LauncherSpawnFailedException,
)
from .runners import RunnerSpec, ResolvedRunner, RUNNERS, build_catalog, resolve_runner
from .command import PromptResult, build_argv, run_prompt
from .description import Description, decode_description, unescape
from .session import PinentrySession, SessionState
from .config import Config
from .logger import Logger, LogLevel, get_logger

__all__ = [
    "PinentryMenuException",
    "ConfigurationException",
    "DisplayNotSetException",
    "UnsupportedRunnerException",
    "NoRunnerAvailableException",
    "InvalidTemplateException",
    "LauncherSpawnFailedException",
    "RunnerSpec",
    "ResolvedRunner",
    "RUNNERS",
    "build_catalog",
    "resolve_runner",
    "PromptResult",
    "build_argv",
    "run_prompt",
    "Description",
    "decode_description",
    "unescape",
    "PinentrySession",
    "SessionState",
    "Config",
    "Logger",
    "LogLevel",
    "get_logger",
]
