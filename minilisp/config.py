r"""
minilisp configuration

Settings are read from environment variables, with command-line flags
taking precedence (see minilisp.cli).

- MINILISP_INDENT     indent unit used by the tree printer (default: two spaces);
                      \t, \n, \r, \s and \\ escapes are expanded
- MINILISP_LOG_LEVEL  logging level name (default: WARNING)
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass

DEFAULT_INDENT = "  "
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Settings:
    """Runtime settings for the interpreter and its printer."""
    indent: str = DEFAULT_INDENT
    log_level: str = DEFAULT_LOG_LEVEL
    show_tokens: bool = True
    show_tree: bool = True
    color: bool = False


ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "s": " ", "\\": "\\"}
ESCAPE_RE = re.compile(r"\\([tnrs\\])")


def decode_escapes(text: str) -> str:
    r"""Expand the escapes \t \n \r \s and \\ in `text`; any other character is kept as-is."""
    return ESCAPE_RE.sub(lambda m: ESCAPES[m.group(1)], text)


def setting_from_env(var: str, default: str) -> str:
    raw = os.environ.get(var)
    if not raw:
        return default
    return raw


def get_settings() -> Settings:
    # MINILISP_INDENT may hold escapes such as "\t" when set from a shell
    indent = decode_escapes(setting_from_env("MINILISP_INDENT", DEFAULT_INDENT))
    log_level = setting_from_env("MINILISP_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    return Settings(indent=indent, log_level=log_level.upper())


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Setup logging for minilisp."""
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        raise ValueError(f"Invalid log level: {level}")
    logging.basicConfig(
        level=numeric,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("minilisp").setLevel(numeric)
