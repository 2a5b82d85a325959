from __future__ import annotations
import logging
import os
from pathlib import Path

# Resolve installation dir (liszp package directory)
_LISZP_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _LISZP_DIR / 'prelude'
# Each Lisp call costs roughly a dozen Python frames, so 10_000 lets
# recursive prelude functions such as `len` walk about 700 elements.
_DEFAULT_RECURSION_LIMIT = 10_000
_DEFAULT_LOG_LEVEL = 'WARNING'


def get_prelude_root() -> Path:
    raw = os.environ.get('LISZP_PRELUDE_PATH', '').strip()
    if not raw:
        return _DEFAULT_PRELUDE_DIR
    # treat as single directory; if a file path is set, return its parent
    p = Path(raw)
    return p if p.is_dir() else p.parent


def get_recursion_limit() -> int:
    raw = os.environ.get('LISZP_RECURSION_LIMIT', '').strip()
    if not raw:
        return _DEFAULT_RECURSION_LIMIT
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f"LISZP_RECURSION_LIMIT must be an integer, got {raw!r}")
    if limit <= 0:
        raise ValueError(f"LISZP_RECURSION_LIMIT must be positive, got {limit}")
    return limit


def get_log_level() -> int:
    raw = os.environ.get('LISZP_LOG_LEVEL', '').strip() or _DEFAULT_LOG_LEVEL
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    if not isinstance(level, int):
        raise ValueError(f"LISZP_LOG_LEVEL is not a known log level: {raw!r}")
    return level
