from __future__ import annotations
import logging
from pathlib import Path
from typing import Protocol

from liszp.config import get_prelude_root

log = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


PRELUDE_FILES = ('std.lisp',)


def prelude_paths() -> list[Path]:
    root = get_prelude_root()
    return [root / name for name in PRELUDE_FILES]


def load_prelude(itp: _HasEvalPrelude) -> None:
    for path in prelude_paths():
        if not path.is_file():
            raise FileNotFoundError(f"Cannot find prelude file '{path}' (LISZP_PRELUDE_PATH)")
        log.info("loading prelude %s", path)
        itp.eval_prelude(path.read_text(encoding='utf-8'))
