from __future__ import annotations
import logging
import sys
from typing import Literal

from liszp import LispValue, EvaluatorFn
from liszp.config import get_recursion_limit
from liszp.reader.parser import lex, TokenStream
from liszp.types.nil import Nil
from liszp.types.environment import Environment
from liszp.builtin.env_builtin import register

log = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating Liszp code.
    Owns the global Environment, which persists across calls; procedures
    and macros both live there.
    """

    def __init__(
        self,
        eval_fn: EvaluatorFn | None = None,
        prelude: str | None | Literal['auto'] = 'auto',
    ):
        if eval_fn is None:
            from liszp.evaluation.evaluator import evaluate
            eval_fn = evaluate
        self.eval_fn = eval_fn

        limit = get_recursion_limit()
        if sys.getrecursionlimit() < limit:
            log.debug("raising recursion limit to %d", limit)
            sys.setrecursionlimit(limit)

        self.env: Environment = Environment()
        register(self.env)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            # Lazy import to avoid circular imports
            from liszp.modules.prelude_loader import load_prelude
            load_prelude(self)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        tokens = lex(code)
        stream = TokenStream(iter(tokens))
        while (expr := stream.parse_expr()) is not None:
            self.eval_fn(expr, self.env)

    def eval(self, code: str) -> LispValue:
        """Evaluate every form in `code`; returns the last value, or Nil for empty input."""
        tokens = lex(code)
        stream = TokenStream(iter(tokens))
        result: LispValue = Nil
        while (expr := stream.parse_expr()) is not None:
            result = self.eval_fn(expr, self.env)
        return result
