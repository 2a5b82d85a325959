"""Special form: defmacro.

Binds a Macro in the global environment. The transformer is an ordinary
lambda over the signature's parameters, closed over the defining environment.
"""

from __future__ import annotations

import logging

from liszp import EvaluatorFn, SExpression, LispValue
from liszp.types.bind import parse_params
from liszp.types.environment import Environment
from liszp.types.errors import LiszpError, LiszpInvalidSymbol, LiszpSyntaxError
from liszp.types.lambda_fn import Lambda
from liszp.types.macro_fn import Macro
from liszp.types.nil import Nil
from liszp.types.pair import Pair, is_list
from liszp.types.symbol import Symbol

logger = logging.getLogger(__name__)


def defmacro_form(tail: list[SExpression], env: Environment, evaluate_fn: EvaluatorFn) -> LispValue:
    """(defmacro (name p1 p2 [@ rest]) body): register a macro named `name`."""
    if len(tail) != 2:
        raise LiszpSyntaxError("expected syntax (defmacro <macro-signature> <macro-body>)")

    signature, body = tail
    if not isinstance(signature, Pair) or not is_list(signature):
        raise LiszpSyntaxError("expected the macro signature to be a list (<name> <args>..)")

    macro_name = signature.car
    if not isinstance(macro_name, Symbol):
        raise LiszpInvalidSymbol(f"expected name in macro definition, got {macro_name!r}")

    params = parse_params(signature.cdr, f"'{macro_name}' macro definition")

    root = env.root()
    if isinstance(root.vars.get(macro_name), Macro):
        raise LiszpError(f"macro '{macro_name}' has already been defined")

    transformer = Lambda(params, body, env, macro_name.id)
    root.define(macro_name, Macro(macro_name.id, transformer))
    logger.debug("Defined macro %s %s", macro_name, params)
    return Nil
