"""Registry of special forms for the Liszp evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table to dispatch special forms before macro
expansion or ordinary function application.
"""

from liszp.types.symbol import Symbol
from liszp.evaluation.special_forms.quote_form import quote_form
from liszp.evaluation.special_forms.lambda_form import lambda_form
from liszp.evaluation.special_forms.define_form import define_form
from liszp.evaluation.special_forms.defmacro_form import defmacro_form
from liszp.evaluation.special_forms.if_form import if_form
from liszp.evaluation.special_forms.macroexpand_forms import macroexpand1_form, macroexpand_form

SPECIAL_FORMS = {
    Symbol("quote"): quote_form,
    Symbol("lambda"): lambda_form,
    Symbol("def"): define_form,
    Symbol("defmacro"): defmacro_form,
    Symbol("if"): if_form,
    Symbol("macroexpand-1"): macroexpand1_form,
    Symbol("macroexpand"): macroexpand_form,
}
