"""Registry of special forms for the minilisp evaluator.

Maps node types to handler functions that control the evaluation of their own
sub-expressions. The evaluator consults this table before falling back to the
builtins, whose operands are always evaluated eagerly.
"""

from minilisp.types.expression import Call, If, Let
from minilisp.evaluation.special_forms.if_form import if_form
from minilisp.evaluation.special_forms.let_form import let_form
from minilisp.evaluation.special_forms.call_form import call_form

SPECIAL_FORMS = {
    If: if_form,
    Let: let_form,
    Call: call_form,
}
