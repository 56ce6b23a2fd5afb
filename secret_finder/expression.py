# pip install lark
from lark import Lark
from lark.exceptions import UnexpectedInput, VisitError
from lark.visitors import Transformer
from .errors import DecodeError
from .operations import apply_operation, decode_base


"""
textual form of a share value:
start E
nonterminals E, L
productions:
E ->  op(L)
    | op()
    | BASE#DIGITS
    | INT

L ->  E
    | E, L

e.g  "42", "-7", "16#ff", "lcm(4, sum(1, 2), 2#101)"
op names are checked when evaluating, not when parsing, so an unknown op gets a useful message
"""

parser = Lark(r"""
    ?expr: call
         | radix
         | decimal

    call: NAME "(" [expr ("," expr)*] ")"
    radix: INT "#" DIGITS
    decimal: SIGNED_INT

    NAME: /[a-zA-Z_][a-zA-Z0-9_]*/
    DIGITS: /[0-9a-zA-Z]+/

    %import common.INT
    %import common.SIGNED_INT
    %import common.WS
    %ignore WS
    """, start='expr')


class ValueEvaluator(Transformer):
    def call(self, children):
        name, *args = children
        # an empty argument list comes through as a single None placeholder
        return apply_operation(str(name), [arg for arg in args if arg is not None])

    def radix(self, children):
        base, digits = children
        return decode_base(str(digits), int(base))

    def decimal(self, children):
        # decode_base has no digit limit, int() refuses anything over sys.get_int_max_str_digits()
        text = str(children[0])
        sign = -1 if text.startswith("-") else 1
        return sign * decode_base(text.lstrip("+-"), 10)


def decode_expression(text: str) -> int:
    """
    Evaluate a textual share value.

    Raises:
        DecodeError: if the text does not parse, or names an unknown operation / invalid digits
    """
    if not isinstance(text, str):
        raise DecodeError(f"expression must be a string, got {text!r}")
    try:
        tree = parser.parse(text)
    except UnexpectedInput as e:
        raise DecodeError(f"could not parse {text!r}: {e}") from e

    try:
        return ValueEvaluator().transform(tree)
    except VisitError as e:
        # lark wraps anything raised inside a transformer callback
        if isinstance(e.orig_exc, DecodeError):
            raise e.orig_exc from e
        if isinstance(e.orig_exc, ValueError):
            raise DecodeError(f"could not evaluate expression: {e.orig_exc}") from e
        raise
