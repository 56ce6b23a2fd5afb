from collections.abc import Mapping
from .errors import DecodeError
from .expression import decode_expression
from .operations import apply_operation, decode_base


def decode_structured(obj: Mapping) -> int:
    """
    decodes {"op": ..., "operands": [...]} (or "values" instead of "operands").
    each operand can be anything decode_value accepts, including another structured value
    """
    op = obj.get("op")
    operands = obj.get("operands", obj.get("values"))
    if not op or operands is None:
        raise DecodeError('structured value must have "op" and "operands" (or "values") properties')
    if isinstance(operands, (str, bytes)) or not isinstance(operands, (list, tuple)):
        raise DecodeError(f"operands must be a list, got {operands!r}")

    return apply_operation(op, [decode_value(operand) for operand in operands])


def decode_value(raw) -> int:
    """
    Turn a raw share value from an input file into an integer.

    Accepted forms:
        int:                          used as is
        str:                          an expression, see expression.py ("42", "16#ff", "sum(1, 2)")
        {"op": ..., "operands": ...}: structured value
        {"value": ..., "base": ...}:  digit string in the given base
    """
    # bool is an int subclass but never a sensible share value
    if isinstance(raw, bool):
        raise DecodeError(f"cannot decode {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        return decode_expression(raw)
    if isinstance(raw, Mapping):
        if "op" in raw:
            return decode_structured(raw)
        if "value" in raw and "base" in raw:
            return decode_base(raw["value"], raw["base"])
        raise DecodeError(f"unrecognised value object with keys {sorted(raw)}")
    raise DecodeError(f"cannot decode {raw!r}")
