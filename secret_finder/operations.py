from functools import reduce
from math import gcd, lcm
from .errors import DecodeError

ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"
MIN_BASE = 2
MAX_BASE = 36


def parse_base(base) -> int:
    # bases show up as "16" in the json files as often as 16
    try:
        base = int(base)
    except (TypeError, ValueError):
        raise DecodeError(f"base must be an integer, got {base!r}")
    if not MIN_BASE <= base <= MAX_BASE:
        raise DecodeError(f"unsupported base {base} - must be between {MIN_BASE} and {MAX_BASE} inclusive")
    return base


def decode_base(digits: str, base) -> int:
    """
    decodes a digit string in the given base (2 to 36), case insensitive.
    e.g decode_base("ff", 16) == 255, decode_base("111", 2) == 7
    """
    base = parse_base(base)
    # json numbers, e.g {"base": "2", "value": 111}
    if isinstance(digits, int) and not isinstance(digits, bool):
        digits = str(digits)
    if not isinstance(digits, str):
        raise DecodeError(f"encoded value must be a string, got {digits!r}")
    if digits == "":
        raise DecodeError("encoded value is empty")

    result = 0
    for char in digits.lower():
        digit = ALPHABET.find(char)
        if digit == -1 or digit >= base:
            raise DecodeError(f"invalid character {char!r} for base {base}")
        result = result * base + digit
    return result


def encode_base(value: int, base) -> str:
    """inverse of decode_base for non-negative integers"""
    base = parse_base(base)
    if value < 0:
        raise ValueError("only non-negative integers can be encoded")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, base)
        digits.append(ALPHABET[remainder])
    return "".join(reversed(digits))


def _gcd_all(values):
    if not values:
        raise DecodeError("gcd needs at least one operand")
    return reduce(gcd, values)


def _lcm_all(values):
    if not values:
        raise DecodeError("lcm needs at least one operand")
    # math.lcm is 0 if any operand is 0
    return reduce(lcm, values)


OPERATIONS = {
    "sum": sum,
    "multiply": lambda values: reduce(lambda a, b: a * b, values, 1),
    "gcd": _gcd_all,
    "hcf": _gcd_all,
    "lcm": _lcm_all,
}


def apply_operation(op: str, values: list[int]) -> int:
    if not isinstance(op, str):
        raise DecodeError(f"operation must be a string, got {op!r}")
    func = OPERATIONS.get(op.lower())
    if func is None:
        raise DecodeError(f"unsupported operation {op!r} - must be one of {'/'.join(OPERATIONS)}")
    return func(list(values))
