import json
import logging
from collections.abc import Mapping
from .decoding import decode_value
from .errors import DecodeError
from .shares import Share, ShareSet

logger = logging.getLogger(__name__)

"""
two input layouts are accepted

keyed:
{
    "keys": {"n": 4, "k": 3},
    "1": {"base": "10", "value": "4"},
    "2": {"base": "2", "value": "111"},
    ...
}

listed:
{
    "k": 3,
    "shares": [
        {"t": "1", "value_base": "16#ff"},
        {"t": "2", "value_base": {"op": "lcm", "values": ["4", "6"]}},
        {"x": "3", "encodedValue": "aed7", "base": 16},
        {"x": "4", "op": "sum", "operands": [1, 2]},
        ...
    ]
}
"""


def _parse_int(raw, what):
    # int() would quietly truncate 1.5
    if isinstance(raw, (bool, float)):
        raise DecodeError(f"{what} must be an integer, got {raw!r}")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise DecodeError(f"{what} must be an integer, got {raw!r}")


def _decode_share(x, raw) -> Share:
    try:
        return Share(x, decode_value(raw))
    except DecodeError as e:
        raise DecodeError(str(e), identifier=x) from e


def _raw_value(descriptor: Mapping):
    # picks out whichever field holds the encoded value in a listed share
    if "value_base" in descriptor:
        return descriptor["value_base"]
    if "op" in descriptor:
        return descriptor
    if "encodedValue" in descriptor and "base" in descriptor:
        return {"value": descriptor["encodedValue"], "base": descriptor["base"]}
    if "value" in descriptor:
        return {"value": descriptor["value"], "base": descriptor["base"]} if "base" in descriptor else descriptor["value"]
    raise DecodeError(f"share has no value (keys: {sorted(descriptor)})")


def _parse_keyed(data: Mapping) -> ShareSet:
    keys = data["keys"]
    if not isinstance(keys, Mapping) or "k" not in keys:
        raise DecodeError('"keys" must be an object containing "k"')
    threshold = _parse_int(keys["k"], "k")

    shares = []
    for key, raw in data.items():
        if key == "keys":
            continue
        shares.append(_decode_share(_parse_int(key, "share key"), raw))

    if "n" in keys and _parse_int(keys["n"], "n") != len(shares):
        logger.warning("keys.n is %s but %d shares were given", keys["n"], len(shares))

    return ShareSet(shares, threshold)


def _parse_listed(data: Mapping) -> ShareSet:
    threshold = _parse_int(data["k"], "k")
    descriptors = data.get("shares")
    if not isinstance(descriptors, list):
        raise DecodeError('"shares" must be a list')

    shares = []
    for i, descriptor in enumerate(descriptors):
        if not isinstance(descriptor, Mapping):
            raise DecodeError(f"share #{i} must be an object, got {descriptor!r}")
        raw_x = descriptor.get("t", descriptor.get("x"))
        if raw_x is None:
            raise DecodeError(f'share #{i} has no "t" (or "x")')
        x = _parse_int(raw_x, f"share #{i} x")
        try:
            raw = _raw_value(descriptor)
        except DecodeError as e:
            raise DecodeError(str(e), identifier=x) from e
        shares.append(_decode_share(x, raw))

    return ShareSet(shares, threshold)


def parse_share_set(data) -> ShareSet:
    """
    Build a ShareSet from an already parsed json document (either layout).

    Raises:
        DecodeError: if the document or any share value is malformed
        DuplicateShareError: if two shares have the same x
    """
    if not isinstance(data, Mapping):
        raise DecodeError("input must be a json object")
    if "keys" in data:
        return _parse_keyed(data)
    if "k" in data and "shares" in data:
        return _parse_listed(data)
    raise DecodeError('input must contain either "keys" or "k" and "shares"')


def load_share_set(path) -> ShareSet:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise DecodeError(f"{path} is not valid json: {e}") from e
        except UnicodeDecodeError as e:
            raise DecodeError(f"{path} is not valid utf-8: {e}") from e
    return parse_share_set(data)
