import json
import logging
import pytest
from .errors import DecodeError, DuplicateShareError
from .loader import load_share_set, parse_share_set
from .shares import Share
from .voting import recover_secret


KEYED_CASE = {
    "keys": {"n": 4, "k": 3},
    "1": {"base": "10", "value": "4"},
    "2": {"base": "2", "value": "111"},
    "3": {"base": "10", "value": "12"},
    "6": {"base": "4", "value": "213"},
}

# y = 3x + 2 with the share at x=4 corrupted, every value written a different way
LISTED_CASE = {
    "k": 2,
    "shares": [
        {"t": "1", "value_base": "5"},
        {"t": "2", "value_base": {"op": "sum", "values": ["3", "5"]}},
        {"t": "3", "value_base": "16#b"},
        {"t": "4", "value_base": {"op": "multiply", "values": [9, 11]}},
    ],
}


def test_keyed_layout():
    share_set = parse_share_set(KEYED_CASE)
    assert share_set.threshold == 3
    assert share_set.shares == (Share(1, 4), Share(2, 7), Share(3, 12), Share(6, 39))
    # y = x^2 + 3
    assert recover_secret(share_set).secret == 3


def test_listed_layout():
    share_set = parse_share_set(LISTED_CASE)
    assert share_set.threshold == 2
    assert share_set.shares == (Share(1, 5), Share(2, 8), Share(3, 11), Share(4, 99))

    result = recover_secret(share_set)
    assert result.secret == 2
    assert result.faulty_shares == (Share(4, 99),)


def test_listed_descriptor_variants():
    share_set = parse_share_set({
        "k": "2",
        "shares": [
            {"x": 1, "encodedValue": "101", "base": 2},
            {"x": "2", "op": "lcm", "operands": [4, 6]},
            {"t": 3, "value": "13", "base": 16},
            {"t": 4, "value": 23},
        ],
    })
    assert share_set.shares == (Share(1, 5), Share(2, 12), Share(3, 19), Share(4, 23))


def test_keyed_layout_with_structured_value():
    share_set = parse_share_set({
        "keys": {"k": 2},
        "1": {"op": "hcf", "values": ["10", "15"]},
        "2": {"base": "16", "value": "8"},
    })
    assert share_set.shares == (Share(1, 5), Share(2, 8))


def test_decode_error_names_the_share():
    case = {"k": 2, "shares": [{"t": "1", "value_base": "5"}, {"t": "7", "value_base": "16#zz"}]}
    with pytest.raises(DecodeError) as info:
        parse_share_set(case)
    assert info.value.identifier == 7
    assert "share 7" in str(info.value)


def test_keyed_invalid_base_names_the_share():
    case = dict(KEYED_CASE)
    case["3"] = {"base": "40", "value": "12"}
    with pytest.raises(DecodeError) as info:
        parse_share_set(case)
    assert info.value.identifier == 3


@pytest.mark.parametrize("data", [
    [],
    {},
    {"shares": []},
    {"keys": {"n": 2}},
    {"keys": {"k": "three"}},
    {"keys": {"k": 2}, "one": {"base": "10", "value": "1"}},
    {"k": 2, "shares": {}},
    {"k": 2, "shares": [{"value_base": "5"}]},
    {"k": 2, "shares": [{"t": "1"}]},
    {"k": 2, "shares": ["5"]},
])
def test_malformed_documents(data):
    with pytest.raises(DecodeError):
        parse_share_set(data)


def test_duplicate_x():
    with pytest.raises(DuplicateShareError):
        parse_share_set({"k": 2, "shares": [{"t": "1", "value_base": "5"}, {"t": "01", "value_base": "6"}]})


def test_share_count_mismatch_is_logged(caplog):
    case = dict(KEYED_CASE)
    case["keys"] = {"n": 5, "k": 3}
    with caplog.at_level(logging.WARNING):
        parse_share_set(case)
    assert "keys.n is 5" in caplog.text


def test_load_from_file(tmp_path):
    path = tmp_path / "case.json"
    path.write_text(json.dumps(LISTED_CASE))
    assert len(load_share_set(path)) == 4


def test_load_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    with pytest.raises(DecodeError):
        load_share_set(path)


def test_load_non_utf8_file(tmp_path):
    path = tmp_path / "binary.json"
    path.write_bytes(b"\xff\xfe{}")
    with pytest.raises(DecodeError) as info:
        load_share_set(path)
    assert "utf-8" in str(info.value)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_share_set(tmp_path / "missing.json")
