import pytest
from inpututil import AtLeast, choose_option, get_existing_path, get_input


@pytest.fixture
def answer(monkeypatch):
    def feed(*answers):
        answers = iter(answers)
        monkeypatch.setattr("builtins.input", lambda prompt: next(answers))
    return feed


def test_get_input_retries_until_valid(answer, capsys):
    answer("three", "0", " 4 ")
    assert get_input("> ", int, AtLeast(1)) == 4
    out = capsys.readouterr().out
    assert "'three' is not a valid int" in out
    assert "Choose from at least 1" in out


def test_choose_option(answer, capsys):
    answer("x", "q")
    assert choose_option({"f": "Find", "q": "Quit"}) == "q"
    assert "[f] Find" in capsys.readouterr().out


def test_get_existing_path(tmp_path, answer):
    path = tmp_path / "case.json"
    path.write_text("{}")
    answer(str(tmp_path / "missing.json"), str(path))
    assert get_existing_path("> ") == str(path)
    answer("")
    assert get_existing_path("> ") is None


def test_at_least():
    assert 0 in AtLeast(0)
    assert 10**100 in AtLeast(1)
    assert 0 not in AtLeast(1)
    assert repr(AtLeast(1)) == "at least 1"
