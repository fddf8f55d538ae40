import datetime
import logging
from unittest.mock import patch

from tokenbind._utils import is_newable, is_plain_object, required_parameters, stringify


def foo(): ...


class MultiLine:
    def __str__(self):
        return "first line\nsecond line"


def test_stringify_none():
    assert stringify(None) == "None"


def test_stringify_returns_same_string():
    assert stringify("abc") == "abc"


def test_stringify_function_uses_name():
    assert stringify(foo) == "foo"


def test_stringify_class_uses_name():
    assert stringify(datetime.date) == "date"


def test_stringify_number():
    assert stringify(123) == "123"


def test_stringify_keeps_first_line_only():
    assert stringify(MultiLine()) == "first line"


def test_is_plain_object():
    assert is_plain_object({"a": 1})
    assert not is_plain_object([("a", 1)])
    assert not is_plain_object(MultiLine())


def test_is_newable():
    assert is_newable(MultiLine)
    assert not is_newable(MultiLine())
    assert not is_newable(foo)


def test_required_parameters():
    class A:
        def __init__(self, a, b=1, *args, c, d=2, **kwargs): ...

    assert required_parameters(A) == ["a", "c"]
    assert required_parameters(MultiLine) == []


def test_required_parameters_logs_uninspectable_constructor(caplog):
    with (
        caplog.at_level(logging.WARNING, logger="tokenbind._utils"),
        patch("tokenbind._utils.inspect.signature", side_effect=ValueError("no signature found")),
    ):
        assert required_parameters(MultiLine) == []

    assert "Unable to introspect MultiLine constructor (no signature found)" in caplog.text
