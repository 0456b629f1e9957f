import pytest

from src.training_events.training_events.common.validators import parse_flag, parse_int
from src.training_events.training_events.core.exceptions import ValidationError


@pytest.mark.parametrize("value, expected", [("1", True), ("on", True), ("true", True), (1, True), (True, True),
                                             ("0", False), ("", False), (None, False), (0, False), ("no", False)])
def test_parse_flag(value, expected):
    assert parse_flag(value) is expected


def test_parse_int_defaults_for_blank():
    assert parse_int("", "cmid") == 0
    assert parse_int(None, "userid", default=9) == 9
    assert parse_int(" 12 ", "userid") == 12


def test_parse_int_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_int("abc", "userid")
