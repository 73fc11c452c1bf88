import logging

import pytest

from notifix.errors import ProviderError
from notifix.utils import Logger, coerce_count, funclogger, get_logger


@pytest.mark.parametrize("value, expected", [(0, 0), (12, 12), (" 3 ", 3)])
def test_coerce_count_accepts_integers(value, expected):
    assert coerce_count(value) == expected


@pytest.mark.parametrize("value", [-1, "-2", "three", 1.5, None, True])
def test_coerce_count_rejects_non_counts(value):
    with pytest.raises(ProviderError):
        coerce_count(value)


def test_get_logger_does_not_propagate():
    logger = get_logger("notifix.tests.example")

    assert logger.propagate is False
    assert logger.handlers


def test_logger_class_uses_default_level():
    logger = Logger("notifix.tests.custom")

    assert logger.level == logging.INFO


def test_funclogger_preserves_result_and_name():
    @funclogger
    def add(left: int, right: int = 0) -> int:
        return left + right

    logger_name = f"{__name__}.test_funclogger_preserves_result_and_name.locals.add"
    get_logger(logger_name).setLevel(logging.DEBUG)

    assert add(2, right=3) == 5
    assert add.__name__ == "add"
