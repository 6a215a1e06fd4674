"""
Tests for the package logger and its per-component children.
"""

import logging

from latinsq.chain.scheduler import HL
from latinsq.logging_utils import LOGGER_NAME, get_logger


def test_component_logger_is_child_of_package_logger():
    parent = get_logger()
    child = get_logger("chain")

    assert child.name == f"{LOGGER_NAME}.chain"
    assert child.parent is parent
    assert child.handlers == []
    assert len(parent.handlers) == 1


def test_package_logger_is_configured_once():
    get_logger()
    get_logger("csp.search")
    assert len(get_logger().handlers) == 1


def test_records_carry_component_name(caplog, klein4):
    with caplog.at_level(logging.DEBUG, logger=LOGGER_NAME):
        HL(klein4)

    names = {r.name for r in caplog.records}
    assert f"{LOGGER_NAME}.chain" in names
    assert f"{LOGGER_NAME}.csp.completion" in names
