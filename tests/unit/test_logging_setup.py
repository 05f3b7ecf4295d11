"""Tests for package logging helpers."""

from __future__ import annotations

import io
import logging

import pytest

from achbuilder import logging_setup


@pytest.mark.parametrize(
    ("level", "expected"),
    [(logging.DEBUG, logging.DEBUG), ("warning", logging.WARNING), ("10", 10), ("bogus", logging.INFO)],
)
def test_parse_level(level, expected):
    assert logging_setup._parse_level(level) == expected


def test_parse_level_reads_env(monkeypatch):
    monkeypatch.setenv("ACHBUILDER_LOG_LEVEL", "ERROR")
    assert logging_setup._parse_level(None) == logging.ERROR


def test_configure_logging_attaches_one_handler(monkeypatch):
    logger = logging.getLogger("achbuilder")
    monkeypatch.setattr(logging_setup, "_CONFIGURED", False)
    monkeypatch.setattr(logger, "handlers", [])
    monkeypatch.setattr(logger, "propagate", True)
    monkeypatch.setattr(logger, "level", logger.level)
    stream = io.StringIO()

    logging_setup.configure_logging("INFO", stream=stream)
    logging_setup.configure_logging("DEBUG", stream=stream)
    logging_setup.get_logger("achbuilder.builder").info("hello")

    assert len(logger.handlers) == 1
    assert "achbuilder.builder INFO hello" in stream.getvalue()
