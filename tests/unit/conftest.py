"""Unit test fixtures — file config and builders at each lifecycle stage."""

from __future__ import annotations

import pytest

from achbuilder.builder import ACHFileBuilder
from achbuilder.core.config import FileConfig
from tests.fakes import FILE_IDENTIFIERS, fixed_clock


@pytest.fixture
def file_config() -> FileConfig:
    return FileConfig(**FILE_IDENTIFIERS)


@pytest.fixture
def builder(file_config):
    return ACHFileBuilder(file_config, clock=fixed_clock)


@pytest.fixture
def header_builder(builder):
    builder.make_file_header_record()
    return builder
