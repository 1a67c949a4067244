"""Shared fixtures: configs, a fake registry and logger cleanup."""

import logging

import pytest

from icon_merge.config import IconsConfig
from tests.helpers import REGISTRY, FakeFetcher


@pytest.fixture
def fetcher():
    return FakeFetcher(REGISTRY)


@pytest.fixture
def config():
    """React, TypeScript, single-file output with provenance tracking."""
    return IconsConfig(output="src/icons.tsx", framework="react")


@pytest.fixture
def folder_config():
    return IconsConfig(output={"type": "folder", "path": "src/icons"}, framework="react")


@pytest.fixture
def always_yes():
    return lambda message: True


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """Drop handlers installed by setup_logging so each test gets fresh streams."""
    yield
    logger = logging.getLogger("icon_merge")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
