# tests/conftest.py
"""
pytest configuration and fixtures for the rules registry
"""

import textwrap

import pytest

from populator import TransformRegistry
from populator.core.logging_config import PopulatorLogger


class Project:
    pass


class Task:
    pass


@pytest.fixture
def registry():
    """Fresh registry per test, nothing shared between tests"""
    return TransformRegistry()


@pytest.fixture
def project_class():
    return Project


@pytest.fixture
def task_class():
    return Task


@pytest.fixture
def write_document(tmp_path):
    """Write a YAML rules document and return its path"""
    def _write(text: str, name: str = "transforms.yaml"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path
    return _write


@pytest.fixture
def reset_logging():
    yield
    PopulatorLogger.reset()
