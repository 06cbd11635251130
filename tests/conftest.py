"""Shared fixtures: every test runs against fresh registries."""

import pytest

from heredity import Runtime, set_runtime


@pytest.fixture(autouse=True)
def runtime():
    rt = Runtime()
    previous = set_runtime(rt)
    yield rt
    set_runtime(previous)
