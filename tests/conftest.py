"""
Shared pytest fixtures for all tests.

Provides a sample controller, an in-memory recorder, a proxy wired to both
and a table view host that talks to the proxy.
"""

import pytest

from delegate_proxy.demo import SampleTableController, TableView
from delegate_proxy.proxy import InterceptingProxy
from delegate_proxy.recorder import MemoryRecorder


class RowCounter:
    """Target with one method, used by the narrow dispatch tests."""

    def __init__(self):
        self.calls = []

    def number_of_rows(self, section):
        self.calls.append(("number_of_rows", section))
        return 5


@pytest.fixture
def recorder():
    """Recorder that keeps every call record."""
    return MemoryRecorder()


@pytest.fixture
def row_counter():
    return RowCounter()


@pytest.fixture
def controller():
    """Controller with a small table: 2 sections of 3 rows."""
    return SampleTableController(sections=2, rows=3)


@pytest.fixture
def proxy(controller, recorder):
    """Proxy in front of the sample controller."""
    return InterceptingProxy.create(controller, recorder=recorder)


@pytest.fixture
def table(proxy):
    """Table view whose data source and delegate are the proxy."""
    return TableView(data_source=proxy, delegate=proxy)
