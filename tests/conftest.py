from typing import Optional

import pytest

from restaurant_orders import DishFactory, OrderIdGenerator, OrderObserver


class RecordingObserver(OrderObserver):
    """Observer that remembers every state it was told about"""

    def __init__(self, name: str, journal: Optional[list] = None):
        self.name = name
        self.calls = []
        self._journal = journal

    def on_order_changed(self, order) -> None:
        self.calls.append(order.get_state())
        if self._journal is not None:
            self._journal.append(self.name)


@pytest.fixture
def factory():
    return DishFactory()


@pytest.fixture
def id_generator():
    return OrderIdGenerator()


@pytest.fixture
def journal():
    """Shared call log for checking notification order across observers"""
    return []


@pytest.fixture
def make_observer(journal):
    def _make(name):
        return RecordingObserver(name, journal)
    return _make
