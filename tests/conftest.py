import pytest

from calculator_engine import CalculatorEngine
from config import Settings


@pytest.fixture
def engine():
    """Motor nuevo en modo DEG con semilla fija."""
    return CalculatorEngine(Settings(random_seed=1234))


@pytest.fixture
def notifications(engine):
    received = []
    engine.add_listener(received.append)
    return received
