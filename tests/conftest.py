import os

# Qt tests run without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from perceptronlab.model.state import DataPoint, Dimensions, Session


@pytest.fixture
def session() -> Session:
    return Session(dimensions=Dimensions(500, 500))


@pytest.fixture
def and_gate() -> tuple[DataPoint, ...]:
    return (
        DataPoint("p1", 0.0, 0.0, 0.0),
        DataPoint("p2", 1.0, 0.0, 0.0),
        DataPoint("p3", 0.0, 1.0, 0.0),
        DataPoint("p4", 1.0, 1.0, 1.0),
    )
