"""
Messages & Reducer
==================
The single entry point for changing a `Session`.

The UI never edits the session directly. It builds one of the message classes
below and hands it to `update()`, which returns the next session. Messages
that do not change anything return the very same session object, so callers
can use an identity check to skip repaints.

The training loop is part of the reducer:

    Idle --StartTraining--> Training   (epoch counter reset to 0)
    Training --StopTraining--> Idle
    Training --Tick--> Training        (one epoch applied)
    Training --Tick--> Idle            (epoch limit reached, no epoch applied)

`Tick` and `StopTraining` have no effect while idle.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
import logging
from typing import Optional, Union

import numpy as np

from perceptronlab.model import coordinates, perceptron
from perceptronlab.model.state import DataPoint, Session, TrainingState

logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


# Marker for "use the session's currently selected label"
UNSET = _Unset()


@dataclass(frozen=True)
class AddPoint:
    """Point in graph space."""
    x1: float
    x2: float
    expected: Union[Optional[float], _Unset] = UNSET


@dataclass(frozen=True)
class AddCanvasPoint:
    """Point in canvas (pixel) space, labelled with the selected label."""
    px: float
    py: float


@dataclass(frozen=True)
class RemovePoint:
    id: str


@dataclass(frozen=True)
class ClearPoints:
    pass


@dataclass(frozen=True)
class SetWeight:
    """`value` may be raw user text; unparsable text becomes 0.0."""
    id: str
    value: Union[float, str]


@dataclass(frozen=True)
class SetLabel:
    value: Optional[float]


@dataclass(frozen=True)
class RandomizeWeights:
    seed: Optional[int] = None


@dataclass(frozen=True)
class StartTraining:
    pass


@dataclass(frozen=True)
class StopTraining:
    pass


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class Step:
    """Train a single epoch by hand."""
    pass


Message = Union[
    AddPoint, AddCanvasPoint, RemovePoint, ClearPoints, SetWeight, SetLabel,
    RandomizeWeights, StartTraining, StopTraining, Tick, Step,
]


def update(session: Session, message: Message) -> Session:
    """
    Return the session that results from applying `message` to `session`.

    Raises:
        KeyError: SetWeight with an id that is not w1, w2 or bias.
        TypeError: Unknown message type.
    """
    logger.debug(f"update: {message}")

    match message:
        case AddPoint(x1=x1, x2=x2, expected=expected):
            label = session.next_label if expected is UNSET else expected
            return _add_point(session, x1, x2, label)

        case AddCanvasPoint(px=px, py=py):
            x1 = coordinates.to_graph(session.dimensions.width, px)
            x2 = coordinates.to_graph_y(session.dimensions.height, py)
            return _add_point(session, x1, x2, session.next_label)

        case RemovePoint(id=point_id):
            if session.find_point(point_id) is None:
                logger.warning(f"No point with id '{point_id}' to remove.")
                return session
            return replace(session, points=tuple(p for p in session.points if p.id != point_id))

        case ClearPoints():
            if not session.points:
                return session
            return replace(session, points=())

        case SetWeight(id=weight_id, value=value):
            if isinstance(value, str):
                value = perceptron.parse_weight(value)
            return replace(session, weights=session.weights.with_value(weight_id, value))

        case SetLabel(value=value):
            return replace(session, next_label=value)

        case RandomizeWeights(seed=seed):
            rng = np.random.default_rng(seed)
            weights = perceptron.random_weights(session.dimensions.width, rng)
            return replace(session, weights=weights)

        case StartTraining():
            logger.info("Training started.")
            return replace(session, training=TrainingState(is_training=True, epochs=0))

        case StopTraining():
            if not session.training.is_training:
                return session
            logger.info(f"Training stopped after {session.training.epochs} epochs.")
            return replace(session, training=replace(session.training, is_training=False))

        case Tick():
            return _tick(session)

        case Step():
            return _apply_epoch(session)

        case _:
            raise TypeError(f"Unknown message: {message!r}")


def _add_point(session: Session, x1: float, x2: float, expected: Optional[float]) -> Session:
    point = DataPoint(id=f"p{session.next_serial}", x1=float(x1), x2=float(x2), expected=expected)
    return replace(
        session,
        points=session.points + (point,),
        next_serial=session.next_serial + 1,
    )


def _tick(session: Session) -> Session:
    training = session.training
    if not training.is_training:
        return session
    if training.epochs >= session.epoch_limit:
        logger.info(f"Epoch limit of {session.epoch_limit} reached, training halted.")
        return replace(session, training=replace(training, is_training=False))
    return _apply_epoch(session)


def _apply_epoch(session: Session) -> Session:
    weights = perceptron.train_epoch(
        session.weights,
        session.points,
        session.activation,
        session.learning_rate,
    )
    return replace(
        session,
        weights=weights,
        training=replace(session.training, epochs=session.training.epochs + 1),
    )
