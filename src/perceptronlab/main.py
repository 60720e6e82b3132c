"""
Application Initialization
==========================
This module builds the session, the store and the main window, and starts
the Qt Event Loop.

Why is this file needed?
------------------------
It acts as the "Dependency Injection" root. It:
1. Reads command-line flags into a SessionConfig.
2. Instantiates the Session and the Store that owns it.
3. Instantiates the Main Window (View) and passes it the Store.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from perceptronlab.config import SessionConfig, CANVAS_WIDTH
from perceptronlab.logging_config import setup_logging
from perceptronlab.model.perceptron import Activation
from perceptronlab.model.state import new_session


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="perceptronlab",
        description="Train a single perceptron by clicking points onto a canvas.",
    )
    parser.add_argument(
        "--activation", choices=[a.value for a in Activation], default=Activation.STEP.value,
        help="activation function of the neuron (default: step)",
    )
    parser.add_argument(
        "--random-weights", action="store_true",
        help="start from random weights instead of all 1.0",
    )
    parser.add_argument("--seed", type=int, default=None, help="seed for random weights")
    parser.add_argument(
        "--size", type=int, default=CANVAS_WIDTH,
        help=f"canvas width and height in pixels (default: {CANVAS_WIDTH})",
    )
    parser.add_argument("--debug", action="store_true", help="log every message")
    parser.add_argument("--log-file", default=None, help="also write logs to this file")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> SessionConfig:
    if args.size <= 0:
        raise SystemExit(f"--size must be positive, got {args.size}")
    return SessionConfig(
        width=args.size,
        height=args.size,
        activation=Activation(args.activation),
        random_weights=args.random_weights,
        seed=args.seed,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    # 1. Setup Logging (Console + Optional File)
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO, log_file=args.log_file)

    # Qt is imported late so --help works without a display
    from perceptronlab.app.application import create_app
    from perceptronlab.app.state import Store
    from perceptronlab.app.ui.main_window import MainWindow

    # 2. Create the Qt Application
    app = create_app()

    # 3. Initialize the Data Model
    store = Store(new_session(config_from_args(args)))

    # 4. Initialize the Main Window, passing the store
    window = MainWindow(store)
    window.show()

    # 5. Start Event Loop
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
