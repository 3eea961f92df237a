from __future__ import annotations

import logging


def configure_optkit_logging(*, level: int = logging.INFO, fmt: str = "%(message)s") -> None:
    """
    Attach a console handler to the "optkit" logger.

    Runs stay quiet unless this is called. At INFO the cooperative
    coordinator reports run start and stop and the console observer its
    progress lines; at DEBUG slice ownership, per-round best fitness and
    every solution recorded by a niching problem are logged as well.

    Nothing is attached when the root or the "optkit" logger already has
    handlers, so repeated calls and host configuration are left alone.
    """
    root = logging.getLogger()
    optkit_logger = logging.getLogger("optkit")

    # If the user already configured logging, don't interfere.
    if root.handlers or optkit_logger.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt))
    optkit_logger.addHandler(handler)
    optkit_logger.setLevel(level)
    optkit_logger.propagate = False


__all__ = ["configure_optkit_logging"]
