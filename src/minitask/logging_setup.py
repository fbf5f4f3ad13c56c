from __future__ import annotations

import logging
import sys

_HANDLER_NAME = "minitask-stderr"


def setup_logging(verbose: bool = False) -> None:
    """
    Route the package's log records to stderr.

    - WARNING and above by default (corruption recovery, backup failures)
    - DEBUG with verbose, prefixed with the logger name

    Call once per CLI invocation. A handler from an earlier call is replaced
    so records always go to the current sys.stderr.
    """
    logger = logging.getLogger("minitask")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False

    for h in list(logger.handlers):
        if h.get_name() == _HANDLER_NAME:
            logger.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    if verbose:
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)
