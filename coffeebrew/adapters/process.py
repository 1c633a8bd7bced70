"""
Process adapter — replace the current process with the core.
"""

from __future__ import annotations

import logging
import os
import sys

from coffeebrew.core.models.environment import HandoffPlan

logger = logging.getLogger(__name__)


def exec_handoff(plan: HandoffPlan) -> str:
    """Replace this process with ``plan``.

    Does not return on success. On failure (interpreter missing or not
    executable) returns a one-line error message instead of raising.
    """
    argv = [plan.interpreter, *plan.argv]
    logger.debug("exec %s (%d env vars)", " ".join(argv), len(plan.env))

    # Buffered output would be lost once the process image is replaced.
    for handler in logging.getLogger().handlers:
        handler.flush()
    sys.stdout.flush()
    sys.stderr.flush()

    try:
        os.execve(plan.interpreter, argv, plan.env)
    except OSError as e:
        return f"Cannot run {plan.interpreter}: {e.strerror or e}"
