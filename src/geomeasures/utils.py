"""
utils.py

Small utility helpers shared by the measurement engines. This file contains a
robust logging helper and the missing-value normalization used on raw engine
output. Keep implementations small and testable.

The public helpers added here:
- `safe_log_exception(msg, exc, **ctx)` : logs exceptions robustly
- `as_missing(values)` : float array with non-finite entries set to NaN

"""

from typing import Any
import sys
import logging
import numpy as np

logger = logging.getLogger(__name__)


def safe_log_exception(msg: str, exc: Exception, **ctx: Any) -> None:
    """Log an exception robustly.

    Attempts to call `logger.exception`. If logging fails for any reason,
    falls back to writing a compact message to `sys.stderr`.
    """
    try:
        if ctx:
            ctx_s = ' | '.join(f"{k}={v!r}" for k, v in ctx.items())
            logger.exception('%s | %s | %s', msg, exc, ctx_s)
        else:
            logger.exception('%s | %s', msg, exc)
    except Exception:
        # Minimal fallback: write a compact failure message to stderr.
        try:
            sys.stderr.write(f'LOGGING FAILURE: {msg} {exc}\n')
        except Exception:
            # Give up silently; don't allow logging fallback to raise.
            pass


def as_missing(values) -> np.ndarray:
    """Return ``values`` as a float array with NaN/inf normalized to NaN.

    NaN is the single missing-value marker used throughout geomeasures.
    """
    arr = np.array(values, dtype=float)
    arr[~np.isfinite(arr)] = np.nan
    return arr
