"""
memostate — incremental computation over immutable state.

    from memostate import deriver as D   # Nodes and combinators
    from memostate import memo as M      # State + derived value facade
    from memostate import equality as E  # When is an input "the same"?
"""

import logging

from memostate import equality
from memostate import deriver
from memostate import memo
from memostate._types import (
    Result,
    Ok,
    Error,
    Option,
    Some,
    Nothing,
    Effects,
    Batcher,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = (
    "equality",
    "deriver",
    "memo",
    "Result",
    "Ok",
    "Error",
    "Option",
    "Some",
    "Nothing",
    "Effects",
    "Batcher",
)
