# src/contractsim_core/core/caller.py
"""
Resolves which identity the next operation call runs as.

Two override slots exist. The single-use slot is set by `as_caller` and is
consumed by the very next invocation, pure or impure, whether it succeeds or
raises. The persistent slot lasts until it is changed or cleared. When neither is
set the identity already recorded in the stored context is used.
"""
import logging
from typing import Optional

from ..runtime.context import OperationContext, empty_local_state

logger = logging.getLogger(__name__)


class CallerIdentityResolver:
    """Holds the two caller override slots of one simulator."""

    def __init__(self):
        self.caller_override: Optional[str] = None
        self.persistent_caller_override: Optional[str] = None

    def set_single_use(self, caller: str):
        self.caller_override = caller
        logger.debug(f"Single-use caller set to {caller}.")

    def set_persistent(self, caller: Optional[str]):
        self.persistent_caller_override = caller
        if caller is None:
            logger.debug("Persistent caller cleared.")
        else:
            logger.debug(f"Persistent caller set to {caller}.")

    def reset(self):
        self.caller_override = None
        self.persistent_caller_override = None

    def consume_single_use(self):
        self.caller_override = None

    @property
    def active_caller(self) -> Optional[str]:
        """
        The override the next call would use, or None when the call falls through
        to the identity stored in the context. `None` is the only "unset" value.
        """
        if self.caller_override is not None:
            return self.caller_override
        return self.persistent_caller_override

    def effective_context(self, context: OperationContext) -> OperationContext:
        """
        Returns a copy of `context` whose identity state reflects the active
        override. `context` itself is never modified.
        """
        caller = self.active_caller
        if caller is None:
            return context
        return context.with_local_state(empty_local_state(caller))
