# src/contractsim_core/core/proxies.py
"""
Turns raw, context-taking contract operations into contextless callables.

A raw operation has the shape `(context, *args) -> PureResult | ImpureResult`.
Test code should not have to thread a context through every call, so the
`OperationProxyFactory` wraps each named operation once, explicitly, into a
`(*args) -> result` function and collects the wrappers into a
`ContextlessOperations` dispatch table.

Two wrappers exist and they differ in exactly one decision:

- **Pure:** the raw function receives the stored context and only the
  `result` is read from what it returns. A returned context, if any, is
  discarded. Nothing is ever written back.
- **Impure:** the raw function receives the *effective* context (the stored
  context with the active caller override applied). On normal return the new
  context is committed as a whole, except that an overridden caller identity is
  swapped back for the stored one. If the raw function raises, nothing is
  committed and the exception reaches the caller untouched.

Both wrappers consume the single-use caller override in a `finally` block, so an
override set with `as_caller` can never leak into a later, unrelated call, even
when the call it was meant for fails.
"""
import functools
import logging
from dataclasses import replace
from typing import Any, Callable, Dict, Iterator, Mapping, Tuple

from ..runtime.context import OperationContext
from ..runtime.contract import RawOperation
from ..runtime.results import ImpureResult, PureResult
from .caller import CallerIdentityResolver
from .exceptions import OperationResultError, UnknownOperationError

logger = logging.getLogger(__name__)


class ContextlessOperations:
    """
    An explicit, prebuilt dispatch table of wrapped operations.

    Operations are reachable as attributes (`table.increment(2)`) or items
    (`table["increment"](2)`). Only names present when the table was built
    resolve; anything else raises `UnknownOperationError`.
    """

    def __init__(self, kind: str, operations: Mapping[str, Callable[..., Any]]):
        self._kind = kind
        self._operations: Dict[str, Callable[..., Any]] = dict(operations)

    @property
    def kind(self) -> str:
        return self._kind

    def names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._operations))

    def __getattr__(self, name: str) -> Callable[..., Any]:
        # Only reached when normal lookup fails, i.e. for operation names.
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        return self[name]

    def __getitem__(self, name: str) -> Callable[..., Any]:
        operations = self.__dict__.get("_operations", {})
        try:
            return operations[name]
        except KeyError:
            raise UnknownOperationError(name, self.__dict__.get("_kind", "unknown"), tuple(sorted(operations))) from None

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._operations)

    def __dir__(self):
        return sorted(set(super().__dir__()) | set(self._operations))

    def __repr__(self) -> str:
        return f"ContextlessOperations(kind={self._kind!r}, operations={list(self.names())})"


class OperationProxyFactory:
    """
    Builds pure and impure contextless wrappers around raw operations.

    The factory does not own any state. It is handed three collaborators:

    Args:
        get_context: Returns the currently stored context.
        commit_context: Replaces the stored context as a whole.
        caller: The resolver owning the caller override slots.
    """

    def __init__(
        self,
        get_context: Callable[[], OperationContext],
        commit_context: Callable[[OperationContext], None],
        caller: CallerIdentityResolver,
    ):
        self._get_context = get_context
        self._commit_context = commit_context
        self._caller = caller

    def wrap_pure(self, name: str, fn: RawOperation) -> Callable[..., Any]:
        """Wraps one raw pure operation. The stored context is never written."""

        @functools.wraps(fn)
        def pure_operation(*args: Any) -> Any:
            try:
                logger.debug(f"Dispatching pure operation '{name}'.")
                outcome = fn(self._get_context(), *args)
                if not isinstance(outcome, (PureResult, ImpureResult)):
                    raise OperationResultError(name, "pure", type(outcome).__name__)
                return outcome.result
            finally:
                # Pure calls do not read the caller, yet still consume a pending
                # single-use override. See test_caller_identity.
                self._caller.consume_single_use()

        return pure_operation

    def wrap_impure(self, name: str, fn: RawOperation) -> Callable[..., Any]:
        """
        Wraps one raw impure operation. The returned context is committed only
        after `fn` returns normally with an `ImpureResult`.
        """

        @functools.wraps(fn)
        def impure_operation(*args: Any) -> Any:
            try:
                stored = self._get_context()
                effective = self._caller.effective_context(stored)
                logger.debug(f"Dispatching impure operation '{name}' as caller {effective.caller}.")
                outcome = fn(effective, *args)
                if not isinstance(outcome, ImpureResult):
                    raise OperationResultError(name, "impure", type(outcome).__name__)
                new_context = outcome.context
                if not isinstance(new_context, OperationContext):
                    raise OperationResultError(
                        name, "impure", f"ImpureResult with a {type(new_context).__name__} context"
                    )

                if effective is not stored:
                    # Only the identity is ephemeral; other identity-state writes are kept.
                    new_context = new_context.with_local_state(
                        replace(new_context.current_local_state, coin_public_key=stored.caller)
                    )
                self._commit_context(new_context)
                logger.debug(f"Committed context after impure operation '{name}'.")
                return outcome.result
            finally:
                self._caller.consume_single_use()

        return impure_operation

    def create_pure_proxy(self, operations: Mapping[str, RawOperation]) -> ContextlessOperations:
        wrapped = {name: self.wrap_pure(name, fn) for name, fn in operations.items()}
        logger.debug(f"Built pure proxy table with {len(wrapped)} operation(s).")
        return ContextlessOperations("pure", wrapped)

    def create_impure_proxy(self, operations: Mapping[str, RawOperation]) -> ContextlessOperations:
        wrapped = {name: self.wrap_impure(name, fn) for name, fn in operations.items()}
        logger.debug(f"Built impure proxy table with {len(wrapped)} operation(s).")
        return ContextlessOperations("impure", wrapped)
