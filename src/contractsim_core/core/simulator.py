# src/contractsim_core/core/simulator.py
"""
Defines `ContractSimulator`, the abstract base every generated simulator
extends.

The base class composes the three cooperating parts of a simulator:

- a `CircuitContextManager` (owns the one live context; assigned by the
  concrete subclass once the contract has been initialized),
- a `CallerIdentityResolver` (the single-use and persistent caller slots),
- an `OperationProxyFactory` plus a `ProxyCache` (lazily built contextless
  operation tables, dropped whenever the engine behind them changes).

Every one of these is an instance attribute. Two simulators never share caller
overrides, contexts or proxy tables.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, NamedTuple, Optional, TypeVar

from ..cache import ProxyCache
from ..errors import FrameworkLogicError
from ..runtime.context import ContractState, OperationContext
from ..runtime.contract import RawOperation
from .caller import CallerIdentityResolver
from .context_manager import CircuitContextManager
from .proxies import ContextlessOperations, OperationProxyFactory

logger = logging.getLogger(__name__)

P = TypeVar("P")
L = TypeVar("L")


class SimulatorCircuits(NamedTuple):
    """The two contextless operation tables of a simulator."""
    pure: ContextlessOperations
    impure: ContextlessOperations


class ContractSimulator(ABC, Generic[P, L]):
    """
    Abstract base class for simulating contract behavior.

    Subclasses must assign `circuit_context_manager` during construction and
    implement `get_public_state`, `contract_address` and the two operation
    table hooks.
    """

    def __init__(self):
        self.circuit_context_manager: Optional[CircuitContextManager[P]] = None
        self._caller = CallerIdentityResolver()
        self._proxy_cache = ProxyCache(owner=type(self).__name__)
        self._proxy_factory = OperationProxyFactory(
            get_context=lambda: self.circuit_context,
            commit_context=self._commit_context,
            caller=self._caller,
        )

    # --- Abstract surface ---

    @property
    @abstractmethod
    def contract_address(self) -> str:
        """The deployed contract's address."""

    @abstractmethod
    def get_public_state(self) -> L:
        """Returns the public ledger state derived from the current context."""

    @abstractmethod
    def _pure_operations(self) -> Dict[str, RawOperation]:
        """Raw pure operations of the current engine."""

    @abstractmethod
    def _impure_operations(self) -> Dict[str, RawOperation]:
        """Raw impure operations of the current engine."""

    # --- Caller identity ---

    def as_caller(self, caller: str) -> "ContractSimulator[P, L]":
        """
        Runs the next operation call, and only the next one, as `caller`.

        Returns:
            This simulator, for chaining: `sim.as_caller(OWNER).circuits.impure.pause()`.
        """
        self._caller.set_single_use(caller)
        return self

    def set_persistent_caller(self, caller: Optional[str]):
        """Runs all following calls as `caller` until changed; None clears it."""
        self._caller.set_persistent(caller)

    def reset_caller(self) -> "ContractSimulator[P, L]":
        """Clears both the single-use and the persistent caller override."""
        self._caller.reset()
        return self

    @property
    def caller_override(self) -> Optional[str]:
        return self._caller.caller_override

    @property
    def persistent_caller_override(self) -> Optional[str]:
        return self._caller.persistent_caller_override

    def get_caller_context(self) -> OperationContext[P]:
        """
        The context the next impure call would receive: the stored context with
        the active caller override applied. The stored context is not modified.
        """
        return self._caller.effective_context(self.circuit_context)

    # --- State access ---

    @property
    def circuit_context(self) -> OperationContext[P]:
        return self._require_context_manager().get_context()

    @circuit_context.setter
    def circuit_context(self, ctx: OperationContext[P]):
        self._require_context_manager().set_context(ctx)

    def get_private_state(self) -> P:
        return self.circuit_context.current_private_state

    def get_contract_state(self) -> ContractState:
        """Returns the contract state recorded at deployment."""
        return self.circuit_context.original_state

    def update_private_state(self, new_private_state: P):
        """Injects a private state directly, bypassing operation execution."""
        self._require_context_manager().update_private_state(new_private_state)

    # --- Operation proxies ---

    @property
    def pure_circuit(self) -> ContextlessOperations:
        """The pure operation table, built on first access."""
        return self._proxy_cache.get_or_build(
            'pure', lambda: self._proxy_factory.create_pure_proxy(self._pure_operations())
        )

    @property
    def impure_circuit(self) -> ContextlessOperations:
        """The impure operation table, built on first access."""
        return self._proxy_cache.get_or_build(
            'impure', lambda: self._proxy_factory.create_impure_proxy(self._impure_operations())
        )

    @property
    def circuits(self) -> SimulatorCircuits:
        return SimulatorCircuits(pure=self.pure_circuit, impure=self.impure_circuit)

    def reset_circuit_proxies(self):
        """Drops the cached operation tables; they are rebuilt on next access."""
        self._proxy_cache.invalidate()

    def get_proxy_cache_stats(self) -> Dict[str, int]:
        return self._proxy_cache.get_stats()

    # --- Internals ---

    def _commit_context(self, ctx: OperationContext[P]):
        self.circuit_context = ctx

    def _require_context_manager(self) -> CircuitContextManager[P]:
        if self.circuit_context_manager is None:
            raise FrameworkLogicError(
                f"'{type(self).__name__}' has no context manager. Subclasses must assign "
                "`circuit_context_manager` in their constructor before any state access."
            )
        return self.circuit_context_manager

    def __repr__(self) -> str:
        address: Any = "<uninitialized>"
        if self.circuit_context_manager is not None:
            address = self.contract_address
        return f"<{type(self).__name__} at {address}>"
