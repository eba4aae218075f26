# src/contractsim_core/runtime/context.py
"""
Defines the immutable state containers exchanged between the simulator and a
contract engine.

The central object is the `OperationContext`: the complete, unambiguous source of
truth handed to every raw contract operation. It aggregates the private state,
the identity (local) state of the caller, the contract state produced at
deployment and a `LedgerHandle` through which the current public ledger is read.

Every container here is a frozen dataclass. A context is never edited in place;
a "change" is always a new object built with `dataclasses.replace`, which is what
makes the simulator's whole-value commit semantics possible.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Generic, Tuple, TypeVar

P = TypeVar("P")
L = TypeVar("L")


@dataclass(frozen=True)
class ContractState:
    """The deployment-time contract state. `data` holds the raw ledger value."""
    data: Any


@dataclass(frozen=True)
class LedgerHandle:
    """
    Query handle onto the contract's public ledger, bound to a contract address.
    Operations that write to the ledger return a context carrying a new handle.
    """
    state: Any
    address: str

    def with_state(self, new_state: Any) -> "LedgerHandle":
        """Returns a handle on the same address holding `new_state`."""
        return replace(self, state=new_state)


@dataclass(frozen=True)
class LocalState:
    """
    The identity state of the party submitting a call. `coin_public_key` is the
    caller identity operations observe.
    """
    coin_public_key: str
    current_index: int = 0
    inputs: Tuple[Any, ...] = field(default_factory=tuple)
    outputs: Tuple[Any, ...] = field(default_factory=tuple)


def empty_local_state(coin_public_key: str) -> LocalState:
    """Builds a fresh identity state for `coin_public_key`."""
    return LocalState(coin_public_key=coin_public_key)


@dataclass(frozen=True)
class ConstructorContext(Generic[P]):
    """The context handed to a contract's initializer."""
    initial_private_state: P
    initial_local_state: LocalState


def constructor_context(private_state: P, coin_public_key: str) -> ConstructorContext[P]:
    """Builds the constructor context for a deployer identified by `coin_public_key`."""
    return ConstructorContext(
        initial_private_state=private_state,
        initial_local_state=empty_local_state(coin_public_key),
    )


@dataclass(frozen=True)
class InitialState(Generic[P]):
    """The three outputs of a contract initializer."""
    current_private_state: P
    current_contract_state: ContractState
    current_local_state: LocalState


@dataclass(frozen=True)
class OperationContext(Generic[P]):
    """
    The aggregate context passed implicitly into every raw operation call.

    Exactly one live instance exists per simulator and it is owned by the
    `CircuitContextManager`.
    """
    current_private_state: P
    current_local_state: LocalState
    original_state: ContractState
    transaction_context: LedgerHandle

    @property
    def caller(self) -> str:
        """The identity recorded in the context's local state."""
        return self.current_local_state.coin_public_key

    def with_private_state(self, private_state: P) -> "OperationContext[P]":
        return replace(self, current_private_state=private_state)

    def with_ledger_state(self, ledger_state: Any) -> "OperationContext[P]":
        return replace(self, transaction_context=self.transaction_context.with_state(ledger_state))

    def with_local_state(self, local_state: LocalState) -> "OperationContext[P]":
        return replace(self, current_local_state=local_state)


@dataclass(frozen=True)
class WitnessContext(Generic[L, P]):
    """The read-only view a witness (oracle) function receives."""
    ledger: L
    private_state: P
    contract_address: str
