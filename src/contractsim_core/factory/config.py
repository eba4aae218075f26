# src/contractsim_core/factory/config.py
from dataclasses import dataclass
from typing import Any, Callable, Generic, Sequence, TypeVar

from ..runtime.contract import ContractEngine, WitnessTable

P = TypeVar("P")
L = TypeVar("L")


def no_contract_args(*args: Any) -> Sequence[Any]:
    """`contract_args` transform for contracts whose constructor takes nothing."""
    return []


@dataclass(frozen=True)
class SimulatorConfig(Generic[P, L]):
    """
    Everything `create_simulator` needs to know about one contract.

    Attributes:
        contract_factory: Builds the engine bound to a witness table.
        default_private_state: Produces the private state used when the
            options do not supply one.
        contract_args: Transforms the simulator's constructor arguments into
            the positional arguments of the contract initializer, e.g.
            `lambda owner, salt: [owner, salt]`.
        ledger_extractor: Derives the public state from the raw ledger value.
        witnesses_factory: Produces the default witness table.
        name: Used to name the generated class in logs and reprs.
    """
    contract_factory: Callable[[WitnessTable], ContractEngine]
    default_private_state: Callable[[], P]
    ledger_extractor: Callable[[Any], L]
    witnesses_factory: Callable[[], WitnessTable]
    contract_args: Callable[..., Sequence[Any]] = no_contract_args
    name: str = "Generated"
