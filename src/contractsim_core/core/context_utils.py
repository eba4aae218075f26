# src/contractsim_core/core/context_utils.py
"""
Helpers that build standalone contexts, for tests that drive raw operations
directly instead of going through a simulator's proxy tables.
"""
from typing import TypeVar

from ..runtime.context import (
    ContractState,
    LedgerHandle,
    OperationContext,
    empty_local_state,
)
from .simulator import ContractSimulator

P = TypeVar("P")


def use_circuit_context(
    private_state: P,
    contract_state: ContractState,
    sender: str,
    contract_address: str,
) -> OperationContext[P]:
    """
    Builds a complete context for `sender` over `contract_state`. The ledger
    handle starts from the contract state's deployment data.
    """
    return OperationContext(
        current_private_state=private_state,
        current_local_state=empty_local_state(sender),
        original_state=contract_state,
        transaction_context=LedgerHandle(contract_state.data, contract_address),
    )


def use_circuit_context_sender(simulator: ContractSimulator, sender: str) -> OperationContext:
    """
    Builds a context carrying `simulator`'s current private state and deployment
    state, submitted by `sender`.
    """
    return use_circuit_context(
        simulator.get_private_state(),
        simulator.get_contract_state(),
        sender,
        simulator.contract_address,
    )
