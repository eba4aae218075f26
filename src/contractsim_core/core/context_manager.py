# src/contractsim_core/core/context_manager.py
"""
Defines the `CircuitContextManager`, the sole owner of a simulator's
`OperationContext`.

The manager runs the contract initializer exactly once, assembles the first
context from its outputs and afterwards only ever swaps whole context objects.
There is no field-level diffing and no in-place mutation: every change,
including a direct private-state injection, produces a new frozen context.
"""
import logging
from typing import Any, Generic, TypeVar

from ..errors import SimulatorConstructionError, format_diagnostic_report
from ..runtime.context import (
    InitialState,
    LedgerHandle,
    OperationContext,
    constructor_context,
)
from ..runtime.contract import ContractEngine

logger = logging.getLogger(__name__)

P = TypeVar("P")


class CircuitContextManager(Generic[P]):
    """
    Initializes and holds the single live `OperationContext` of a simulator.
    """

    def __init__(
        self,
        contract: ContractEngine,
        private_state: P,
        coin_pk: str,
        contract_address: str,
        *contract_args: Any,
    ):
        """
        Runs the contract initializer and builds the first context.

        Args:
            contract: The engine whose `initial_state` is invoked (once).
            private_state: The private state handed to the initializer.
            coin_pk: The deployer identity; seeds the identity state.
            contract_address: The address the ledger handle is bound to.
            *contract_args: Transformed constructor arguments for the initializer.

        Raises:
            SimulatorConstructionError: If the initializer raises or returns
                something other than an `InitialState`. The original exception
                is chained and no context is kept.
        """
        init_ctx = constructor_context(private_state, coin_pk)
        engine_name = type(contract).__name__

        try:
            initial = contract.initial_state(init_ctx, *contract_args)
        except Exception as e:
            logger.error(f"Initializer of '{engine_name}' failed: {e}")
            report = format_diagnostic_report(
                error_type=f"Contract Initialization Failed ({type(e).__name__})",
                details=f"The contract initializer raised: {e}",
                suggestion="Check the constructor arguments passed to the simulator. The original exception is chained as __cause__.",
                context={'simulator': engine_name, 'contract_address': contract_address}
            )
            raise SimulatorConstructionError(report) from e

        if not isinstance(initial, InitialState):
            report = format_diagnostic_report(
                error_type="Malformed Initializer Result",
                details=(
                    f"The initializer of '{engine_name}' returned '{type(initial).__name__}'.\n"
                    "Expected InitialState(current_private_state, current_contract_state, current_local_state)."
                ),
                suggestion="Return an InitialState from the engine's `initial_state` method.",
                context={'simulator': engine_name, 'contract_address': contract_address}
            )
            raise SimulatorConstructionError(report)

        self._context: OperationContext[P] = OperationContext(
            current_private_state=initial.current_private_state,
            current_local_state=initial.current_local_state,
            original_state=initial.current_contract_state,
            transaction_context=LedgerHandle(
                state=initial.current_contract_state.data,
                address=contract_address,
            ),
        )
        logger.debug(f"Context initialized for '{engine_name}' at address {contract_address}.")

    @property
    def context(self) -> OperationContext[P]:
        return self._context

    def get_context(self) -> OperationContext[P]:
        """Returns the current context."""
        return self._context

    def set_context(self, new_context: OperationContext[P]):
        """Replaces the whole context with `new_context`."""
        if not isinstance(new_context, OperationContext):
            raise TypeError(f"Expected an OperationContext, got '{type(new_context).__name__}'.")
        self._context = new_context

    def update_private_state(self, new_private_state: P):
        """
        Replaces only the private state. The ledger handle and identity state of
        the current context carry over unchanged.
        """
        self._context = self._context.with_private_state(new_private_state)
        logger.debug("Private state replaced by direct injection.")
