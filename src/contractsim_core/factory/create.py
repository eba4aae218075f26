# src/contractsim_core/factory/create.py
"""
Provides `create_simulator`, the single public entry point that turns a
`SimulatorConfig` into a ready-to-subclass simulator class.

The generated class removes all per-contract boilerplate:

1.  **Option Resolution:** caller-supplied options win; anything left unset
    falls back to the config's defaults (private state, witnesses) or to the
    framework defaults (an all-zero deployer identity, a random address).
2.  **Engine Binding:** the engine is built from the witness table and rebuilt
    whenever that table changes. Rebuilding drops the cached operation tables,
    because they close over the superseded engine, but keeps the context.
3.  **Initialization:** the context manager runs the contract initializer
    exactly once. If it fails, construction fails and no instance exists.
4.  **Public State:** always re-derived from the current ledger handle on
    read. Nothing is memoized, so a read can never be stale.
"""
import logging
from typing import Any, Dict, Mapping, Sequence, Type, TypeVar, Union

from ..core.context_manager import CircuitContextManager
from ..core.simulator import ContractSimulator
from ..runtime.addresses import DEFAULT_COIN_PUBLIC_KEY, sample_contract_address
from ..runtime.context import WitnessContext
from ..runtime.contract import (
    ContractEngine,
    RawOperation,
    WitnessTable,
    extract_impure_operations,
    extract_pure_operations,
)
from .config import SimulatorConfig
from .options import SimulatorOptions, resolve_options

logger = logging.getLogger(__name__)

P = TypeVar("P")
L = TypeVar("L")

OptionsLike = Union[None, SimulatorOptions, Mapping[str, Any]]


def create_simulator(config: SimulatorConfig[P, L]) -> Type[ContractSimulator[P, L]]:
    """
    Creates a simulator class for the contract described by `config`.

    Args:
        config: How to build the engine, the default private state and witness
                table, how to transform constructor arguments and how to read
                the public ledger.

    Returns:
        A `ContractSimulator` subclass whose constructor has the signature
        `(contract_args: Sequence = (), options: OptionsLike = None)`.

    Example:
        CounterSimulatorBase = create_simulator(SimulatorConfig(
            contract_factory=CounterContract,
            default_private_state=dict,
            ledger_extractor=counter_ledger,
            witnesses_factory=counter_witnesses,
        ))
    """

    class GeneratedSimulator(ContractSimulator[P, L]):
        def __init__(self, contract_args: Sequence[Any] = (), options: OptionsLike = None):
            super().__init__()
            resolved = resolve_options(options)

            private_state = resolved.private_state
            if private_state is None:
                private_state = config.default_private_state()
            witnesses = resolved.witnesses
            if witnesses is None:
                witnesses = config.witnesses_factory()
            coin_pk = resolved.coin_pk if resolved.coin_pk is not None else DEFAULT_COIN_PUBLIC_KEY
            contract_address = resolved.contract_address
            if contract_address is None:
                contract_address = sample_contract_address()

            self._witnesses: WitnessTable = dict(witnesses)
            self.contract: ContractEngine = config.contract_factory(self._witnesses)

            processed_args = config.contract_args(*contract_args)

            self.circuit_context_manager = CircuitContextManager(
                self.contract,
                private_state,
                coin_pk,
                contract_address,
                *processed_args,
            )
            self._contract_address: str = self.circuit_context.transaction_context.address
            logger.info(f"{type(self).__name__} ready at address {self._contract_address}.")

        @property
        def contract_address(self) -> str:
            return self._contract_address

        def get_public_state(self) -> L:
            """Extracts the public state from the current ledger handle."""
            return config.ledger_extractor(self.circuit_context.transaction_context.state)

        def _pure_operations(self) -> Dict[str, RawOperation]:
            return extract_pure_operations(self.contract)

        def _impure_operations(self) -> Dict[str, RawOperation]:
            return extract_impure_operations(self.contract)

        # --- Witness management ---

        @property
        def witnesses(self) -> WitnessTable:
            """A copy of the current witness table."""
            return dict(self._witnesses)

        @witnesses.setter
        def witnesses(self, new_witnesses: WitnessTable):
            """
            Replaces the witness table and rebuilds the engine with it. The
            context, and therefore private and public state, is kept.
            """
            self._witnesses = dict(new_witnesses)
            self.contract = config.contract_factory(self._witnesses)
            self.reset_circuit_proxies()
            logger.info(f"{type(self).__name__}: witness table replaced, engine rebuilt.")

        def override_witness(self, key: str, fn: Any):
            """Replaces one witness function, keeping the others."""
            logger.debug(f"{type(self).__name__}: overriding witness '{key}'.")
            self.witnesses = {**self._witnesses, key: fn}

        def get_witness_context(self) -> WitnessContext[L, P]:
            """The view a witness function would receive right now."""
            ctx = self.circuit_context
            return WitnessContext(
                ledger=self.get_public_state(),
                private_state=ctx.current_private_state,
                contract_address=ctx.transaction_context.address,
            )

    GeneratedSimulator.__name__ = f"{config.name}Simulator"
    GeneratedSimulator.__qualname__ = GeneratedSimulator.__name__
    return GeneratedSimulator
