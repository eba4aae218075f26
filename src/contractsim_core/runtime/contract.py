# src/contractsim_core/runtime/contract.py
"""
Defines the minimal contract the simulator expects from a contract engine.

The engine is an external collaborator: compiled contract artifacts, or hand
written fakes in a test suite, are accepted as long as they satisfy the
`ContractEngine` protocol below. Nothing in the simulator inspects an engine
beyond these three members.

Key elements:
- RawOperation: the signature of an operation before the simulator wraps it.
- ContractEngine: the structural protocol for engines.
- extract_pure_operations / extract_impure_operations: split an engine's
  operation tables into the two categories the proxy layer wraps.
"""
import logging
from typing import (
    Any,
    Callable,
    Dict,
    Mapping,
    Protocol,
    runtime_checkable,
)

from .context import ConstructorContext, InitialState
from .results import OperationResult

logger = logging.getLogger(__name__)


# (context, *args) -> PureResult | ImpureResult
RawOperation = Callable[..., OperationResult]

# name -> witness function; witnesses are called by the engine, never by the simulator.
WitnessTable = Dict[str, Callable[..., Any]]


@runtime_checkable
class ContractEngine(Protocol):
    """
    The structural contract of a contract engine.

    ARCHITECTURAL CONTRACT:
    1.  `initial_state` is called exactly once per simulator, with a
        `ConstructorContext` followed by the transformed constructor arguments.
    2.  `circuits` maps every operation name (pure and impure) to its raw
        function; `impure_circuits` maps the state-mutating subset.
    3.  A raw function receives an `OperationContext` first. Impure functions
        MUST return an `ImpureResult`; pure functions may return either tag.
    """

    circuits: Mapping[str, RawOperation]
    impure_circuits: Mapping[str, RawOperation]

    def initial_state(self, ctx: ConstructorContext, *args: Any) -> InitialState:
        ...


def extract_pure_operations(engine: ContractEngine) -> Dict[str, RawOperation]:
    """Pure operations are those in `circuits` but not in `impure_circuits`."""
    impure_names = set(engine.impure_circuits)
    pure = {name: fn for name, fn in engine.circuits.items() if name not in impure_names}
    logger.debug(f"Extracted {len(pure)} pure operation(s) from {type(engine).__name__}.")
    return pure


def extract_impure_operations(engine: ContractEngine) -> Dict[str, RawOperation]:
    return dict(engine.impure_circuits)
