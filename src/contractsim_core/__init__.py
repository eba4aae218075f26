# src/contractsim_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.debug("ContractSim Core package initialized.")

from .runtime import (
    ContractState, LedgerHandle, LocalState, ConstructorContext, InitialState,
    OperationContext, WitnessContext, PureResult, ImpureResult, ContractEngine,
    constructor_context, empty_local_state,
    to_hex_padded, encode_to_pk, encode_to_address, generate_pub_key_pair,
    dummy_contract_address, sample_contract_address,
)
from .core import (
    CircuitContextManager, CallerIdentityResolver, ContextlessOperations,
    OperationProxyFactory, ContractSimulator, SimulatorCircuits,
    use_circuit_context, use_circuit_context_sender,
    UnknownOperationError, OperationResultError,
)
from .cache import ProxyCache
from .factory import (
    SimulatorConfig, SimulatorOptions, create_simulator, load_simulator_options,
    OptionsFileError, OptionsValidationError,
)
from .errors import ContractSimError, SimulatorConstructionError, DiagnosableError, FrameworkLogicError

__all__ = [
    # Runtime Vocabulary
    "ContractState", "LedgerHandle", "LocalState", "ConstructorContext", "InitialState",
    "OperationContext", "WitnessContext", "PureResult", "ImpureResult", "ContractEngine",
    "constructor_context", "empty_local_state",
    # Identities & Addresses
    "to_hex_padded", "encode_to_pk", "encode_to_address", "generate_pub_key_pair",
    "dummy_contract_address", "sample_contract_address",
    # Core
    "CircuitContextManager", "CallerIdentityResolver", "ContextlessOperations",
    "OperationProxyFactory", "ContractSimulator", "SimulatorCircuits",
    "use_circuit_context", "use_circuit_context_sender",
    "ProxyCache",
    # Factory
    "SimulatorConfig", "SimulatorOptions", "create_simulator", "load_simulator_options",
    # Errors
    "ContractSimError", "SimulatorConstructionError", "DiagnosableError", "FrameworkLogicError",
    "UnknownOperationError", "OperationResultError", "OptionsFileError", "OptionsValidationError",
]
