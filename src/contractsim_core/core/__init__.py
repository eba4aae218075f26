# src/contractsim_core/core/__init__.py
from .exceptions import UnknownOperationError, OperationResultError
from .context_manager import CircuitContextManager
from .caller import CallerIdentityResolver
from .proxies import ContextlessOperations, OperationProxyFactory
from .simulator import ContractSimulator, SimulatorCircuits
from .context_utils import use_circuit_context, use_circuit_context_sender

__all__ = [
    # Exceptions
    "UnknownOperationError",
    "OperationResultError",
    # Core Classes
    "CircuitContextManager",
    "CallerIdentityResolver",
    "ContextlessOperations",
    "OperationProxyFactory",
    "ContractSimulator",
    "SimulatorCircuits",
    # Context Helpers
    "use_circuit_context",
    "use_circuit_context_sender",
]
