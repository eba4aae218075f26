# src/contractsim_core/errors.py
import logging
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class ContractSimError(Exception):
    """Base class for all custom, user-facing errors in ContractSim Core."""
    pass

class SimulatorConstructionError(ContractSimError):
    """
    Raised when a simulator cannot be brought into its ready state, most commonly
    because the contract's initializer raised. The message is a pre-formatted,
    user-friendly diagnostic report; the original exception is chained.
    """
    pass

class FrameworkLogicError(RuntimeError):
    """
    Raised when an internal invariant of the framework itself is violated.
    Seeing this always indicates a bug in ContractSim Core, never in user code.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """Anything that can render a diagnostic report about itself."""
    def get_diagnostic_report(self) -> str:
        ...


class DiagnosableError(Exception, Diagnosable):
    """
    Base of the errors the framework raises about its own misuse: unknown
    operations, malformed operation results and bad simulator options.
    Exceptions raised by contract operations never take this form.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError


# --- Report Formatting ---

def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Renders the multi-line report shown to test authors. Only the header lines
    whose keys are present in `context` (simulator, operation, contract_address,
    source_file) are emitted.
    """
    lines = [
        "\n",
        "============== ContractSim Core: Actionable Diagnostic Report ==============",
        f"Error Type:       {error_type}",
    ]
    if simulator := context.get('simulator'):
        lines.append(f"Simulator:        {simulator}")
    if operation := context.get('operation'):
        lines.append(f"Operation:        {operation}")
    if contract_address := context.get('contract_address'):
        lines.append(f"Contract Address: {contract_address}")
    if source_file := context.get('source_file'):
        lines.append(f"Source File:      {source_file}")

    lines.append("\nDetails:")
    for line in details.splitlines():
        lines.append(f"  {line}")

    if suggestion:
        lines.append("\nSuggestion:")
        for line in suggestion.splitlines():
            lines.append(f"  {line}")

    lines.append("============================================================================")
    return "\n".join(lines)
