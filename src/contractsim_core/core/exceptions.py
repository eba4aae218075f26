# src/contractsim_core/core/exceptions.py
"""
Defines the diagnosable exceptions raised by the simulator core while
dispatching operations.

Only misuse of the framework itself is reported through these types. An
exception raised *inside* a raw contract operation (a failed assertion, an
insufficient balance, ...) is never converted: it reaches the caller exactly as
the operation raised it, with the stored context left untouched.
"""
from dataclasses import dataclass
from typing import Tuple

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass(eq=False)
class UnknownOperationError(DiagnosableError, AttributeError, KeyError):
    """
    Raised when a contextless operation table is asked for a name the engine
    does not define. It is both an `AttributeError` (attribute access) and a
    `KeyError` (item access) so that `hasattr` and `dict`-style probing work.
    """
    operation_name: str
    kind: str
    available: Tuple[str, ...]

    def __str__(self):
        return f"No {self.kind} operation named '{self.operation_name}'. Available: {list(self.available)}"

    def get_diagnostic_report(self) -> str:
        listing = "\n".join(f"- {n}" for n in self.available) or "(none)"
        return format_diagnostic_report(
            error_type="Unknown Operation",
            details=f"The {self.kind} operation table has no entry '{self.operation_name}'.\nDefined {self.kind} operations:\n{listing}",
            suggestion="Check the spelling, and whether the operation is pure or impure in the contract. Impure operations are only reachable through `circuits.impure`.",
            context={'operation': self.operation_name}
        )


@dataclass(eq=False)
class OperationResultError(DiagnosableError, TypeError):
    """
    Raised when a raw operation returns something other than the tagged result
    its category requires: impure operations must return `ImpureResult`, pure
    operations `PureResult` or `ImpureResult`. No context is committed.
    """
    operation: str
    kind: str
    returned_type: str

    @property
    def expected(self) -> str:
        return "ImpureResult" if self.kind == "impure" else "PureResult or ImpureResult"

    def __str__(self):
        return f"{self.kind.capitalize()} operation '{self.operation}' returned {self.returned_type}, expected {self.expected}."

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Malformed Operation Result",
            details=(
                f"The {self.kind} operation '{self.operation}' returned a value of type '{self.returned_type}'.\n"
                f"Expected {self.expected}. Impure operations must hand back the new context so it can be committed."
            ),
            suggestion="Return the tagged result type from the raw operation, or register it under the other category.",
            context={'operation': self.operation}
        )
