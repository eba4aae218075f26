# src/contractsim_core/runtime/results.py
"""
Tagged result types returned by raw contract operations.

A raw operation returns either a `PureResult` (a value only) or an
`ImpureResult` (a value plus the replacement `OperationContext`). The proxy
layer branches on the concrete type: the impure wrapper commits
`ImpureResult.context`, the pure wrapper only ever reads `.result`.
"""
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from .context import OperationContext

P = TypeVar("P")


@dataclass(frozen=True)
class PureResult:
    """Outcome of a read-only operation."""
    result: Any


@dataclass(frozen=True)
class ImpureResult(Generic[P]):
    """Outcome of a state-mutating operation: the value and the new context."""
    result: Any
    context: OperationContext[P]


OperationResult = Union[PureResult, ImpureResult]
