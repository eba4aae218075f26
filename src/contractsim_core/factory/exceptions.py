# src/contractsim_core/factory/exceptions.py
"""
Defines the diagnosable exceptions for loading and validating simulator options.

`OptionsFileError` covers file-level problems (missing file, unreadable file,
invalid YAML syntax). `OptionsValidationError` covers documents that load fine
but do not conform to the Cerberus options schema.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import DiagnosableError, format_diagnostic_report


class BaseOptionsError(DiagnosableError):
    """
    A local, concrete base class for all simulator option errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Simulator Options Error",
            details=str(self),
            suggestion="Please check the simulator options passed to the constructor.",
            context={}
        )


@dataclass(frozen=True, eq=False)
class OptionsFileError(BaseOptionsError):
    """Raised when an options file cannot be read or is not valid YAML."""
    details: str
    file_path: Path

    def __str__(self):
        return f"Options file error in '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Options File Error",
            details=self.details,
            suggestion="Ensure the file exists, is readable and contains a single YAML mapping.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True, eq=False)
class OptionsValidationError(BaseOptionsError):
    """
    Raised when a simulator options document fails Cerberus validation, e.g. an
    unknown key, or a caller identity that is not a hex string.
    """
    errors: Dict[str, Any]
    file_path: Optional[Path] = None

    def _error_lines(self):
        return [f"  - Field '{k}': {v[0] if isinstance(v, list) else v}" for k, v in sorted(self.errors.items())]

    def __str__(self):
        where = f" in '{self.file_path}'" if self.file_path else ""
        return f"Simulator options validation failed{where}:\n" + "\n".join(self._error_lines())

    def get_diagnostic_report(self) -> str:
        details = (
            "The simulator options do not conform to the required schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n" + "\n".join(self._error_lines())
        )
        return format_diagnostic_report(
            error_type="Simulator Options Validation Error",
            details=details,
            suggestion="Allowed keys are 'private_state', 'witnesses', 'coin_pk' and 'contract_address'. Identities and addresses must be even-length hex strings.",
            context={'source_file': self.file_path}
        )
