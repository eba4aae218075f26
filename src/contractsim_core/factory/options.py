# src/contractsim_core/factory/options.py
"""
Simulator construction options and their validation.

Options may be given as a `SimulatorOptions` instance, as a plain mapping, or
loaded from a YAML file. Mappings and files go through a strict Cerberus schema:
unknown keys are rejected, so a misspelled key never silently falls back to a
default.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Generic, Mapping, Optional, TypeVar, Union

import cerberus
import yaml

from ..runtime.addresses import is_hex_string
from ..runtime.contract import WitnessTable
from .exceptions import OptionsFileError, OptionsValidationError

logger = logging.getLogger(__name__)

P = TypeVar("P")


class OptionsValidator(cerberus.Validator):
    """Cerberus validator with the identity/address format rule."""

    def _validate_hex_string(self, constraint, field, value):
        """
        Validates that a string is a non-empty, even-length hex string.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if not constraint or not isinstance(value, str):
            return
        if not is_hex_string(value):
            self._error(
                field,
                f"'{value}' is not a valid hex string. Identities and addresses must be "
                "non-empty, even-length strings of hex digits (see `encode_to_pk`).",
            )


_hex_rule = {"type": "string", "nullable": True, "empty": False, "hex_string": True}

OPTIONS_SCHEMA = {
    # Opaque: whatever the contract uses as private state.
    "private_state": {"nullable": True},
    "witnesses": {"type": "dict", "nullable": True},
    "coin_pk": _hex_rule,
    "contract_address": _hex_rule,
}

# Witness functions cannot be expressed in a file.
FILE_OPTIONS_SCHEMA = {k: v for k, v in OPTIONS_SCHEMA.items() if k != "witnesses"}


@dataclass(frozen=True)
class SimulatorOptions(Generic[P]):
    """
    Optional overrides for a simulator's initial conditions. A field left as
    None falls back to the simulator's default.
    """
    private_state: Optional[P] = None
    witnesses: Optional[WitnessTable] = None
    coin_pk: Optional[str] = None
    contract_address: Optional[str] = None


def _validate(document: Mapping[str, Any], schema, file_path: Optional[Path] = None):
    validator = OptionsValidator(schema)
    validator.allow_unknown = False
    if not validator.validate(dict(document)):
        raise OptionsValidationError(validator.errors, file_path)


def resolve_options(options: Union[None, SimulatorOptions, Mapping[str, Any]]) -> SimulatorOptions:
    """
    Normalizes `options` into a `SimulatorOptions`.

    Raises:
        OptionsValidationError: If a mapping fails schema validation.
        TypeError: If `options` is of any other type.
    """
    if options is None:
        return SimulatorOptions()
    if isinstance(options, SimulatorOptions):
        _validate(
            {k: getattr(options, k) for k in ("coin_pk", "contract_address")},
            OPTIONS_SCHEMA,
        )
        return options
    if isinstance(options, Mapping):
        _validate(options, OPTIONS_SCHEMA)
        # Values are taken from the caller's mapping, not from a validator copy.
        return SimulatorOptions(**dict(options))
    raise TypeError(
        f"Simulator options must be a SimulatorOptions, a mapping or None, not '{type(options).__name__}'."
    )


def load_simulator_options(path: Union[str, Path]) -> SimulatorOptions:
    """
    Loads simulator options from a YAML file.

    The file must hold a single mapping using the keys 'private_state',
    'coin_pk' and 'contract_address'.
    """
    file_path = Path(path).resolve()
    logger.info(f"Loading simulator options from {file_path}")
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise OptionsFileError("File not found.", file_path) from e
    except OSError as e:
        raise OptionsFileError(f"File could not be read: {e}", file_path) from e
    except yaml.YAMLError as e:
        raise OptionsFileError(f"Invalid YAML syntax: {e}", file_path) from e

    if document is None:
        document = {}
    if not isinstance(document, dict):
        raise OptionsFileError(
            f"Top-level content must be a mapping, found '{type(document).__name__}'.", file_path
        )

    _validate(document, FILE_OPTIONS_SCHEMA, file_path)
    return SimulatorOptions(**document)
