# src/contractsim_core/factory/__init__.py
from .exceptions import OptionsFileError, OptionsValidationError
from .config import SimulatorConfig, no_contract_args
from .options import SimulatorOptions, OptionsValidator, resolve_options, load_simulator_options
from .create import create_simulator

__all__ = [
    # Exceptions
    "OptionsFileError",
    "OptionsValidationError",
    # Configuration
    "SimulatorConfig",
    "no_contract_args",
    "SimulatorOptions",
    "OptionsValidator",
    "resolve_options",
    "load_simulator_options",
    # Factory
    "create_simulator",
]
