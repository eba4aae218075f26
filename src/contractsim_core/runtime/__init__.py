# src/contractsim_core/runtime/__init__.py
from .context import (
    ContractState,
    LedgerHandle,
    LocalState,
    ConstructorContext,
    InitialState,
    OperationContext,
    WitnessContext,
    constructor_context,
    empty_local_state,
)
from .results import PureResult, ImpureResult, OperationResult
from .contract import (
    ContractEngine,
    RawOperation,
    WitnessTable,
    extract_pure_operations,
    extract_impure_operations,
)
from .addresses import (
    DEFAULT_COIN_PUBLIC_KEY,
    PREFIX_ADDRESS,
    to_hex_padded,
    encode_to_pk,
    encode_to_address,
    generate_pub_key_pair,
    dummy_contract_address,
    sample_contract_address,
    is_hex_string,
)

__all__ = [
    # State Containers
    "ContractState",
    "LedgerHandle",
    "LocalState",
    "ConstructorContext",
    "InitialState",
    "OperationContext",
    "WitnessContext",
    "constructor_context",
    "empty_local_state",
    # Tagged Results
    "PureResult",
    "ImpureResult",
    "OperationResult",
    # Engine Contract
    "ContractEngine",
    "RawOperation",
    "WitnessTable",
    "extract_pure_operations",
    "extract_impure_operations",
    # Addresses
    "DEFAULT_COIN_PUBLIC_KEY",
    "PREFIX_ADDRESS",
    "to_hex_padded",
    "encode_to_pk",
    "encode_to_address",
    "generate_pub_key_pair",
    "dummy_contract_address",
    "sample_contract_address",
    "is_hex_string",
]
