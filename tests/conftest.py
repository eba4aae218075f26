# tests/conftest.py
import pytest

from contractsim_core import generate_pub_key_pair, encode_to_address

from sample_contracts import CounterSimulator, TokenSimulator, WitnessSimulator

# Identities shared across the suite
_, OWNER = generate_pub_key_pair("OWNER")
_, ALICE = generate_pub_key_pair("ALICE")
_, BOB = generate_pub_key_pair("BOB")
_, DEPLOYER = generate_pub_key_pair("DEPLOYER")
FIXED_ADDRESS = encode_to_address("FIXED_CONTRACT")

INITIAL_SUPPLY = 1_000


@pytest.fixture
def counter_sim():
    """A counter deployed by DEPLOYER, starting at 0."""
    return CounterSimulator(options={"coin_pk": DEPLOYER})


@pytest.fixture
def token_sim():
    """A token whose whole supply belongs to OWNER, deployed by OWNER."""
    return TokenSimulator(OWNER, INITIAL_SUPPLY, options={"coin_pk": OWNER})


@pytest.fixture
def witness_sim():
    return WitnessSimulator()


@pytest.fixture
def call_log():
    """A plain list a test can use to count witness invocations."""
    return []
