# tests/test_simulator_factory.py

"""
End-to-end behavior of simulators generated by `create_simulator`: option
resolution, public state derivation, witness overrides and the guarantee that a
failing operation leaves no trace.
"""

from dataclasses import replace

import pytest

from contractsim_core import (
    ContractSimulator,
    OptionsValidationError,
    SimulatorConfig,
    SimulatorConstructionError,
    SimulatorOptions,
    WitnessContext,
    create_simulator,
    use_circuit_context_sender,
)
from contractsim_core.runtime.addresses import DEFAULT_COIN_PUBLIC_KEY, PREFIX_ADDRESS

from conftest import ALICE, BOB, DEPLOYER, FIXED_ADDRESS, INITIAL_SUPPLY, OWNER
from sample_contracts import (
    CounterContract,
    CounterLedger,
    CounterPrivateState,
    CounterSimulator,
    CounterSimulatorBase,
    InsufficientBalanceError,
    TokenSimulator,
    WitnessPrivateState,
    WitnessSimulator,
    counter_ledger,
    counter_witnesses,
)


class TestGeneratedClass:
    def test_is_a_contract_simulator(self, counter_sim):
        assert isinstance(counter_sim, ContractSimulator)

    def test_class_is_named_after_config(self):
        assert CounterSimulatorBase.__name__ == "CounterSimulator"

    def test_default_construction(self):
        sim = CounterSimulator()
        assert sim.get_private_state() == CounterPrivateState()
        assert sim.circuit_context.caller == DEFAULT_COIN_PUBLIC_KEY
        assert sim.get_public_state() == CounterLedger(counter=0, last_caller=None, secret_sum=0)

    def test_constructor_args_reach_initializer(self):
        assert CounterSimulator(start=40).get_counter() == 40

    def test_each_instance_gets_a_fresh_default_private_state(self):
        a = WitnessSimulator()
        b = WitnessSimulator()
        assert a.get_private_state() != b.get_private_state()

    def test_default_contract_args_transform(self):
        SimpleCounter = create_simulator(SimulatorConfig(
            contract_factory=CounterContract,
            default_private_state=CounterPrivateState,
            ledger_extractor=counter_ledger,
            witnesses_factory=counter_witnesses,
        ))
        sim = SimpleCounter(["ignored"])
        assert sim.get_public_state().counter == 0
        assert type(sim).__name__ == "GeneratedSimulator"

    def test_repr_names_class_and_address(self):
        sim = CounterSimulator(options={"contract_address": FIXED_ADDRESS})
        assert repr(sim) == f"<CounterSimulator at {FIXED_ADDRESS}>"


class TestOptions:
    def test_mapping_options(self):
        sim = CounterSimulator(options={
            "private_state": CounterPrivateState(secret=1),
            "coin_pk": ALICE,
            "contract_address": FIXED_ADDRESS,
        })
        assert sim.get_private_state() == CounterPrivateState(secret=1)
        assert sim.circuit_context.caller == ALICE
        assert sim.contract_address == FIXED_ADDRESS

    def test_dataclass_options(self):
        sim = CounterSimulator(options=SimulatorOptions(coin_pk=BOB))
        assert sim.circuit_context.caller == BOB

    def test_none_private_state_falls_back_to_default(self):
        sim = CounterSimulator(options={"private_state": None})
        assert sim.get_private_state() == CounterPrivateState()

    def test_unknown_option_is_rejected(self):
        with pytest.raises(OptionsValidationError, match="coinPk"):
            CounterSimulator(options={"coinPk": ALICE})

    def test_non_hex_identity_is_rejected(self):
        with pytest.raises(OptionsValidationError, match="coin_pk"):
            CounterSimulator(options={"coin_pk": "not-a-key"})

    def test_non_hex_identity_in_dataclass_is_rejected(self):
        with pytest.raises(OptionsValidationError):
            CounterSimulator(options=SimulatorOptions(contract_address="zz"))

    def test_wrong_options_type_is_rejected(self):
        with pytest.raises(TypeError):
            CounterSimulator(options=[("coin_pk", ALICE)])


class TestContractAddress:
    def test_fixed_address_from_options(self):
        sim = CounterSimulator(options={"contract_address": FIXED_ADDRESS})
        assert sim.contract_address == FIXED_ADDRESS
        assert sim.circuit_context.transaction_context.address == FIXED_ADDRESS

    def test_random_address_when_unset(self):
        a = CounterSimulator()
        b = CounterSimulator()
        assert a.contract_address.startswith(PREFIX_ADDRESS)
        assert a.contract_address != b.contract_address

    def test_address_is_stable_across_calls(self, counter_sim):
        address = counter_sim.contract_address
        counter_sim.increment()
        counter_sim.override_witness("secret_value", lambda wctx: (wctx.private_state, 0))
        assert counter_sim.contract_address == address


class TestConstructionFailure:
    def test_initializer_error_aborts_construction(self):
        with pytest.raises(SimulatorConstructionError, match="Token: invalid owner") as excinfo:
            TokenSimulator(DEFAULT_COIN_PUBLIC_KEY, INITIAL_SUPPLY)
        assert isinstance(excinfo.value.__cause__, ValueError)
        assert "Contract Initialization Failed (ValueError)" in str(excinfo.value)


class TestPublicState:
    def test_increment_twice(self, counter_sim):
        counter_sim.increment()
        counter_sim.increment()
        assert counter_sim.get_public_state().counter == 2

    def test_public_state_is_never_stale(self, counter_sim):
        before = counter_sim.get_public_state()
        counter_sim.circuits.impure.increment_by(5)
        assert before.counter == 0
        assert counter_sim.get_public_state().counter == 5

    def test_direct_context_replacement_is_observed(self, counter_sim):
        ctx = counter_sim.circuit_context
        counter_sim.circuit_context = ctx.with_ledger_state({**ctx.transaction_context.state, "counter": 9})
        assert counter_sim.get_public_state().counter == 9

    def test_contract_state_is_deployment_state(self, counter_sim):
        counter_sim.increment()
        assert counter_sim.get_contract_state().data["counter"] == 0

    def test_token_transfer(self, token_sim):
        assert token_sim.transfer(ALICE, 250) is True
        assert token_sim.balance_of(ALICE) == 250
        assert token_sim.balance_of(OWNER) == INITIAL_SUPPLY - 250
        assert token_sim.get_public_state().total_supply == INITIAL_SUPPLY
        assert token_sim.get_private_state().transfers_sent == 1


class TestFailedOperationLeavesNoTrace:
    def test_insufficient_balance(self, token_sim):
        private_before = token_sim.get_private_state()
        public_before = token_sim.get_public_state()
        context_before = token_sim.circuit_context

        with pytest.raises(InsufficientBalanceError, match="Token: insufficient balance"):
            token_sim.as_caller(BOB).transfer(ALICE, 1)

        assert token_sim.get_private_state() == private_before
        assert token_sim.get_public_state() == public_before
        assert token_sim.circuit_context is context_before

    def test_exception_is_not_wrapped(self, counter_sim):
        with pytest.raises(RuntimeError) as excinfo:
            counter_sim.circuits.impure.always_fails()
        assert type(excinfo.value) is RuntimeError
        assert str(excinfo.value) == "Counter: operation failed on purpose"

    def test_simulator_remains_usable(self, token_sim):
        with pytest.raises(InsufficientBalanceError):
            token_sim.transfer(ALICE, INITIAL_SUPPLY + 1)
        token_sim.transfer(ALICE, INITIAL_SUPPLY)
        assert token_sim.balance_of(ALICE) == INITIAL_SUPPLY


class TestPrivateStateInjection:
    def test_update_keeps_public_state_and_address(self, counter_sim):
        counter_sim.increment()
        public_before = counter_sim.get_public_state()
        address_before = counter_sim.contract_address

        counter_sim.update_private_state(CounterPrivateState(secret=100))

        assert counter_sim.get_private_state() == CounterPrivateState(secret=100)
        assert counter_sim.get_public_state() == public_before
        assert counter_sim.contract_address == address_before

    def test_injected_state_is_seen_by_witnesses(self, counter_sim):
        counter_sim.update_private_state(CounterPrivateState(secret=21))
        assert counter_sim.circuits.impure.add_secret() == 21


class TestWitnesses:
    def test_witness_updates_private_state(self, counter_sim):
        assert counter_sim.circuits.impure.add_secret() == 7
        assert counter_sim.get_private_state().uses == 1
        assert counter_sim.get_public_state().secret_sum == 7

    def test_override_witness_call_count(self, counter_sim, call_log):
        def fixed_secret(context):
            call_log.append(context)
            return context.private_state, 5

        counter_sim.override_witness("secret_value", fixed_secret)

        assert counter_sim.circuits.impure.add_secret() == 5
        assert counter_sim.circuits.impure.add_secret() == 5
        assert len(call_log) == 2
        assert counter_sim.get_public_state().secret_sum == 10

    def test_override_keeps_state(self, counter_sim):
        counter_sim.increment()
        counter_sim.circuits.impure.add_secret()
        ctx_before = counter_sim.circuit_context

        counter_sim.override_witness("secret_value", lambda wctx: (wctx.private_state, 0))

        assert counter_sim.circuit_context is ctx_before

    def test_override_affects_only_later_calls(self, counter_sim):
        first = counter_sim.circuits.impure.add_secret()
        counter_sim.override_witness("secret_value", lambda wctx: (wctx.private_state, 1))
        second = counter_sim.circuits.impure.add_secret()

        assert (first, second) == (7, 1)
        assert counter_sim.get_public_state().secret_sum == 8

    def test_override_keeps_other_witnesses(self, witness_sim):
        witness_sim.override_witness("wit_secret_bytes", lambda wctx: (wctx.private_state, b"\x01" * 32))
        assert set(witness_sim.witnesses) == {
            "wit_secret_bytes", "wit_secret_field_plus_arg", "wit_secret_uint_plus_args"
        }

    def test_witnesses_property_returns_copy(self, counter_sim):
        table = counter_sim.witnesses
        table["secret_value"] = lambda wctx: (wctx.private_state, 99)
        assert counter_sim.circuits.impure.add_secret() == 7

    def test_replace_whole_table(self, counter_sim):
        counter_sim.witnesses = {"secret_value": lambda wctx: (wctx.private_state, 3)}
        assert counter_sim.circuits.impure.add_secret() == 3

    def test_witnesses_from_options(self):
        sim = CounterSimulator(options={"witnesses": {"secret_value": lambda wctx: (wctx.private_state, 11)}})
        assert sim.circuits.impure.add_secret() == 11

    def test_witness_context(self, counter_sim):
        counter_sim.increment()
        wctx = counter_sim.get_witness_context()

        assert isinstance(wctx, WitnessContext)
        assert wctx.ledger.counter == 1
        assert wctx.private_state == counter_sim.get_private_state()
        assert wctx.contract_address == counter_sim.contract_address


class TestWitnessContract:
    def test_set_bytes(self, witness_sim):
        witness_sim.set_bytes()
        assert witness_sim.get_public_state().val_bytes == witness_sim.get_private_state().secret_bytes

    def test_set_field(self, witness_sim):
        witness_sim.set_field(5)
        assert witness_sim.get_public_state().val_field == witness_sim.get_private_state().secret_field + 5

    def test_set_uint(self, witness_sim):
        witness_sim.set_uint(2, 3)
        assert witness_sim.get_public_state().val_uint == witness_sim.get_private_state().secret_uint + 5

    def test_injected_private_state(self, witness_sim):
        witness_sim.inject_secret_field(1000)
        witness_sim.set_field(1)
        assert witness_sim.get_public_state().val_field == 1001

    def test_overridden_witness(self, witness_sim):
        witness_sim.override_witness("wit_secret_field_plus_arg", lambda wctx, arg: (wctx.private_state, arg * 2))
        witness_sim.set_field(21)
        assert witness_sim.get_public_state().val_field == 42

    def test_fixed_private_state_from_options(self):
        state = replace(WitnessPrivateState.generate(), secret_uint=10)
        sim = WitnessSimulator(options={"private_state": state})
        sim.set_uint(1, 1)
        assert sim.get_public_state().val_uint == 12


class TestContextHelpers:
    def test_context_for_sender(self, counter_sim):
        counter_sim.increment()
        ctx = use_circuit_context_sender(counter_sim, ALICE)

        assert ctx.caller == ALICE
        assert ctx.current_private_state == counter_sim.get_private_state()
        assert ctx.transaction_context.address == counter_sim.contract_address
        assert ctx.transaction_context.state["counter"] == 0

    def test_raw_operation_on_helper_context(self, counter_sim):
        ctx = use_circuit_context_sender(counter_sim, BOB)
        outcome = counter_sim.contract.impure_circuits["record_caller"](ctx)

        assert outcome.result == BOB
        assert counter_sim.circuit_context.caller == DEPLOYER
