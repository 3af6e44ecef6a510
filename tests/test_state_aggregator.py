"""Tests for the aggregate-state tagged union."""

import pytest

from tests.helpers.fake_broadcaster import REGISTRAR, REGISTRY, TRANSCODER, FakeBroadcaster
from upkeep_admin import abi
from upkeep_admin.runtime import StateAggregator
from upkeep_admin.schemas import (
    KeeperStateV2,
    ProtocolGeneration,
    RegistryState,
    StateV1_0,
    StateV2_0,
    StateV2_1,
)

KEEPERS = ["0x" + "a1" * 20, "0x" + "a2" * 20]
SIGNERS = ["0x" + "b1" * 20, "0x" + "b2" * 20, "0x" + "b3" * 20, "0x" + "b4" * 20]
TRANSMITTERS = ["0x" + "c1" * 20, "0x" + "c2" * 20, "0x" + "c3" * 20, "0x" + "c4" * 20]
DIGEST = b"\x09" * 32

STATE_V1 = (11, 2 * 10**18, 3 * 10**18, 4)
CONFIG_V1 = (250_000_000, 0, 20, 6_500_000, 90_000, 1, 0, 5_000_000, 20 * 10**9, 2 * 10**16, TRANSCODER, REGISTRAR)
STATE_V2 = (11, 2 * 10**18, 3 * 10**18, 10**17, 4, 2, 1234, DIGEST, 7, False)
CONFIG_V2_0 = (
    250_000_000, 0, 6_500_000, 90_000, 1, 0, 5_000_000, 5_000, 5_000, 20 * 10**9, 2 * 10**16, TRANSCODER, REGISTRAR,
)
CONFIG_V2_1 = (
    250_000_000, 0, 6_500_000, 90_000, 1, 0, 5_000_000, 5_000, 5_000, 1_000, 20 * 10**9, 2 * 10**16,
    TRANSCODER, [REGISTRAR], "0x" + "d1" * 20,
)


@pytest.fixture
def broadcaster():
    broadcaster = FakeBroadcaster()
    broadcaster.respond(REGISTRY, abi.GET_STATE_V1, STATE_V1, CONFIG_V1, KEEPERS)
    return broadcaster


def lower(addresses):
    return [address.lower() for address in addresses]


class TestGetState:
    def test_gen1_0(self, broadcaster):
        state = StateAggregator(broadcaster, REGISTRY, ProtocolGeneration.GEN1_0).get_state()

        assert state.generation is ProtocolGeneration.GEN1_0
        assert state.state_v1_0.state.nonce == 11
        assert state.state_v1_0.state.num_upkeeps == 4
        assert state.state_v1_0.config.block_count_per_turn == 20
        assert state.state_v1_0.config.registrar == REGISTRAR
        assert lower(state.state_v1_0.keepers) == lower(KEEPERS)
        assert state.state_v2_0.is_zero()
        assert state.state_v2_1.is_zero()

    def test_gen2_0(self):
        broadcaster = FakeBroadcaster()
        broadcaster.respond(REGISTRY, abi.GET_STATE_V2_0, STATE_V2, CONFIG_V2_0, SIGNERS, TRANSMITTERS, 1)

        state = StateAggregator(broadcaster, REGISTRY, ProtocolGeneration.GEN2_0).get_state()

        assert state.generation is ProtocolGeneration.GEN2_0
        assert state.state_v1_0 == StateV1_0.zero()
        assert state.state_v2_1 == StateV2_1.zero()
        assert lower(state.state_v2_0.signers) == lower(SIGNERS)
        assert lower(state.state_v2_0.transmitters) == lower(TRANSMITTERS)
        assert state.state_v2_0.f == 1
        assert state.state_v2_0.state.latest_config_digest == DIGEST
        assert state.state_v2_0.config.max_check_data_size == 5_000
        assert state.state_v2_0.config.registrar == REGISTRAR

    def test_gen2_1(self):
        broadcaster = FakeBroadcaster()
        broadcaster.respond(REGISTRY, abi.GET_STATE_V2_1, STATE_V2, CONFIG_V2_1, SIGNERS, TRANSMITTERS, 1)

        state = StateAggregator(broadcaster, REGISTRY, ProtocolGeneration.GEN2_1).get_state()

        assert state.generation is ProtocolGeneration.GEN2_1
        assert state.state_v1_0.is_zero()
        assert state.state_v2_0.is_zero()
        assert not state.state_v2_1.is_zero()
        assert state.state_v2_1.config.registrars == [REGISTRAR]
        assert state.state_v2_1.config.max_revert_data_size == 1_000
        assert state.state_v2_1.state.latest_epoch == 7
        assert state.variant() is state.state_v2_1

    def test_issues_single_read(self, broadcaster):
        StateAggregator(broadcaster, REGISTRY, ProtocolGeneration.GEN1_0).get_state()
        assert broadcaster.calls == [(REGISTRY, abi.GET_STATE_V1.selector)]


class TestRegistryStateUnion:
    def test_from_variant_places_variant(self):
        variant = StateV2_0(f=1, signers=SIGNERS)
        state = RegistryState.from_variant(ProtocolGeneration.GEN2_0, variant)
        assert state.state_v2_0.f == 1
        assert state.state_v1_0.is_zero()

    def test_from_variant_rejects_wrong_type(self):
        with pytest.raises(TypeError):
            RegistryState.from_variant(ProtocolGeneration.GEN2_1, StateV2_0(f=1))

    def test_two_populated_variants_rejected(self):
        with pytest.raises(ValueError):
            RegistryState(
                generation=ProtocolGeneration.GEN2_0,
                state_v2_0=StateV2_0(f=1),
                state_v2_1=StateV2_1(state=KeeperStateV2(nonce=1)),
            )

    def test_default_is_zero(self):
        assert RegistryState().is_zero()
