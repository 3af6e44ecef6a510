"""Tests for registration payloads, generation guards and the cron two-phase flow."""

import pytest
from eth_abi import decode, encode
from eth_hash.auto import keccak

from tests.helpers.fake_broadcaster import (
    ADMIN,
    CRON_FACTORY,
    CRON_UPKEEP,
    LINK_TOKEN,
    REGISTRAR,
    REGISTRATION_REQUESTED_TOPIC,
    REQUEST_HASH,
    SENDER,
    TARGET,
    FakeBroadcaster,
    funded_call_events,
)
from upkeep_admin import abi
from upkeep_admin.abi import event_topic
from upkeep_admin.exceptions import (
    ConfigurationError,
    IntermediaryCreationError,
    OperationNotSupportedForVersion,
)
from upkeep_admin.runtime import RegistrarAdapter, StaticSigner
from upkeep_admin.schemas import EventLog, PendingRequest, ProtocolGeneration, RegistrationRequest, TriggerKind

AMOUNT = 5 * 10**18
GAS_LIMIT = 500_000


def word(value: int) -> bytes:
    return value.to_bytes(32, "big")


def address_word(address: str) -> bytes:
    return b"\x00" * 12 + bytes.fromhex(address[2:])


def padded(data: bytes) -> bytes:
    return data.ljust(32, b"\x00")


def selector(signature: str) -> bytes:
    return keccak(signature.encode())[:4]


def ownership_event():
    return EventLog(address=CRON_FACTORY, topics=[event_topic("OwnershipTransferred(address,address)")])


def created_event(upkeep, owner):
    return EventLog(
        address=CRON_FACTORY,
        topics=[event_topic(abi.NEW_CRON_UPKEEP_CREATED)],
        data=encode(["address", "address"], [upkeep, owner]),
    )


@pytest.fixture
def request_fields():
    return RegistrationRequest(
        name="test",
        upkeep_contract=TARGET,
        gas_limit=GAS_LIMIT,
        admin_address=ADMIN,
        offchain_config=b"\xab\xcd",
        amount=AMOUNT,
    )


@pytest.fixture
def broadcaster():
    broadcaster = FakeBroadcaster()
    broadcaster.emit(LINK_TOKEN, funded_call_events())
    return broadcaster


def make_adapter(broadcaster, generation, cron_factory=CRON_FACTORY):
    return RegistrarAdapter(
        broadcaster,
        StaticSigner(SENDER),
        REGISTRAR,
        LINK_TOKEN,
        generation,
        cron_factory_address=cron_factory,
    )


def submitted_payload(broadcaster):
    """Unwrap the register calldata from the single transferAndCall submission."""
    assert len(broadcaster.transactions) == 1
    to, data = broadcaster.transactions[-1]
    assert to == LINK_TOKEN
    assert data[:4] == bytes.fromhex("4000aea0")
    registrar, amount, payload = decode(["address", "uint256", "bytes"], data[4:])
    assert registrar == REGISTRAR
    assert amount == AMOUNT
    return payload


class TestGoldenPayloads:
    def test_legacy_1_2(self, broadcaster, request_fields):
        adapter = make_adapter(broadcaster, ProtocolGeneration.GEN1_0)
        expected = selector("register(string,bytes,address,uint32,address,bytes,uint96,uint8,address)") + b"".join([
            word(288),  # name
            word(352),  # encryptedEmail
            address_word(TARGET),
            word(GAS_LIMIT),
            address_word(ADMIN),
            word(384),  # checkData
            word(AMOUNT),
            word(0),  # source
            address_word(SENDER),
            word(4), padded(b"test"),
            word(0),
            word(0),
        ])
        assert adapter.encode_register(request_fields) == expected

        assert adapter.register_condition_or_custom(request_fields) == REQUEST_HASH
        assert submitted_payload(broadcaster) == expected

    def test_gen2_0(self, broadcaster, request_fields):
        adapter = make_adapter(broadcaster, ProtocolGeneration.GEN2_0)
        expected = selector("register(string,bytes,address,uint32,address,bytes,bytes,uint96,address)") + b"".join([
            word(288),  # name
            word(352),  # encryptedEmail
            address_word(TARGET),
            word(GAS_LIMIT),
            address_word(ADMIN),
            word(384),  # checkData
            word(416),  # offchainConfig
            word(AMOUNT),
            address_word(SENDER),
            word(4), padded(b"test"),
            word(0),
            word(0),
            word(2), padded(b"\xab\xcd"),
        ])
        assert adapter.register_condition_or_custom(request_fields) == REQUEST_HASH
        assert submitted_payload(broadcaster) == expected

    def test_gen2_1(self, broadcaster, request_fields):
        adapter = make_adapter(broadcaster, ProtocolGeneration.GEN2_1)
        expected = selector(
            "register(string,bytes,address,uint32,address,uint8,bytes,bytes,bytes,uint96,address)"
        ) + b"".join([
            word(352),  # name
            word(416),  # encryptedEmail
            address_word(TARGET),
            word(GAS_LIMIT),
            address_word(ADMIN),
            word(0),  # triggerType
            word(448),  # checkData
            word(480),  # triggerConfig
            word(512),  # offchainConfig
            word(AMOUNT),
            address_word(SENDER),
            word(4), padded(b"test"),
            word(0),
            word(0),
            word(0),
            word(2), padded(b"\xab\xcd"),
        ])
        assert adapter.register_condition_or_custom(request_fields) == REQUEST_HASH
        assert submitted_payload(broadcaster) == expected

    def test_condition_path_forces_condition_trigger(self, broadcaster, request_fields):
        adapter = make_adapter(broadcaster, ProtocolGeneration.GEN2_1)
        request = request_fields.model_copy(update={"trigger_type": TriggerKind.LOG, "trigger_config": b"\x01"})
        adapter.register_condition_or_custom(request)
        decoded = decode(list(abi.REGISTER_V2_1.inputs), submitted_payload(broadcaster)[4:])
        assert decoded[5] == TriggerKind.CONDITION
        assert decoded[7] == b""

    def test_admin_defaults_to_sender(self, broadcaster, request_fields):
        adapter = make_adapter(broadcaster, ProtocolGeneration.GEN2_0)
        request = request_fields.model_copy(update={"admin_address": None})
        decoded = decode(list(abi.REGISTER_V2_0.inputs), adapter.encode_register(request)[4:])
        assert decoded[4] == SENDER
        assert decoded[8] == SENDER

    def test_cron_trigger_encodes_as_condition(self, broadcaster, request_fields):
        adapter = make_adapter(broadcaster, ProtocolGeneration.GEN2_1)
        request = request_fields.model_copy(update={"trigger_type": TriggerKind.CRON})
        decoded = decode(list(abi.REGISTER_V2_1.inputs), adapter.encode_register(request)[4:])
        assert decoded[5] == TriggerKind.CONDITION


class TestLogTrigger:
    def test_gen2_1_encodes_log_trigger(self, broadcaster, request_fields):
        adapter = make_adapter(broadcaster, ProtocolGeneration.GEN2_1)
        trigger_config = encode(["address", "uint8"], [TARGET, 0])
        request = request_fields.model_copy(update={"trigger_config": trigger_config})

        result = adapter.register_log_trigger(request)

        assert result == REGISTRATION_REQUESTED_TOPIC
        decoded = decode(list(abi.REGISTER_V2_1.inputs), submitted_payload(broadcaster)[4:])
        assert decoded[5] == TriggerKind.LOG
        assert decoded[7] == trigger_config

    @pytest.mark.parametrize("generation", [ProtocolGeneration.GEN1_0, ProtocolGeneration.GEN2_0])
    def test_older_registrars_reject(self, broadcaster, request_fields, generation):
        adapter = make_adapter(broadcaster, generation)
        with pytest.raises(OperationNotSupportedForVersion) as exc_info:
            adapter.register_log_trigger(request_fields)
        assert str(exc_info.value) == "This function is only supported for KeeperRegistrar2_1"
        assert broadcaster.transactions == []


class TestTimeBased:
    @pytest.fixture
    def cron_broadcaster(self, broadcaster):
        broadcaster.respond(CRON_FACTORY, abi.ENCODE_CRON_JOB, b"encoded-job")
        broadcaster.emit(
            CRON_FACTORY,
            [
                ownership_event(),
                created_event(CRON_UPKEEP, SENDER),
            ],
        )
        return broadcaster

    def test_registers_created_intermediary(self, cron_broadcaster, request_fields):
        adapter = make_adapter(cron_broadcaster, ProtocolGeneration.GEN2_1)
        handler = selector("performWork()")

        result = adapter.register_time_based(request_fields, handler, "0 * * * *")

        assert result == REQUEST_HASH
        (encode_to, encode_data), = cron_broadcaster.calls_to(abi.ENCODE_CRON_JOB)
        assert encode_to == CRON_FACTORY
        assert decode(["address", "bytes", "string"], encode_data[4:]) == (TARGET, handler, "0 * * * *")

        factory_tx, funded_tx = cron_broadcaster.transactions
        assert factory_tx == (CRON_FACTORY, abi.NEW_CRON_UPKEEP_WITH_JOB.encode_call(b"encoded-job"))
        assert funded_tx[0] == LINK_TOKEN
        _, _, payload = decode(["address", "uint256", "bytes"], funded_tx[1][4:])
        decoded = decode(list(abi.REGISTER_V2_1.inputs), payload[4:])
        assert decoded[2] == CRON_UPKEEP
        assert decoded[5] == TriggerKind.CONDITION
        assert decoded[7] == b""

    def test_missing_creation_event(self, broadcaster, request_fields):
        broadcaster.respond(CRON_FACTORY, abi.ENCODE_CRON_JOB, b"encoded-job")
        broadcaster.emit(CRON_FACTORY, [ownership_event()])
        adapter = make_adapter(broadcaster, ProtocolGeneration.GEN2_1)

        with pytest.raises(IntermediaryCreationError):
            adapter.register_time_based(request_fields, b"\x01\x02\x03\x04", "0 * * * *")
        assert [to for to, _ in broadcaster.transactions] == [CRON_FACTORY]

    def test_requires_factory_address(self, broadcaster, request_fields):
        adapter = make_adapter(broadcaster, ProtocolGeneration.GEN2_1, cron_factory=None)
        with pytest.raises(ConfigurationError):
            adapter.register_time_based(request_fields, b"\x01\x02\x03\x04", "0 * * * *")

    @pytest.mark.parametrize("generation", [ProtocolGeneration.GEN1_0, ProtocolGeneration.GEN2_0])
    def test_older_registrars_reject_before_factory(self, broadcaster, request_fields, generation):
        adapter = make_adapter(broadcaster, generation)
        with pytest.raises(OperationNotSupportedForVersion, match="KeeperRegistrar2_1"):
            adapter.register_time_based(request_fields, b"\x01\x02\x03\x04", "0 * * * *")
        assert broadcaster.calls == []
        assert broadcaster.transactions == []


class TestPendingRequests:
    def test_get_pending_request(self, broadcaster):
        broadcaster.respond(REGISTRAR, abi.GET_PENDING_REQUEST, ADMIN, AMOUNT)
        adapter = make_adapter(broadcaster, ProtocolGeneration.GEN2_0)
        assert adapter.get_pending_request(REQUEST_HASH) == PendingRequest(admin=ADMIN, balance=AMOUNT)
        (_, data), = broadcaster.calls
        assert data == abi.GET_PENDING_REQUEST.encode_call(REQUEST_HASH)

    def test_cancel_request(self, broadcaster):
        adapter = make_adapter(broadcaster, ProtocolGeneration.GEN1_0)
        adapter.cancel_request(REQUEST_HASH)
        assert broadcaster.transactions == [(REGISTRAR, abi.CANCEL_REQUEST.encode_call(REQUEST_HASH))]

