"""Registration through the registrar's funded-call entry point.

A registration is one ``transferAndCall(registrar, amount, registerCalldata)``
on the funding token: the token moves the funds and hands the encoded
``register`` call to the registrar in the same transaction. The request hash
is then recovered from the emitted events.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from eth_abi import decode

from upkeep_admin import abi, log_extractor
from upkeep_admin.exceptions import (
    ConfigurationError,
    IntermediaryCreationError,
    OperationNotSupportedForVersion,
    UnsupportedRegistrarVersion,
)
from upkeep_admin.schemas import (
    EventLog,
    PendingRequest,
    ProtocolGeneration,
    RegistrationPath,
    RegistrationRequest,
    TriggerKind,
)

from .broadcaster import Broadcaster, Signer

logger = logging.getLogger(__name__)

# Source tag the 1.2 registrar records for registrations; 0 is "API".
REGISTRATION_SOURCE = 0


class RegistrarAdapter:
    def __init__(
        self,
        broadcaster: Broadcaster,
        signer: Signer,
        registrar_address: str,
        link_token_address: str,
        generation: ProtocolGeneration,
        cron_factory_address: Optional[str] = None,
    ):
        self.broadcaster = broadcaster
        self.signer = signer
        self.registrar_address = registrar_address
        self.link_token_address = link_token_address
        self.generation = generation
        self.cron_factory_address = cron_factory_address

    # Registration

    def register_condition_or_custom(self, request: RegistrationRequest) -> bytes:
        """Register a condition-based (or custom logic) upkeep; returns the request hash."""
        request = request.model_copy(
            update={"trigger_type": TriggerKind.CONDITION, "trigger_config": b""}
        )
        payload = self.encode_register(request)
        return self._submit(payload, request.amount, RegistrationPath.CONDITION)

    def register_log_trigger(self, request: RegistrationRequest) -> bytes:
        """Register a log-triggered upkeep; 2.1 registrars only."""
        self._require_gen2_1("registerLogTrigger")
        request = request.model_copy(update={"trigger_type": TriggerKind.LOG})
        payload = self.encode_register(request)
        return self._submit(payload, request.amount, RegistrationPath.LOG)

    def register_time_based(self, request: RegistrationRequest, handler: bytes, cron_expression: str) -> bytes:
        """Register a cron schedule for ``request.upkeep_contract``; 2.1 registrars only.

        Phase one asks the cron factory to deploy a CronUpkeep that calls
        ``handler`` on the target on schedule. Phase two registers that new
        CronUpkeep, not the original target, behind a condition trigger.
        """
        self._require_gen2_1("registerTimeBased")
        cron_upkeep = self.create_cron_upkeep(request.upkeep_contract, handler, cron_expression)
        request = request.model_copy(
            update={
                "upkeep_contract": cron_upkeep,
                "trigger_type": TriggerKind.CONDITION,
                "trigger_config": b"",
            }
        )
        payload = self.encode_register(request)
        return self._submit(payload, request.amount, RegistrationPath.CRON)

    def create_cron_upkeep(self, target: str, handler: bytes, cron_expression: str) -> str:
        """Deploy a CronUpkeep through the factory and return its address."""
        if not self.cron_factory_address:
            raise ConfigurationError("cron_factory_address is required for time-based registration")

        encode_job = abi.ENCODE_CRON_JOB.encode_call(target, handler, cron_expression)
        (job,) = abi.ENCODE_CRON_JOB.decode_output(self.broadcaster.call(self.cron_factory_address, encode_job))
        events = self.broadcaster.transact(
            self.cron_factory_address, abi.NEW_CRON_UPKEEP_WITH_JOB.encode_call(job)
        )

        created = log_extractor.find_by_signature(events, abi.NEW_CRON_UPKEEP_CREATED)
        if created is None:
            raise IntermediaryCreationError(
                f"Cron factory {self.cron_factory_address} did not emit {abi.NEW_CRON_UPKEEP_CREATED}"
            )
        cron_upkeep, _owner = decode(list(abi.NEW_CRON_UPKEEP_CREATED_FIELDS), created.data)
        logger.info("Created cron upkeep %s for target %s (%s)", cron_upkeep, target, cron_expression)
        return cron_upkeep

    def encode_register(self, request: RegistrationRequest) -> bytes:
        """Encode the registrar ``register`` call for this generation."""
        sender = self.signer.get_address()
        admin = request.admin_address or sender

        if self.generation is ProtocolGeneration.GEN1_0:
            return abi.REGISTER_V1_2.encode_call(
                request.name,
                request.encrypted_email,
                request.upkeep_contract,
                request.gas_limit,
                admin,
                request.check_data,
                request.amount,
                REGISTRATION_SOURCE,
                sender,
            )
        elif self.generation is ProtocolGeneration.GEN2_0:
            return abi.REGISTER_V2_0.encode_call(
                request.name,
                request.encrypted_email,
                request.upkeep_contract,
                request.gas_limit,
                admin,
                request.check_data,
                request.offchain_config,
                request.amount,
                sender,
            )
        elif self.generation is ProtocolGeneration.GEN2_1:
            return abi.REGISTER_V2_1.encode_call(
                request.name,
                request.encrypted_email,
                request.upkeep_contract,
                request.gas_limit,
                admin,
                request.trigger_type.onchain_tag,
                request.check_data,
                request.trigger_config,
                request.offchain_config,
                request.amount,
                sender,
            )
        else:
            raise UnsupportedRegistrarVersion()

    def _submit(self, payload: bytes, amount: int, path: RegistrationPath) -> bytes:
        data = abi.TRANSFER_AND_CALL.encode_call(self.registrar_address, amount, payload)
        logger.debug(
            "Submitting %s registration to %s via token %s",
            path.value,
            self.registrar_address,
            self.link_token_address,
        )
        events = self.broadcaster.transact(self.link_token_address, data)
        request_hash = log_extractor.extract(events, self.generation, path)
        logger.info("Registration requested: 0x%s", request_hash.hex())
        return request_hash

    def _require_gen2_1(self, operation: str) -> None:
        if self.generation is ProtocolGeneration.GEN2_1:
            return
        elif self.generation in (ProtocolGeneration.GEN1_0, ProtocolGeneration.GEN2_0):
            raise OperationNotSupportedForVersion(operation=operation)
        else:
            raise UnsupportedRegistrarVersion()

    # Pending requests

    def get_pending_request(self, request_hash: bytes) -> PendingRequest:
        raw = self.broadcaster.call(self.registrar_address, abi.GET_PENDING_REQUEST.encode_call(request_hash))
        admin, balance = abi.GET_PENDING_REQUEST.decode_output(raw)
        return PendingRequest(admin=admin, balance=balance)

    def cancel_request(self, request_hash: bytes) -> List[EventLog]:
        return self.broadcaster.transact(self.registrar_address, abi.CANCEL_REQUEST.encode_call(request_hash))
