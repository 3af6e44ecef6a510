"""Registry operations: pass-through administration and normalized reads."""

from __future__ import annotations

import logging
from typing import List

from upkeep_admin import abi
from upkeep_admin.exceptions import OperationNotSupportedForVersion, UnsupportedRegistryVersion
from upkeep_admin.schemas import EventLog, ProtocolGeneration, UpkeepRecord

from .broadcaster import Broadcaster

logger = logging.getLogger(__name__)


class RegistryAdapter:
    """Talks to one KeeperRegistry of a known generation.

    Administrative calls have the same shape in every generation and are
    forwarded unchanged. ``get_upkeep`` normalizes the per-generation upkeep
    records into ``UpkeepRecord``.
    """

    def __init__(self, broadcaster: Broadcaster, registry_address: str, generation: ProtocolGeneration):
        self.broadcaster = broadcaster
        self.registry_address = registry_address
        self.generation = generation

    def _transact(self, function: abi.ContractFunction, *args) -> List[EventLog]:
        data = function.encode_call(*args)
        logger.debug("Submitting %s to registry %s", function.signature, self.registry_address)
        return self.broadcaster.transact(self.registry_address, data)

    def _call(self, function: abi.ContractFunction, *args):
        raw = self.broadcaster.call(self.registry_address, function.encode_call(*args))
        return function.decode_output(raw)

    # Pass-through administration

    def add_funds(self, upkeep_id: int, amount: int) -> List[EventLog]:
        return self._transact(abi.ADD_FUNDS, upkeep_id, amount)

    def pause_upkeep(self, upkeep_id: int) -> List[EventLog]:
        return self._transact(abi.PAUSE_UPKEEP, upkeep_id)

    def unpause_upkeep(self, upkeep_id: int) -> List[EventLog]:
        return self._transact(abi.UNPAUSE_UPKEEP, upkeep_id)

    def cancel_upkeep(self, upkeep_id: int) -> List[EventLog]:
        return self._transact(abi.CANCEL_UPKEEP, upkeep_id)

    def set_upkeep_gas_limit(self, upkeep_id: int, gas_limit: int) -> List[EventLog]:
        return self._transact(abi.SET_UPKEEP_GAS_LIMIT, upkeep_id, gas_limit)

    def withdraw_funds(self, upkeep_id: int, to: str) -> List[EventLog]:
        return self._transact(abi.WITHDRAW_FUNDS, upkeep_id, to)

    def transfer_upkeep_admin(self, upkeep_id: int, proposed: str) -> List[EventLog]:
        return self._transact(abi.TRANSFER_UPKEEP_ADMIN, upkeep_id, proposed)

    def accept_upkeep_admin(self, upkeep_id: int) -> List[EventLog]:
        return self._transact(abi.ACCEPT_UPKEEP_ADMIN, upkeep_id)

    def get_min_balance_for_upkeep(self, upkeep_id: int) -> int:
        (balance,) = self._call(abi.GET_MIN_BALANCE_FOR_UPKEEP, upkeep_id)
        return balance

    def get_active_upkeep_ids(self, start_index: int, max_count: int) -> List[int]:
        (ids,) = self._call(abi.GET_ACTIVE_UPKEEP_IDS, start_index, max_count)
        return list(ids)

    # Generation-dependent reads

    def get_upkeep(self, upkeep_id: int) -> UpkeepRecord:
        """Read one upkeep and normalize it.

        1.x returns a flat 9-tuple whose ``lastKeeper`` is dropped. 2.0 and 2.1
        return a struct; the gas limit is ``executeGas`` in 2.0 and
        ``performGas`` in 2.1 but sits in the same slot.
        """
        if self.generation is ProtocolGeneration.GEN1_0:
            (target, execute_gas, check_data, balance, _last_keeper, admin,
             max_valid_blocknumber, amount_spent, paused) = self._call(abi.GET_UPKEEP_V1, upkeep_id)
            return UpkeepRecord(
                target=target,
                execute_gas=execute_gas,
                check_data=check_data,
                balance=balance,
                admin=admin,
                max_valid_blocknumber=max_valid_blocknumber,
                amount_spent=amount_spent,
                paused=paused,
            )
        elif self.generation is ProtocolGeneration.GEN2_0:
            (info,) = self._call(abi.GET_UPKEEP_V2, upkeep_id)
            (target, execute_gas, check_data, balance, admin, max_valid_blocknumber,
             _last_perform_block, amount_spent, paused, _offchain_config) = info
            return UpkeepRecord(
                target=target,
                execute_gas=execute_gas,
                check_data=check_data,
                balance=balance,
                admin=admin,
                max_valid_blocknumber=max_valid_blocknumber,
                amount_spent=amount_spent,
                paused=paused,
            )
        elif self.generation is ProtocolGeneration.GEN2_1:
            (info,) = self._call(abi.GET_UPKEEP_V2, upkeep_id)
            (target, perform_gas, check_data, balance, admin, max_valid_blocknumber,
             _last_performed_block, amount_spent, paused, _offchain_config) = info
            return UpkeepRecord(
                target=target,
                execute_gas=perform_gas,
                check_data=check_data,
                balance=balance,
                admin=admin,
                max_valid_blocknumber=max_valid_blocknumber,
                amount_spent=amount_spent,
                paused=paused,
            )
        else:
            raise UnsupportedRegistryVersion()

    def get_upkeep_transcoder_version(self) -> int:
        """Return the upkeep format version; only 1.x registries expose it."""
        if self.generation is ProtocolGeneration.GEN1_0:
            (version,) = self._call(abi.UPKEEP_TRANSCODER_VERSION)
            return version
        elif self.generation in (ProtocolGeneration.GEN2_0, ProtocolGeneration.GEN2_1):
            raise OperationNotSupportedForVersion(
                "This function is only supported for KeeperRegistry1_x",
                operation="upkeepTranscoderVersion",
            )
        else:
            raise UnsupportedRegistryVersion()
