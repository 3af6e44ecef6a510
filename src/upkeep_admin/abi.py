"""ABI catalog for the registry, registrar, funding token and cron factory.

Each ``ContractFunction`` knows its canonical signature, so the 4-byte
selector is derived from the signature rather than written out by hand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Tuple

from eth_abi import decode, encode
from eth_hash.auto import keccak


def event_topic(signature: str) -> bytes:
    """Return topic 0 for an event with the given canonical signature."""
    return keccak(signature.encode("utf-8"))


@dataclass(frozen=True)
class ContractFunction:
    name: str
    inputs: Tuple[str, ...] = ()
    outputs: Tuple[str, ...] = ()

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        return keccak(self.signature.encode("utf-8"))[:4]

    def encode_call(self, *args: Any) -> bytes:
        if len(args) != len(self.inputs):
            raise ValueError(f"{self.signature} takes {len(self.inputs)} arguments, got {len(args)}")
        return self.selector + encode(list(self.inputs), list(args))

    def decode_output(self, data: bytes) -> Tuple[Any, ...]:
        return tuple(decode(list(self.outputs), data))


# Shared by every deployed service.
TYPE_AND_VERSION = ContractFunction("typeAndVersion", (), ("string",))

# Funding token (ERC-677).
TRANSFER_AND_CALL = ContractFunction("transferAndCall", ("address", "uint256", "bytes"), ("bool",))

# Registrar.
REGISTER_V1_2 = ContractFunction(
    "register",
    ("string", "bytes", "address", "uint32", "address", "bytes", "uint96", "uint8", "address"),
)
REGISTER_V2_0 = ContractFunction(
    "register",
    ("string", "bytes", "address", "uint32", "address", "bytes", "bytes", "uint96", "address"),
)
REGISTER_V2_1 = ContractFunction(
    "register",
    ("string", "bytes", "address", "uint32", "address", "uint8", "bytes", "bytes", "bytes", "uint96", "address"),
)
GET_PENDING_REQUEST = ContractFunction("getPendingRequest", ("bytes32",), ("address", "uint96"))
CANCEL_REQUEST = ContractFunction("cancel", ("bytes32",))
GET_REGISTRATION_CONFIG = ContractFunction(
    "getRegistrationConfig", (), ("uint8", "uint32", "uint32", "address", "uint256")
)
GET_TRIGGER_REGISTRATION_DETAILS = ContractFunction(
    "getTriggerRegistrationDetails", ("uint8",), ("(uint8,uint32,uint32)",)
)
GET_REGISTRAR_CONFIG = ContractFunction("getConfig", (), ("address", "uint256"))

# Registry, identical across generations.
ADD_FUNDS = ContractFunction("addFunds", ("uint256", "uint96"))
PAUSE_UPKEEP = ContractFunction("pauseUpkeep", ("uint256",))
UNPAUSE_UPKEEP = ContractFunction("unpauseUpkeep", ("uint256",))
CANCEL_UPKEEP = ContractFunction("cancelUpkeep", ("uint256",))
SET_UPKEEP_GAS_LIMIT = ContractFunction("setUpkeepGasLimit", ("uint256", "uint32"))
WITHDRAW_FUNDS = ContractFunction("withdrawFunds", ("uint256", "address"))
TRANSFER_UPKEEP_ADMIN = ContractFunction("transferUpkeepAdmin", ("uint256", "address"))
ACCEPT_UPKEEP_ADMIN = ContractFunction("acceptUpkeepAdmin", ("uint256",))
GET_MIN_BALANCE_FOR_UPKEEP = ContractFunction("getMinBalanceForUpkeep", ("uint256",), ("uint96",))
GET_ACTIVE_UPKEEP_IDS = ContractFunction("getActiveUpkeepIDs", ("uint256", "uint256"), ("uint256[]",))

# Registry, 1.x only.
UPKEEP_TRANSCODER_VERSION = ContractFunction("upkeepTranscoderVersion", (), ("uint8",))

# target, executeGas, checkData, balance, lastKeeper, admin, maxValidBlocknumber, amountSpent, paused
GET_UPKEEP_V1 = ContractFunction(
    "getUpkeep",
    ("uint256",),
    ("address", "uint32", "bytes", "uint96", "address", "address", "uint64", "uint96", "bool"),
)
# target, executeGas|performGas, checkData, balance, admin, maxValidBlocknumber,
# lastPerformBlockNumber, amountSpent, paused, offchainConfig
GET_UPKEEP_V2 = ContractFunction(
    "getUpkeep",
    ("uint256",),
    ("(address,uint32,bytes,uint96,address,uint64,uint32,uint96,bool,bytes)",),
)

_STATE_V1 = "(uint32,uint96,uint256,uint256)"
_CONFIG_V1 = "(uint32,uint32,uint24,uint32,uint24,uint16,uint96,uint32,uint256,uint256,address,address)"
_STATE_V2 = "(uint32,uint96,uint256,uint96,uint256,uint32,uint32,bytes32,uint32,bool)"
_CONFIG_V2_0 = "(uint32,uint32,uint32,uint24,uint16,uint96,uint32,uint32,uint32,uint256,uint256,address,address)"
_CONFIG_V2_1 = (
    "(uint32,uint32,uint32,uint24,uint16,uint96,uint32,uint32,uint32,uint32,uint256,uint256,address,address[],address)"
)

GET_STATE_V1 = ContractFunction("getState", (), (_STATE_V1, _CONFIG_V1, "address[]"))
GET_STATE_V2_0 = ContractFunction("getState", (), (_STATE_V2, _CONFIG_V2_0, "address[]", "address[]", "uint8"))
GET_STATE_V2_1 = ContractFunction("getState", (), (_STATE_V2, _CONFIG_V2_1, "address[]", "address[]", "uint8"))

# Cron upkeep factory.
ENCODE_CRON_JOB = ContractFunction("encodeCronJob", ("address", "bytes", "string"), ("bytes",))
NEW_CRON_UPKEEP_WITH_JOB = ContractFunction("newCronUpkeepWithJob", ("bytes",))

NEW_CRON_UPKEEP_CREATED = "NewCronUpkeepCreated(address,address)"
NEW_CRON_UPKEEP_CREATED_FIELDS = ("address", "address")
