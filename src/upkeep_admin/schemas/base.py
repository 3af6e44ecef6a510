"""Common schema utilities and base classes."""

from __future__ import annotations

from typing import Annotated, Any

from eth_utils import is_address, to_checksum_address
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

UINT8_MAX = 2**8 - 1
UINT32_MAX = 2**32 - 1
UINT64_MAX = 2**64 - 1
UINT96_MAX = 2**96 - 1
UINT256_MAX = 2**256 - 1


def _coerce_address(value: Any) -> Any:
    if isinstance(value, bytes) and len(value) == 20:
        return to_checksum_address(value)
    if isinstance(value, str):
        if not is_address(value):
            raise ValueError(f"not an account address: {value!r}")
        return to_checksum_address(value)
    return value


def _coerce_bytes(value: Any) -> Any:
    if isinstance(value, str):
        text = value[2:] if value.startswith(("0x", "0X")) else value
        try:
            return bytes.fromhex(text)
        except ValueError as exc:
            raise ValueError(f"not a hex byte string: {value!r}") from exc
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    return value


Address = Annotated[str, BeforeValidator(_coerce_address)]
HexBytes = Annotated[bytes, BeforeValidator(_coerce_bytes)]
Bytes32 = Annotated[bytes, BeforeValidator(_coerce_bytes), Field(min_length=32, max_length=32)]

Uint8 = Annotated[int, Field(ge=0, le=UINT8_MAX)]
Uint32 = Annotated[int, Field(ge=0, le=UINT32_MAX)]
Uint64 = Annotated[int, Field(ge=0, le=UINT64_MAX)]
Uint96 = Annotated[int, Field(ge=0, le=UINT96_MAX)]
Uint256 = Annotated[int, Field(ge=0, le=UINT256_MAX)]


class SchemaBase(BaseModel):
    """Base model with common config for upkeep admin schemas."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)


class FrozenSchema(SchemaBase):
    """Immutable schema; used for values fixed once per adapter instance."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, frozen=True)


class ZeroValued(SchemaBase):
    """Schema whose default construction is its zero value.

    Every field of a subclass must default to the zero of its type so that
    ``cls.zero()`` is the unpopulated variant of a tagged union.
    """

    @classmethod
    def zero(cls):
        return cls()

    def is_zero(self) -> bool:
        return self == type(self)()
