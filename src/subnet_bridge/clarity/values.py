"""
Clarity Values - Typed contract-call arguments and results.

Each variant is a frozen dataclass carrying its wire type id and an
explicit ``encode()``. ``deserialize`` turns node responses back into
the same variants, and ``cv_to_string`` renders them as Clarity text.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from typing import Any, ClassVar, Union

from ..errors import AddressError, ClarityValueError
from ..utils import strip_hex_prefix, u8, u32
from .address import c32_address, parse_address


class ClarityType:
    INT = 0x00
    UINT = 0x01
    BUFFER = 0x02
    BOOL_TRUE = 0x03
    BOOL_FALSE = 0x04
    PRINCIPAL_STANDARD = 0x05
    PRINCIPAL_CONTRACT = 0x06
    RESPONSE_OK = 0x07
    RESPONSE_ERR = 0x08
    OPTIONAL_NONE = 0x09
    OPTIONAL_SOME = 0x0A
    LIST = 0x0B
    TUPLE = 0x0C
    STRING_ASCII = 0x0D
    STRING_UTF8 = 0x0E


UINT_MAX = 2**128 - 1
INT_MIN = -(2**127)
INT_MAX = 2**127 - 1
MAX_NAME_LENGTH = 128
MAX_VALUE_DEPTH = 32

CONTRACT_NAME_RE = re.compile(r"^[a-zA-Z]([a-zA-Z0-9]|[-_])*$")
CLARITY_NAME_RE = re.compile(r"^[a-zA-Z]([a-zA-Z0-9]|[-_!?+<>=/*])*$|^[-+=/*]$|^[<>]=?$")
_ASCII_RE = re.compile(r"^[\x20-\x7e\t\n\r]*$")


def validate_contract_name(name: str) -> str:
    if not isinstance(name, str) or not CONTRACT_NAME_RE.match(name):
        raise ClarityValueError(f"Invalid contract name: {name!r}")
    if len(name) > MAX_NAME_LENGTH:
        raise ClarityValueError(f"Contract name too long: {name!r}")
    return name


def validate_clarity_name(name: str) -> str:
    """Validate a function or tuple field name."""
    if not isinstance(name, str) or not CLARITY_NAME_RE.match(name):
        raise ClarityValueError(f"Invalid Clarity name: {name!r}")
    if len(name) > MAX_NAME_LENGTH:
        raise ClarityValueError(f"Clarity name too long: {name!r}")
    return name


def _require_int(value: Any, kind: str) -> int:
    # bool is an int subclass; never let True/False pass as a number
    if not isinstance(value, int) or isinstance(value, bool):
        raise ClarityValueError(f"{kind} requires an integer, got {type(value).__name__}")
    return value


class ClarityValue:
    """Base class for all Clarity value variants."""

    type_id: ClassVar[int]

    def encode(self) -> bytes:
        raise NotImplementedError

    def __str__(self) -> str:
        return cv_to_string(self)


@dataclass(frozen=True, eq=True)
class IntValue(ClarityValue):
    value: int
    type_id: ClassVar[int] = ClarityType.INT

    def __post_init__(self) -> None:
        _require_int(self.value, "int")
        if not INT_MIN <= self.value <= INT_MAX:
            raise ClarityValueError(f"int out of range: {self.value}")

    def encode(self) -> bytes:
        return u8(self.type_id) + self.value.to_bytes(16, "big", signed=True)


@dataclass(frozen=True, eq=True)
class UIntValue(ClarityValue):
    value: int
    type_id: ClassVar[int] = ClarityType.UINT

    def __post_init__(self) -> None:
        _require_int(self.value, "uint")
        if not 0 <= self.value <= UINT_MAX:
            raise ClarityValueError(f"uint out of range: {self.value}")

    def encode(self) -> bytes:
        return u8(self.type_id) + self.value.to_bytes(16, "big")


@dataclass(frozen=True, eq=True)
class Buffer(ClarityValue):
    data: bytes
    type_id: ClassVar[int] = ClarityType.BUFFER

    def __post_init__(self) -> None:
        if not isinstance(self.data, (bytes, bytearray)):
            raise ClarityValueError("buffer requires bytes")
        object.__setattr__(self, "data", bytes(self.data))

    def encode(self) -> bytes:
        return u8(self.type_id) + u32(len(self.data)) + self.data


@dataclass(frozen=True, eq=True)
class Bool(ClarityValue):
    value: bool

    @property
    def type_id(self) -> int:  # type: ignore[override]
        return ClarityType.BOOL_TRUE if self.value else ClarityType.BOOL_FALSE

    def encode(self) -> bytes:
        return u8(self.type_id)


@dataclass(frozen=True, eq=True)
class StandardPrincipal(ClarityValue):
    """An account address, e.g. ``ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM``."""

    address: str
    type_id: ClassVar[int] = ClarityType.PRINCIPAL_STANDARD

    def __post_init__(self) -> None:
        try:
            parse_address(self.address)
        except AddressError as exc:
            raise ClarityValueError(f"Invalid principal: {exc}") from exc

    def encode(self) -> bytes:
        version, hash_bytes = parse_address(self.address)
        return u8(self.type_id) + u8(version) + hash_bytes


@dataclass(frozen=True, eq=True)
class ContractPrincipal(ClarityValue):
    """A contract identifier: issuer address plus contract name."""

    address: str
    contract_name: str
    type_id: ClassVar[int] = ClarityType.PRINCIPAL_CONTRACT

    def __post_init__(self) -> None:
        try:
            parse_address(self.address)
        except AddressError as exc:
            raise ClarityValueError(f"Invalid contract principal: {exc}") from exc
        validate_contract_name(self.contract_name)

    @property
    def contract_id(self) -> str:
        return f"{self.address}.{self.contract_name}"

    def encode(self) -> bytes:
        version, hash_bytes = parse_address(self.address)
        name = self.contract_name.encode("ascii")
        return u8(self.type_id) + u8(version) + hash_bytes + u8(len(name)) + name


@dataclass(frozen=True, eq=True)
class ResponseOk(ClarityValue):
    value: ClarityValue
    type_id: ClassVar[int] = ClarityType.RESPONSE_OK

    def encode(self) -> bytes:
        return u8(self.type_id) + self.value.encode()


@dataclass(frozen=True, eq=True)
class ResponseErr(ClarityValue):
    value: ClarityValue
    type_id: ClassVar[int] = ClarityType.RESPONSE_ERR

    def encode(self) -> bytes:
        return u8(self.type_id) + self.value.encode()


@dataclass(frozen=True, eq=True)
class OptionalNone(ClarityValue):
    type_id: ClassVar[int] = ClarityType.OPTIONAL_NONE

    def encode(self) -> bytes:
        return u8(self.type_id)


@dataclass(frozen=True, eq=True)
class OptionalSome(ClarityValue):
    value: ClarityValue
    type_id: ClassVar[int] = ClarityType.OPTIONAL_SOME

    def encode(self) -> bytes:
        return u8(self.type_id) + self.value.encode()


@dataclass(frozen=True, eq=True)
class ListValue(ClarityValue):
    items: tuple[ClarityValue, ...] = field(default_factory=tuple)
    type_id: ClassVar[int] = ClarityType.LIST

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def encode(self) -> bytes:
        return u8(self.type_id) + u32(len(self.items)) + b"".join(
            item.encode() for item in self.items
        )


@dataclass(frozen=True, eq=True, init=False)
class TupleValue(ClarityValue):
    """A named-field record. Fields serialize in sorted key order."""

    data: tuple[tuple[str, ClarityValue], ...]
    type_id: ClassVar[int] = ClarityType.TUPLE

    def __init__(self, data: Union[dict[str, ClarityValue], tuple] = ()) -> None:
        pairs = list(data.items()) if isinstance(data, dict) else list(data)
        names = [validate_clarity_name(name) for name, _ in pairs]
        if len(set(names)) != len(names):
            raise ClarityValueError(f"Duplicate tuple field in {names}")
        object.__setattr__(self, "data", tuple(sorted(pairs, key=lambda kv: kv[0])))

    def __getitem__(self, key: str) -> ClarityValue:
        for name, value in self.data:
            if name == key:
                return value
        raise KeyError(key)

    def encode(self) -> bytes:
        out = bytearray(u8(self.type_id) + u32(len(self.data)))
        for name, value in self.data:
            raw = name.encode("ascii")
            out += u8(len(raw)) + raw + value.encode()
        return bytes(out)


@dataclass(frozen=True, eq=True)
class StringAscii(ClarityValue):
    data: str
    type_id: ClassVar[int] = ClarityType.STRING_ASCII

    def __post_init__(self) -> None:
        if not isinstance(self.data, str) or not _ASCII_RE.match(self.data):
            raise ClarityValueError(f"string-ascii requires printable ASCII: {self.data!r}")

    def encode(self) -> bytes:
        raw = self.data.encode("ascii")
        return u8(self.type_id) + u32(len(raw)) + raw


@dataclass(frozen=True, eq=True)
class StringUtf8(ClarityValue):
    data: str
    type_id: ClassVar[int] = ClarityType.STRING_UTF8

    def __post_init__(self) -> None:
        if not isinstance(self.data, str):
            raise ClarityValueError("string-utf8 requires str")

    def encode(self) -> bytes:
        raw = self.data.encode("utf-8")
        return u8(self.type_id) + u32(len(raw)) + raw


TRUE = Bool(True)
FALSE = Bool(False)
NONE = OptionalNone()


# ============ Helpers ============


def principal(value: str) -> Union[StandardPrincipal, ContractPrincipal]:
    """Build a principal from ``ADDR`` or ``ADDR.contract-name``."""
    if "." in value:
        address, name = value.split(".", 1)
        return ContractPrincipal(address, name)
    return StandardPrincipal(value)


def serialize(value: ClarityValue) -> bytes:
    if not isinstance(value, ClarityValue):
        raise ClarityValueError(f"Not a Clarity value: {value!r}")
    return value.encode()


def to_hex(value: ClarityValue) -> str:
    return "0x" + serialize(value).hex()


# ============ Deserialization ============


class ByteReader:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.pos = 0

    def read(self, n: int) -> bytes:
        if self.pos + n > len(self.data):
            raise ClarityValueError("Unexpected end of Clarity value")
        chunk = self.data[self.pos:self.pos + n]
        self.pos += n
        return chunk

    def read_u8(self) -> int:
        return self.read(1)[0]

    def read_u32(self) -> int:
        return int.from_bytes(self.read(4), "big")


def read_address(reader: ByteReader) -> str:
    version = reader.read_u8()
    try:
        return c32_address(version, reader.read(20))
    except AddressError as exc:
        raise ClarityValueError(str(exc)) from exc


def read_name(reader: ByteReader) -> str:
    length = reader.read_u8()
    try:
        return reader.read(length).decode("ascii")
    except UnicodeDecodeError as exc:
        raise ClarityValueError("Name is not ASCII") from exc


def read_value(reader: ByteReader, depth: int = 0) -> ClarityValue:
    if depth > MAX_VALUE_DEPTH:
        raise ClarityValueError(f"Clarity value nested deeper than {MAX_VALUE_DEPTH}")
    type_id = reader.read_u8()

    if type_id == ClarityType.INT:
        return IntValue(int.from_bytes(reader.read(16), "big", signed=True))
    if type_id == ClarityType.UINT:
        return UIntValue(int.from_bytes(reader.read(16), "big"))
    if type_id == ClarityType.BUFFER:
        return Buffer(reader.read(reader.read_u32()))
    if type_id == ClarityType.BOOL_TRUE:
        return TRUE
    if type_id == ClarityType.BOOL_FALSE:
        return FALSE
    if type_id == ClarityType.PRINCIPAL_STANDARD:
        return StandardPrincipal(read_address(reader))
    if type_id == ClarityType.PRINCIPAL_CONTRACT:
        address = read_address(reader)
        return ContractPrincipal(address, read_name(reader))
    if type_id == ClarityType.RESPONSE_OK:
        return ResponseOk(read_value(reader, depth + 1))
    if type_id == ClarityType.RESPONSE_ERR:
        return ResponseErr(read_value(reader, depth + 1))
    if type_id == ClarityType.OPTIONAL_NONE:
        return NONE
    if type_id == ClarityType.OPTIONAL_SOME:
        return OptionalSome(read_value(reader, depth + 1))
    if type_id == ClarityType.LIST:
        count = reader.read_u32()
        return ListValue(tuple(read_value(reader, depth + 1) for _ in range(count)))
    if type_id == ClarityType.TUPLE:
        count = reader.read_u32()
        fields = []
        for _ in range(count):
            name = read_name(reader)
            fields.append((name, read_value(reader, depth + 1)))
        return TupleValue(tuple(fields))
    if type_id == ClarityType.STRING_ASCII:
        raw = reader.read(reader.read_u32())
        try:
            return StringAscii(raw.decode("ascii"))
        except UnicodeDecodeError as exc:
            raise ClarityValueError("string-ascii is not ASCII") from exc
    if type_id == ClarityType.STRING_UTF8:
        raw = reader.read(reader.read_u32())
        try:
            return StringUtf8(raw.decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise ClarityValueError("string-utf8 is not valid UTF-8") from exc

    raise ClarityValueError(f"Unknown Clarity type id: 0x{type_id:02x}")


def deserialize(data: Union[bytes, str]) -> ClarityValue:
    """
    Decode a serialized Clarity value.

    Args:
        data: Raw bytes, or hex (optionally 0x-prefixed)

    Returns:
        The decoded value

    Raises:
        ClarityValueError: On truncated, trailing or unknown data
    """
    if isinstance(data, str):
        try:
            data = bytes.fromhex(strip_hex_prefix(data))
        except ValueError as exc:
            raise ClarityValueError(f"Invalid hex: {exc}") from exc

    reader = ByteReader(data)
    value = read_value(reader)
    if reader.pos != len(data):
        raise ClarityValueError(f"{len(data) - reader.pos} trailing bytes after Clarity value")
    return value


# ============ Text rendering ============


def cv_to_string(value: ClarityValue) -> str:
    """Render a value as Clarity source text (``u5``, ``(some ST...)``, ...)."""
    if isinstance(value, IntValue):
        return str(value.value)
    if isinstance(value, UIntValue):
        return f"u{value.value}"
    if isinstance(value, Buffer):
        return "0x" + value.data.hex()
    if isinstance(value, Bool):
        return "true" if value.value else "false"
    if isinstance(value, StandardPrincipal):
        return value.address
    if isinstance(value, ContractPrincipal):
        return value.contract_id
    if isinstance(value, ResponseOk):
        return f"(ok {cv_to_string(value.value)})"
    if isinstance(value, ResponseErr):
        return f"(err {cv_to_string(value.value)})"
    if isinstance(value, OptionalNone):
        return "none"
    if isinstance(value, OptionalSome):
        return f"(some {cv_to_string(value.value)})"
    if isinstance(value, ListValue):
        return "(list " + " ".join(cv_to_string(item) for item in value.items) + ")"
    if isinstance(value, TupleValue):
        fields = " ".join(f"({name} {cv_to_string(v)})" for name, v in value.data)
        return f"(tuple {fields})"
    if isinstance(value, StringAscii):
        return json.dumps(value.data)
    if isinstance(value, StringUtf8):
        return "u" + json.dumps(value.data, ensure_ascii=False)
    raise ClarityValueError(f"Not a Clarity value: {value!r}")
