"""
Wire encoding for public keys, private keys and signatures.

Each record is a DER ``SEQUENCE`` of ``UTF8String`` fields, one per
integer, in declaration order:

    PublicKeyRecord   SEQUENCE { x UTF8String, y UTF8String }
    PrivateKeyRecord  SEQUENCE { d UTF8String }
    SignatureRecord   SEQUENCE { r UTF8String, s UTF8String }

Every integer is written as lowercase hexadecimal text without a prefix,
zero-padded to an even number of digits. Decoding accepts only that
canonical form (no uppercase, odd-length or extra zero-padded text),
so every record has exactly one encoding and any accepted byte
string re-encodes to itself.

The encoding carries no curve identifier, so the same bytes are
ambiguous across curves and the caller has to track the curve.
Callers are also responsible for bounding input size.
"""

import binascii
import re
from dataclasses import dataclass, fields
from typing import Type, TypeVar, Union

from ecdsa import der

from .exceptions import MalformedEncodingError


FIELD_TAG = 0x0C  # UTF8String

_HEX_TEXT = re.compile(r"[0-9a-f]+")


@dataclass(frozen=True)
class PublicKeyRecord:
    x: int
    y: int


@dataclass(frozen=True)
class PrivateKeyRecord:
    d: int


@dataclass(frozen=True)
class SignatureRecord:
    r: int
    s: int


Record = Union[PublicKeyRecord, PrivateKeyRecord, SignatureRecord]
R = TypeVar("R", PublicKeyRecord, PrivateKeyRecord, SignatureRecord)

RECORD_TYPES = (PublicKeyRecord, PrivateKeyRecord, SignatureRecord)


def _int_to_text(value: int) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"Record fields must be integers, got {type(value).__name__}")
    if value < 0:
        raise ValueError("Record fields must be non-negative")
    text = format(value, "x")
    if len(text) % 2:
        text = "0" + text
    return text


def _text_to_int(raw: bytes, name: str) -> int:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedEncodingError(f"Field '{name}' is not valid UTF-8") from e
    if not _HEX_TEXT.fullmatch(text):
        raise MalformedEncodingError(f"Field '{name}' is not hexadecimal text")
    value = int(text, 16)
    if _int_to_text(value) != text:
        raise MalformedEncodingError(f"Field '{name}' is not in canonical hex form")
    return value


def _encode_field(text: str) -> bytes:
    body = text.encode("utf-8")
    return bytes([FIELD_TAG]) + der.encode_length(len(body)) + body


def _remove_field(data: bytes):
    """Split one UTF8String off the front of ``data``: (body, rest)."""
    if not data:
        raise der.UnexpectedDER("Empty string does not encode a UTF8String")
    if data[0] != FIELD_TAG:
        raise der.UnexpectedDER(
            "wanted type 'UTF8String' (0x%02x), got 0x%02x" % (FIELD_TAG, data[0])
        )
    length, lengthlength = der.read_length(data[1:])
    if length > len(data) - 1 - lengthlength:
        raise der.UnexpectedDER("Length longer than the provided buffer")
    end = 1 + lengthlength + length
    return data[1 + lengthlength:end], data[end:]


def encode(record: Record) -> bytes:
    """
    Encode a record to DER bytes.

    Args:
        record: PublicKeyRecord, PrivateKeyRecord or SignatureRecord.

    Returns:
        Deterministic DER encoding of the record.

    Raises:
        TypeError: If ``record`` is not one of the record types.
        ValueError: If a field is negative or not an integer.
    """
    if not isinstance(record, RECORD_TYPES):
        raise TypeError(f"Cannot encode {type(record).__name__}")
    parts = [_encode_field(_int_to_text(getattr(record, f.name))) for f in fields(record)]
    return der.encode_sequence(*parts)


def decode(data: bytes, record_type: Type[R]) -> R:
    """
    Decode DER bytes into a record of the given type.

    Only the structure is checked; the integers are not validated as
    curve elements.

    Args:
        data: Encoded bytes.
        record_type: The expected record class.

    Returns:
        A ``record_type`` instance.

    Raises:
        MalformedEncodingError: If the bytes are not a sequence of exactly
            the expected number of hex UTF8String fields.
    """
    if not isinstance(data, (bytes, bytearray)):
        raise MalformedEncodingError(f"Expected bytes, got {type(data).__name__}")

    name = record_type.__name__
    try:
        body, rest = der.remove_sequence(bytes(data))
        if rest:
            raise der.UnexpectedDER("Trailing bytes after sequence")

        values = []
        for f in fields(record_type):
            raw, body = _remove_field(body)
            values.append(_text_to_int(raw, f.name))

        if body:
            raise der.UnexpectedDER("Too many fields in sequence")
    except der.UnexpectedDER as e:
        raise MalformedEncodingError(f"Failed to decode {name}: {e}") from e

    return record_type(*values)


def to_hex(data: bytes) -> str:
    """Hex transcript of encoded bytes, as handed to callers."""
    return binascii.hexlify(data).decode("ascii")


def from_hex(text: Union[str, bytes]) -> bytes:
    """
    Parse a hex transcript back to bytes.

    Raises:
        MalformedEncodingError: On non-hex characters, odd length or
            a value that is neither text nor bytes.
    """
    if not isinstance(text, (str, bytes, bytearray)):
        raise MalformedEncodingError(f"Expected hex text, got {type(text).__name__}")
    try:
        return binascii.unhexlify(text)
    except ValueError as e:
        raise MalformedEncodingError(f"Invalid hex encoding: {e}") from e


# Typed shorthands


def encode_public_key(x: int, y: int) -> bytes:
    return encode(PublicKeyRecord(x, y))


def decode_public_key(data: bytes) -> PublicKeyRecord:
    return decode(data, PublicKeyRecord)


def encode_private_key(d: int) -> bytes:
    return encode(PrivateKeyRecord(d))


def decode_private_key(data: bytes) -> PrivateKeyRecord:
    return decode(data, PrivateKeyRecord)


def encode_signature(r: int, s: int) -> bytes:
    return encode(SignatureRecord(r, s))


def decode_signature(data: bytes) -> SignatureRecord:
    return decode(data, SignatureRecord)
