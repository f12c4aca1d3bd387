"""Tests for the key and signature wire encoding."""

import pytest

from simpleecdsa.codec import (
    PrivateKeyRecord,
    PublicKeyRecord,
    SignatureRecord,
    decode,
    decode_private_key,
    decode_public_key,
    decode_signature,
    encode,
    encode_private_key,
    encode_public_key,
    encode_signature,
    from_hex,
    to_hex,
)
from simpleecdsa.exceptions import MalformedEncodingError


def utf8_field(text: bytes) -> bytes:
    """A short-form UTF8String field."""
    return b"\x0c" + bytes([len(text)]) + text


def sequence(*parts: bytes) -> bytes:
    body = b"".join(parts)
    return b"\x30" + bytes([len(body)]) + body


class TestEncode:
    """Test record encoding."""

    def test_private_key_layout(self):
        assert encode_private_key(1) == bytes.fromhex("3004" "0c02" "3031")

    def test_public_key_layout(self):
        # x = "0a", y = "ff"
        assert encode_public_key(0x0A, 0xFF) == bytes.fromhex(
            "3008" "0c02" "3061" "0c02" "6666"
        )

    def test_hex_text_is_even_length_lowercase(self):
        data = encode_signature(0xABC, 0)
        assert data == sequence(utf8_field(b"0abc"), utf8_field(b"00"))

    def test_encoding_is_deterministic(self):
        record = SignatureRecord(r=12345, s=67890)
        assert encode(record) == encode(record)

    def test_field_order_is_fixed(self):
        assert encode_public_key(1, 2) != encode_public_key(2, 1)

    def test_long_form_length(self):
        """Fields over 127 bytes use the DER long length form."""
        value = 2 ** 1000 + 1
        data = encode_private_key(value)
        assert data[0] == 0x30
        assert data[1] & 0x80
        assert decode_private_key(data).d == value

    def test_negative_value_rejected(self):
        with pytest.raises(ValueError):
            encode(PrivateKeyRecord(d=-1))

    def test_non_integer_value_rejected(self):
        with pytest.raises(ValueError):
            encode(PrivateKeyRecord(d="ff"))

    def test_non_record_rejected(self):
        with pytest.raises(TypeError):
            encode((1, 2))


class TestDecode:
    """Test record decoding."""

    def test_decode_public_key(self):
        data = sequence(utf8_field(b"0a"), utf8_field(b"ff"))
        assert decode_public_key(data) == PublicKeyRecord(x=10, y=255)

    def test_decode_zero(self):
        assert decode_private_key(sequence(utf8_field(b"00"))).d == 0

    @pytest.mark.parametrize(
        "text",
        [b"FF", b"abc", b"0", b"00ff", b"0000", b"0Abc"],
        ids=["uppercase", "odd-length", "short-zero", "extra-zero-pair", "padded-zero", "mixed-case"],
    )
    def test_non_canonical_hex_rejected(self, text):
        """Each record has exactly one accepted encoding."""
        with pytest.raises(MalformedEncodingError):
            decode_private_key(sequence(utf8_field(text)))

    def test_accepted_bytes_reencode_identically(self):
        data = sequence(utf8_field(b"0abc"), utf8_field(b"ff"))
        assert encode(decode_public_key(data)) == data

    def test_decode_signature(self):
        record = SignatureRecord(r=2 ** 255 + 3, s=7)
        assert decode_signature(encode(record)) == record

    def test_decode_bytearray(self):
        data = bytearray(encode_private_key(42))
        assert decode(data, PrivateKeyRecord).d == 42

    @pytest.mark.parametrize(
        "data",
        [
            b"",
            b"\x30",
            b"\x31\x00",
            b"\x30\x00",
            b"\x30\x08\x0c\x02\x30\x61",
        ],
        ids=["empty", "no-length", "wrong-tag", "no-fields", "truncated"],
    )
    def test_structural_errors(self, data):
        with pytest.raises(MalformedEncodingError):
            decode_public_key(data)

    def test_missing_field(self):
        with pytest.raises(MalformedEncodingError):
            decode_public_key(sequence(utf8_field(b"01")))

    def test_extra_field(self):
        data = encode_public_key(1, 2)
        with pytest.raises(MalformedEncodingError):
            decode_private_key(data)

    def test_trailing_bytes(self):
        with pytest.raises(MalformedEncodingError):
            decode_private_key(encode_private_key(1) + b"\x00")

    def test_wrong_field_tag(self):
        # OCTET STRING instead of UTF8String
        data = sequence(b"\x04\x02" + b"01")
        with pytest.raises(MalformedEncodingError):
            decode_private_key(data)

    @pytest.mark.parametrize("text", [b"", b"zz", b"0x01", b" 01", b"1_0", b"-1"])
    def test_non_hex_field(self, text):
        with pytest.raises(MalformedEncodingError):
            decode_private_key(sequence(utf8_field(text)))

    def test_invalid_utf8_field(self):
        with pytest.raises(MalformedEncodingError):
            decode_private_key(sequence(utf8_field(b"\xff\xfe")))

    def test_non_bytes_input(self):
        with pytest.raises(MalformedEncodingError):
            decode_private_key("3004")

    def test_error_chains_der_cause(self):
        with pytest.raises(MalformedEncodingError) as info:
            decode_private_key(b"\x31\x00")
        assert info.value.__cause__ is not None


class TestHexTranscript:
    """Test the hex helpers used at the API boundary."""

    def test_to_hex_lowercase(self):
        assert to_hex(b"\xab\x01") == "ab01"

    def test_from_hex_text_and_bytes(self):
        assert from_hex("ab01") == b"\xab\x01"
        assert from_hex(b"AB01") == b"\xab\x01"

    @pytest.mark.parametrize("text", ["abc", "zz", "ab 01", "é0"])
    def test_from_hex_rejects_bad_text(self, text):
        with pytest.raises(MalformedEncodingError):
            from_hex(text)

    @pytest.mark.parametrize("value", [None, 12, ["ab"]])
    def test_from_hex_rejects_other_types(self, value):
        with pytest.raises(MalformedEncodingError):
            from_hex(value)
