"""
Public API for creating, exporting, importing and using ECDSA identities.

This module provides the SignerIdentity class, which owns a curve
selection and one keypair, plus module-level shortcuts:
- generate(): Create an identity with a fresh keypair
- verify(): Check a signature against an encoded public key
- is_valid_public_key(): Check that a public key blob is well formed
- load_private_key() / load_public_key(): Import encoded keys

All keys and signatures cross the API boundary as hex strings of the
DER records described in ``simpleecdsa.codec``. The curve is never
part of the encoding and must be passed in by the caller.

Known weakness:
    Importing a public key checks only that it is well formed, not that
    the point lies on the curve. An off-curve point is rejected later,
    when it is used for verification (which then returns False).

Example:
    >>> alice = SignerIdentity("p256")
    >>> pub = alice.export_public_key()
    >>> sig = alice.sign("hello")
    >>> SignerIdentity.verify(pub, "p256", "hello", sig)
    True
    >>> SignerIdentity.verify(pub, "p256", "hello!", sig)
    False
"""

import logging
from enum import Enum
from typing import Optional

from .codec import (
    PrivateKeyRecord,
    PublicKeyRecord,
    SignatureRecord,
    decode,
    encode,
    from_hex,
    to_hex,
)
from .crypto import CurvePoint, Entropy, KeyPair, Message
from .curves import DEFAULT_CURVE, CurveId, CurveLike, get_provider, resolve_curve
from .exceptions import NoPrivateKeyError, SimpleECDSAError


logger = logging.getLogger(__name__)


class KeyOrigin(Enum):
    """How an identity obtained its keypair."""

    GENERATED = "generated"
    IMPORTED_PRIVATE = "imported_private"
    IMPORTED_PUBLIC = "imported_public"


class SignerIdentity:
    """
    A curve selection plus one keypair.

    Constructing an identity generates a fresh keypair. Use the
    ``load_from_*`` class methods to rebuild one from exported keys.
    An identity loaded from a public key can verify but not sign.

    Attributes:
        curve: The CurveId, fixed for the lifetime of the identity.
        origin: KeyOrigin telling how the keypair was obtained.
    """

    def __init__(self, curve: CurveLike = DEFAULT_CURVE, *, entropy: Optional[Entropy] = None):
        """
        Create an identity with a freshly generated keypair.

        Args:
            curve: CurveId or curve name (e.g. ``"p256"``).
            entropy: Optional ``randfunc(n) -> bytes`` randomness source.
                Pass a seeded source to get reproducible keypairs.

        Raises:
            UnsupportedCurveError: If the curve is not registered.
        """
        curve_id = resolve_curve(curve)
        key_pair = get_provider(curve_id).generate_keypair(entropy)
        self._init(curve_id, key_pair, KeyOrigin.GENERATED)
        logger.debug("generated keypair on curve %s", curve_id.value)

    def _init(self, curve_id: CurveId, key_pair: KeyPair, origin: KeyOrigin) -> None:
        self._curve = curve_id
        self._key_pair = key_pair
        self._origin = origin

    @classmethod
    def _restore(cls, curve_id: CurveId, key_pair: KeyPair, origin: KeyOrigin) -> "SignerIdentity":
        # bypasses __init__ so no throwaway keypair is generated
        identity = cls.__new__(cls)
        identity._init(curve_id, key_pair, origin)
        return identity

    @classmethod
    def create(cls, curve: CurveLike = DEFAULT_CURVE, entropy: Optional[Entropy] = None) -> "SignerIdentity":
        """Same as ``SignerIdentity(curve, entropy=entropy)``."""
        return cls(curve, entropy=entropy)

    @property
    def curve(self) -> CurveId:
        return self._curve

    @property
    def origin(self) -> KeyOrigin:
        return self._origin

    @property
    def public_point(self) -> CurvePoint:
        return self._key_pair.public

    @property
    def has_private_key(self) -> bool:
        return self._key_pair.has_private

    def __repr__(self) -> str:
        return (
            f"SignerIdentity(curve={self._curve.value!r}, "
            f"origin={self._origin.value!r}, private={self.has_private_key})"
        )

    def _require_private(self, action: str) -> int:
        if not self._key_pair.has_private:
            raise NoPrivateKeyError(f"Cannot {action}: identity holds only a public key")
        return self._key_pair.private

    def export_public_key(self) -> str:
        """
        Get the encoded public key.

        Returns:
            Hex string of the DER PublicKeyRecord.
        """
        point = self._key_pair.public
        return to_hex(encode(PublicKeyRecord(point.x, point.y)))

    def export_private_key(self) -> str:
        """
        Get the encoded private key.

        Returns:
            Hex string of the DER PrivateKeyRecord.

        Raises:
            NoPrivateKeyError: If the identity was loaded from a public key.
        """
        private = self._require_private("export private key")
        return to_hex(encode(PrivateKeyRecord(private)))

    def sign(self, message: Message) -> str:
        """
        Sign a message.

        The message is hashed with SHA-256 (text is UTF-8 encoded first)
        and signed with a deterministic RFC 6979 nonce.

        Args:
            message: Text or bytes to sign.

        Returns:
            Hex string of the DER SignatureRecord.

        Raises:
            NoPrivateKeyError: If the identity was loaded from a public key.
            TypeError: If the message is neither text nor bytes.
        """
        private = self._require_private("sign")
        r, s = get_provider(self._curve).sign(private, message)
        return to_hex(encode(SignatureRecord(r, s)))

    def verify_message(self, message: Message, signature: str) -> bool:
        """
        Verify a signature against this identity's public key.

        Never raises; anything that cannot be verified returns False.
        """
        try:
            record = decode(from_hex(signature), SignatureRecord)
            return get_provider(self._curve).verify(
                self._key_pair.public, message, (record.r, record.s)
            )
        except (SimpleECDSAError, TypeError) as e:
            logger.debug("verification failed: %s", e)
            return False

    @staticmethod
    def verify(public_key: str, curve: CurveLike, message: Message, signature: str) -> bool:
        """
        Verify a signature.

        This is total over its inputs: malformed keys or signatures, an
        unknown curve, an off-curve point and plain mismatches all
        return False instead of raising.

        Args:
            public_key: Hex encoded public key.
            curve: The curve the public key belongs to.
            message: The message that was signed.
            signature: Hex encoded signature.

        Returns:
            True if the signature verifies, otherwise False.
        """
        try:
            identity = SignerIdentity.load_from_public_key(public_key, curve)
        except SimpleECDSAError as e:
            logger.debug("verification failed: %s", e)
            return False
        return identity.verify_message(message, signature)

    @classmethod
    def load_from_private_key(cls, private_key: str, curve: CurveLike) -> "SignerIdentity":
        """
        Create an identity from an encoded private key.

        The public point is derived from the scalar.

        Args:
            private_key: Hex encoded private key.
            curve: The curve the key belongs to.

        Raises:
            UnsupportedCurveError: If the curve is not registered.
            MalformedEncodingError: If the key cannot be decoded.
            InvalidKeyError: If the scalar is out of range for the curve.
        """
        curve_id = resolve_curve(curve)
        record = decode(from_hex(private_key), PrivateKeyRecord)
        public = get_provider(curve_id).derive_public_point(record.d)
        logger.debug("loaded private key on curve %s", curve_id.value)
        return cls._restore(
            curve_id, KeyPair(public=public, private=record.d), KeyOrigin.IMPORTED_PRIVATE
        )

    @classmethod
    def load_from_public_key(cls, public_key: str, curve: CurveLike) -> "SignerIdentity":
        """
        Create a verify-only identity from an encoded public key.

        The point is not checked against the curve equation.

        Args:
            public_key: Hex encoded public key.
            curve: The curve the key belongs to.

        Raises:
            UnsupportedCurveError: If the curve is not registered.
            MalformedEncodingError: If the key cannot be decoded.
        """
        curve_id = resolve_curve(curve)
        record = decode(from_hex(public_key), PublicKeyRecord)
        return cls._restore(
            curve_id, KeyPair(public=CurvePoint(record.x, record.y)), KeyOrigin.IMPORTED_PUBLIC
        )

    @staticmethod
    def is_valid_public_key(public_key: str) -> bool:
        """
        Check that a public key is well formed. Never raises.

        Only the encoding is checked. A point that is not on any curve
        still counts as valid here.

        Returns:
            True if the key decodes as a PublicKeyRecord, otherwise False.
        """
        try:
            decode(from_hex(public_key), PublicKeyRecord)
            return True
        except SimpleECDSAError:
            return False


# Module-level shortcuts


def generate(curve: CurveLike = DEFAULT_CURVE, *, entropy: Optional[Entropy] = None) -> SignerIdentity:
    """Create an identity with a fresh keypair. See SignerIdentity()."""
    return SignerIdentity(curve, entropy=entropy)


def verify(public_key: str, curve: CurveLike, message: Message, signature: str) -> bool:
    """See SignerIdentity.verify()."""
    return SignerIdentity.verify(public_key, curve, message, signature)


def is_valid_public_key(public_key: str) -> bool:
    """See SignerIdentity.is_valid_public_key()."""
    return SignerIdentity.is_valid_public_key(public_key)


def load_private_key(private_key: str, curve: CurveLike) -> SignerIdentity:
    """See SignerIdentity.load_from_private_key()."""
    return SignerIdentity.load_from_private_key(private_key, curve)


def load_public_key(public_key: str, curve: CurveLike) -> SignerIdentity:
    """See SignerIdentity.load_from_public_key()."""
    return SignerIdentity.load_from_public_key(public_key, curve)
