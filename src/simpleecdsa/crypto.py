"""
ECDSA primitives backing the signer identities.

This module wraps the python-ecdsa library behind a small provider
interface (generate, derive, sign, verify, point construction) so the
rest of the package only ever deals with plain integers and points.

Hashing contract:
    Messages are hashed with SHA-256 before signing and verification.
    ``str`` messages are encoded as UTF-8 first. Signer and verifier
    must agree on this, otherwise every verification fails.

Nonces are derived deterministically (RFC 6979), so signing the same
message with the same key always yields the same (r, s) pair.
"""

import hashlib
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Union

from ecdsa import BadSignatureError, SigningKey, VerifyingKey
from ecdsa.ellipticcurve import Point

from .exceptions import InvalidKeyError


logger = logging.getLogger(__name__)

# Hash function for ECDSA signing and verification
HASH_FUNC = hashlib.sha256

Message = Union[bytes, bytearray, memoryview, str]
Entropy = Callable[[int], bytes]


@dataclass(frozen=True)
class CurvePoint:
    """
    Affine coordinates of a public key.

    Nothing here checks that (x, y) satisfies the curve equation;
    that happens in the provider when the point is actually used.
    """

    x: int
    y: int


@dataclass(frozen=True)
class KeyPair:
    """
    A public point and, optionally, the private scalar it derives from.

    A pair imported from a public key has ``private=None``.
    """

    public: CurvePoint
    private: Optional[int] = None

    @property
    def has_private(self) -> bool:
        return self.private is not None

    def __repr__(self) -> str:
        # never leak the scalar through logs or tracebacks
        private = "<hidden>" if self.has_private else None
        return f"KeyPair(public={self.public!r}, private={private})"


def message_bytes(message: Message) -> bytes:
    """
    Normalize a message to bytes.

    Args:
        message: Bytes-like object or text (encoded as UTF-8).

    Returns:
        The message bytes that get hashed.

    Raises:
        TypeError: If the message is neither text nor bytes-like,
            or is text that cannot be encoded as UTF-8 (lone surrogates).
    """
    if isinstance(message, str):
        try:
            return message.encode("utf-8")
        except UnicodeEncodeError as e:
            raise TypeError("Message text is not encodable as UTF-8") from e
    if isinstance(message, (bytes, bytearray, memoryview)):
        return bytes(message)
    raise TypeError(f"Message must be str or bytes, got {type(message).__name__}")


def _sigencode_pair(r: int, s: int, order: int) -> Tuple[int, int]:
    return int(r), int(s)


def _sigdecode_pair(signature: Tuple[int, int], order: int) -> Tuple[int, int]:
    return signature


class EcdsaCurveProvider:
    """
    Curve arithmetic provider backed by python-ecdsa.

    One provider instance exists per registered curve. Providers hold
    no mutable state and can be shared freely between identities.

    Example:
        >>> from ecdsa import NIST256p
        >>> provider = EcdsaCurveProvider(NIST256p)
        >>> pair = provider.generate_keypair()
        >>> r, s = provider.sign(pair.private, b"hello")
        >>> provider.verify(pair.public, b"hello", (r, s))
        True
    """

    def __init__(self, curve, hashfunc=HASH_FUNC):
        """
        Args:
            curve: python-ecdsa curve object (e.g. ``ecdsa.NIST256p``).
            hashfunc: Hash constructor applied to messages.
        """
        self.curve = curve
        self.hashfunc = hashfunc

    @property
    def order(self) -> int:
        return self.curve.order

    def _point_of(self, signing_key: SigningKey) -> CurvePoint:
        point = signing_key.get_verifying_key().pubkey.point
        # gmpy2-backed python-ecdsa hands back mpz values
        return CurvePoint(x=int(point.x()), y=int(point.y()))

    def _signing_key(self, private: int) -> SigningKey:
        if not 1 <= private < self.order:
            raise InvalidKeyError(
                f"Private scalar out of range for curve {self.curve.name}"
            )
        return SigningKey.from_secret_exponent(
            private, curve=self.curve, hashfunc=self.hashfunc
        )

    def generate_keypair(self, entropy: Optional[Entropy] = None) -> KeyPair:
        """
        Generate a fresh keypair.

        Args:
            entropy: Optional ``randfunc(n) -> bytes`` randomness source.
                Defaults to ``os.urandom`` inside python-ecdsa. Passing a
                seeded source makes generation reproducible.

        Returns:
            KeyPair holding both the private scalar and the public point.
        """
        signing_key = SigningKey.generate(
            curve=self.curve, entropy=entropy, hashfunc=self.hashfunc
        )
        private = int(signing_key.privkey.secret_multiplier)
        return KeyPair(public=self._point_of(signing_key), private=private)

    def derive_public_point(self, private: int) -> CurvePoint:
        """
        Compute the public point for a private scalar.

        Raises:
            InvalidKeyError: If the scalar is not in [1, n-1].
        """
        return self._point_of(self._signing_key(private))

    def point_from_coordinates(self, x: int, y: int) -> VerifyingKey:
        """
        Build a verifying key from affine coordinates.

        Unlike the codec, this does check curve membership.

        Raises:
            InvalidKeyError: If the coordinates are outside the field or
                the point is not on the curve.
        """
        field = self.curve.curve
        p = field.p()
        if not (0 <= x < p and 0 <= y < p) or not field.contains_point(x, y):
            raise InvalidKeyError(f"Point is not on curve {self.curve.name}")

        point = Point(field, x, y, self.order)
        return VerifyingKey.from_public_point(
            point, curve=self.curve, hashfunc=self.hashfunc, validate_point=False
        )

    def sign(self, private: int, message: Message) -> Tuple[int, int]:
        """
        Sign a message.

        Args:
            private: Private scalar.
            message: Message to sign (hashed with ``self.hashfunc``).

        Returns:
            The signature as an ``(r, s)`` pair of integers.
        """
        signing_key = self._signing_key(private)
        return signing_key.sign_deterministic(
            message_bytes(message),
            hashfunc=self.hashfunc,
            sigencode=_sigencode_pair,
        )

    def verify(self, public: CurvePoint, message: Message, signature: Tuple[int, int]) -> bool:
        """
        Verify an ``(r, s)`` signature against a public point.

        Returns:
            True if the signature is valid, False otherwise.

        Raises:
            InvalidKeyError: If the public point is unusable on this curve.
        """
        verifying_key = self.point_from_coordinates(public.x, public.y)
        try:
            verifying_key.verify(
                tuple(signature),
                message_bytes(message),
                hashfunc=self.hashfunc,
                sigdecode=_sigdecode_pair,
            )
            return True
        except BadSignatureError:
            logger.debug("signature rejected on curve %s", self.curve.name)
            return False
