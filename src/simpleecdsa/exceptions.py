"""
Custom exceptions for the simpleecdsa library.

This module defines the errors raised while creating, importing and
using signer identities, so callers can tell an unknown curve apart
from a corrupted key blob or a verify-only identity.

InvalidKeyError is raised by load_from_private_key when a decoded
scalar is outside [1, n-1] for the curve. Out-of-range scalars are
rejected rather than reduced modulo the curve order, so callers that
only catch UnsupportedCurveError, MalformedEncodingError and
NoPrivateKeyError should catch SimpleECDSAError instead.
"""


class SimpleECDSAError(Exception):
    """Base exception for all simpleecdsa errors."""

    pass


class UnsupportedCurveError(SimpleECDSAError):
    """
    Raised when a curve outside the registry is requested.

    The request is never retried; the caller has to pick one of
    the supported curves (see ``simpleecdsa.curves.supported_curves``).
    """

    def __init__(self, message: str = "Unsupported elliptic curve"):
        self.message = message
        super().__init__(self.message)


class MalformedEncodingError(SimpleECDSAError):
    """
    Raised when encoded bytes do not match the expected record shape.

    Covers bad hex transcripts, a wrong DER tag, truncated data,
    a wrong field count and fields that are not hex text.
    """

    def __init__(self, message: str = "Malformed key or signature encoding"):
        self.message = message
        super().__init__(self.message)


class NoPrivateKeyError(SimpleECDSAError):
    """
    Raised when signing or private key export is attempted on an
    identity that was loaded from a public key only.
    """

    def __init__(self, message: str = "No private key available for this identity"):
        self.message = message
        super().__init__(self.message)


class InvalidKeyError(SimpleECDSAError):
    """
    Raised when the curve library rejects a decoded scalar or point.

    This is distinct from MalformedEncodingError - the bytes decoded
    fine, but the values are not usable on the selected curve.
    """

    def __init__(self, message: str = "Invalid key material for the selected curve"):
        self.message = message
        super().__init__(self.message)
