"""
simpleecdsa - Minimal ECDSA identities with a compact DER encoding.

This library generates ECDSA keypairs on a named curve, exports keys
and signatures as hex strings of small DER records, and verifies
signatures against an exported public key. Curve arithmetic is done
by the python-ecdsa library.

Quick Start:
    >>> from simpleecdsa import SignerIdentity, verify
    >>>
    >>> # Create an identity (generates a keypair)
    >>> alice = SignerIdentity("p256")
    >>> pub = alice.export_public_key()
    >>>
    >>> # Sign and verify
    >>> sig = alice.sign("hello")
    >>> verify(pub, "p256", "hello", sig)
    True

Encoded keys carry no curve identifier: keep track of the curve
yourself and pass it back in when loading or verifying.

See Also:
    - api.py: SignerIdentity and module-level functions
    - codec.py: Wire encoding of keys and signatures
    - crypto.py: python-ecdsa wrapper and hashing contract
    - curves.py: Supported curve registry
    - exceptions.py: Custom exception types
"""

__version__ = "0.1.0"
__author__ = "simpleecdsa Contributors"

# Public API
from .api import (
    SignerIdentity,
    KeyOrigin,
    generate,
    verify,
    is_valid_public_key,
    load_private_key,
    load_public_key,
)

# Curve registry
from .curves import CurveId, DEFAULT_CURVE, supported_curves

# Data types
from .crypto import CurvePoint, KeyPair

# Exceptions for error handling
from .exceptions import (
    SimpleECDSAError,
    UnsupportedCurveError,
    MalformedEncodingError,
    NoPrivateKeyError,
    InvalidKeyError,
)

__all__ = [
    # Version
    "__version__",
    # Main API
    "SignerIdentity",
    "KeyOrigin",
    "generate",
    "verify",
    "is_valid_public_key",
    "load_private_key",
    "load_public_key",
    # Curves
    "CurveId",
    "DEFAULT_CURVE",
    "supported_curves",
    # Types
    "CurvePoint",
    "KeyPair",
    # Exceptions
    "SimpleECDSAError",
    "UnsupportedCurveError",
    "MalformedEncodingError",
    "NoPrivateKeyError",
    "InvalidKeyError",
]
