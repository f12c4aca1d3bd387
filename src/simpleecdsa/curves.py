"""
Registry of supported named curves.

Every curve a signer identity can use is listed in ``CurveId`` and
mapped to exactly one provider instance. Looking up anything else
raises UnsupportedCurveError.
"""

from enum import Enum
from typing import Dict, Tuple, Union

from ecdsa import NIST256p

from .crypto import EcdsaCurveProvider
from .exceptions import UnsupportedCurveError


class CurveId(str, Enum):
    """Named curves known to the registry."""

    P256 = "p256"


# Default curve for new identities
DEFAULT_CURVE = CurveId.P256

_PROVIDERS: Dict[CurveId, EcdsaCurveProvider] = {
    CurveId.P256: EcdsaCurveProvider(NIST256p),
}

CurveLike = Union[CurveId, str]


def resolve_curve(curve: CurveLike) -> CurveId:
    """
    Map a curve name or enum member to a registered CurveId.

    Args:
        curve: A CurveId, or its string value (case-insensitive).

    Returns:
        The matching CurveId.

    Raises:
        UnsupportedCurveError: If the curve is not registered.
    """
    if isinstance(curve, CurveId):
        return curve
    if isinstance(curve, str):
        try:
            return CurveId(curve.lower())
        except ValueError:
            pass
    raise UnsupportedCurveError(f"Unsupported elliptic curve: {curve!r}")


def get_provider(curve: CurveLike) -> EcdsaCurveProvider:
    """Return the provider registered for ``curve``."""
    return _PROVIDERS[resolve_curve(curve)]


def supported_curves() -> Tuple[CurveId, ...]:
    """Return all registered curves."""
    return tuple(_PROVIDERS)
