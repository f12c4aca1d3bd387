"""Pytest configuration and shared fixtures."""

import random

import pytest

from simpleecdsa import SignerIdentity


def seeded_entropy(seed: int):
    """Deterministic ``randfunc(n) -> bytes`` for reproducible keypairs."""
    return random.Random(seed).randbytes


@pytest.fixture
def entropy_factory():
    """Return a factory building seeded entropy sources."""
    return seeded_entropy


@pytest.fixture(scope="module")
def identity():
    """
    A generated P-256 identity reused across tests in a module.

    Identities are immutable, so sharing one is safe.
    """
    return SignerIdentity("p256")


@pytest.fixture(scope="module")
def exported(identity):
    """Exported keys and a signature over b"hello" for the shared identity."""
    return {
        "pub": identity.export_public_key(),
        "priv": identity.export_private_key(),
        "sig": identity.sign(b"hello"),
    }
