"""
Simple wrapper around the supported hash options to provide a single enum which can
calculate different hashes.

A ``Hasher`` is fed bytes with ``process`` and consumed exactly once by ``finalize``.
After that it refuses further input, mirroring an accumulator which is moved out
of on finalization.
"""

import hashlib
import logging
from enum import Enum
from typing import Union

logger = logging.getLogger(__name__)


class HashAlgorithm(Enum):
    """The closed set of hash algorithms a ``Hasher`` can run"""

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @classmethod
    def from_name(cls, name: str) -> 'HashAlgorithm':
        """Look up an algorithm by name, ignoring case and dashes ("SHA-256")"""
        normalized = name.lower().replace("-", "").replace("_", "")
        for algorithm in cls:
            if algorithm.value == normalized:
                return algorithm
        raise ValueError(f"Unsupported hash algorithm: {name}")

    @property
    def digest_size(self) -> int:
        """Length in bytes of a finalized digest"""
        return _DIGEST_SIZES[self]

    @property
    def asn1_prefix(self) -> bytes:
        """DER encoded DigestInfo prefix used by EMSA-PKCS1-v1_5"""
        from . import pkcs1
        return pkcs1.asn1_prefix(self)


_DIGEST_SIZES = {
    HashAlgorithm.SHA1: 20,
    HashAlgorithm.SHA256: 32,
    HashAlgorithm.SHA512: 64,
}

_CONSTRUCTORS = {
    HashAlgorithm.SHA1: hashlib.sha1,
    HashAlgorithm.SHA256: hashlib.sha256,
    HashAlgorithm.SHA512: hashlib.sha512,
}


def resolve_algorithm(algorithm: Union[HashAlgorithm, str]) -> HashAlgorithm:
    if isinstance(algorithm, HashAlgorithm):
        return algorithm
    if isinstance(algorithm, str):
        return HashAlgorithm.from_name(algorithm)
    raise ValueError(f"Unsupported hash algorithm: {algorithm!r}")


class HasherFinalizedError(RuntimeError):
    """A hasher was used after finalize() consumed it"""
    pass


class Hasher:
    """Hash engine that supports SHA1, SHA256 and SHA512"""

    def __init__(self, algorithm: Union[HashAlgorithm, str]):
        self._algorithm = resolve_algorithm(algorithm)
        self._hasher = _CONSTRUCTORS[self._algorithm]()
        self._finalized = False
        logger.debug(f"Created {self._algorithm.value} hasher")

    @classmethod
    def sha1(cls) -> 'Hasher':
        """Create a SHA1 hasher"""
        return cls(HashAlgorithm.SHA1)

    @classmethod
    def sha256(cls) -> 'Hasher':
        """Create a SHA256 hasher"""
        return cls(HashAlgorithm.SHA256)

    @classmethod
    def sha512(cls) -> 'Hasher':
        """Create a SHA512 hasher"""
        return cls(HashAlgorithm.SHA512)

    @property
    def algorithm(self) -> HashAlgorithm:
        return self._algorithm

    @property
    def digest_size(self) -> int:
        return self._algorithm.digest_size

    @property
    def finalized(self) -> bool:
        return self._finalized

    def _check_active(self, operation: str) -> None:
        if self._finalized:
            raise HasherFinalizedError(
                f"Cannot {operation} a {self._algorithm.value} hasher after finalize()"
            )

    def process(self, data: bytes) -> None:
        """Feed more data into the running hash, in call order"""
        self._check_active("process")
        self._hasher.update(data)

    def copy(self) -> 'Hasher':
        """
        Fork the running state into an independent hasher.

        Useful to hash a shared prefix once and finish it several ways.
        """
        self._check_active("copy")
        clone = type(self).__new__(type(self))
        clone._algorithm = self._algorithm
        clone._hasher = self._hasher.copy()
        clone._finalized = False
        return clone

    def finalize(self) -> bytes:
        """Finalize the hash and return the raw digest. The hasher is consumed."""
        self._check_active("finalize")
        self._finalized = True
        result = self._hasher.digest()
        # Drop the primitive so no state outlives finalization
        self._hasher = None
        logger.debug(f"Finalized {self._algorithm.value} hasher ({len(result)} bytes)")
        return result

    def asn1_prefix(self) -> bytes:
        """The DER DigestInfo prefix for this hasher's algorithm"""
        return self._algorithm.asn1_prefix

    def emsa_pkcs1_v1_5(self, digest: bytes, output_len: int) -> bytes:
        """
        Pad a digest produced by this hasher's algorithm for RSA signing.

        Only reads the algorithm, so it may be called after finalize(). See
        ``digestable.pkcs1.emsa_pkcs1_v1_5_encode`` for the errors raised.
        """
        from . import pkcs1
        return pkcs1.emsa_pkcs1_v1_5_encode(self._algorithm, digest, output_len)

    def __repr__(self) -> str:
        state = "finalized" if self._finalized else "active"
        return f"Hasher({self._algorithm.value}, {state})"


def digest(algorithm: Union[HashAlgorithm, str], data: bytes) -> bytes:
    """Hash ``data`` in one shot"""
    hasher = Hasher(algorithm)
    hasher.process(data)
    return hasher.finalize()
