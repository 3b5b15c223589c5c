"""
digestable

A uniform wrapper over SHA-1, SHA-256 and SHA-512 with EMSA-PKCS1-v1_5 encoding of the
resulting digests (RFC 3447 section 9.2), ready to be handed to an RSA signer.

Example:

    hasher = Hasher.sha256()
    hasher.process(b"hello ")
    hasher.process(b"world")
    block = hasher.emsa_pkcs1_v1_5(hasher.finalize(), 256)
"""

from .hash import (
    HashAlgorithm,
    Hasher,
    HasherFinalizedError,
    digest
)

from .pkcs1 import (
    EncodingError,
    MIN_PADDING_LEN,
    SHA1_PREFIX,
    SHA256_PREFIX,
    SHA512_PREFIX,
    asn1_prefix,
    digest_info,
    emsa_pkcs1_v1_5_encode
)

__version__ = "0.1.0"

__all__ = [
    # Hashing
    "HashAlgorithm",
    "Hasher",
    "HasherFinalizedError",
    "digest",

    # EMSA-PKCS1-v1_5
    "EncodingError",
    "MIN_PADDING_LEN",
    "SHA1_PREFIX",
    "SHA256_PREFIX",
    "SHA512_PREFIX",
    "asn1_prefix",
    "digest_info",
    "emsa_pkcs1_v1_5_encode",
]
