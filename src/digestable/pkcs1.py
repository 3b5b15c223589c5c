"""
EMSA-PKCS1-v1_5 encoding of a message digest, as used before RSA signing

See https://www.rfc-editor.org/rfc/rfc3447#section-9.2. The RSA operation itself
happens elsewhere; this module only builds the padded block.
"""

import logging
from enum import Enum
from typing import Union

from .hash import HashAlgorithm, resolve_algorithm

logger = logging.getLogger(__name__)

# Minimum run of 0xff bytes in the padding string (PS)
MIN_PADDING_LEN = 8

# 0x00 0x01 before PS and the 0x00 separator after it
FRAMING_LEN = 3

# From https://www.rfc-editor.org/rfc/rfc4880#section-5.2.2
# DER encoded AlgorithmIdentifier + OCTET STRING header of a DigestInfo
SHA1_PREFIX = bytes([
    0x30, 0x21, 0x30, 0x09, 0x06, 0x05, 0x2b, 0x0e,
    0x03, 0x02, 0x1a, 0x05, 0x00, 0x04, 0x14])
SHA256_PREFIX = bytes([
    0x30, 0x31, 0x30, 0x0d, 0x06, 0x09, 0x60, 0x86,
    0x48, 0x01, 0x65, 0x03, 0x04, 0x02, 0x01, 0x05,
    0x00, 0x04, 0x20])
SHA512_PREFIX = bytes([
    0x30, 0x51, 0x30, 0x0d, 0x06, 0x09, 0x60, 0x86,
    0x48, 0x01, 0x65, 0x03, 0x04, 0x02, 0x03, 0x05,
    0x00, 0x04, 0x40])

_PREFIXES = {
    HashAlgorithm.SHA1: SHA1_PREFIX,
    HashAlgorithm.SHA256: SHA256_PREFIX,
    HashAlgorithm.SHA512: SHA512_PREFIX,
}


class EncodingError(Exception):
    """An error when encoding a digest into a padded block"""

    class ErrorType(Enum):
        """Types of encoding errors"""
        MESSAGE_TOO_SHORT = "message_too_short"
        DIGEST_LENGTH_MISMATCH = "digest_length_mismatch"

    def __init__(self, error_type: ErrorType, message: str = ""):
        self.error_type = error_type
        super().__init__(f"{error_type.value}: {message}" if message else error_type.value)


def asn1_prefix(algorithm: Union[HashAlgorithm, str]) -> bytes:
    """Gets the DigestInfo prefix for the given algorithm or algorithm name"""
    return _PREFIXES[resolve_algorithm(algorithm)]


def digest_info(algorithm: Union[HashAlgorithm, str], digest: bytes) -> bytes:
    """
    Builds the DigestInfo (prefix || digest) for a digest of the given algorithm.

    Raises EncodingError if the digest is not the algorithm's output size, and
    TypeError if it is not a bytes-like object.
    """
    algorithm = resolve_algorithm(algorithm)
    prefix = _PREFIXES[algorithm]
    # bytes(int) would silently build a zero-filled digest
    digest = memoryview(digest).tobytes()
    if len(digest) != algorithm.digest_size:
        logger.debug(
            f"Rejecting {algorithm.value} digest of {len(digest)} bytes, "
            f"expected {algorithm.digest_size}"
        )
        raise EncodingError(
            EncodingError.ErrorType.DIGEST_LENGTH_MISMATCH,
            f"{algorithm.value} digests are {algorithm.digest_size} bytes, got {len(digest)}"
        )
    return prefix + digest


def emsa_pkcs1_v1_5_encode(algorithm: Union[HashAlgorithm, str], digest: bytes,
                           output_len: int) -> bytes:
    """
    Encodes a digest with EMSA-PKCS1-v1_5 into a block of exactly output_len bytes.

    Format: 0x00 0x01 [0xff padding, at least 8 bytes] 0x00 [DigestInfo prefix] [digest]

    Args:
        algorithm: Algorithm (or algorithm name) which produced the digest
        digest: Raw digest bytes
        output_len: Length of the block, normally the RSA modulus length in bytes

    Returns:
        The padded block

    Raises:
        TypeError: if digest is not bytes-like or output_len is not an int
        EncodingError: if the digest has the wrong length for the algorithm, or
            output_len cannot hold the minimum padding plus the DigestInfo
    """
    if not isinstance(output_len, int):
        raise TypeError(f"output_len must be an int, not {type(output_len).__name__}")

    algorithm = resolve_algorithm(algorithm)
    info = digest_info(algorithm, digest)

    # Intended encoded message length too short (emLen < tLen + 11)
    if output_len < len(info) + FRAMING_LEN + MIN_PADDING_LEN:
        logger.debug(
            f"Output length {output_len} too short for {algorithm.value} "
            f"DigestInfo of {len(info)} bytes"
        )
        raise EncodingError(
            EncodingError.ErrorType.MESSAGE_TOO_SHORT,
            f"{output_len} bytes cannot hold a {algorithm.value} DigestInfo of {len(info)} bytes"
        )

    padding = b"\xff" * (output_len - len(info) - FRAMING_LEN)
    ret = b"\x00\x01" + padding + b"\x00" + info

    assert len(ret) == output_len
    logger.debug(f"Encoded {algorithm.value} digest into {output_len} byte block")
    return ret
