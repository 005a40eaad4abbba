from enum import Enum

from ..helpers.errors import UnknownAlgorithm
from .provider import get_hasher


class HashAlgorithm(Enum):
    """
    The hash functions a multihash can hold.

    Each member carries its wire code (one byte, stored in the binary form),
    the canonical algorithm name used to request a hasher from a digest
    provider, and the size of its hash values in bits.

    Wire codes are part of the on-disk format: never change or reuse one,
    only append new members with new codes.
    """

    RIPEMD_160 = (0x00, "RIPEMD-160", 160)
    SHA_512 = (0x01, "SHA-512", 512)
    SHA3_512 = (0x02, "SHA3-512", 512)
    BLAKE2B_512 = (0x03, "BLAKE2b-512", 512)
    SKEIN_512 = (0x04, "Skein-512", 512)
    WHIRLPOOL = (0x05, "Whirlpool", 512)

    def __init__(self, code: int, algorithm_name: str, nbits: int):
        self.code = code
        self.algorithm_name = algorithm_name
        self.nbits = nbits

    def __str__(self):
        return self.algorithm_name

    def __lt__(self, other):
        if not isinstance(other, HashAlgorithm):
            return NotImplemented
        return self.code < other.code

    @property
    def size(self) -> int:
        """size of a hash value in bytes"""
        return self.nbits // 8

    def encode(self) -> int:
        return self.code

    def write(self, fd):
        """write the wire code of this algorithm to binary stream *fd*"""
        fd.write(bytes((self.code,)))

    def hasher(self, provider=None):
        """
        Return a fresh hasher for this algorithm.

        *provider* selects the digest provider: None for the default provider chain,
        a provider name (str) or a provider object.
        """
        return get_hasher(self.algorithm_name, provider)

    @classmethod
    def decode(cls, code: int) -> "HashAlgorithm":
        try:
            return _BY_CODE[code]
        except KeyError:
            raise UnknownAlgorithm(code) from None

    @classmethod
    def all(cls) -> tuple:
        """all known algorithms, in wire code order"""
        return tuple(sorted(cls))


_BY_CODE = {algo.code: algo for algo in HashAlgorithm}
assert len(_BY_CODE) == len(HashAlgorithm), "duplicate wire code"
