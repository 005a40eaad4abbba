import hashlib

from ..crypto.provider import DigestProvider
from ..helpers.errors import UnsupportedAlgorithm

# output sizes in bytes of the canonical algorithms, as a provider would see them
FAKE_SIZES = {
    "RIPEMD-160": 20,
    "SHA-512": 64,
    "SHA3-512": 64,
    "BLAKE2b-512": 64,
    "Skein-512": 64,
    "Whirlpool": 64,
}


class FakeDigestProvider(DigestProvider):
    """
    Deterministic provider supporting every algorithm name, for tests.

    The hash values are keyed BLAKE2b hashes of the right size, keyed by the algorithm
    name, so different algorithms give different hash values for the same data.
    """

    NAME = "fake"

    def __init__(self):
        self.requested = []

    def new(self, algorithm_name):
        try:
            size = FAKE_SIZES[algorithm_name]
        except KeyError:
            raise UnsupportedAlgorithm(algorithm_name, self.NAME) from None
        self.requested.append(algorithm_name)
        return hashlib.blake2b(key=algorithm_name.encode(), digest_size=size)


class BrokenDigestProvider(DigestProvider):
    """Provider whose hashers fail while hashing."""

    NAME = "broken"

    class Hasher:
        def update(self, data):
            raise OSError("hashing device gone")

        def digest(self):
            raise AssertionError("not reached")

    def new(self, algorithm_name):
        return self.Hasher()


class ShortDigestProvider(DigestProvider):
    """Provider handing out SHA-256 hashers for every algorithm name, i.e. hash values of the wrong size."""

    NAME = "short"

    def new(self, algorithm_name):
        return hashlib.sha256()
