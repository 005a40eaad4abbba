import io
import threading
from hmac import compare_digest
from struct import Struct

from .constants import *  # NOQA
from .crypto.algorithm import HashAlgorithm
from .helpers import bin_to_hex
from .helpers.errors import EmptyAlgorithmSet, InvalidEncoding, NoSuchHashPresent, TruncatedInput
from .logger import create_logger

logger = create_logger()


def compute_hash(hasher, data) -> bytes:
    """
    Feed *data* to *hasher* and return the digest.

    *data* is either a bytes-like object or a seekable binary stream. A stream is hashed from
    its current position to its end; afterwards the position is restored, also on errors.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        hasher.update(data)
        return hasher.digest()
    pos = data.tell()
    try:
        while True:
            chunk = data.read(BUFSIZE)
            if not chunk:
                break
            hasher.update(chunk)
        return hasher.digest()
    finally:
        data.seek(pos)


def data_size(data) -> int:
    """number of bytes a multihash over *data* refers to (for streams: from the current position to the end)"""
    if isinstance(data, (bytes, bytearray, memoryview)):
        return memoryview(data).nbytes
    pos = data.tell()
    try:
        return data.seek(0, io.SEEK_END) - pos
    finally:
        data.seek(pos)


def check_digest(algo, digest):
    if len(digest) != algo.size:
        raise ValueError(f"{algo} hash value must be {algo.size} bytes long, got {len(digest)}")


def read_exactly(fd, n, what):
    """read exactly *n* bytes from *fd*, raise TruncatedInput if the stream ends before"""
    buf = b""
    while len(buf) < n:
        chunk = fd.read(n - len(buf))
        if not chunk:
            raise TruncatedInput(n, what, len(buf))
        buf += chunk
    return buf


class Multihash:
    """
    Hash values of the same data, computed by one or more hash algorithms.

    A Multihash also records the size of the referenced data and always holds at
    least one hash value. Hash values can be added later (see add_hash), but never
    replaced or removed.

    Where a method takes *data*, it accepts a bytes-like object or a seekable binary
    stream; the data is only read, a stream's position is left as it was.

    Where a method takes *provider*, it selects the digest provider used to compute
    hash values: None for the default provider chain, a registered provider name or
    a provider object (see multihash.crypto.provider).
    """

    # binary header: size of referenced data (64b), number of hash values (8b)
    header_fmt = Struct(MULTIHASH_HEADER_FMT)

    def __init__(self, size: int, hashes: dict):
        if not hashes:
            raise EmptyAlgorithmSet()
        if not 0 <= size <= MAX_DATA_SIZE:
            raise ValueError(f"size must be in range 0 .. {MAX_DATA_SIZE}, got {size}")
        for algo, digest in hashes.items():
            check_digest(algo, digest)
        self._size = size
        self._hashes = {algo: bytes(digest) for algo, digest in hashes.items()}
        self._lock = threading.Lock()

    @property
    def size(self) -> int:
        """expected size of the referenced data"""
        return self._size

    def algorithms(self) -> tuple:
        """the algorithms this multihash has hash values for, in wire code order"""
        with self._lock:
            return tuple(sorted(self._hashes))

    def has_hash(self, algo: HashAlgorithm) -> bool:
        return algo in self._hashes

    def get_hash(self, algo: HashAlgorithm):
        """return the hash value computed by *algo* or None, if there is none"""
        return self._hashes.get(algo)

    def hexdigest(self, algo: HashAlgorithm) -> str:
        try:
            return bin_to_hex(self._hashes[algo])
        except KeyError:
            raise NoSuchHashPresent(algo) from None

    def add_hash(self, algo: HashAlgorithm, data, provider=None):
        """
        Add the hash value computed by *algo* over *data*.

        Does nothing if there already is a hash value for *algo*.
        """
        with self._lock:
            if algo not in self._hashes:
                digest = compute_hash(algo.hasher(provider), data)
                check_digest(algo, digest)
                self._hashes[algo] = digest
                logger.debug("Added %s hash value.", algo)

    def verify_hash(self, algo: HashAlgorithm, data, provider=None) -> bool:
        """
        Check the hash value computed by *algo* against *data*.

        Raises NoSuchHashPresent if this multihash has no hash value for *algo*.
        """
        try:
            expected = self._hashes[algo]
        except KeyError:
            raise NoSuchHashPresent(algo) from None
        actual = compute_hash(algo.hasher(provider), data)
        if compare_digest(expected, actual):
            return True
        logger.debug("%s hash value mismatch.", algo)
        return False

    def verify(self, data, provider=None) -> bool:
        """Check all hash values of this multihash against *data*."""
        return all(self.verify_hash(algo, data, provider) for algo in self.algorithms())

    def write(self, fd):
        """write the binary form of this multihash to binary stream *fd*"""
        algorithms = self.algorithms()
        fd.write(self.header_fmt.pack(self._size, len(algorithms)))
        for algo in algorithms:
            algo.write(fd)
            fd.write(self._hashes[algo])

    def pack(self) -> bytes:
        fd = io.BytesIO()
        self.write(fd)
        return fd.getvalue()

    @classmethod
    def read(cls, fd) -> "Multihash":
        """read a multihash in binary form from binary stream *fd*"""
        size, count = cls.header_fmt.unpack(read_exactly(fd, cls.header_fmt.size, "header"))
        if count < 1:
            raise InvalidEncoding("a multihash must contain at least one hash value")
        hashes = {}
        for _ in range(count):
            algo = HashAlgorithm.decode(read_exactly(fd, 1, "algorithm code")[0])
            if algo in hashes:
                raise InvalidEncoding(f"duplicate {algo} hash value")
            hashes[algo] = read_exactly(fd, algo.size, f"{algo} hash value")
        logger.debug("Read multihash with %d hash values for %d bytes of data.", count, size)
        return cls(size, hashes)

    @classmethod
    def unpack(cls, data: bytes) -> "Multihash":
        """parse a multihash from *data*, which must contain exactly one multihash in binary form"""
        fd = io.BytesIO(data)
        multihash = cls.read(fd)
        trailing = len(data) - fd.tell()
        if trailing:
            raise InvalidEncoding(f"{trailing} trailing bytes")
        return multihash

    @classmethod
    def create(cls, data, algorithms=None, provider=None) -> "Multihash":
        """
        Compute a multihash over *data*.

        *algorithms* is an iterable of HashAlgorithm, None means all known algorithms.
        """
        if algorithms is None:
            algorithms = HashAlgorithm.all()
        algorithms = sorted(set(algorithms))
        if not algorithms:
            raise EmptyAlgorithmSet()
        size = data_size(data)
        hashes = {algo: compute_hash(algo.hasher(provider), data) for algo in algorithms}
        logger.debug("Created multihash over %d bytes using %s.", size, ", ".join(str(a) for a in algorithms))
        return cls(size, hashes)

    def __eq__(self, other):
        if not isinstance(other, Multihash):
            return NotImplemented
        return self._size == other._size and self._hashes == other._hashes

    __hash__ = None

    def __repr__(self):
        return f"<Multihash size={self._size} algorithms={','.join(str(a) for a in self.algorithms())}>"
