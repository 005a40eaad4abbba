from packaging.version import parse as parse_version

from ._version import version as __version__
from .crypto.algorithm import HashAlgorithm
from .crypto.provider import ChainedProvider, HashlibProvider, PyCryptodomeProvider, get_hasher, register_provider
from .helpers.errors import (
    EmptyAlgorithmSet,
    InvalidEncoding,
    MultihashError,
    NoSuchHashPresent,
    ProviderNotFound,
    TruncatedInput,
    UnknownAlgorithm,
    UnsupportedAlgorithm,
)
from .multihash import Multihash


_v = parse_version(__version__)
__version_tuple__ = _v.release

# assert that all semver components are integers
# this is mainly to show errors when people repackage poorly
assert all(isinstance(v, int) for v in __version_tuple__), (
    """\
Broken multihash version metadata: %r

The version is read from multihash/_version.py; please make sure it holds a plain
release version like "1.0.0".
"""
    % __version__
)
