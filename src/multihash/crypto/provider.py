"""
Digest providers.

A digest provider hands out hasher objects for canonical algorithm names
(like "SHA-512"). A hasher is anything with ``update(data)`` and ``digest()``,
which is what hashlib and Crypto.Hash objects offer.

Callers may select a provider explicitly (by object or by registered name);
otherwise the default chain is used, which asks the providers named in
MULTIHASH_PROVIDERS one after the other.
"""

import hashlib
import os
from functools import partial
from typing import Any, Protocol, runtime_checkable

from Crypto.Hash import BLAKE2b, RIPEMD160, SHA3_512, SHA512

from ..constants import DEFAULT_PROVIDERS, PROVIDERS_ENV_VAR
from ..helpers.errors import ProviderNotFound, UnsupportedAlgorithm
from ..logger import create_logger

logger = create_logger()


@runtime_checkable
class Hasher(Protocol):
    def update(self, __data: bytes) -> Any: ...

    def digest(self) -> bytes: ...


class DigestProvider:
    NAME = None

    def new(self, algorithm_name: str) -> Hasher:
        raise NotImplementedError

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.NAME}>"


class HashlibProvider(DigestProvider):
    NAME = "hashlib"

    # canonical name -> hashlib name. some of these depend on the OpenSSL hashlib is linked against.
    ALGORITHMS = {
        "RIPEMD-160": "ripemd160",
        "SHA-512": "sha512",
        "SHA3-512": "sha3_512",
        "BLAKE2b-512": "blake2b",  # digest_size defaults to 64 bytes
        "Whirlpool": "whirlpool",
    }

    def new(self, algorithm_name):
        try:
            return hashlib.new(self.ALGORITHMS[algorithm_name])
        except (KeyError, ValueError):
            raise UnsupportedAlgorithm(algorithm_name, self.NAME) from None


class PyCryptodomeProvider(DigestProvider):
    NAME = "pycryptodome"

    FACTORIES = {
        "RIPEMD-160": RIPEMD160.new,
        "SHA-512": SHA512.new,
        "SHA3-512": SHA3_512.new,
        "BLAKE2b-512": partial(BLAKE2b.new, digest_bits=512),
    }

    def new(self, algorithm_name):
        try:
            factory = self.FACTORIES[algorithm_name]
        except KeyError:
            raise UnsupportedAlgorithm(algorithm_name, self.NAME) from None
        return factory()


class ChainedProvider(DigestProvider):
    """
    Ask several providers in order of preference, use the first one that supports the algorithm.
    """

    NAME = "chain"

    def __init__(self, providers):
        self.providers = list(providers)

    def new(self, algorithm_name):
        for provider in self.providers:
            try:
                hasher = provider.new(algorithm_name)
            except UnsupportedAlgorithm:
                logger.debug("%r does not support %s, trying next provider.", provider, algorithm_name)
                continue
            logger.debug("Using %r for %s.", provider, algorithm_name)
            return hasher
        raise UnsupportedAlgorithm(algorithm_name, ",".join(str(p.NAME) for p in self.providers))

    def __repr__(self):
        return f"<{self.__class__.__name__} {self.providers!r}>"


PROVIDERS = {
    HashlibProvider.NAME: HashlibProvider,
    PyCryptodomeProvider.NAME: PyCryptodomeProvider,
}


def register_provider(cls):
    """add a DigestProvider subclass to the registry, so it can be selected by its NAME"""
    assert cls.NAME, "provider classes need a NAME"
    PROVIDERS[cls.NAME] = cls
    return cls


def get_provider(name: str) -> DigestProvider:
    try:
        return PROVIDERS[name]()
    except KeyError:
        raise ProviderNotFound(name) from None


def default_provider() -> ChainedProvider:
    names = [name.strip() for name in os.environ.get(PROVIDERS_ENV_VAR, DEFAULT_PROVIDERS).split(",")]
    return ChainedProvider(get_provider(name) for name in names if name)


def resolve_provider(provider=None) -> DigestProvider:
    """
    Return the provider selected by *provider*:

    - None: the default provider chain (see MULTIHASH_PROVIDERS)
    - str: the registered provider with that name
    - anything else: *provider* itself, it must have a new(algorithm_name) method
    """
    if provider is None:
        return default_provider()
    if isinstance(provider, str):
        return get_provider(provider)
    return provider


def get_hasher(algorithm_name: str, provider=None) -> Hasher:
    return resolve_provider(provider).new(algorithm_name)
