"""
This package contains various small helper/utility functions that did not fit better elsewhere.
"""
from binascii import hexlify, unhexlify

from .errors import *  # NOQA


def bin_to_hex(binary):
    return hexlify(binary).decode("ascii")


def hex_to_bin(hex, length=None):
    binary = unhexlify(hex)
    if length is not None and len(binary) != length:
        raise ValueError(f"Expected binary of length {length}, got {len(binary)}.")
    return binary
