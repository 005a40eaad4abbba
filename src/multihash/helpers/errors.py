class ErrorBase(Exception):
    """ErrorBase: {}"""

    # Error base class

    def __init__(self, *args):
        super().__init__(*args)
        self.args = args

    def get_message(self):
        return type(self).__doc__.format(*self.args)

    __str__ = get_message


class Error(ErrorBase):
    """Error: {}"""


class MultihashError(Error):
    """Multihash error: {}"""


class UnknownAlgorithm(MultihashError):
    """Unknown hash algorithm code {}."""


class UnsupportedAlgorithm(MultihashError):
    """Hash algorithm {} is not supported by digest provider {}."""


class ProviderNotFound(MultihashError):
    """No digest provider named {!r} found."""


class EmptyAlgorithmSet(MultihashError):
    """A multihash must contain at least one hash value."""


class NoSuchHashPresent(MultihashError):
    """No hash value for {} present."""


class InvalidEncoding(MultihashError):
    """Invalid multihash encoding: {}"""


class TruncatedInput(InvalidEncoding):
    """Truncated multihash input: expected {} bytes for {}, got {}."""
