from __future__ import annotations


class FreeHandError(RuntimeError):
    """Base class for failures that abort decoding a document."""


class EndOfStreamError(FreeHandError):
    """A read ran past the end of the available bytes."""


class GenericError(FreeHandError):
    """The byte stream violates a structural rule of the container."""


class RecursionLimitError(FreeHandError):
    pass
