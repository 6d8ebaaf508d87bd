# avsfld/errors.py
__all__ = [
    "FldError",
    "FldIOError",
    "HeaderValueParseError",
    "UnrecognizedEncodingError",
    "UnrecognizedFieldKindError",
    "MalformedHeaderError",
    "MalformedPayloadError",
    "DtypeMismatchError",
    "PayloadConsumedError",
]


class FldError(Exception):
    """
    Base class for AVS field file errors.
    """


class FldIOError(FldError, OSError):
    """Raised when a stream or file can't be opened, read or written."""


class HeaderValueParseError(FldError, ValueError):
    """Raised when a numeric header value is not an unsigned integer."""

    _msg = "Header value for {!r} is not an unsigned integer: {!r}"

    def __init__(self, *args: object) -> None:
        if len(args) == 2:
            super().__init__(self._msg.format(*args))
        else:
            super().__init__(*args)


class UnrecognizedEncodingError(FldError, ValueError):
    """Raised when the ``data`` entry names an unsupported encoding."""


class UnrecognizedFieldKindError(FldError, ValueError):
    """Raised when the ``field`` entry names an unsupported field kind."""


class MalformedHeaderError(FldError, ValueError):
    """Raised when a required header entry is missing or out of place."""


class MalformedPayloadError(FldError, ValueError):
    """Raised when the payload length does not match the header."""


class DtypeMismatchError(FldError, TypeError):
    """Raised when an array dtype disagrees with the on-disk encoding."""


class PayloadConsumedError(FldError, RuntimeError):
    """Raised when the payload of an opened file is read a second time."""
