# fldio/file.py
import math
from enum import Enum
from typing import BinaryIO, Optional
from dataclasses import dataclass, field
import numpy as np

from avsfld.errors import (
    FldIOError,
    HeaderValueParseError,
    MalformedHeaderError,
    UnrecognizedEncodingError,
    UnrecognizedFieldKindError,
)
from avsfld.logger import ProgressLogger

FORM_FEED = 0x0C
NEWLINE = 0x0A
SENTINEL = b'\x0c\x0c'

# dim1..dim7 are the only extent keys the format defines
MAX_DIMENSIONS = 7


class Encoding(Enum):
    XDR_FLOAT = ('xdr_float', '>f4')
    FLOAT_LE = ('float_le', '<f4')
    BYTE = ('byte', 'u1')

    def __init__(self, token, dtype):
        self.token = token
        self.dtype = np.dtype(dtype)

    @property
    def width(self) -> int:
        return self.dtype.itemsize

    @classmethod
    def from_token(cls, token: str) -> "Encoding":
        for encoding in cls:
            if encoding.token == token:
                return encoding
        raise UnrecognizedEncodingError(f"Unrecognized data encoding: {token!r}")

    def to_float32(self, raw: bytes) -> np.ndarray:
        """Convert payload bytes of this encoding to native float32.

        xdr_float is byte-swapped into native order, float_le is reinterpreted
        directly and byte samples are widened to 0.0..255.0.
        """
        return np.frombuffer(raw, dtype=self.dtype).astype(np.float32)


class FieldKind(Enum):
    UNIFORM = 'uniform'

    @classmethod
    def from_token(cls, token: str) -> "FieldKind":
        try:
            return cls(token)
        except ValueError:
            raise UnrecognizedFieldKindError(f"Unrecognized field kind: {token!r}") from None


@dataclass(frozen=True)
class HeaderFields:
    dimension_count: int
    extents: tuple
    encoding: Encoding
    field_kind: FieldKind
    external_payload_path: Optional[str] = None

    @property
    def element_count(self) -> int:
        return math.prod(self.extents)

    @property
    def payload_nbytes(self) -> int:
        return self.element_count * self.encoding.width

    @property
    def shape(self) -> tuple:
        # dim1 varies fastest on disk, so it is the last numpy axis
        return tuple(reversed(self.extents))


def parse_unsigned(key: str, value: str) -> int:
    if not value.isascii() or not value.isdigit():
        raise HeaderValueParseError(key, value)
    return int(value)


@dataclass
class _HeaderBuilder:
    """Mutable header state filled in while the lines are scanned."""
    dimension_count: Optional[int] = None
    extents: list = field(default_factory=list)
    encoding: Optional[Encoding] = None
    field_kind: Optional[FieldKind] = None
    external_payload_path: Optional[str] = None

    def set_ndim(self, value: str):
        self.dimension_count = parse_unsigned('ndim', value)
        self.extents = [None] * self.dimension_count

    def set_extent(self, index: int, value: str):
        key = f"dim{index + 1}"
        if self.dimension_count is None:
            raise MalformedHeaderError(f"'{key}' appears before 'ndim'")
        if index >= self.dimension_count:
            raise MalformedHeaderError(
                f"'{key}' is out of range for ndim={self.dimension_count}")
        self.extents[index] = parse_unsigned(key, value)

    def set_encoding(self, value: str):
        self.encoding = Encoding.from_token(value)

    def set_field_kind(self, value: str):
        self.field_kind = FieldKind.from_token(value)

    def set_external(self, value: str):
        self.external_payload_path = value

    def build(self) -> HeaderFields:
        if self.dimension_count is None:
            raise MalformedHeaderError("Header has no 'ndim' entry")
        for index, extent in enumerate(self.extents):
            if extent is None:
                raise MalformedHeaderError(f"Header has no 'dim{index + 1}' entry")
        if self.encoding is None:
            raise MalformedHeaderError("Header has no 'data' entry")
        if self.field_kind is None:
            raise MalformedHeaderError("Header has no 'field' entry")
        return HeaderFields(
            dimension_count=self.dimension_count,
            extents=tuple(self.extents),
            encoding=self.encoding,
            field_kind=self.field_kind,
            external_payload_path=self.external_payload_path,
        )


def _extent_setter(index):
    return lambda builder, value: builder.set_extent(index, value)


KEY_HANDLERS = {
    'ndim': _HeaderBuilder.set_ndim,
    'data': _HeaderBuilder.set_encoding,
    'field': _HeaderBuilder.set_field_kind,
    'variable 1 file': _HeaderBuilder.set_external,
    **{f"dim{k}": _extent_setter(k - 1) for k in range(1, MAX_DIMENSIONS + 1)},
}


def split_line(line: bytes):
    """Split a header line on its first '=' into a stripped (key, value) pair.

    Returns None for lines without '='.
    """
    text = line.decode('ascii', errors='replace')
    if '=' not in text:
        return None
    key, value = text.split('=', 1)
    return key.strip(), value.strip()


def _process_line(builder: _HeaderBuilder, line: bytes, logger: ProgressLogger):
    tokens = split_line(line)
    if tokens is None:
        return
    key, value = tokens
    handler = KEY_HANDLERS.get(key)
    if handler is None:
        # unknown keys (veclen, nspace, label, ...) are allowed
        logger.debug(f"Ignoring header entry {key!r}")
        return
    handler(builder, value)


def parse_header(stream: BinaryIO, logger: ProgressLogger = None) -> HeaderFields:
    """
    Read an FLD header from a binary stream, one byte at a time.

    The stream is left positioned on the first byte after the two form-feed
    sentinel bytes.

    Args:
        stream: Readable binary stream positioned at the start of the header.
        logger: Optional ProgressLogger for debug output.

    Returns:
        The validated HeaderFields.

    Raises:
        HeaderValueParseError: A numeric value is not an unsigned integer.
        UnrecognizedEncodingError: Unknown ``data`` value.
        UnrecognizedFieldKindError: Unknown ``field`` value.
        MalformedHeaderError: A required entry is missing, or the stream
            ended before the sentinel.
    """
    if logger is None:
        logger = ProgressLogger()

    builder = _HeaderBuilder()
    line = bytearray()
    last = None
    while True:
        try:
            byte = stream.read(1)
        except OSError as e:
            raise FldIOError(f"Failed reading header: {e}") from e
        if not byte:
            raise MalformedHeaderError("Stream ended before the header sentinel")
        current = byte[0]

        if current == FORM_FEED and last == FORM_FEED:
            # drop the first form feed, already buffered; a partial line before
            # the sentinel still counts as a header line
            del line[-1]
            _process_line(builder, bytes(line), logger)
            break
        last = current

        line.append(current)
        if current == NEWLINE:
            _process_line(builder, bytes(line), logger)
            line.clear()

    return builder.build()
