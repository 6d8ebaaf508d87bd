# fldio/reader.py
import os
from dataclasses import dataclass
from typing import BinaryIO, Optional, Union

from avsfld.errors import FldIOError, PayloadConsumedError
from avsfld.logger import ProgressLogger
from .file import HeaderFields, parse_header
from .decoder import decode_raw, decode_as_float32


@dataclass(frozen=True)
class InlinePayload:
    """Payload follows the header sentinel in the header file."""
    offset: int


@dataclass(frozen=True)
class ExternalPayload:
    """Payload is the whole of a separate file."""
    path: str


PayloadSource = Union[InlinePayload, ExternalPayload]


def resolve_path(path, base_dir=None) -> str:
    path = os.fspath(path)
    if base_dir is None or os.path.isabs(path):
        return path
    return os.path.join(os.fspath(base_dir), path)


def _open_binary(path: str) -> BinaryIO:
    try:
        return open(path, 'rb')
    except OSError as e:
        raise FldIOError(f"Cannot open {path}: {e}") from e


class FldReader:
    """
    An opened FLD file: the parsed header plus the stream holding the payload.

    The payload can be read once; the stream is not rewound.
    """

    def __init__(self, header: HeaderFields, stream: BinaryIO, source: PayloadSource):
        self._header = header
        self._stream = stream
        self.source = source
        self._consumed = False

    @property
    def header(self):
        return self._header

    @property
    def consumed(self):
        return self._consumed

    def read_payload_bytes(self) -> bytes:
        """Read all remaining payload bytes. Fails on a second call."""
        if self._consumed:
            raise PayloadConsumedError("The payload of this file has already been read")
        if self._stream.closed:
            raise FldIOError("Cannot read the payload of a closed file")
        self._consumed = True
        try:
            return self._stream.read()
        except OSError as e:
            raise FldIOError(f"Failed reading payload: {e}") from e

    def read(self, dtype=None):
        return decode_raw(self, dtype)

    def read_float32(self):
        return decode_as_float32(self)

    def close(self):
        self._stream.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def open_fld(path, base_dir=None, logger: Optional[ProgressLogger] = None) -> FldReader:
    """
    Open an FLD file and parse its header.

    If the header names an external payload (``variable 1 file``), the header
    file is closed and the reader is bound to the payload file instead.

    Args:
        path: Path of the FLD header file.
        base_dir: Directory relative paths are resolved against; the working
            directory when None.
        logger: Optional ProgressLogger.
    """
    if logger is None:
        logger = ProgressLogger()

    header_path = resolve_path(path, base_dir)
    logger.log(f"Reading FLD file: {header_path}")
    stream = _open_binary(header_path)
    try:
        header = parse_header(stream, logger=logger)
        if header.external_payload_path is None:
            source = InlinePayload(offset=stream.tell())
            return FldReader(header, stream, source)
    except Exception:
        stream.close()
        raise

    stream.close()
    payload_path = resolve_path(header.external_payload_path, base_dir)
    logger.log(f"Payload redirected to: {payload_path}")
    payload_stream = _open_binary(payload_path)
    return FldReader(header, payload_stream, ExternalPayload(path=payload_path))
