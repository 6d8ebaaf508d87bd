# fldio/decoder.py
import numpy as np

from avsfld.errors import DtypeMismatchError, MalformedPayloadError
from .file import HeaderFields


def check_payload_length(header: HeaderFields, nbytes: int, itemsize: int):
    if nbytes % itemsize != 0:
        raise MalformedPayloadError(
            f"Payload of {nbytes} bytes is not a multiple of the {itemsize}-byte element size")
    if nbytes != header.payload_nbytes:
        raise MalformedPayloadError(
            f"Expected {header.payload_nbytes} payload bytes "
            f"({header.element_count} x {header.encoding.token}), found {nbytes}")


def resolve_dtype(header: HeaderFields, dtype=None) -> np.dtype:
    """Return the dtype to reinterpret the payload as, checked against the encoding."""
    if dtype is None:
        return header.encoding.dtype
    dtype = np.dtype(dtype)
    if dtype.itemsize != header.encoding.width:
        raise DtypeMismatchError(
            f"dtype {dtype} has {dtype.itemsize}-byte items but encoding "
            f"{header.encoding.token} stores {header.encoding.width}-byte samples")
    return dtype


def decode_raw(reader, dtype=None) -> np.ndarray:
    """
    Reinterpret the payload of an opened file as a flat array of ``dtype``.

    No value conversion happens: ``dtype`` defaults to the on-disk dtype of the
    encoding and must have the same item size.
    """
    header = reader.header
    dtype = resolve_dtype(header, dtype)
    raw = reader.read_payload_bytes()
    check_payload_length(header, len(raw), dtype.itemsize)
    return np.frombuffer(bytearray(raw), dtype=dtype)


def decode_as_float32(reader) -> np.ndarray:
    """Decode the payload of an opened file into a flat native float32 array."""
    header = reader.header
    raw = reader.read_payload_bytes()
    check_payload_length(header, len(raw), header.encoding.width)
    return header.encoding.to_float32(raw)
