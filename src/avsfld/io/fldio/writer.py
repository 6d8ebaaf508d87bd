# fldio/writer.py
import math
from typing import BinaryIO, Sequence

import numpy as np

from avsfld.errors import DtypeMismatchError, FldIOError, MalformedPayloadError
from .file import MAX_DIMENSIONS, SENTINEL, Encoding, FieldKind

HEADER_COMMENT = "# AVS FLD file (written by avsfld)"

# the writer only produces uniform little-endian float fields
WRITE_ENCODING = Encoding.FLOAT_LE
WRITE_FIELD = FieldKind.UNIFORM


def format_header(extents: Sequence[int]) -> bytes:
    """Build the header bytes, sentinel included, for a field of ``extents``."""
    ndim = len(extents)
    lines = [
        HEADER_COMMENT,
        f"ndim={ndim}",
        "veclen=1",
        f"nspace={ndim}",
        f"field={WRITE_FIELD.value}",
        f"data={WRITE_ENCODING.token}",
    ]
    lines += [f"dim{k}={size}" for k, size in enumerate(extents, start=1)]
    return ("\n".join(lines) + "\n").encode('ascii') + SENTINEL


def encode(stream: BinaryIO, extents: Sequence[int], data) -> None:
    """
    Write a header for ``extents`` followed by the raw bytes of ``data``.

    ``data`` must already hold little-endian float32 samples (dtype ``<f4``),
    dim1 varying fastest; its bytes are written untransformed.
    """
    extents = [int(size) for size in extents]
    if any(size < 0 for size in extents):
        raise ValueError(f"Extents must be non-negative, got {extents}")
    if len(extents) > MAX_DIMENSIONS:
        raise ValueError(
            f"FLD headers describe at most {MAX_DIMENSIONS} dimensions, got {len(extents)}")

    data = np.asarray(data)
    if data.dtype != WRITE_ENCODING.dtype:
        raise DtypeMismatchError(
            f"FLD files are written as {WRITE_ENCODING.token} ({WRITE_ENCODING.dtype}), "
            f"got dtype {data.dtype}")
    expected = math.prod(extents)
    if data.size != expected:
        raise MalformedPayloadError(
            f"Extents {extents} describe {expected} elements but data has {data.size}")

    try:
        stream.write(format_header(extents))
        stream.write(data.tobytes(order='C'))
    except OSError as e:
        raise FldIOError(f"Failed writing FLD data: {e}") from e
