from .fldio.file import HeaderFields
from .fldio.reader import open_fld
from .fldio.writer import encode
from avsfld.errors import FldIOError
from avsfld.logger import ProgressLogger

import numpy as np
import xarray as xr


def format_fld_header(header: HeaderFields, source=None):
    """
    Generates a formatted string summary of an FLD header.

    Args:
        header (HeaderFields): The parsed header.
        source: Optional payload source of an opened reader.

    Returns:
        str: A formatted, multi-line string with the summary.
    """
    lines = [
        "--- FLD Header ---",
        f"Dimensions:        {header.dimension_count}",
        f"Extents:           {' x '.join(str(e) for e in header.extents) or '-'}",
        f"Elements:          {header.element_count}",
        f"Encoding:          {header.encoding.token} ({header.encoding.width} byte)",
        f"Field:             {header.field_kind.value}",
        f"Payload Bytes:     {header.payload_nbytes}",
    ]
    if header.external_payload_path is not None:
        lines.append(f"External Payload:  {header.external_payload_path}")
    if source is not None:
        lines.append(f"Payload Source:    {source}")
    return "\n".join(lines)


def read_fld(path, base_dir=None, logger: ProgressLogger = None):
    """
    Reads an FLD file into a float32 array shaped (dimN, ..., dim1).

    Returns:
        tuple: (HeaderFields, np.ndarray)
    """
    if logger is None:
        logger = ProgressLogger()

    with open_fld(path, base_dir=base_dir, logger=logger) as reader:
        header = reader.header
        logger.debug(format_fld_header(header, reader.source))
        data = reader.read_float32()
    return header, data.reshape(header.shape)


def read_fld_dataarray(path, base_dir=None, logger: ProgressLogger = None) -> xr.DataArray:
    """
    Reads an FLD file into a labelled xarray.DataArray.

    Axes are named after the header keys, slowest first, so ``dim1`` is the
    last dimension.
    """
    header, data = read_fld(path, base_dir=base_dir, logger=logger)
    dims = [f"dim{k}" for k in range(header.dimension_count, 0, -1)]
    return xr.DataArray(
        data=data,
        dims=dims,
        coords={dim: np.arange(size) for dim, size in zip(dims, data.shape)},
        attrs={
            "ndim": header.dimension_count,
            "encoding": header.encoding.token,
            "field": header.field_kind.value,
            "external_payload_path": header.external_payload_path or "",
        },
    )


def write_fld(path, array, logger: ProgressLogger = None):
    """
    Writes a numeric array as an FLD file of little-endian float32 samples.

    The array's last axis becomes ``dim1``. Values are cast to float32.
    """
    if logger is None:
        logger = ProgressLogger()

    array = np.ascontiguousarray(array, dtype='<f4')
    extents = list(reversed(array.shape))
    logger.log(f"Writing FLD file: {path} (extents {extents})")
    try:
        f = open(path, 'wb')
    except OSError as e:
        raise FldIOError(f"Cannot open {path} for writing: {e}") from e
    with f:
        encode(f, extents, array)
