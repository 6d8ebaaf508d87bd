from .errors import (
    FldError,
    FldIOError,
    HeaderValueParseError,
    UnrecognizedEncodingError,
    UnrecognizedFieldKindError,
    MalformedHeaderError,
    MalformedPayloadError,
    DtypeMismatchError,
    PayloadConsumedError,
)
from .io.fldio.file import Encoding, FieldKind, HeaderFields, parse_header
from .io.fldio.reader import FldReader, open_fld
from .io.fldio.decoder import decode_raw, decode_as_float32
from .io.fldio.writer import encode
from .io.loader import read_fld, read_fld_dataarray, write_fld, format_fld_header
