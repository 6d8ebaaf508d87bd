from .file import Encoding, FieldKind, HeaderFields, parse_header
from .reader import FldReader, ExternalPayload, InlinePayload, open_fld
from .decoder import decode_raw, decode_as_float32
from .writer import encode, format_header
