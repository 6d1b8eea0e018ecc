# ==============================================
# Codec
# ==============================================
#
# PURPOSE:
#   Turn Python values into the bytes stored in HBase and back.
#
# STORAGE FORMAT:
#   Every value is stored as the UTF-8 bytes of its canonical
#   string text, never as a fixed-width binary number. This keeps
#   rows readable by other clients that store `toString()` text:
#     42      → b"42"
#     4.5     → b"4.5"
#     True    → b"true"     (lowercase, like other HBase clients)
#     "abc"   → b"abc"
#     b"\x00" → b"\x00"     (bytes are stored unchanged)
#
#   Decoding uses the declared ColumnType. Text that doesn't parse
#   as the declared type comes back as a str instead of failing, so
#   legacy rows stay readable.
#
# ==============================================

from typing import Any

from hbase_mapper.schema.column_type import ColumnType

ENCODING = "utf-8"


def to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_value(value: Any) -> bytes:
    if value is None:
        raise ValueError("None cannot be stored in HBase")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    return to_text(value).encode(ENCODING)


def decode_value(raw: bytes, column_type: ColumnType = ColumnType.STRING) -> Any:
    if column_type is ColumnType.BINARY:
        return raw
    text = raw.decode(ENCODING, errors="replace")
    try:
        if column_type in (ColumnType.INTEGER, ColumnType.BIGINT):
            return int(text)
        if column_type in (ColumnType.FLOAT, ColumnType.DOUBLE):
            return float(text)
    except ValueError:
        return text
    if column_type is ColumnType.BOOLEAN:
        lowered = text.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
    return text
