from clinic_records.codec.fields import (
    encode_medications,
    decode_medications,
    parse_medications,
    escape_for_storage,
    format_date,
    format_time,
)

__all__ = [
    "encode_medications",
    "decode_medications",
    "parse_medications",
    "escape_for_storage",
    "format_date",
    "format_time",
]
