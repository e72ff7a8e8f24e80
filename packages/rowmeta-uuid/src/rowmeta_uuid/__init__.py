"""
rowmeta-uuid - UUID value type for rowmeta

Importing this package registers the UUID type (type code 77) with the
rowmeta value-meta registry.
"""

from rowmeta.exceptions import (
    CodecError,
    ConversionError,
    DatabaseBindingError,
    DatabaseReadError,
    EndOfStreamError,
)
from rowmeta_uuid.value_meta import TYPE_UUID, ValueMetaUuid

__version__ = "0.1.0"

__all__ = [
    "TYPE_UUID",
    "ValueMetaUuid",
    "CodecError",
    "ConversionError",
    "DatabaseBindingError",
    "DatabaseReadError",
    "EndOfStreamError",
]
