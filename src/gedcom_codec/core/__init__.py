from gedcom_codec.core.exceptions import CodecError, EmptyDocumentError, ParseExecutionError
from gedcom_codec.core.version import GedcomVersion

__all__ = [
    "CodecError",
    "EmptyDocumentError",
    "GedcomVersion",
    "ParseExecutionError",
]
