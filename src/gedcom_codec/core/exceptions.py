class CodecError(Exception):
    """Base exception for gedcom_codec failures."""


class ParseExecutionError(CodecError):
    """Raised when a parse run fails outside of recoverable record errors."""


class EmptyDocumentError(ParseExecutionError):
    """Raised when a document contains no recognizable records at all."""
