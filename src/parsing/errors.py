"""Exceptions shared by the document parsers."""


class DocumentParseError(Exception):
    """Raised when a document cannot be turned into text."""

    pass
