"""Document specific exceptions."""

from superwallet.core.exceptions import NotFound


class DocumentNotFoundError(NotFound):
    default_message = "Document not found"
