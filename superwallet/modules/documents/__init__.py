"""Electronic documents with multi-party signatures."""

from .exceptions import DocumentNotFoundError
from .models import DOCUMENT_TYPES, Document, DocumentSignature
from .service import DocumentService, content_hash

__all__ = [
    "DOCUMENT_TYPES",
    "Document",
    "DocumentNotFoundError",
    "DocumentService",
    "DocumentSignature",
    "content_hash",
]
