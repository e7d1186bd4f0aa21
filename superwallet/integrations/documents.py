"""Identity document field extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Protocol

from superwallet.core.exceptions import InvalidArgument

SUPPORTED_DOCUMENT_TYPES = ("passport", "resident_card", "driver_license", "health_insurance")


@dataclass(frozen=True, slots=True)
class ExtractedDocument:
    document_type: str
    fields: dict[str, str] = field(default_factory=dict)
    confidence: Decimal = Decimal(0)
    verified: bool = False
    country_hint: Optional[str] = None


class DocumentExtractor(Protocol):
    def extract(self, document_type: str, content: str, country_hint: Optional[str] = None) -> ExtractedDocument:
        ...


class MockDocumentExtractor:
    """Reads ``key: value`` lines from text content.

    No OCR is performed and nothing is ever reported as verified.
    """

    def extract(self, document_type: str, content: str, country_hint: Optional[str] = None) -> ExtractedDocument:
        if document_type not in SUPPORTED_DOCUMENT_TYPES:
            raise InvalidArgument(f"Unsupported document type: {document_type}", field="document_type")
        if not content or not content.strip():
            raise InvalidArgument("content is required", field="content")

        fields: dict[str, str] = {}
        for line in content.splitlines():
            key, sep, value = line.partition(":")
            key = key.strip().lower().replace(" ", "_")
            if sep and key:
                fields[key] = value.strip()
        return ExtractedDocument(
            document_type=document_type,
            fields=fields,
            confidence=Decimal(0),
            verified=False,
            country_hint=country_hint.upper() if country_hint else None,
        )


__all__ = ["SUPPORTED_DOCUMENT_TYPES", "ExtractedDocument", "DocumentExtractor", "MockDocumentExtractor"]
