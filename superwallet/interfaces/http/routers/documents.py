"""Electronic document and identity document extraction endpoints."""
import asyncio

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from superwallet.core.container import ApplicationContainer
from superwallet.interfaces.http.deps import (
    get_app_container,
    get_current_user,
    get_db_session,
    get_document_service,
)
from superwallet.modules.accounts import User
from superwallet.modules.documents import DocumentService
from superwallet.schemas import (
    DocumentCreateRequest,
    DocumentExtractRequest,
    DocumentExtractResponse,
    DocumentListResponse,
    DocumentResponse,
    DocumentSignRequest,
)

router = APIRouter()


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED, summary="Create a draft")
async def create_document(
    payload: DocumentCreateRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    documents: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    document = await documents.create(
        user.id,
        title=payload.title,
        document_type=payload.document_type,
        content=payload.content,
        ipfs_hash=payload.ipfs_hash,
    )
    await db.commit()
    return DocumentResponse.model_validate(document)


@router.get("/user", response_model=DocumentListResponse, summary="Own documents, newest first")
async def list_documents(
    user: User = Depends(get_current_user),
    documents: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    items = await documents.list_by_user(user.id)
    return DocumentListResponse(total=len(items), documents=[DocumentResponse.model_validate(d) for d in items])


@router.get("/{document_id}", response_model=DocumentResponse, summary="A document owned or signed by the caller")
async def get_document(
    document_id: int,
    user: User = Depends(get_current_user),
    documents: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    return DocumentResponse.model_validate(await documents.get(document_id, user.id))


@router.post("/{document_id}/sign", response_model=DocumentResponse, summary="Add the caller's signature")
async def sign_document(
    document_id: int,
    payload: DocumentSignRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    documents: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    document = await documents.sign(document_id, user.id, payload.signature)
    await db.commit()
    return DocumentResponse.model_validate(document)


@router.post("/{document_id}/finalize", response_model=DocumentResponse, summary="Anchor a signed document")
async def finalize_document(
    document_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    documents: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    document = await documents.finalize(document_id, user.id)
    await db.commit()
    return DocumentResponse.model_validate(document)


@router.post("/extract", response_model=DocumentExtractResponse, summary="Extract fields from a document")
async def extract_document(
    payload: DocumentExtractRequest,
    _: User = Depends(get_current_user),
    container: ApplicationContainer = Depends(get_app_container),
) -> DocumentExtractResponse:
    document = await asyncio.to_thread(
        container.document_extractor.extract,
        payload.document_type,
        payload.content,
        payload.country_hint,
    )
    return DocumentExtractResponse.model_validate(document)
