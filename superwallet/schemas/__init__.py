"""Pydantic schemas used across the project."""
from datetime import datetime
from decimal import Decimal
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class TokenData(BaseModel):
    user_id: str
    email: str


class SuccessResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None


# --- accounts -------------------------------------------------------------


class RegisterRequest(BaseModel):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=6)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    nationality: Optional[str] = None
    wallet_address: Optional[str] = None
    language: str = "ko"
    country: str = "KR"


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    nationality: Optional[str] = None
    wallet_address: Optional[str] = None
    language: str
    country: str
    is_verified: bool
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class ProfileUpdateRequest(BaseModel):
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    nationality: Optional[str] = None
    language: Optional[str] = None
    country: Optional[str] = None


class PasswordChangeRequest(BaseModel):
    current_password: str
    new_password: str = Field(..., min_length=6)


# --- ledger and transactions ----------------------------------------------


class BalanceResponse(BaseModel):
    address: str
    balance: Decimal
    asset_type: str
    source: Literal["ledger", "chain"] = "ledger"
    updated_at: Optional[datetime] = None


class SendRequest(BaseModel):
    to_address: str
    amount: Decimal
    asset_type: str = "XP"


class DepositRequest(BaseModel):
    amount: Decimal
    asset_type: Optional[str] = None


class TransactionResponse(BaseModel):
    id: int
    user_id: str
    from_address: str
    to_address: str
    asset_type: str
    amount: Decimal
    fee: Decimal
    tx_hash: str
    status: str
    transaction_type: str
    block_number: Optional[int] = None
    merchant_info: Optional[dict[str, Any]] = None
    created_at: datetime
    confirmed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class TransactionListResponse(BaseModel):
    total: int
    transactions: list[TransactionResponse]


class TransactionStatusUpdate(BaseModel):
    status: str = Field(..., description="completed or failed")


class PaymentResponse(BaseModel):
    transaction: TransactionResponse
    previous_balance: Optional[Decimal] = None
    new_balance: Optional[Decimal] = None

    model_config = ConfigDict(from_attributes=True)


# --- tax refunds ----------------------------------------------------------


class TaxEstimateRequest(BaseModel):
    gross_income: Decimal
    tax_paid: Decimal
    deductions: Decimal = Decimal(0)
    refund_type: str = "income_tax"


class TaxEstimateResponse(BaseModel):
    gross_income: Decimal
    tax_paid: Decimal
    deductions: Decimal
    taxable_income: Decimal
    tax_rate: Decimal
    calculated_tax: Decimal
    refund_amount: Decimal
    effective_rate: Decimal
    eligibility_score: int
    processing_time: str
    required_documents: list[str]


class RefundSubmitRequest(TaxEstimateRequest):
    tax_year: Optional[int] = None
    bank_account: Optional[str] = None


class RefundResponse(BaseModel):
    id: int
    user_id: str
    refund_type: str
    tax_year: Optional[int] = None
    gross_income: Decimal
    tax_paid: Decimal
    deductions: Decimal
    taxable_income: Decimal
    calculated_tax: Decimal
    tax_rate: Decimal
    refund_amount: Decimal
    bank_account: Optional[str] = None
    status: str
    submitted_at: datetime
    processed_at: Optional[datetime] = None
    disbursement_tx_hash: Optional[str] = None
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RefundListResponse(BaseModel):
    total: int
    refunds: list[RefundResponse]


class RefundStatisticsResponse(BaseModel):
    total_refunded: Decimal
    total_applications: int
    pending_amount: Decimal
    success_rate: Decimal
    average_processing_time: str

    model_config = ConfigDict(from_attributes=True)


class RefundProcessRequest(BaseModel):
    action: str = Field(..., description="approve or reject")


class RefundCompleteRequest(BaseModel):
    disbursement_tx_hash: Optional[str] = None


class RefundStepResponse(BaseModel):
    step: str
    completed: bool
    timestamp: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class RefundStatusResponse(BaseModel):
    refund: RefundResponse
    steps: list[RefundStepResponse]


# --- exchange and VAN -----------------------------------------------------


class ExchangeRateResponse(BaseModel):
    from_currency: str
    to_currency: str
    rate: Decimal
    spread: Decimal

    model_config = ConfigDict(from_attributes=True)


class ExchangeRatesResponse(BaseModel):
    rates: list[ExchangeRateResponse]


class ConvertRequest(BaseModel):
    amount: Decimal
    from_currency: str
    to_currency: str


class ConversionResponse(BaseModel):
    original_amount: Decimal
    from_currency: str
    to_currency: str
    rate: Decimal
    fees: Decimal
    amount: Decimal

    model_config = ConfigDict(from_attributes=True)


class VanPaymentRequest(BaseModel):
    amount: Decimal
    merchant_id: str
    currency: str = "KRW"
    terminal_id: Optional[str] = None
    provider: str = "mock-van"
    transaction_id: Optional[int] = None


class VanPaymentResponse(BaseModel):
    id: int
    user_id: str
    van_provider: str
    merchant_id: str
    terminal_id: Optional[str] = None
    van_tx_id: str
    amount: Decimal
    currency: str
    exchange_rate: Optional[Decimal] = None
    status: str
    created_at: datetime
    processed_at: Optional[datetime] = None
    transaction_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class VanHistoryResponse(BaseModel):
    total: int
    payments: list[VanPaymentResponse]


# --- network and documents ------------------------------------------------


class PriceResponse(BaseModel):
    symbol: str
    price_usd: Decimal
    price_krw: Decimal
    change_24h: Decimal
    source: str

    model_config = ConfigDict(from_attributes=True)


class NetworkStatusResponse(BaseModel):
    is_connected: bool
    latest_block: int
    network_id: str
    chain_id: str
    gas_price: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class RpcRequest(BaseModel):
    method: str = Field(..., min_length=1)
    params: list[Any] = Field(default_factory=list)


class RpcResponse(BaseModel):
    method: str
    result: Any = None


class WalletAddressResponse(BaseModel):
    address: str
    asset_type: str
    network_id: str


class DocumentExtractRequest(BaseModel):
    document_type: str
    content: str
    country_hint: Optional[str] = None


class DocumentExtractResponse(BaseModel):
    document_type: str
    fields: dict[str, str]
    confidence: Decimal
    verified: bool
    country_hint: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class LanguageSettingsRequest(BaseModel):
    language: Optional[str] = None
    country: Optional[str] = Field(None, min_length=2, max_length=2)


class LanguageSettingsResponse(BaseModel):
    language: str
    country: str
    supported_languages: list[str]
    message: Optional[str] = None


# --- identity -------------------------------------------------------------


class DidCreateRequest(BaseModel):
    public_key: str = Field(..., description="hex encoded secp256k1 public key")
    service_endpoint: Optional[str] = None


class DidResponse(BaseModel):
    id: int
    user_id: str
    did_identifier: str
    did_document: dict[str, Any]
    public_key: str
    blockchain_tx_hash: Optional[str] = None
    status: str
    issued_at: datetime
    expires_at: Optional[datetime] = None
    revoked_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DidListResponse(BaseModel):
    total: int
    dids: list[DidResponse]


class CredentialIssueRequest(BaseModel):
    credential_type: str
    claims: dict[str, Any] = Field(default_factory=dict)
    expires_in_days: Optional[int] = None


class CredentialResponse(BaseModel):
    id: int
    did_id: int
    credential_type: str
    credential_data: dict[str, Any]
    issuer_did: str
    issuer_signature: str
    blockchain_tx_hash: Optional[str] = None
    status: str
    issued_at: datetime
    expires_at: Optional[datetime] = None
    revoked_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class CredentialListResponse(BaseModel):
    total: int
    credentials: list[CredentialResponse]


# --- electronic documents -------------------------------------------------


class DocumentCreateRequest(BaseModel):
    title: str
    document_type: str = Field(..., description="contract, certificate or report")
    content: str
    ipfs_hash: Optional[str] = None


class DocumentSignRequest(BaseModel):
    signature: Optional[str] = Field(None, description="omit to sign with the service wallet")


class DocumentSignatureResponse(BaseModel):
    signer_id: str
    signature: str
    signed_at: str

    model_config = ConfigDict(from_attributes=True)


class DocumentResponse(BaseModel):
    id: int
    user_id: str
    title: str
    document_type: str
    content: str
    content_hash: str
    status: str
    version: int
    signatures: list[DocumentSignatureResponse]
    blockchain_tx_hash: Optional[str] = None
    ipfs_hash: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class DocumentListResponse(BaseModel):
    total: int
    documents: list[DocumentResponse]


# --- contracts ------------------------------------------------------------


class ContractTemplateResponse(BaseModel):
    name: str
    abi: list[dict[str, Any]]
    constructor_inputs: list[dict[str, Any]]

    model_config = ConfigDict(from_attributes=True)


class ContractDeployRequest(BaseModel):
    contract_name: str
    constructor_args: list[Any] = Field(default_factory=list)
    gas_limit: int = 3_000_000
    deployer_address: Optional[str] = None


class ContractDeploymentResponse(BaseModel):
    id: int
    user_id: str
    contract_name: str
    contract_address: Optional[str] = None
    deployer_address: str
    tx_hash: str
    block_number: int
    gas_limit: int
    gas_used: Optional[int] = None
    status: str
    abi: list[dict[str, Any]]
    constructor_args: list[Any]
    compilation_metadata: Optional[dict[str, Any]] = None
    deployment_date: datetime
    verified_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ContractDeploymentListResponse(BaseModel):
    total: int
    deployments: list[ContractDeploymentResponse]
