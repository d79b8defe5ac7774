from pydantic import BaseModel, Field, field_validator
from typing import Optional, List

from domain.entities import validate_account_id
from domain.services import U128_MAX


class InitializeFeesRequest(BaseModel):
    tokens: List[str] = Field(default_factory=list, description="Initially supported token ids")

    @field_validator('tokens')
    @classmethod
    def validate_tokens(cls, v: List[str]) -> List[str]:
        return [validate_account_id(token) for token in v]


class FeeStateResponse(BaseModel):
    owner: str
    percent: str
    supported_tokens: List[str]


class CalculateFeeRequest(BaseModel):
    amount: str = Field(..., description="Transfer amount as string")
    token_id: str = Field(..., min_length=2, max_length=64)
    target_network: str = Field(..., min_length=2, max_length=64)
    target_address: str = Field(..., description="Recipient address on the target network")

    @field_validator('amount')
    @classmethod
    def validate_amount(cls, v: str) -> str:
        if not v.isdigit() or not v.isascii():
            raise ValueError("Amount must be a non-negative integer")
        if int(v) > U128_MAX:
            raise ValueError("Amount does not fit into 128 bits")
        return v

    @field_validator('token_id', 'target_network')
    @classmethod
    def validate_account(cls, v: str) -> str:
        return validate_account_id(v)


class CalculateFeeResponse(BaseModel):
    fee: str


class SetFeePercentRequest(BaseModel):
    percent: str = Field(..., max_length=64, description="Fee percent, at most 2 decimals")


class FeePercentResponse(BaseModel):
    percent: str


class SupportedTokenRequest(BaseModel):
    token_id: str = Field(..., min_length=2, max_length=64)

    @field_validator('token_id')
    @classmethod
    def validate_token_id(cls, v: str) -> str:
        return validate_account_id(v)


class SupportedTokensResponse(BaseModel):
    tokens: List[str]
    total: int


class ErrorResponse(BaseModel):
    error: str
    detail: Optional[str] = None
