from fastapi import Header
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.repositories import FeeStateRepository, SupportedTokenRepository
from config import settings
from application.use_cases import (
    InitializeFeesUseCase,
    CalculateFeeUseCase,
    SetFeePercentUseCase,
    GetFeePercentUseCase,
    ListSupportedTokensUseCase,
    AddSupportedTokenUseCase,
    RemoveSupportedTokenUseCase
)


CALLER_HEADER = "X-Caller-Id"


async def get_caller(caller_id: str = Header(..., alias=CALLER_HEADER)) -> str:
    return caller_id.strip()


async def get_initialize_fees_use_case(
    session: AsyncSession
) -> InitializeFeesUseCase:
    return InitializeFeesUseCase(
        FeeStateRepository(session),
        settings.default_fee_percent
    )


async def get_calculate_fee_use_case(
    session: AsyncSession
) -> CalculateFeeUseCase:
    return CalculateFeeUseCase(FeeStateRepository(session))


async def get_set_fee_percent_use_case(
    session: AsyncSession
) -> SetFeePercentUseCase:
    return SetFeePercentUseCase(FeeStateRepository(session))


async def get_get_fee_percent_use_case(
    session: AsyncSession
) -> GetFeePercentUseCase:
    return GetFeePercentUseCase(FeeStateRepository(session))


async def get_list_supported_tokens_use_case(
    session: AsyncSession
) -> ListSupportedTokensUseCase:
    return ListSupportedTokensUseCase(FeeStateRepository(session))


async def get_add_supported_token_use_case(
    session: AsyncSession
) -> AddSupportedTokenUseCase:
    return AddSupportedTokenUseCase(
        FeeStateRepository(session),
        SupportedTokenRepository(session)
    )


async def get_remove_supported_token_use_case(
    session: AsyncSession
) -> RemoveSupportedTokenUseCase:
    return RemoveSupportedTokenUseCase(
        FeeStateRepository(session),
        SupportedTokenRepository(session)
    )
