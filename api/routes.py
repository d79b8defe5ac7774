from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
import logging

from infrastructure.database import get_db
from domain.percent import format_percent
from domain.exceptions import (
    AlreadyInitializedError,
    FeesNotInitializedError,
    InvalidFeePercentError,
    UnauthorizedError,
    TokenAlreadyPresentError,
    TokenNotPresentError
)
from api.schemas import (
    InitializeFeesRequest,
    FeeStateResponse,
    CalculateFeeRequest,
    CalculateFeeResponse,
    SetFeePercentRequest,
    FeePercentResponse,
    SupportedTokenRequest,
    SupportedTokensResponse,
    ErrorResponse
)
from api.dependencies import (
    get_caller,
    get_initialize_fees_use_case,
    get_calculate_fee_use_case,
    get_set_fee_percent_use_case,
    get_get_fee_percent_use_case,
    get_list_supported_tokens_use_case,
    get_add_supported_token_use_case,
    get_remove_supported_token_use_case
)

logger = logging.getLogger(__name__)

router = APIRouter()

NOT_INITIALIZED = {409: {"model": ErrorResponse}}


@router.post(
    "/fees",
    response_model=FeeStateResponse,
    status_code=201,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse}
    }
)
async def initialize_fees(
    request: InitializeFeesRequest,
    caller: str = Depends(get_caller),
    session: AsyncSession = Depends(get_db)
):
    try:
        use_case = await get_initialize_fees_use_case(session)
        state = await use_case.execute(caller=caller, tokens=request.tokens)

        logger.info(f"Fees calculator initialized by {caller}")
        return FeeStateResponse(
            owner=state.owner,
            percent=format_percent(state.percent),
            supported_tokens=state.sorted_tokens
        )

    except AlreadyInitializedError as e:
        logger.warning(f"Repeated initialization attempt by {caller}")
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        logger.warning(f"Invalid request: {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error initializing fees: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post(
    "/fees/calculate",
    response_model=CalculateFeeResponse,
    responses=NOT_INITIALIZED
)
async def calculate_fee(
    request: CalculateFeeRequest,
    session: AsyncSession = Depends(get_db)
):
    try:
        use_case = await get_calculate_fee_use_case(session)
        fee = await use_case.execute(
            amount=int(request.amount),
            token_id=request.token_id,
            target_network=request.target_network,
            target_address=request.target_address
        )
        return CalculateFeeResponse(fee=str(fee))

    except FeesNotInitializedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Error calculating fee: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/fees/percent",
    response_model=FeePercentResponse,
    responses=NOT_INITIALIZED
)
async def get_fee_percent(session: AsyncSession = Depends(get_db)):
    try:
        use_case = await get_get_fee_percent_use_case(session)
        return FeePercentResponse(percent=await use_case.execute())

    except FeesNotInitializedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Error getting fee percent: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put(
    "/fees/percent",
    response_model=FeePercentResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        409: {"model": ErrorResponse}
    }
)
async def set_fee_percent(
    request: SetFeePercentRequest,
    caller: str = Depends(get_caller),
    session: AsyncSession = Depends(get_db)
):
    try:
        use_case = await get_set_fee_percent_use_case(session)
        percent = await use_case.execute(caller=caller, percent=request.percent)

        logger.info(f"Fee percent changed to {percent} by {caller}")
        return FeePercentResponse(percent=percent)

    except UnauthorizedError as e:
        logger.warning(f"Unauthorized fee percent change by {caller}")
        raise HTTPException(status_code=403, detail=str(e))
    except InvalidFeePercentError as e:
        logger.warning(f"Invalid fee percent '{request.percent}': {str(e)}")
        raise HTTPException(status_code=400, detail=str(e))
    except FeesNotInitializedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Error setting fee percent: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get(
    "/fees/tokens",
    response_model=SupportedTokensResponse,
    responses=NOT_INITIALIZED
)
async def list_supported_tokens(session: AsyncSession = Depends(get_db)):
    try:
        use_case = await get_list_supported_tokens_use_case(session)
        tokens = await use_case.execute()
        return SupportedTokensResponse(tokens=tokens, total=len(tokens))

    except FeesNotInitializedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Error listing supported tokens: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post(
    "/fees/tokens",
    response_model=SupportedTokensResponse,
    status_code=201,
    responses={409: {"model": ErrorResponse}}
)
async def add_supported_token(
    request: SupportedTokenRequest,
    session: AsyncSession = Depends(get_db)
):
    try:
        use_case = await get_add_supported_token_use_case(session)
        tokens = await use_case.execute(request.token_id)

        logger.info(f"Added supported token: {request.token_id}")
        return SupportedTokensResponse(tokens=tokens, total=len(tokens))

    except (TokenAlreadyPresentError, FeesNotInitializedError) as e:
        logger.warning(f"Cannot add token {request.token_id}: {str(e)}")
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Error adding supported token: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete(
    "/fees/tokens/{token_id}",
    response_model=SupportedTokensResponse,
    responses={
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse}
    }
)
async def remove_supported_token(
    token_id: str,
    session: AsyncSession = Depends(get_db)
):
    try:
        use_case = await get_remove_supported_token_use_case(session)
        tokens = await use_case.execute(token_id)

        logger.info(f"Removed supported token: {token_id}")
        return SupportedTokensResponse(tokens=tokens, total=len(tokens))

    except TokenNotPresentError as e:
        logger.warning(f"Token not found: {token_id}")
        raise HTTPException(status_code=404, detail=str(e))
    except FeesNotInitializedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.error(f"Error removing supported token: {str(e)}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error")
