import logging
from typing import List
from datetime import datetime, timezone

from domain.entities import FeeState
from domain.percent import parse_percent
from domain.services import FeesCalculator
from domain.exceptions import AlreadyInitializedError, FeesNotInitializedError
from application.repositories import IFeeStateRepository, ISupportedTokenRepository

logger = logging.getLogger(__name__)


async def load_calculator(fee_state_repo: IFeeStateRepository) -> FeesCalculator:
    state = await fee_state_repo.get()
    if state is None:
        raise FeesNotInitializedError("Fees calculator is not initialized")
    return FeesCalculator(state)


class InitializeFeesUseCase:
    def __init__(
        self,
        fee_state_repo: IFeeStateRepository,
        default_percent: str = None
    ):
        self.fee_state_repo = fee_state_repo
        self.default_percent = default_percent

    async def execute(self, caller: str, tokens: List[str]) -> FeeState:
        existing = await self.fee_state_repo.get()
        if existing:
            raise AlreadyInitializedError("Fees calculator is already initialized")

        percent = None
        if self.default_percent is not None:
            percent = parse_percent(self.default_percent)

        calculator = FeesCalculator.new(caller, tokens, percent)
        calculator.state.created_at = datetime.now(timezone.utc)
        state = await self.fee_state_repo.create(calculator.state)

        logger.info(
            f"Initialized fees calculator: owner={state.owner}, "
            f"percent={state.percent}, tokens={state.sorted_tokens}"
        )
        return state


class CalculateFeeUseCase:
    def __init__(self, fee_state_repo: IFeeStateRepository):
        self.fee_state_repo = fee_state_repo

    async def execute(
        self,
        amount: int,
        token_id: str,
        target_network: str,
        target_address: str
    ) -> int:
        calculator = await load_calculator(self.fee_state_repo)
        return calculator.calculate_fee(
            amount, token_id, target_network, target_address
        )


class SetFeePercentUseCase:
    def __init__(self, fee_state_repo: IFeeStateRepository):
        self.fee_state_repo = fee_state_repo

    async def execute(self, caller: str, percent: str) -> str:
        calculator = await load_calculator(self.fee_state_repo)
        value = calculator.set_fee_percent(caller, percent)
        await self.fee_state_repo.update_percent(value)

        logger.info(f"Fee percent set to {value} by {caller}")
        return calculator.get_fee_percent()


class GetFeePercentUseCase:
    def __init__(self, fee_state_repo: IFeeStateRepository):
        self.fee_state_repo = fee_state_repo

    async def execute(self) -> str:
        calculator = await load_calculator(self.fee_state_repo)
        return calculator.get_fee_percent()


class ListSupportedTokensUseCase:
    def __init__(self, fee_state_repo: IFeeStateRepository):
        self.fee_state_repo = fee_state_repo

    async def execute(self) -> List[str]:
        calculator = await load_calculator(self.fee_state_repo)
        return calculator.supported_tokens()


class AddSupportedTokenUseCase:
    def __init__(
        self,
        fee_state_repo: IFeeStateRepository,
        token_repo: ISupportedTokenRepository
    ):
        self.fee_state_repo = fee_state_repo
        self.token_repo = token_repo

    async def execute(self, token_id: str) -> List[str]:
        calculator = await load_calculator(self.fee_state_repo)
        calculator.add_supported_token(token_id)
        await self.token_repo.add(token_id)

        logger.info(f"Added supported token: {token_id}")
        return calculator.supported_tokens()


class RemoveSupportedTokenUseCase:
    def __init__(
        self,
        fee_state_repo: IFeeStateRepository,
        token_repo: ISupportedTokenRepository
    ):
        self.fee_state_repo = fee_state_repo
        self.token_repo = token_repo

    async def execute(self, token_id: str) -> List[str]:
        calculator = await load_calculator(self.fee_state_repo)
        calculator.remove_supported_token(token_id)
        await self.token_repo.remove(token_id)

        logger.info(f"Removed supported token: {token_id}")
        return calculator.supported_tokens()
