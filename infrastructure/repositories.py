from typing import Optional, List
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import FlushError
from sqlalchemy.ext.asyncio import AsyncSession

from domain.entities import FeeState
from domain.exceptions import (
    AlreadyInitializedError,
    TokenAlreadyPresentError,
    TokenNotPresentError
)
from infrastructure.models import FEE_STATE_ID, FeeStateModel, SupportedTokenModel
from application.repositories import IFeeStateRepository, ISupportedTokenRepository


class SupportedTokenRepository(ISupportedTokenRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def list(self) -> List[str]:
        result = await self.session.execute(
            select(SupportedTokenModel.token_id).order_by(SupportedTokenModel.token_id)
        )
        return list(result.scalars().all())

    async def add(self, token_id: str) -> None:
        self.session.add(SupportedTokenModel(token_id=token_id))
        try:
            await self.session.flush()
        except IntegrityError:
            raise TokenAlreadyPresentError("Token is already present")

    async def remove(self, token_id: str) -> None:
        result = await self.session.execute(
            delete(SupportedTokenModel).where(SupportedTokenModel.token_id == token_id)
        )
        if result.rowcount == 0:
            raise TokenNotPresentError(
                f"Nothing to remove, token: {token_id} hasn't been added"
            )
        await self.session.flush()


class FeeStateRepository(IFeeStateRepository):
    def __init__(self, session: AsyncSession):
        self.session = session
        self.token_repo = SupportedTokenRepository(session)

    async def create(self, state: FeeState) -> FeeState:
        db_state = FeeStateModel(
            id=FEE_STATE_ID,
            percent=state.percent,
            owner=state.owner
        )
        if state.created_at is not None:
            db_state.created_at = state.created_at
        self.session.add(db_state)
        try:
            await self.session.flush()
        except (IntegrityError, FlushError):
            raise AlreadyInitializedError("Fees calculator is already initialized")

        for token_id in state.sorted_tokens:
            await self.token_repo.add(token_id)

        return await self.get()

    async def get(self) -> Optional[FeeState]:
        result = await self.session.execute(
            select(FeeStateModel).where(FeeStateModel.id == FEE_STATE_ID)
        )
        db_state = result.scalar_one_or_none()

        if not db_state:
            return None

        tokens = await self.token_repo.list()
        return FeeState(
            owner=db_state.owner,
            percent=db_state.percent,
            supported_tokens=set(tokens),
            created_at=db_state.created_at
        )

    async def update_percent(self, percent: int) -> None:
        await self.session.execute(
            update(FeeStateModel)
            .where(FeeStateModel.id == FEE_STATE_ID)
            .values(percent=percent)
        )
        await self.session.flush()
