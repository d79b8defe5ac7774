from abc import ABC, abstractmethod
from typing import Optional, List

from domain.entities import FeeState


class IFeeStateRepository(ABC):
    @abstractmethod
    async def create(self, state: FeeState) -> FeeState:
        pass

    @abstractmethod
    async def get(self) -> Optional[FeeState]:
        pass

    @abstractmethod
    async def update_percent(self, percent: int) -> None:
        pass


class ISupportedTokenRepository(ABC):
    @abstractmethod
    async def list(self) -> List[str]:
        pass

    @abstractmethod
    async def add(self, token_id: str) -> None:
        pass

    @abstractmethod
    async def remove(self, token_id: str) -> None:
        pass
