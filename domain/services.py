from typing import Iterable, List

from domain.entities import FeeState, validate_account_id
from domain.percent import parse_percent, format_percent, DEFAULT_FEE_PERCENT
from domain.exceptions import (
    PercentParseError,
    InvalidFeePercentError,
    UnauthorizedError,
    TokenAlreadyPresentError,
    TokenNotPresentError
)


FEE_DENOMINATOR = 10000
U128_MAX = 2 ** 128 - 1
U256_MAX = 2 ** 256 - 1


def fee_for_percent(amount: int, percent: int) -> int:
    """Return ``floor(amount * percent / 10000)``.

    The product is clamped to ``U256_MAX`` instead of growing without
    bound, so amounts outside the u128 range still yield a defined result.
    """
    if amount < 0:
        raise ValueError("Amount cannot be negative")
    product = min(percent * amount, U256_MAX)
    return product // FEE_DENOMINATOR


class FeesCalculator:
    def __init__(self, state: FeeState):
        self.state = state

    @classmethod
    def new(cls, owner: str, tokens: Iterable[str], percent: int = None) -> "FeesCalculator":
        if percent is None:
            percent = DEFAULT_FEE_PERCENT
        return cls(FeeState(owner=owner, percent=percent, supported_tokens=set(tokens)))

    def calculate_fee(
        self,
        amount: int,
        token_id: str,
        target_network: str,
        target_address: str
    ) -> int:
        # target_network and target_address don't affect the fee
        if token_id not in self.state.supported_tokens:
            return 0
        return fee_for_percent(amount, self.state.percent)

    def set_fee_percent(self, caller: str, percent: str) -> int:
        if caller != self.state.owner:
            raise UnauthorizedError("Only the owner can change the fee percent")

        try:
            value = parse_percent(percent)
        except PercentParseError as e:
            raise InvalidFeePercentError(f"Couldn't parse percent: {e}") from e

        self.state.percent = value
        return value

    def get_fee_percent(self) -> str:
        return format_percent(self.state.percent)

    def supported_tokens(self) -> List[str]:
        return self.state.sorted_tokens

    def add_supported_token(self, token_id: str) -> None:
        validate_account_id(token_id)
        if token_id in self.state.supported_tokens:
            raise TokenAlreadyPresentError("Token is already present")
        self.state.supported_tokens.add(token_id)

    def remove_supported_token(self, token_id: str) -> None:
        if token_id not in self.state.supported_tokens:
            raise TokenNotPresentError(
                f"Nothing to remove, token: {token_id} hasn't been added"
            )
        self.state.supported_tokens.remove(token_id)
