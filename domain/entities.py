import re
from typing import Optional, Set, List
from dataclasses import dataclass, field
from datetime import datetime

from domain.exceptions import InvalidAccountIdError
from domain.percent import MIN_FEE_PERCENT, MAX_FEE_PERCENT, DEFAULT_FEE_PERCENT


MIN_ACCOUNT_ID_LEN = 2
MAX_ACCOUNT_ID_LEN = 64

ACCOUNT_ID_PATTERN = re.compile(
    r"^(([a-z\d]+[-_])*[a-z\d]+\.)*([a-z\d]+[-_])*[a-z\d]+$"
)


def validate_account_id(account_id: str) -> str:
    if not isinstance(account_id, str):
        raise InvalidAccountIdError("Account id must be a string")
    if not MIN_ACCOUNT_ID_LEN <= len(account_id) <= MAX_ACCOUNT_ID_LEN:
        raise InvalidAccountIdError(
            f"Account id '{account_id}' must be between "
            f"{MIN_ACCOUNT_ID_LEN} and {MAX_ACCOUNT_ID_LEN} characters"
        )
    if not ACCOUNT_ID_PATTERN.fullmatch(account_id):
        raise InvalidAccountIdError(f"Invalid account id '{account_id}'")
    return account_id


@dataclass
class FeeState:
    owner: str
    percent: int = DEFAULT_FEE_PERCENT
    supported_tokens: Set[str] = field(default_factory=set)
    created_at: Optional[datetime] = None

    def __post_init__(self):
        validate_account_id(self.owner)
        if not MIN_FEE_PERCENT <= self.percent <= MAX_FEE_PERCENT:
            raise ValueError(
                f"Fee percent must be between {MIN_FEE_PERCENT} "
                f"and {MAX_FEE_PERCENT}"
            )
        self.supported_tokens = {
            validate_account_id(token) for token in self.supported_tokens
        }

    @property
    def sorted_tokens(self) -> List[str]:
        return sorted(self.supported_tokens)
