import pytest

from domain.entities import FeeState, validate_account_id
from domain.percent import (
    parse_percent,
    format_percent,
    MIN_FEE_PERCENT,
    MAX_FEE_PERCENT,
    DEFAULT_FEE_PERCENT
)
from domain.services import FeesCalculator, fee_for_percent, U128_MAX, U256_MAX
from domain.exceptions import (
    InvalidNumberError,
    TooManyDecimalsError,
    TooLowPercentError,
    TooHighPercentError,
    InvalidFeePercentError,
    InvalidAccountIdError,
    UnauthorizedError,
    TokenAlreadyPresentError,
    TokenNotPresentError
)


OWNER = "owner.near"
AURORA = "aurora"
TARGET_ADDRESS = "0xea2342"
USDT = "usdt.near"


def test_parse_percent():
    assert parse_percent("10") == 1000
    assert parse_percent("2") == 200
    assert parse_percent("0.25") == 25
    assert parse_percent("0.01") == 1
    assert parse_percent("7.5") == 750
    assert parse_percent("0.29") == 29
    assert parse_percent("5.") == 500
    assert parse_percent(".5") == 50


def test_parse_percent_too_many_decimals():
    with pytest.raises(TooManyDecimalsError):
        parse_percent("0.015")

    with pytest.raises(TooManyDecimalsError):
        parse_percent("0.009")

    with pytest.raises(TooManyDecimalsError):
        parse_percent("1.5e1")

    with pytest.raises(TooManyDecimalsError):
        parse_percent("hello.world")


def test_parse_percent_out_of_range():
    with pytest.raises(TooHighPercentError):
        parse_percent("10.1")

    with pytest.raises(TooHighPercentError):
        parse_percent("inf")

    with pytest.raises(TooLowPercentError):
        parse_percent("0")

    with pytest.raises(TooLowPercentError):
        parse_percent("-1")

    with pytest.raises(TooLowPercentError):
        parse_percent("NaN")


def test_parse_percent_exponent():
    assert parse_percent("1e1") == 1000
    assert parse_percent("15e-3") == 1

    with pytest.raises(TooLowPercentError):
        parse_percent("1e-3")


def test_parse_percent_range_checked_after_truncation():
    assert parse_percent("10005e-3") == 1000
    assert parse_percent("100099e-4") == 1000

    with pytest.raises(TooHighPercentError):
        parse_percent("1001e-2")

    with pytest.raises(TooLowPercentError):
        parse_percent("9e-3")


def test_parse_percent_exponent_overflow():
    with pytest.raises(TooHighPercentError):
        parse_percent("1e99999999999999999999")

    with pytest.raises(TooLowPercentError):
        parse_percent("-1e99999999999999999999")

    with pytest.raises(TooLowPercentError):
        parse_percent("1e-99999999999999999999")


def test_parse_percent_invalid_number():
    with pytest.raises(InvalidNumberError) as exc_info:
        parse_percent("hello")
    assert str(exc_info.value) == "invalid float literal"

    with pytest.raises(InvalidNumberError) as exc_info:
        parse_percent("")
    assert str(exc_info.value) == "cannot parse float from empty string"

    for value in [" 5", "5 ", "1_0", ".", "5%"]:
        with pytest.raises(InvalidNumberError):
            parse_percent(value)


def test_parse_error_messages():
    with pytest.raises(TooManyDecimalsError, match="provided percent could contain only 2 decimals"):
        parse_percent("6.123")

    with pytest.raises(TooHighPercentError, match="provided percent is more than 10%"):
        parse_percent("12.12")

    with pytest.raises(TooLowPercentError, match="provided percent is less than 0.01%"):
        parse_percent("0.00")


def test_format_percent():
    assert format_percent(500) == "5.00"
    assert format_percent(750) == "7.50"
    assert format_percent(1) == "0.01"
    assert format_percent(1000) == "10.00"


def test_format_parse_consistency():
    for percent in range(MIN_FEE_PERCENT, MAX_FEE_PERCENT + 1):
        assert parse_percent(format_percent(percent)) == percent


def test_parse_format_normalizes():
    assert format_percent(parse_percent("2")) == "2.00"
    assert format_percent(parse_percent("2.5")) == "2.50"
    assert format_percent(parse_percent("0.01")) == "0.01"


def test_account_id_validation():
    assert validate_account_id("usdt.near") == "usdt.near"
    assert validate_account_id("aurora") == "aurora"
    assert validate_account_id("a-b_c.near") == "a-b_c.near"

    for account_id in ["", "a", "Usdt.near", "usdt..near", ".near", "near.", "a" * 65, "usdt near"]:
        with pytest.raises(InvalidAccountIdError):
            validate_account_id(account_id)


def test_fee_state_defaults():
    state = FeeState(owner=OWNER)
    assert state.percent == DEFAULT_FEE_PERCENT
    assert state.supported_tokens == set()


def test_fee_state_invalid_percent():
    with pytest.raises(ValueError):
        FeeState(owner=OWNER, percent=0)

    with pytest.raises(ValueError):
        FeeState(owner=OWNER, percent=MAX_FEE_PERCENT + 1)


def test_fee_state_deduplicates_tokens():
    calculator = FeesCalculator.new(OWNER, [USDT, "wrap.near", USDT])
    assert calculator.supported_tokens() == [USDT, "wrap.near"]


def test_check_supported_tokens(calculator):
    assert calculator.calculate_fee(1000, USDT, AURORA, TARGET_ADDRESS) == 0

    calculator.add_supported_token(USDT)
    assert calculator.calculate_fee(1000, USDT, AURORA, TARGET_ADDRESS) == 50

    calculator.remove_supported_token(USDT)
    assert calculator.calculate_fee(1000, USDT, AURORA, TARGET_ADDRESS) == 0


def test_set_percent(calculator):
    assert calculator.get_fee_percent() == "5.00"

    calculator.set_fee_percent(OWNER, "6")
    assert calculator.get_fee_percent() == "6.00"

    calculator.set_fee_percent(OWNER, "7.5")
    assert calculator.get_fee_percent() == "7.50"


def test_set_percent_with_many_decimals(calculator):
    with pytest.raises(
        InvalidFeePercentError,
        match="Couldn't parse percent: provided percent could contain only 2 decimals"
    ):
        calculator.set_fee_percent(OWNER, "6.123")
    assert calculator.get_fee_percent() == "5.00"


def test_set_too_high_percents(calculator):
    with pytest.raises(
        InvalidFeePercentError,
        match="Couldn't parse percent: provided percent is more than 10%"
    ):
        calculator.set_fee_percent(OWNER, "12.12")
    assert calculator.get_fee_percent() == "5.00"


def test_set_percent_unauthorized(calculator):
    with pytest.raises(UnauthorizedError):
        calculator.set_fee_percent("mallory.near", "6")
    assert calculator.get_fee_percent() == "5.00"


def test_add_supported_token_twice(calculator):
    calculator.add_supported_token(USDT)

    with pytest.raises(TokenAlreadyPresentError, match="Token is already present"):
        calculator.add_supported_token(USDT)
    assert calculator.supported_tokens() == [USDT]


def test_remove_absent_token(calculator):
    calculator.add_supported_token("wrap.near")

    with pytest.raises(TokenNotPresentError, match="hasn't been added"):
        calculator.remove_supported_token(USDT)
    assert calculator.supported_tokens() == ["wrap.near"]


def test_token_management_is_not_owner_gated(calculator):
    # Only the fee percent is protected by the owner check
    calculator.add_supported_token(USDT)
    calculator.remove_supported_token(USDT)
    assert calculator.supported_tokens() == []


def test_supported_tokens_are_sorted(calculator):
    for token in ["wrap.near", "aurora", USDT]:
        calculator.add_supported_token(token)
    assert calculator.supported_tokens() == ["aurora", USDT, "wrap.near"]


def test_fee_ignores_destination():
    calculator = FeesCalculator.new(OWNER, [USDT])
    assert calculator.calculate_fee(1000, USDT, AURORA, TARGET_ADDRESS) == \
        calculator.calculate_fee(1000, USDT, "other-network.near", "anything")


def test_fee_is_floored():
    calculator = FeesCalculator.new(OWNER, [USDT])
    assert calculator.calculate_fee(19, USDT, AURORA, TARGET_ADDRESS) == 0
    assert calculator.calculate_fee(20, USDT, AURORA, TARGET_ADDRESS) == 1
    assert calculator.calculate_fee(39, USDT, AURORA, TARGET_ADDRESS) == 1


def test_fee_is_monotonic():
    calculator = FeesCalculator.new(OWNER, [USDT])
    calculator.set_fee_percent(OWNER, "0.37")

    fees = [
        calculator.calculate_fee(amount, USDT, AURORA, TARGET_ADDRESS)
        for amount in range(0, 5000, 7)
    ]
    assert fees == sorted(fees)


def test_fee_is_bounded_by_max_percent():
    calculator = FeesCalculator.new(OWNER, [USDT])
    calculator.set_fee_percent(OWNER, "10")

    assert calculator.calculate_fee(1000, USDT, AURORA, TARGET_ADDRESS) == 100
    assert calculator.calculate_fee(U128_MAX, USDT, AURORA, TARGET_ADDRESS) == U128_MAX // 10


def test_fee_for_percent_saturates():
    assert fee_for_percent(2 ** 256, MAX_FEE_PERCENT) == U256_MAX // 10000


def test_fee_for_percent_negative_amount():
    with pytest.raises(ValueError):
        fee_for_percent(-1, DEFAULT_FEE_PERCENT)
