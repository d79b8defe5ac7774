class DomainException(Exception):
    pass


class PercentParseError(DomainException):
    message = "invalid percent"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)


class InvalidNumberError(PercentParseError):
    message = "invalid float literal"


class TooManyDecimalsError(PercentParseError):
    message = "provided percent could contain only 2 decimals"


class TooLowPercentError(PercentParseError):
    message = "provided percent is less than 0.01%"


class TooHighPercentError(PercentParseError):
    message = "provided percent is more than 10%"


class InvalidFeePercentError(DomainException):
    pass


class InvalidAccountIdError(ValueError):
    pass


class AlreadyInitializedError(DomainException):
    pass


class FeesNotInitializedError(DomainException):
    pass


class UnauthorizedError(DomainException):
    pass


class TokenAlreadyPresentError(DomainException):
    pass


class TokenNotPresentError(DomainException):
    pass
