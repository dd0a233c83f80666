class ValidationError(ValueError):
    """Malformed or inconsistent input. Deterministic, never worth retrying."""


class NotFoundError(LookupError):
    pass


class PermissionDeniedError(PermissionError):
    pass


class ExchangeRateError(RuntimeError):
    pass
