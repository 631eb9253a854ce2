class CurrencyException(Exception):
    pass


class ProviderError(CurrencyException):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class RateStoreError(CurrencyException):
    pass


class StoreReadError(RateStoreError):
    pass


class StorageError(RateStoreError):
    pass


class TransportError(CurrencyException):
    pass
