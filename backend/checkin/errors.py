class CheckinError(Exception):
    pass


class PositionNotResolvable(CheckinError):
    pass


class DocumentStoreError(CheckinError):
    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CredentialExpired(DocumentStoreError):
    pass


class TransientStoreFailure(DocumentStoreError):
    pass


class DocumentBusy(CheckinError):
    pass
