
RECORD_NOT_FOUND = "Record not found"

class LendTrackAPIError(Exception): pass

class InvalidPayloadError(LendTrackAPIError): pass

class UnknownActionError(LendTrackAPIError):
    def __init__(self, message="Unknown action"):
        super().__init__(message)

class RecordNotFoundError(LendTrackAPIError):
    def __init__(self, message=RECORD_NOT_FOUND):
        super().__init__(message)

class ItemNotFoundError(RecordNotFoundError): pass

class ItemTypeNotFoundError(RecordNotFoundError): pass

class CategoryNotFoundError(RecordNotFoundError): pass

class LoanStateError(LendTrackAPIError): pass

class ItemAlreadyLoanedError(LoanStateError):
    def __init__(self, message="Item already loaned or does not exist"):
        super().__init__(message)

class NoActiveLoanError(LoanStateError):
    def __init__(self, message="No active loan for this item"):
        super().__init__(message)

class ConcurrentModificationError(LoanStateError):
    def __init__(self, message="Failed to return item. It may have been returned by another process."):
        super().__init__(message)

class DuplicateRecordError(LendTrackAPIError): pass
