class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class InvalidDataTypeError(ValidationError):
    """Raised when an attribute data type is not one of the known kinds."""

    def __init__(self, data_type: object):
        super().__init__(f"Invalid data type: {data_type!r}")
        self.data_type = data_type


class RetryableStorageError(DomainError):
    """Raised for storage conflicts that succeed when the caller retries."""


class DuplicateAttributeError(RetryableStorageError):
    """Raised when a concurrent writer created the same attribute first."""

    def __init__(self, attribute_name: str):
        super().__init__(f"Attribute {attribute_name!r} was created concurrently, retry")
        self.attribute_name = attribute_name
