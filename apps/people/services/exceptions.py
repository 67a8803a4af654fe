"""
Domain-specific exceptions for people app.

These exceptions represent business rule violations and should be
caught in views and converted to appropriate HTTP responses.
"""


class PeopleServiceError(Exception):
    """Base exception for all people service errors."""
    pass


class PersonNotFoundError(PeopleServiceError):
    """Raised when a person does not exist or belongs to another owner."""
    pass


class InvalidPersonDataError(PeopleServiceError):
    """Raised when person data violates business rules."""
    pass


class ContactNotFoundError(PeopleServiceError):
    """Raised when a contact does not exist or belongs to another owner."""
    pass


class DocumentNotFoundError(PeopleServiceError):
    """Raised when a document does not exist or belongs to another owner."""
    pass


class InvalidDocumentError(PeopleServiceError):
    """Raised when an uploaded payload cannot be decoded."""
    pass


class DocumentTooLargeError(InvalidDocumentError):
    """Raised when a decoded payload exceeds the upload limit."""
    pass
