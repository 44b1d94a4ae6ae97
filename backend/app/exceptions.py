"""
ProductHub Backend — Custom Exception Hierarchy
=================================================

What:  Application-specific exceptions for every way a request can fail.
How:   Each exception carries a message, an ErrorKind and an optional context
       dict. Services raise them; the fallback adapter in routes/fallback.py
       turns them into the endpoint's default payload.
Who:   Raised by the store accessor, services and configuration.
When:  During request processing (recoverable) or startup (fatal).

Exception Hierarchy:
    ProductHubError (base)
    ├── ConfigurationError       → fatal at startup (MONGO_URI missing)
    ├── ValidationError          → 400 on cart-add (missing userId / productId)
    ├── InvalidIdError           → path ID is not a valid ObjectId
    ├── StoreConnectionError     → MongoDB unreachable
    ├── StoreOperationError      → driver / server error during an operation
    ├── MalformedDocumentError   → stored cart does not fit its typed model
    └── ResponseEncodingError    → result holds a value JSON cannot represent

Services return a value or raise one of these; routes never catch anything
themselves. The ErrorKind travels with the exception so a route can pick a
status code per kind without isinstance chains.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    """Machine-readable category attached to every ProductHubError."""

    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    INVALID_ID = "invalid_id"
    CONNECTION = "connection"
    STORE = "store"
    MALFORMED_DOCUMENT = "malformed_document"
    ENCODING = "encoding"
    INTERNAL = "internal"


class ProductHubError(Exception):
    """
    Base exception for all ProductHub application errors.

    Attributes:
        message:  Human-readable description (logged, never sent to clients)
        kind:     ErrorKind used by the fallback adapter
        context:  Additional debug info for the logs
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ConfigurationError(ProductHubError):
    """
    Raised when required configuration is missing at startup.

    This is the only unrecoverable condition: the process refuses to start.
    """

    kind = ErrorKind.CONFIGURATION

    def __init__(
        self,
        message: str = "Configuration validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ValidationError(ProductHubError):
    """
    Raised when a request body lacks a field the handler needs.

    HTTP:  400 Bad Request (cart-add only; other handlers accept any body)
    """

    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class InvalidIdError(ProductHubError):
    """Raised when a path parameter cannot be parsed into an ObjectId."""

    kind = ErrorKind.INVALID_ID

    def __init__(
        self,
        raw_id: str = "",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["raw_id"] = raw_id
        super().__init__(message=f"'{raw_id}' is not a valid document ID", context=ctx)
        self.raw_id = raw_id


class StoreConnectionError(ProductHubError):
    """
    Raised when the MongoDB client cannot be created or the server
    does not answer the initial ping.

    The accessor does not cache a failed client, so the next request
    attempts the connection again.
    """

    kind = ErrorKind.CONNECTION

    def __init__(
        self,
        message: str = "Could not connect to the document store",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreOperationError(ProductHubError):
    """
    Raised when a query, insert, update or delete fails.

    Security Note:
        Driver messages can include hostnames and query shapes. They are kept
        in the context for the logs and never reach the API response.
    """

    kind = ErrorKind.STORE

    def __init__(
        self,
        message: str = "A document store operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class MalformedDocumentError(ProductHubError):
    """Raised when a stored cart cannot be read as its typed model."""

    kind = ErrorKind.MALFORMED_DOCUMENT

    def __init__(
        self,
        collection: str = "document",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["collection"] = collection
        super().__init__(
            message=f"A stored {collection} document has an unexpected shape",
            context=ctx,
        )


class ResponseEncodingError(ProductHubError):
    """
    Raised when a service result holds a value that cannot be rendered as
    JSON (an exotic BSON type, or bytes that are not UTF-8).
    """

    kind = ErrorKind.ENCODING

    def __init__(
        self,
        message: str = "A service result could not be encoded as JSON",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
