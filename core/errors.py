"""Error taxonomy for the back-office data services.

Every failure raised by a store or a service is one of these types, so
callers can branch on the kind of failure instead of parsing messages.
"""

from typing import Any, Dict, List, Optional


class BackOfficeError(Exception):
    """Base exception for data service errors."""
    def __init__(self, message: str, entity: str = "", record_id: Any = None):
        super().__init__(message)
        self.entity = entity
        self.record_id = record_id


class NotFoundError(BackOfficeError):
    """Referenced id is absent from the store."""
    pass


class DuplicateKeyError(BackOfficeError):
    """Insert collided with an id already in the store."""
    pass


class ValidationError(BackOfficeError):
    """Malformed or incomplete input to create/update."""
    def __init__(
        self,
        message: str,
        entity: str = "",
        record_id: Any = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message, entity, record_id)
        self.errors = errors or []
