"""
Core plumbing shared by all resource server components
"""
from .errors import (
    AccessDeniedError,
    AttachmentUploadError,
    AuthenticationError,
    ConflictError,
    DataHandlerError,
    MessageNotReadableError,
    PaginationParameterError,
    ResourceNotFoundError,
    ResourceServerError,
)
from .locks import ProcessAlreadyRunningError, ProcessLockRegistry, TooManyProcessesError

__all__ = [
    'AccessDeniedError',
    'AttachmentUploadError',
    'AuthenticationError',
    'ConflictError',
    'DataHandlerError',
    'MessageNotReadableError',
    'PaginationParameterError',
    'ResourceNotFoundError',
    'ResourceServerError',
    'ProcessAlreadyRunningError',
    'ProcessLockRegistry',
    'TooManyProcessesError',
]
