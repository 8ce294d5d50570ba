"""
Data records exchanged with the backend data handler
"""
from .enums import (
    AttachmentType,
    CheckStatus,
    ClearingState,
    ExternalToolProcessStatus,
    MainlineState,
    ReleaseRelationship,
    RequestStatus,
    VerificationState,
)
from .release import (
    HIDDEN_FIELDS,
    RELEASE_FIELDS,
    id_from_uri,
    merge_release,
    release_from_request,
)
from .user import User

__all__ = [
    'AttachmentType', 'CheckStatus', 'ClearingState', 'ExternalToolProcessStatus',
    'MainlineState', 'ReleaseRelationship', 'RequestStatus', 'VerificationState',
    'HIDDEN_FIELDS', 'RELEASE_FIELDS', 'id_from_uri', 'merge_release',
    'release_from_request', 'User',
]
