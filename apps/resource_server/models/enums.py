"""
Enumerations shared with the backend data schema
"""
from enum import Enum


class RequestStatus(str, Enum):
    SUCCESS = 'SUCCESS'
    SENT_TO_MODERATOR = 'SENT_TO_MODERATOR'
    FAILURE = 'FAILURE'
    IN_USE = 'IN_USE'
    FAILED_SANITY_CHECK = 'FAILED_SANITY_CHECK'
    DUPLICATE = 'DUPLICATE'
    DUPLICATE_ATTACHMENT = 'DUPLICATE_ATTACHMENT'
    ACCESS_DENIED = 'ACCESS_DENIED'
    CLOSED_UPDATE_NOT_ALLOWED = 'CLOSED_UPDATE_NOT_ALLOWED'
    INVALID_INPUT = 'INVALID_INPUT'
    NAMINGERROR = 'NAMINGERROR'
    PROCESSING = 'PROCESSING'


class VerificationState(str, Enum):
    NOT_CHECKED = 'NOT_CHECKED'
    CHECKED = 'CHECKED'
    INCORRECT = 'INCORRECT'


class ReleaseRelationship(str, Enum):
    CONTAINED = 'CONTAINED'
    REFERRED = 'REFERRED'
    UNKNOWN = 'UNKNOWN'
    DYNAMICALLY_LINKED = 'DYNAMICALLY_LINKED'
    STATICALLY_LINKED = 'STATICALLY_LINKED'
    SIDE_BY_SIDE = 'SIDE_BY_SIDE'
    STANDALONE = 'STANDALONE'
    INTERNAL_USE = 'INTERNAL_USE'
    OPTIONAL = 'OPTIONAL'
    TO_BE_REPLACED = 'TO_BE_REPLACED'
    CODE_SNIPPET = 'CODE_SNIPPET'


class ClearingState(str, Enum):
    NEW_CLEARING = 'NEW_CLEARING'
    SENT_TO_CLEARING_TOOL = 'SENT_TO_CLEARING_TOOL'
    UNDER_CLEARING = 'UNDER_CLEARING'
    REPORT_AVAILABLE = 'REPORT_AVAILABLE'
    APPROVED = 'APPROVED'
    SCAN_AVAILABLE = 'SCAN_AVAILABLE'


class MainlineState(str, Enum):
    OPEN = 'OPEN'
    MAINLINE = 'MAINLINE'
    SPECIFIC = 'SPECIFIC'
    PHASEOUT = 'PHASEOUT'
    DENIED = 'DENIED'


class ExternalToolProcessStatus(str, Enum):
    NEW = 'NEW'
    IN_WORK = 'IN_WORK'
    DONE = 'DONE'
    OUTDATED = 'OUTDATED'


class CheckStatus(str, Enum):
    NOTCHECKED = 'NOTCHECKED'
    ACCEPTED = 'ACCEPTED'
    REJECTED = 'REJECTED'


class AttachmentType(str, Enum):
    DOCUMENT = 'DOCUMENT'
    SOURCE = 'SOURCE'
    DESIGN = 'DESIGN'
    REQUIREMENT = 'REQUIREMENT'
    CLEARING_REPORT = 'CLEARING_REPORT'
    COMPONENT_LICENSE_INFO_XML = 'COMPONENT_LICENSE_INFO_XML'
    COMPONENT_LICENSE_INFO_COMBINED = 'COMPONENT_LICENSE_INFO_COMBINED'
    SCAN_RESULT_REPORT = 'SCAN_RESULT_REPORT'
    SCAN_RESULT_REPORT_XML = 'SCAN_RESULT_REPORT_XML'
    SOURCE_SELF = 'SOURCE_SELF'
    BINARY = 'BINARY'
    BINARY_SELF = 'BINARY_SELF'
    DECISION_REPORT = 'DECISION_REPORT'
    LEGAL_EVALUATION = 'LEGAL_EVALUATION'
    LICENSE_AGREEMENT = 'LICENSE_AGREEMENT'
    SCREENSHOT = 'SCREENSHOT'
    README_OSS = 'README_OSS'
    SECURITY_ASSESSMENT = 'SECURITY_ASSESSMENT'
    INITIAL_SCAN_REPORT = 'INITIAL_SCAN_REPORT'
    SBOM = 'SBOM'
    OTHER = 'OTHER'
