"""
Release record mapping

Releases travel as JSON objects with the backend's camelCase field names.
This module knows which of those fields exist and how request bodies are
mapped onto them.
"""
from urllib.parse import urlparse

from ..core.errors import MessageNotReadableError
from .enums import ClearingState, MainlineState, ReleaseRelationship

RELEASE_FIELDS = (
    'id', 'revision', 'type', 'cpeid', 'name', 'version', 'componentId',
    'releaseDate', 'externalIds', 'additionalData', 'createdOn', 'repository',
    'mainlineState', 'clearingState', 'contributors', 'createdBy', 'modifiedBy',
    'modifiedOn', 'moderators', 'subscribers', 'vendor', 'vendorId',
    'languages', 'operatingSystems', 'cotsDetails', 'eccInformation',
    'softwarePlatforms', 'mainLicenseIds', 'otherLicenseIds',
    'sourceCodeDownloadurl', 'binaryDownloadurl', 'releaseIdToRelationship',
    'clearingInformation', 'attachments', 'externalToolProcesses',
    'componentType', 'documentState', 'permissions', 'spdxId',
)

# Never rendered in response bodies, the self link carries the id
HIDDEN_FIELDS = ('id', 'revision', 'type', 'documentState', 'permissions')

SET_FIELDS = (
    'contributors', 'moderators', 'subscribers', 'languages',
    'operatingSystems', 'softwarePlatforms', 'mainLicenseIds', 'otherLicenseIds',
)

ENUM_FIELDS = {
    'clearingState': ClearingState,
    'mainlineState': MainlineState,
}

# field -> (old name, new name)
BACKWARD_COMPATIBLE_FIELDS = {
    'sourceCodeDownloadurl': ('downloadurl', 'sourceCodeDownloadurl'),
}


def _unique_strings(field, value):
    if not isinstance(value, (list, tuple, set)):
        raise MessageNotReadableError(f"Field {field} must be an array")
    result = []
    for item in value:
        if not isinstance(item, str):
            raise MessageNotReadableError(f"Field {field} must contain strings only")
        if item not in result:
            result.append(item)
    return result


def _relationships(value):
    if not isinstance(value, dict):
        raise MessageNotReadableError("Field releaseIdToRelationship must be an object")
    try:
        return {release_id: ReleaseRelationship(relationship).value
                for release_id, relationship in value.items()}
    except ValueError as e:
        raise MessageNotReadableError(f"Invalid release relationship: {e}") from e


def release_from_request(body):
    """Map a request body onto a release record

    Unknown properties and the hidden bookkeeping fields are dropped,
    set-like fields are de-duplicated and enum values validated. Old field names are honoured when the new name is
    absent from the body.
    """
    if not isinstance(body, dict):
        raise MessageNotReadableError("Request body must be a JSON object")

    release = {}
    for field in RELEASE_FIELDS:
        if field not in body or field in HIDDEN_FIELDS:
            continue
        value = body[field]
        if value is None:
            release[field] = None
        elif field in SET_FIELDS:
            release[field] = _unique_strings(field, value)
        elif field in ENUM_FIELDS:
            try:
                release[field] = ENUM_FIELDS[field](value).value
            except ValueError as e:
                raise MessageNotReadableError(f"Invalid value for {field}: {value}") from e
        elif field == 'releaseIdToRelationship':
            release[field] = _relationships(value)
        else:
            release[field] = value

    for field, (old_name, new_name) in BACKWARD_COMPATIBLE_FIELDS.items():
        if new_name not in body and old_name in body:
            old_value = body[old_name]
            release[field] = '' if old_value is None else str(old_value)

    return release


def merge_release(release_to_update, request_release):
    """Copy every non-null field of the request onto the stored release"""
    for field, value in request_release.items():
        if value is not None:
            release_to_update[field] = value
    return release_to_update


def id_from_uri(value):
    """Last path segment of a resource URI, or the value itself for bare ids"""
    path = urlparse(value).path
    return path[path.rfind('/') + 1:]
