"""
Release Vulnerability API Routes
"""
import logging

from flask import Blueprint, request

from ...core.auth import WRITE_AUTHORITY, get_sw360_user, requires_authority
from ...core.errors import MessageNotReadableError
from ...core.hal import CollectionResource, HalResource, create_resources, curie, hal_response
from ...models import RequestStatus, VerificationState
from ...services import get_vulnerability_service
from ...services.vulnerability_service import add_verification_state_info

logger = logging.getLogger(__name__)

release_vulnerabilities_bp = Blueprint('release_vulnerabilities', __name__)


def _vulnerability_resource(vulnerability):
    return HalResource(vulnerability, collection_rel=curie('vulnerabilityDTOes'))


@release_vulnerabilities_bp.route('/releases/<release_id>/vulnerabilities', methods=['GET'])
def get_vulnerabilities_of_release(release_id):
    user = get_sw360_user()
    vulnerabilities = get_vulnerability_service().get_vulnerabilities_by_release_id(release_id, user)
    resources = [_vulnerability_resource(vulnerability) for vulnerability in vulnerabilities]
    return hal_response(CollectionResource(resources, default_rel=curie('vulnerabilityDTOes')))


def _parse_vulnerability_state(body):
    if not isinstance(body, dict):
        raise MessageNotReadableError("Request body must be a JSON object")
    relation_dtos = body.get('releaseVulnerabilityRelationDTOs')
    if not relation_dtos or not isinstance(relation_dtos, list):
        raise MessageNotReadableError("Required field ReleaseVulnerabilityRelation is not present")
    try:
        verification_state = VerificationState(body.get('verificationState')).value
    except ValueError:
        raise MessageNotReadableError("Required field verificationState is not present")
    external_ids = {dto.get('externalId') for dto in relation_dtos if isinstance(dto, dict)}
    return external_ids, verification_state, body.get('comment')


def update_release_vulnerability_relation(release_id, user, comment, verification_state, external_id):
    """Append a verification entry to one relation and store it"""
    vulnerability_service = get_vulnerability_service()
    relation = {}
    for vulnerability in vulnerability_service.get_vulnerabilities_by_release_id(release_id, user):
        if vulnerability.get('externalId') == external_id:
            relation = vulnerability.get('releaseVulnerabilityRelation') or {}
    relation = add_verification_state_info(relation, comment, verification_state, user)
    return vulnerability_service.update_release_vulnerability_relation(relation, user)


@release_vulnerabilities_bp.route('/releases/<release_id>/vulnerabilities', methods=['PATCH'])
@requires_authority(WRITE_AUTHORITY)
def patch_release_vulnerability_relation(release_id):
    """Update the verification state of release/vulnerability relations"""
    user = get_sw360_user()
    vulnerability_service = get_vulnerability_service()
    external_ids, verification_state, comment = _parse_vulnerability_state(request.get_json(silent=True))

    actual_vulnerabilities = vulnerability_service.get_vulnerabilities_by_release_id(release_id, user)
    actual_external_ids = {vulnerability.get('externalId') for vulnerability in actual_vulnerabilities}
    common_external_ids = actual_external_ids & external_ids
    if not common_external_ids or len(common_external_ids) != len(external_ids):
        raise MessageNotReadableError("External ID is not valid")

    requested = vulnerability_service.get_vulnerability_dto_by_external_id(external_ids, release_id)
    relation_external_ids = []
    for vulnerability in requested:
        if vulnerability.get('externalId') not in relation_external_ids:
            relation_external_ids.append(vulnerability.get('externalId'))

    request_status = None
    for external_id in relation_external_ids:
        request_status = update_release_vulnerability_relation(
            release_id, user, comment, verification_state, external_id)
        if request_status != RequestStatus.SUCCESS:
            logger.warning(f"Updating vulnerability {external_id} of release {release_id} "
                           f"returned {request_status.value}")
            break
    if request_status == RequestStatus.ACCESS_DENIED:
        raise MessageNotReadableError("User not allowed!")

    updated = vulnerability_service.get_vulnerability_dto_by_external_id(external_ids, release_id)
    resources = create_resources([_vulnerability_resource(vulnerability) for vulnerability in updated],
                                 default_rel=curie('vulnerabilityDTOes'))
    if resources is None:
        return hal_response({}, 400)
    return hal_response(resources)
