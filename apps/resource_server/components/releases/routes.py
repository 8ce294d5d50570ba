"""
Release API Routes
CRUD, search and linking of releases
"""
import logging

from flask import Blueprint, current_app, request

from ...core.auth import WRITE_AUTHORITY, get_sw360_user, requires_authority
from ...core.errors import MessageNotReadableError
from ...core.hal import create_resources, curie, hal_response
from ...core.helper import (
    convert_to_embedded_component,
    convert_to_embedded_project,
    convert_to_embedded_release,
    create_hal_release_resource,
    create_hal_release_resource_with_all_details,
    add_embedded_release_links,
    add_embedded_data_to_release,
)
from ...core.pagination import create_pagination_result, generate_pages_resource
from ...models import RequestStatus, id_from_uri, merge_release, release_from_request
from ...services import get_attachment_service, get_release_service

logger = logging.getLogger(__name__)

releases_bp = Blueprint('releases', __name__)

RESPONSE_BODY_FOR_MODERATION_REQUEST = {'message': 'Moderation request is created'}

DELETE_STATUS_CODES = {
    RequestStatus.SUCCESS: 200,
    RequestStatus.SENT_TO_MODERATOR: 202,
    RequestStatus.IN_USE: 409,
}


def moderation_response():
    return hal_response(RESPONSE_BODY_FOR_MODERATION_REQUEST, 202)


def _bool_arg(name):
    return request.args.get(name, '').lower() in ('true', '1', 'yes')


def _list_arg(name):
    values = []
    for raw in request.args.getlist(name):
        values.extend(part.strip() for part in raw.split(',') if part.strip())
    return values or None


def _search_releases_by_sha1(sha1, user):
    release_service = get_release_service()
    releases = []
    for attachment_info in get_attachment_service().get_attachments_by_sha1(sha1):
        owner = attachment_info.get('owner') or {}
        if owner.get('releaseId'):
            releases.append(release_service.get_release_for_user_by_id(owner['releaseId'], user))
    return releases


@releases_bp.route('/releases', methods=['GET'])
def get_releases_for_user():
    """List releases visible to the user"""
    user = get_sw360_user()
    release_service = get_release_service()
    sha1 = request.args.get('sha1')
    name = request.args.get('name')
    fields = _list_arg('fields')
    all_details = _bool_arg('allDetails')

    if sha1:
        releases = _search_releases_by_sha1(sha1, user)
    else:
        releases = list(release_service.get_releases_for_user(user))

    for release in releases:
        release_service.set_component_dependent_fields_in_release(release, user)

    if name:
        releases = [release for release in releases
                    if (release.get('name') or '').lower() == name.lower()]

    pagination_result = create_pagination_result(
        request.args, releases, current_app.config['DEFAULT_PAGE_ENTRIES'])

    release_resources = []
    for release in pagination_result.resources:
        if all_details:
            release_resources.append(create_hal_release_resource_with_all_details(release))
        else:
            release_resources.append(convert_to_embedded_release(release, fields))

    resources = None
    if release_resources:
        resources = generate_pages_resource(
            pagination_result, release_resources, request.base_url, request.args,
            default_rel=curie('releases'))
    return hal_response(resources)


@releases_bp.route('/releases/<release_id>', methods=['GET'])
def get_release(release_id):
    user = get_sw360_user()
    release_service = get_release_service()
    release = release_service.get_release_for_user_by_id(release_id, user)
    hal_release = create_hal_release_resource(release, verbose=True)
    add_embedded_data_to_release(hal_release, release)
    linked_release_relations = release_service.get_linked_release_relations(release, user)
    if linked_release_relations is not None:
        add_embedded_release_links(hal_release, linked_release_relations)
    return hal_response(hal_release)


@releases_bp.route('/releases/recentReleases', methods=['GET'])
def get_recent_releases():
    user = get_sw360_user()
    releases = get_release_service().get_recent_releases(user)
    resources = [convert_to_embedded_release(release) for release in releases]
    return hal_response(create_resources(resources))


@releases_bp.route('/releases/mySubscriptions', methods=['GET'])
def get_release_subscriptions():
    user = get_sw360_user()
    releases = get_release_service().get_release_subscriptions(user)
    resources = [convert_to_embedded_release(release) for release in releases]
    return hal_response(create_resources(resources))


@releases_bp.route('/releases/usedBy/<release_id>', methods=['GET'])
def get_used_by_resource_details(release_id):
    """Projects and components that use the release"""
    user = get_sw360_user()
    release_service = get_release_service()
    projects = release_service.get_projects_by_release(release_id, user)
    components = release_service.get_using_components_for_release(release_id, user)

    resources = [convert_to_embedded_project(project) for project in projects]
    resources.extend(convert_to_embedded_component(component) for component in components)
    return hal_response(create_resources(resources))


@releases_bp.route('/releases/searchByExternalIds', methods=['GET'])
def search_by_external_ids():
    """Search releases by external ids given as JSON body or query parameters"""
    user = get_sw360_user()
    external_ids = request.get_json(silent=True)
    if external_ids is None:
        external_ids = {key: request.args.getlist(key) for key in request.args}
    if not isinstance(external_ids, dict):
        raise MessageNotReadableError("External ids must be a JSON object")
    external_ids = {key: values if isinstance(values, list) else [values]
                    for key, values in external_ids.items()}

    releases = get_release_service().search_by_external_ids(external_ids, user)
    resources = [convert_to_embedded_release(release, ['externalIds']) for release in releases]
    return hal_response(create_resources(resources))


@releases_bp.route('/releases/<release_ids>', methods=['DELETE'])
@requires_authority(WRITE_AUTHORITY)
def delete_releases(release_ids):
    """Delete comma separated releases, reporting a status per id"""
    user = get_sw360_user()
    release_service = get_release_service()
    results = []
    for release_id in [part.strip() for part in release_ids.split(',') if part.strip()]:
        request_status = release_service.delete_release(release_id, user)
        status = DELETE_STATUS_CODES.get(request_status, 500)
        logger.info(f"Delete of release {release_id} returned {request_status.value}")
        results.append({'resourceId': release_id, 'status': status})
    return hal_response(results, 207)


@releases_bp.route('/releases/<release_id>', methods=['PATCH'])
@requires_authority(WRITE_AUTHORITY)
def patch_release(release_id):
    user = get_sw360_user()
    release_service = get_release_service()
    release = release_service.get_release_for_user_by_id(release_id, user)

    update_release = release_from_request(request.get_json(silent=True))
    update_release['clearingState'] = release.get('clearingState')
    release = merge_release(release, update_release)
    release['id'] = release_id
    release_service.set_component_name_as_release_name(release, user)

    update_status = release_service.update_release(release, user)
    if update_status == RequestStatus.SENT_TO_MODERATOR:
        return moderation_response()
    return hal_response(create_hal_release_resource(release, verbose=True))


@releases_bp.route('/releases', methods=['POST'])
@requires_authority(WRITE_AUTHORITY)
def create_release():
    user = get_sw360_user()
    release = release_from_request(request.get_json(silent=True))
    if release.get('componentId'):
        release['componentId'] = id_from_uri(release['componentId'])
    if release.get('vendorId'):
        release['vendorId'] = id_from_uri(release['vendorId'])
    if release.get('mainLicenseIds') is not None:
        license_ids = []
        for license_uri in release['mainLicenseIds']:
            license_id = id_from_uri(license_uri)
            if license_id not in license_ids:
                license_ids.append(license_id)
        release['mainLicenseIds'] = license_ids
    release.pop('clearingState', None)

    release = get_release_service().create_release(release, user)
    hal_release = create_hal_release_resource(release, verbose=True)
    location = f"{request.base_url.rstrip('/')}/{release['id']}"
    return hal_response(hal_release, 201, headers={'Location': location})


@releases_bp.route('/releases/<release_id>/releases', methods=['POST'])
@requires_authority(WRITE_AUTHORITY)
def link_releases(release_id):
    """Replace the release's links to other releases"""
    user = get_sw360_user()
    release_service = get_release_service()
    release = release_service.get_release_for_user_by_id(release_id, user)
    body = request.get_json(silent=True)
    if not body:
        raise MessageNotReadableError("Input data can not empty!")
    release.update(release_from_request({'releaseIdToRelationship': body}))

    update_status = release_service.update_release(release, user)
    if update_status == RequestStatus.SENT_TO_MODERATOR:
        return moderation_response()
    return '', 201
