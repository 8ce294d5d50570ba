"""
Release Attachment API Routes
Listing, download, upload, patch and removal of release attachments
"""
import json
import logging

from flask import Blueprint, Response, request

from ...core.auth import WRITE_AUTHORITY, get_sw360_user, requires_authority
from ...core.errors import MessageNotReadableError, ResourceServerError
from ...core.hal import CollectionResource, HalResource, curie, hal_response
from ...core.helper import create_hal_release_resource, strip_hidden_fields
from ...models import RequestStatus
from ...services import get_attachment_service, get_release_service
from ...services.attachment_service import ATTACHMENT_BUNDLE_NAME
from ..releases.routes import moderation_response

logger = logging.getLogger(__name__)

release_attachments_bp = Blueprint('release_attachments', __name__)


def _attachment_disposition(filename):
    return f'attachment; filename="{filename}"'


@release_attachments_bp.route('/releases/<release_id>/attachments', methods=['GET'])
def get_release_attachments(release_id):
    user = get_sw360_user()
    release = get_release_service().get_release_for_user_by_id(release_id, user)
    resources = get_attachment_service().get_attachment_resources(release.get('attachments'), release['id'])
    return hal_response(CollectionResource(resources, default_rel=curie('attachmentDTOes')))


@release_attachments_bp.route('/releases/<release_id>/attachments/download', methods=['GET'])
def download_attachment_bundle_from_release(release_id):
    user = get_sw360_user()
    release = get_release_service().get_release_for_user_by_id(release_id, user)
    bundle = get_attachment_service().download_attachment_bundle(release, release.get('attachments'), user)
    return Response(bundle, mimetype='application/zip',
                    headers={'Content-Disposition': _attachment_disposition(ATTACHMENT_BUNDLE_NAME)})


@release_attachments_bp.route('/releases/<release_id>/attachments/<attachment_id>', methods=['GET'])
def download_attachment_from_release(release_id, attachment_id):
    user = get_sw360_user()
    release = get_release_service().get_release_for_user_by_id(release_id, user)
    attachment, content = get_attachment_service().download_attachment(release, attachment_id, user)
    filename = attachment.get('filename') or attachment_id
    return Response(content, mimetype='application/octet-stream',
                    headers={'Content-Disposition': _attachment_disposition(filename)})


@release_attachments_bp.route('/releases/<release_id>/attachment/<attachment_id>', methods=['PATCH'])
@requires_authority(WRITE_AUTHORITY)
def patch_release_attachment_info(release_id, attachment_id):
    user = get_sw360_user()
    release_service = get_release_service()
    release = release_service.get_release_for_user_by_id(release_id, user)
    attachment = get_attachment_service().update_attachment(
        release.get('attachments'), request.get_json(silent=True), attachment_id, user)

    update_status = release_service.update_release(release, user)
    if update_status == RequestStatus.SENT_TO_MODERATOR:
        return moderation_response()
    return hal_response(HalResource(strip_hidden_fields(attachment)))


def _attachment_part():
    """The ``attachment`` multipart part as a dict, sent as form field or file"""
    raw = request.form.get('attachment')
    if raw is None and 'attachment' in request.files:
        raw = request.files['attachment'].read().decode('utf-8')
    if raw is None:
        raise MessageNotReadableError("Required request part 'attachment' is not present")
    try:
        attachment = json.loads(raw)
    except ValueError as e:
        raise MessageNotReadableError(f"Request part 'attachment' is not valid JSON: {e}") from e
    if not isinstance(attachment, dict):
        raise MessageNotReadableError("Request part 'attachment' must be a JSON object")
    return attachment


@release_attachments_bp.route('/releases/<release_id>/attachments', methods=['POST'])
@requires_authority(WRITE_AUTHORITY)
def add_attachment_to_release(release_id):
    user = get_sw360_user()
    release_service = get_release_service()
    release = release_service.get_release_for_user_by_id(release_id, user)
    upload = request.files.get('file')
    if upload is None:
        raise MessageNotReadableError("Required request part 'file' is not present")
    new_attachment = _attachment_part()

    attachment = get_attachment_service().upload_attachment(upload, new_attachment, user)
    release['attachments'] = list(release.get('attachments') or []) + [attachment]

    update_status = release_service.update_release(release, user)
    if update_status == RequestStatus.SENT_TO_MODERATOR:
        return moderation_response()
    return hal_response(create_hal_release_resource(release, verbose=True))


@release_attachments_bp.route('/releases/<release_id>/attachments/<attachment_ids>', methods=['DELETE'])
@requires_authority(WRITE_AUTHORITY)
def delete_attachments_from_release(release_id, attachment_ids):
    user = get_sw360_user()
    release_service = get_release_service()
    release = release_service.get_release_for_user_by_id(release_id, user)
    requested_ids = [part.strip() for part in attachment_ids.split(',') if part.strip()]

    attachments_to_delete = get_attachment_service().filter_attachments_to_remove(
        release_id, release.get('attachments'), requested_ids)
    if not attachments_to_delete:
        # the whole action fails when nothing can be deleted
        raise ResourceServerError(f"Could not delete attachments {requested_ids} from release {release_id}")

    deleted_ids = {attachment['attachmentContentId'] for attachment in attachments_to_delete}
    logger.debug(f"Deleting the following attachments from release {release_id}: {sorted(deleted_ids)}")
    release['attachments'] = [attachment for attachment in release.get('attachments') or ()
                              if attachment.get('attachmentContentId') not in deleted_ids]

    update_status = release_service.update_release(release, user)
    if update_status == RequestStatus.SENT_TO_MODERATOR:
        return moderation_response()
    return hal_response(create_hal_release_resource(release, verbose=True))
