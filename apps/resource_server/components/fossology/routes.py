"""
FOSSology API Routes
Trigger and status of the per-release FOSSology license scan
"""
import logging

from flask import Blueprint, request

from ...core.auth import get_sw360_user
from ...core.hal import HalResource, api_url, hal_response
from ...core.helper import RELEASES_URL
from ...core.locks import ProcessAlreadyRunningError, TooManyProcessesError
from ...models import RequestStatus
from ...services import get_attachment_service, get_fossology_locks, get_release_service

logger = logging.getLogger(__name__)

fossology_bp = Blueprint('fossology', __name__)


@fossology_bp.route('/releases/<release_id>/checkFossologyProcessStatus', methods=['GET'])
def check_fossology_process_status(release_id):
    user = get_sw360_user()
    release_service = get_release_service()
    release = release_service.get_release_for_user_by_id(release_id, user)
    fossology_process = release_service.get_external_tool_process(release)

    if get_fossology_locks().is_locked(release_id):
        status = RequestStatus.PROCESSING
    elif fossology_process is not None and release_service.is_fossology_process_completed(fossology_process):
        logger.info(f"FOSSology process for Release : {release_id} is complete.")
        status = RequestStatus.SUCCESS
    else:
        status = RequestStatus.FAILURE

    return hal_response({'status': status.value, 'fossologyProcessInfo': fossology_process})


@fossology_bp.route('/releases/<release_id>/triggerFossologyProcess', methods=['GET'])
def trigger_fossology_process(release_id):
    """Start the FOSSology process unless it runs already or too many run"""
    release_service = get_release_service()
    release_service.check_fossology_connection()

    mark_outdated = request.args.get('markFossologyProcessOutdated', '').lower() in ('true', '1', 'yes')
    upload_description = request.args.get('uploadDescription')
    locks = get_fossology_locks()

    try:
        release_service.execute_fossology_process(
            get_sw360_user(), get_attachment_service(), locks, release_id,
            mark_outdated, upload_description)
        message = f"FOSSology Process for Release Id : {release_id} has been triggered."
        status = 200
    except ProcessAlreadyRunningError:
        message = (f"FOSSology Process for Release Id : {release_id} is already running. "
                   "Please wait till it is completed.")
        status = 406
    except TooManyProcessesError as e:
        message = (f"Max {e.max_entries} FOSSology Process can be triggered simultaneously. "
                   "Please try after sometime.")
        status = 429

    response_resource = HalResource({'message': message})
    response_resource.add_link('self', api_url(RELEASES_URL, release_id, 'checkFossologyProcessStatus'))
    return hal_response(response_resource, status)
