"""
Release service
Wraps the backend component, project and FOSSology services for releases
"""
import logging
import threading
import time

from ..core.errors import (
    AccessDeniedError,
    ConflictError,
    DataHandlerError,
    MessageNotReadableError,
    ResourceNotFoundError,
)
from ..models import AttachmentType, ExternalToolProcessStatus, RequestStatus
from .datahandler_client import parse_request_status

logger = logging.getLogger(__name__)

FOSSOLOGY_TOOL = 'FOSSOLOGY'
FOSSOLOGY_PROCESS_STEPS = 3


class ReleaseService:
    """Release operations on top of the backend data handler"""

    def __init__(self, client, fossology_max_attempts=10, fossology_poll_interval=30):
        self.client = client
        self.fossology_max_attempts = fossology_max_attempts
        self.fossology_poll_interval = fossology_poll_interval

    # Lookups

    def get_releases_for_user(self, user):
        return self.client.call('components', 'getAccessibleReleaseSummary', user) or []

    def get_release_for_user_by_id(self, release_id, user):
        release = self.client.call('components', 'getAccessibleReleaseById', user, id=release_id)
        if release is None:
            raise ResourceNotFoundError(f"Release does not exist! id={release_id}")
        return release

    def get_recent_releases(self, user):
        return self.client.call('components', 'getRecentReleasesWithAccessibility', user) or []

    def get_release_subscriptions(self, user):
        return self.client.call('components', 'getSubscribedReleases', user) or []

    def get_linked_release_relations(self, release, user):
        return self.client.call('components', 'getLinkedReleaseRelations', user, releaseId=release['id'])

    def get_projects_by_release(self, release_id, user):
        return self.client.call('projects', 'searchByReleaseId', user, releaseId=release_id) or []

    def get_using_components_for_release(self, release_id, user):
        return self.client.call('components', 'getUsingComponentsForRelease', user, releaseId=release_id) or []

    def search_by_external_ids(self, external_ids, user):
        return self.client.call('components', 'searchReleasesByExternalIds', user, externalIds=external_ids) or []

    def _get_component(self, component_id, user):
        return self.client.call('components', 'getComponentById', user, id=component_id)

    def set_component_dependent_fields_in_release(self, release, user):
        component_id = release.get('componentId')
        if not component_id:
            logger.warning(f"Release {release.get('id')} has no component")
            return release
        component = self._get_component(component_id, user)
        release['componentType'] = component.get('componentType')
        return release

    def set_component_name_as_release_name(self, release, user):
        component = self._get_component(release['componentId'], user)
        release['name'] = component.get('name')
        return release

    # Modifications

    def create_release(self, release, user):
        summary = self.client.call('components', 'addRelease', user, release=release) or {}
        status = parse_request_status(summary.get('requestStatus'), 'components.addRelease')
        if status == RequestStatus.DUPLICATE:
            raise ConflictError(
                f"sw360 release with name '{release.get('name')} {release.get('version')}' already exists."
            )
        self._check_modification_status(status)
        if status != RequestStatus.SUCCESS:
            raise DataHandlerError(f"Creating release failed with status {status.value}")
        release['id'] = summary.get('id')
        logger.info(f"Created release {release['id']} ({release.get('name')} {release.get('version')})")
        return release

    def update_release(self, release, user):
        status = parse_request_status(
            self.client.call('components', 'updateRelease', user, release=release), 'components.updateRelease')
        if status == RequestStatus.DUPLICATE:
            raise ConflictError(
                f"sw360 release with name '{release.get('name')} {release.get('version')}' already exists."
            )
        self._check_modification_status(status)
        return status

    def delete_release(self, release_id, user):
        return parse_request_status(
            self.client.call('components', 'deleteRelease', user, id=release_id), 'components.deleteRelease')

    @staticmethod
    def _check_modification_status(status):
        if status == RequestStatus.INVALID_INPUT:
            raise MessageNotReadableError("Dependent document Id/ids not valid.")
        if status == RequestStatus.NAMINGERROR:
            raise MessageNotReadableError(
                "Release name and version field cannot be empty or contain only whitespace character"
            )
        if status == RequestStatus.ACCESS_DENIED:
            raise AccessDeniedError("User does not have permission to modify the release")

    # FOSSology

    def check_fossology_connection(self):
        try:
            status = parse_request_status(
                self.client.call('fossology', 'checkConnection'), 'fossology.checkConnection')
        except DataHandlerError as e:
            logger.error(f"FOSSology connection check failed: {e.message}")
            raise MessageNotReadableError("Connection to Fossology server Failed.") from e
        if status != RequestStatus.SUCCESS:
            raise MessageNotReadableError("Connection to Fossology server Failed.")

    def get_external_tool_process(self, release):
        """Active (not outdated) FOSSology process of the release, if any"""
        for process in release.get('externalToolProcesses') or ():
            if (process.get('externalTool') == FOSSOLOGY_TOOL
                    and process.get('processStatus') != ExternalToolProcessStatus.OUTDATED.value):
                return process
        return None

    def is_fossology_process_completed(self, process):
        """Upload, scan and report steps are present and the report is done"""
        steps = process.get('processSteps') or []
        if len(steps) != FOSSOLOGY_PROCESS_STEPS:
            return False
        report_step = steps[-1]
        return (report_step.get('stepStatus') == ExternalToolProcessStatus.DONE.value
                and bool(report_step.get('result')))

    def execute_fossology_process(self, user, attachment_service, lock_registry, release_id,
                                  mark_fossology_process_outdated, upload_description):
        """Reserve the release's lock and run the FOSSology process in the background

        Raises ProcessAlreadyRunningError or TooManyProcessesError from the
        registry when the process cannot be started.
        """
        lock_registry.reserve(release_id)
        try:
            release = self.get_release_for_user_by_id(release_id, user)
            source_attachments = attachment_service.filter_attachments_by_type(
                release.get('attachments') or [], AttachmentType.SOURCE)
            if len(source_attachments) != 1:
                raise MessageNotReadableError("Release must have exactly 1 source attachment")

            if mark_fossology_process_outdated:
                logger.info(f"Marking FOSSology process outdated for Release : {release_id}")
                status = parse_request_status(
                    self.client.call('components', 'markFossologyProcessOutdated', user, releaseId=release_id),
                    'components.markFossologyProcessOutdated')
                if status == RequestStatus.FAILURE:
                    raise MessageNotReadableError(
                        "Unable to mark FOSSology Process as outdated. Please verify the releaseId.")

            worker = threading.Thread(
                target=self._run_fossology_process,
                args=(user, lock_registry, release_id, upload_description),
                name=f"fossology-{release_id}",
                daemon=True,
            )
            worker.start()
        except Exception:
            lock_registry.release(release_id)
            raise
        return worker

    def _run_fossology_process(self, user, lock_registry, release_id, upload_description):
        logger.info(f"FOSSology process for Release : {release_id} started")
        try:
            for attempt in range(1, self.fossology_max_attempts + 1):
                self.client.call('fossology', 'process', user,
                                 releaseId=release_id, uploadDescription=upload_description)
                release = self.get_release_for_user_by_id(release_id, user)
                process = self.get_external_tool_process(release)
                if process is not None and self.is_fossology_process_completed(process):
                    logger.info(f"FOSSology process for Release : {release_id} completed after {attempt} attempt(s)")
                    return
                if attempt < self.fossology_max_attempts:
                    time.sleep(self.fossology_poll_interval)
            logger.warning(
                f"FOSSology process for Release : {release_id} not completed after "
                f"{self.fossology_max_attempts} attempts")
        except Exception as e:
            logger.exception(f"FOSSology process for Release : {release_id} failed: {e}")
        finally:
            lock_registry.release(release_id)
