"""In-memory stand-in for the backend data handler used by the tests."""

import copy
import itertools
import threading

from resource_server.core.errors import ResourceNotFoundError


def sample_releases():
    return {
        'rel-1': {
            'id': 'rel-1',
            'revision': '1-abc',
            'type': 'release',
            'name': 'Angular',
            'version': '1.0',
            'componentId': 'comp-1',
            'clearingState': 'NEW_CLEARING',
            'moderators': ['mod@sw360.org'],
            'subscribers': ['admin@sw360.org'],
            'createdBy': 'creator@sw360.org',
            'contributors': ['dev@sw360.org'],
            'otherLicenseIds': ['Apache-2.0'],
            'vendor': {'id': 'vendor-1', 'fullname': 'Google LLC', 'shortname': 'Google', 'url': 'https://google.com'},
            'mainLicenseIds': ['MIT'],
            'externalIds': {'purl': 'pkg:npm/angular@1.0'},
            'releaseIdToRelationship': {'rel-2': 'CONTAINED'},
            'attachments': [{
                'attachmentContentId': 'att-1',
                'filename': 'angular-src.zip',
                'sha1': 'da39a3ee5e6b4b0d3255bfef95601890afd80709',
                'attachmentType': 'SOURCE',
                'checkStatus': 'NOTCHECKED',
            }],
        },
        'rel-2': {
            'id': 'rel-2',
            'name': 'React',
            'version': '17.0',
            'componentId': 'comp-2',
            'clearingState': 'APPROVED',
            'attachments': [
                {'attachmentContentId': 'att-2', 'filename': 'readme.txt',
                 'attachmentType': 'DOCUMENT', 'checkStatus': 'ACCEPTED'},
                {'attachmentContentId': 'att-3', 'filename': 'notes.txt',
                 'attachmentType': 'DOCUMENT', 'checkStatus': 'NOTCHECKED'},
            ],
        },
        'rel-3': {
            'id': 'rel-3',
            'name': 'angular',
            'version': '2.0',
            'componentId': 'comp-1',
        },
    }


class FakeDataHandlerClient:
    """Answers the backend calls made by the services from in-memory data."""

    def __init__(self):
        self.releases = sample_releases()
        self.components = {
            'comp-1': {'id': 'comp-1', 'name': 'Angular', 'componentType': 'OSS', 'releaseIds': ['rel-1', 'rel-3']},
            'comp-2': {'id': 'comp-2', 'name': 'React', 'componentType': 'COTS', 'releaseIds': ['rel-2']},
            'comp-3': {'id': 'comp-3', 'name': 'Framework', 'componentType': 'INTERNAL', 'releaseIds': ['rel-2']},
        }
        self.projects = [
            {'id': 'proj-1', 'name': 'Portal', 'version': '1', 'projectType': 'PRODUCT', 'releaseIds': ['rel-1']},
        ]
        self.vulnerabilities = {
            'rel-1': [
                {'externalId': 'CVE-2021-0001', 'title': 'XSS', 'priority': '2 - major',
                 'releaseVulnerabilityRelation': {'releaseId': 'rel-1', 'vulnerabilityId': 'vul-1'}},
                {'externalId': 'CVE-2021-0002', 'title': 'DoS', 'priority': '1 - critical',
                 'releaseVulnerabilityRelation': {'releaseId': 'rel-1', 'vulnerabilityId': 'vul-2'}},
            ],
        }
        self.contents = {'att-1': b'source code', 'att-2': b'read me', 'att-3': b'some notes'}
        self.recent = ['rel-2', 'rel-1']
        self.attachment_usages = {}
        self.delete_statuses = {}
        self.add_status = 'SUCCESS'
        self.update_status = 'SUCCESS'
        self.vulnerability_update_status = 'SUCCESS'
        self.fossology_connection = 'SUCCESS'
        self.fossology_complete = True
        self.fossology_gate = threading.Event()
        self.fossology_gate.set()
        self.available = True
        self.calls = []
        self.updated_relations = []
        self.failing_calls = {}
        self._ids = itertools.count(100)

    def call(self, service, method, user=None, **params):
        self.calls.append((service, method, params))
        if method in self.failing_calls:
            raise self.failing_calls[method]
        handler = getattr(self, f"_{service}_{method}")
        return copy.deepcopy(handler(user, **copy.deepcopy(params)))

    def calls_to(self, method):
        return [params for _, called, params in self.calls if called == method]

    # components

    def _components_getAccessibleReleaseSummary(self, user):
        return list(self.releases.values())

    def _components_getAccessibleReleaseById(self, user, id):
        return self.releases.get(id)

    def _components_getRecentReleasesWithAccessibility(self, user):
        return [self.releases[release_id] for release_id in self.recent if release_id in self.releases]

    def _components_getSubscribedReleases(self, user):
        return [release for release in self.releases.values()
                if user.email in (release.get('subscribers') or [])]

    def _components_getLinkedReleaseRelations(self, user, releaseId):
        relations = self.releases[releaseId].get('releaseIdToRelationship') or {}
        return [{'id': linked_id,
                 'name': self.releases[linked_id]['name'],
                 'version': self.releases[linked_id]['version'],
                 'releaseRelationship': relationship}
                for linked_id, relationship in relations.items() if linked_id in self.releases]

    def _components_getUsingComponentsForRelease(self, user, releaseId):
        return [component for component in self.components.values()
                if releaseId in component['releaseIds'] and component['id'] != self.releases.get(releaseId, {}).get('componentId')]

    def _components_searchReleasesByExternalIds(self, user, externalIds):
        found = []
        for release in self.releases.values():
            release_external_ids = release.get('externalIds') or {}
            if any(release_external_ids.get(key) in values for key, values in externalIds.items()):
                found.append(release)
        return found

    def _components_getComponentById(self, user, id):
        return self.components[id]

    def _components_addRelease(self, user, release):
        if self.add_status != 'SUCCESS':
            return {'requestStatus': self.add_status}
        release_id = f"rel-{next(self._ids)}"
        release['id'] = release_id
        self.releases[release_id] = release
        return {'requestStatus': 'SUCCESS', 'id': release_id}

    def _components_updateRelease(self, user, release):
        if self.update_status == 'SUCCESS':
            self.releases[release['id']] = release
        return self.update_status

    def _components_deleteRelease(self, user, id):
        status = self.delete_statuses.get(id, 'SUCCESS')
        if status == 'SUCCESS':
            self.releases.pop(id, None)
        return status

    def _components_markFossologyProcessOutdated(self, user, releaseId):
        for process in self.releases[releaseId].get('externalToolProcesses') or []:
            process['processStatus'] = 'OUTDATED'
        return 'SUCCESS'

    # projects

    def _projects_searchByReleaseId(self, user, releaseId):
        return [project for project in self.projects if releaseId in project['releaseIds']]

    # fossology

    def _fossology_checkConnection(self, user):
        return self.fossology_connection

    def _fossology_process(self, user, releaseId, uploadDescription):
        self.fossology_gate.wait(5)
        steps = [{'stepName': 'upload', 'stepStatus': 'DONE'},
                 {'stepName': 'scan', 'stepStatus': 'DONE'},
                 {'stepName': 'report', 'stepStatus': 'DONE' if self.fossology_complete else 'IN_WORK',
                  'result': 'report-1' if self.fossology_complete else None}]
        self.releases[releaseId]['externalToolProcesses'] = [{
            'id': 'etp-1',
            'externalTool': 'FOSSOLOGY',
            'processStatus': 'DONE' if self.fossology_complete else 'IN_WORK',
            'processSteps': steps,
        }]
        return 'SUCCESS'

    # attachments

    def _attachments_getAttachmentsBySha1(self, user, sha1):
        infos = []
        for release in self.releases.values():
            for attachment in release.get('attachments') or []:
                if attachment.get('sha1') == sha1:
                    infos.append({'attachment': attachment, 'owner': {'releaseId': release['id']}})
        return infos

    def _attachments_getAttachmentUsageCount(self, user, ownerId, attachmentContentId):
        return self.attachment_usages.get(attachmentContentId, 0)

    def upload_content(self, filename, content, content_type=None, user=None):
        content_id = f"att-{next(self._ids)}"
        self.contents[content_id] = content
        return content_id

    def download_content(self, attachment_content_id, user=None):
        if attachment_content_id not in self.contents:
            raise ResourceNotFoundError(f"No content for {attachment_content_id}")
        return self.contents[attachment_content_id]

    def is_available(self):
        return self.available

    # vulnerabilities

    def _vulnerabilities_getVulnerabilitiesByReleaseId(self, user, releaseId):
        return self.vulnerabilities.get(releaseId, [])

    def _vulnerabilities_getVulnerabilityDTOByExternalId(self, user, externalIds, releaseId):
        return [vulnerability for vulnerability in self.vulnerabilities.get(releaseId, [])
                if vulnerability['externalId'] in externalIds]

    def _vulnerabilities_updateReleaseVulnerabilityRelation(self, user, relation):
        self.updated_relations.append(relation)
        if self.vulnerability_update_status == 'SUCCESS':
            for vulnerability in self.vulnerabilities.get(relation.get('releaseId'), []):
                if vulnerability['releaseVulnerabilityRelation'].get('vulnerabilityId') == relation.get('vulnerabilityId'):
                    vulnerability['releaseVulnerabilityRelation'] = relation
        return self.vulnerability_update_status
