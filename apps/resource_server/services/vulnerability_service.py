"""
Vulnerability service
"""
from datetime import date

from .datahandler_client import parse_request_status


class VulnerabilityService:
    """Vulnerability operations on top of the backend data handler"""

    def __init__(self, client):
        self.client = client

    def get_vulnerabilities_by_release_id(self, release_id, user):
        return self.client.call('vulnerabilities', 'getVulnerabilitiesByReleaseId',
                                user, releaseId=release_id) or []

    def get_vulnerability_dto_by_external_id(self, external_ids, release_id):
        return self.client.call('vulnerabilities', 'getVulnerabilityDTOByExternalId',
                                externalIds=sorted(external_ids), releaseId=release_id) or []

    def update_release_vulnerability_relation(self, relation, user):
        return parse_request_status(
            self.client.call('vulnerabilities', 'updateReleaseVulnerabilityRelation', user, relation=relation),
            'vulnerabilities.updateReleaseVulnerabilityRelation')


def add_verification_state_info(relation, comment, verification_state, user):
    """Append a verification entry to the relation's history"""
    history = relation.get('verificationStateInfo')
    if history is None:
        history = []
        relation['verificationStateInfo'] = history
    history.append({
        'checkedBy': user.email,
        'checkedOn': date.today().isoformat(),
        'verificationState': verification_state,
        'comment': comment,
    })
    return relation
