"""
Conversions from backend records to HAL resources
"""
from ..models import HIDDEN_FIELDS
from .hal import HalResource, api_url, curie

RELEASES_URL = 'releases'
COMPONENTS_URL = 'components'
PROJECTS_URL = 'projects'
ATTACHMENTS_URL = 'attachments'
VENDORS_URL = 'vendors'
LICENSES_URL = 'licenses'
USERS_URL = 'users'

EMBEDDED_RELEASE_FIELDS = ('name', 'version')
EMBEDDED_ATTACHMENT_FIELDS = ('filename', 'sha1', 'attachmentType', 'checkStatus',
                              'createdBy', 'createdTeam', 'createdOn')

# single users and user sets embedded on a single release
EMBEDDED_USER_FIELDS = ('createdBy', 'modifiedBy', 'contributors', 'subscribers')

# release field -> embedded relation for the all-details view
FIELDS_TO_BE_EMBEDDED = {
    'moderators': 'moderators',
    'attachments': 'attachments',
    'cotsDetails': 'cotsDetails',
    'releaseIdToRelationship': 'releaseIdToRelationship',
    'clearingInformation': 'clearingInformation',
}


def strip_hidden_fields(record):
    return {key: value for key, value in record.items() if key not in HIDDEN_FIELDS}


def convert_to_embedded_release(release, fields=None):
    content = {field: release.get(field) for field in EMBEDDED_RELEASE_FIELDS}
    for field in fields or ():
        if field in release and field not in HIDDEN_FIELDS:
            content[field] = release[field]
    resource = HalResource(content, collection_rel=curie('releases'))
    resource.add_link('self', api_url(RELEASES_URL, release.get('id')))
    return resource


def convert_to_embedded_project(project):
    content = {field: project.get(field) for field in ('name', 'version', 'projectType')}
    resource = HalResource(content, collection_rel=curie('projects'))
    resource.add_link('self', api_url(PROJECTS_URL, project.get('id')))
    return resource


def convert_to_embedded_component(component):
    content = {field: component.get(field) for field in ('name', 'componentType')}
    resource = HalResource(content, collection_rel=curie('components'))
    resource.add_link('self', api_url(COMPONENTS_URL, component.get('id')))
    return resource


def convert_to_embedded_attachment(attachment):
    content = {field: attachment[field] for field in EMBEDDED_ATTACHMENT_FIELDS if field in attachment}
    resource = HalResource(content, collection_rel=curie('attachments'))
    resource.add_link('self', api_url(ATTACHMENTS_URL, attachment.get('attachmentContentId')))
    return resource


def convert_to_embedded_user(email):
    resource = HalResource({'email': email}, collection_rel=curie('users'))
    resource.add_link('self', api_url(USERS_URL, email))
    return resource


def add_embedded_users(hal_resource, rel, emails):
    for email in emails:
        hal_resource.add_embedded_resource(curie(rel), convert_to_embedded_user(email))


def add_embedded_moderators(hal_resource, moderators):
    add_embedded_users(hal_resource, 'moderators', moderators)


def add_embedded_attachments(hal_resource, attachments):
    for attachment in attachments:
        hal_resource.add_embedded_resource(curie('attachments'), convert_to_embedded_attachment(attachment))


def add_embedded_vendor(vendor):
    content = {field: vendor.get(field) for field in ('fullname', 'shortname', 'url')}
    resource = HalResource(content, collection_rel=curie('vendors'))
    resource.add_link('self', api_url(VENDORS_URL, vendor.get('id')))
    return resource


def _license_resource(license_id):
    license_resource = HalResource({'shortName': license_id})
    license_resource.add_link('self', api_url(LICENSES_URL, license_id))
    return license_resource


def add_embedded_licenses(hal_resource, license_ids, rel='licenses'):
    for license_id in license_ids:
        hal_resource.add_embedded_resource(curie(rel), _license_resource(license_id))


def add_embedded_release_links(hal_resource, release_links):
    for link in release_links:
        link_resource = HalResource(strip_hidden_fields(link))
        link_resource.add_link('self', api_url(RELEASES_URL, link.get('id')))
        hal_resource.add_embedded_resource(curie('releaseLinks'), link_resource)


def add_embedded_fields(rel, value, hal_resource):
    """Embed a release field under ``rel``, skipping empty values"""
    if value is None or value == [] or value == {}:
        return
    if rel == 'moderators':
        add_embedded_moderators(hal_resource, value)
    elif rel == 'attachments':
        add_embedded_attachments(hal_resource, value)
    else:
        hal_resource.set_embedded(curie(rel), value)


def _release_base_resource(release):
    content = strip_hidden_fields(release)
    content.pop('componentId', None)
    hal_release = HalResource(content, collection_rel=curie('releases'))
    hal_release.add_link('self', api_url(RELEASES_URL, release.get('id')))
    hal_release.add_link(curie('component'), api_url(COMPONENTS_URL, release.get('componentId')))
    return hal_release


def create_hal_release_resource(release, verbose):
    """HAL resource for a release

    In verbose mode moderators, attachments, vendor and main licenses are
    moved from the body into ``_embedded``.
    """
    hal_release = _release_base_resource(release)
    if not verbose:
        return hal_release

    content = hal_release.content
    if release.get('moderators') is not None:
        add_embedded_moderators(hal_release, content.pop('moderators'))
    if release.get('attachments') is not None:
        add_embedded_attachments(hal_release, content.pop('attachments'))
    if release.get('vendor') is not None:
        hal_release.add_embedded_resource(curie('vendors'), add_embedded_vendor(content.pop('vendor')))
    if release.get('mainLicenseIds') is not None:
        add_embedded_licenses(hal_release, content.pop('mainLicenseIds'))
    return hal_release


def create_hal_release_resource_with_all_details(release):
    hal_release = _release_base_resource(release)
    for field, rel in FIELDS_TO_BE_EMBEDDED.items():
        add_embedded_fields(rel, release.get(field), hal_release)
    # attachments are only rendered embedded
    hal_release.content.pop('attachments', None)
    return hal_release


def add_embedded_data_to_release(hal_release, release):
    """Move the release's user and other-license references into ``_embedded``"""
    content = hal_release.content
    for field in EMBEDDED_USER_FIELDS:
        value = release.get(field)
        if not value:
            continue
        content.pop(field, None)
        add_embedded_users(hal_release, field, [value] if isinstance(value, str) else value)
    if release.get('otherLicenseIds'):
        content.pop('otherLicenseIds', None)
        add_embedded_licenses(hal_release, release['otherLicenseIds'], rel='otherLicenses')
    return hal_release
