"""
Attachment service
Uploads, downloads and bookkeeping of attachments owned by releases
"""
import hashlib
import io
import logging
import zipfile
from datetime import date

from ..core.errors import AttachmentUploadError, MessageNotReadableError, ResourceNotFoundError
from ..core.hal import HalResource, api_url, curie
from ..core.helper import ATTACHMENTS_URL, strip_hidden_fields
from ..models import AttachmentType, CheckStatus

logger = logging.getLogger(__name__)

ATTACHMENT_BUNDLE_NAME = 'AttachmentBundle.zip'
PATCHABLE_FIELDS = ('attachmentType', 'checkStatus', 'createdComment', 'checkedComment')


class AttachmentService:
    """Attachment operations on top of the backend data handler"""

    def __init__(self, client):
        self.client = client

    def get_attachments_by_sha1(self, sha1):
        """Attachment infos ``{"attachment": ..., "owner": {...}}`` matching a sha1"""
        return self.client.call('attachments', 'getAttachmentsBySha1', sha1=sha1) or []

    def get_attachment_resources(self, attachments, release_id):
        resources = []
        for attachment in attachments or ():
            content = strip_hidden_fields(attachment)
            content['releaseId'] = release_id
            resource = HalResource(content, collection_rel=curie('attachmentDTOes'))
            resource.add_link('self', api_url(ATTACHMENTS_URL, attachment.get('attachmentContentId')))
            resources.append(resource)
        return resources

    @staticmethod
    def filter_attachments_by_type(attachments, attachment_type):
        return [attachment for attachment in attachments
                if attachment.get('attachmentType') == AttachmentType(attachment_type).value]

    @staticmethod
    def _find_attachment(attachments, attachment_id):
        for attachment in attachments or ():
            if attachment.get('attachmentContentId') == attachment_id:
                return attachment
        raise ResourceNotFoundError("Requested Attachment Not Found")

    def download_attachment(self, release, attachment_id, user):
        """Attachment record and content of one attachment of the release"""
        attachment = self._find_attachment(release.get('attachments'), attachment_id)
        return attachment, self.client.download_content(attachment_id, user=user)

    def download_attachment_bundle(self, release, attachments, user):
        """Zip archive holding every attachment of the release"""
        buffer = io.BytesIO()
        used_names = set()
        with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as bundle:
            for attachment in attachments or ():
                content_id = attachment.get('attachmentContentId')
                name = attachment.get('filename') or content_id
                if name in used_names:
                    name = f"{content_id}_{name}"
                used_names.add(name)
                bundle.writestr(name, self.client.download_content(content_id, user=user))
        logger.debug(f"Bundled {len(used_names)} attachments of release {release.get('id')}")
        return buffer.getvalue()

    def update_attachment(self, attachments, attachment_data, attachment_id, user):
        """Apply the patchable fields of ``attachment_data`` in place"""
        attachment = self._find_attachment(attachments, attachment_id)
        if not isinstance(attachment_data, dict):
            raise MessageNotReadableError("Attachment data must be a JSON object")

        new_check_status = attachment_data.get('checkStatus')
        if new_check_status is not None:
            try:
                new_check_status = CheckStatus(new_check_status).value
            except ValueError as e:
                raise MessageNotReadableError(f"Invalid checkStatus: {new_check_status}") from e
            if new_check_status != attachment.get('checkStatus'):
                attachment['checkedBy'] = user.email
                attachment['checkedTeam'] = user.department
                attachment['checkedOn'] = date.today().isoformat()
            attachment['checkStatus'] = new_check_status

        if attachment_data.get('attachmentType') is not None:
            try:
                attachment['attachmentType'] = AttachmentType(attachment_data['attachmentType']).value
            except ValueError as e:
                raise MessageNotReadableError(f"Invalid attachmentType: {attachment_data['attachmentType']}") from e

        for field in ('createdComment', 'checkedComment'):
            if attachment_data.get(field) is not None:
                attachment[field] = attachment_data[field]
        return attachment

    def upload_attachment(self, file, new_attachment, user):
        """Store the uploaded file and return the attachment record describing it"""
        try:
            attachment_type = AttachmentType(new_attachment.get('attachmentType') or AttachmentType.DOCUMENT).value
        except ValueError as e:
            raise MessageNotReadableError(f"Invalid attachmentType: {new_attachment.get('attachmentType')}") from e

        try:
            content = file.read()
        except OSError as e:
            logger.error(f"failed to upload attachment: {e}")
            raise AttachmentUploadError("failed to upload attachment") from e

        filename = new_attachment.get('filename') or file.filename
        content_id = self.client.upload_content(filename, content, file.mimetype, user=user)
        return {
            'attachmentContentId': content_id,
            'filename': filename,
            'sha1': hashlib.sha1(content).hexdigest(),
            'attachmentType': attachment_type,
            'createdComment': new_attachment.get('createdComment'),
            'createdBy': user.email,
            'createdTeam': user.department,
            'createdOn': date.today().isoformat(),
            'checkStatus': CheckStatus.NOTCHECKED.value,
        }

    def filter_attachments_to_remove(self, release_id, attachments, attachment_ids):
        """Requested attachments that are neither accepted nor in use"""
        removable = []
        for attachment in attachments or ():
            content_id = attachment.get('attachmentContentId')
            if content_id not in attachment_ids:
                continue
            if attachment.get('checkStatus') == CheckStatus.ACCEPTED.value:
                logger.info(f"Attachment {content_id} of release {release_id} is accepted and can not be deleted")
                continue
            usages = self.client.call('attachments', 'getAttachmentUsageCount',
                                      ownerId=release_id, attachmentContentId=content_id)
            if usages:
                logger.info(f"Attachment {content_id} of release {release_id} is in use and can not be deleted")
                continue
            removable.append(attachment)
        return removable
