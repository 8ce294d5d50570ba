"""Tests for the release attachment endpoints."""

import hashlib
import io
import json
import zipfile


class TestAttachmentDownloads:
    def test_list_attachments(self, client, reader_headers):
        response = client.get('/api/releases/rel-2/attachments', headers=reader_headers)
        assert response.status_code == 200
        attachments = response.get_json()['_embedded']['sw360:attachmentDTOes']
        assert [attachment['filename'] for attachment in attachments] == ['readme.txt', 'notes.txt']
        assert all(attachment['releaseId'] == 'rel-2' for attachment in attachments)
        assert attachments[0]['_links']['self']['href'] == 'http://localhost/api/attachments/att-2'

    def test_download_single_attachment(self, client, reader_headers):
        response = client.get('/api/releases/rel-1/attachments/att-1', headers=reader_headers)
        assert response.status_code == 200
        assert response.data == b'source code'
        assert response.mimetype == 'application/octet-stream'
        assert 'angular-src.zip' in response.headers['Content-Disposition']

    def test_download_unknown_attachment(self, client, reader_headers):
        response = client.get('/api/releases/rel-1/attachments/att-2', headers=reader_headers)
        assert response.status_code == 404
        assert response.get_json()['message'] == 'Requested Attachment Not Found'

    def test_download_bundle(self, client, reader_headers):
        response = client.get('/api/releases/rel-2/attachments/download', headers=reader_headers)
        assert response.status_code == 200
        assert response.mimetype == 'application/zip'
        assert 'AttachmentBundle.zip' in response.headers['Content-Disposition']
        with zipfile.ZipFile(io.BytesIO(response.data)) as bundle:
            assert sorted(bundle.namelist()) == ['notes.txt', 'readme.txt']
            assert bundle.read('readme.txt') == b'read me'


class TestAttachmentPatch:
    def test_check_status_change_records_checker(self, client, writer_headers, datahandler):
        response = client.patch('/api/releases/rel-1/attachment/att-1', headers=writer_headers,
                                json={'checkStatus': 'ACCEPTED', 'checkedComment': 'looks good'})
        assert response.status_code == 200
        body = response.get_json()
        assert body['checkStatus'] == 'ACCEPTED'
        assert body['checkedBy'] == 'admin@sw360.org'
        assert body['checkedComment'] == 'looks good'
        stored = datahandler.releases['rel-1']['attachments'][0]
        assert stored['checkStatus'] == 'ACCEPTED'
        assert stored['checkedTeam'] == 'DEPARTMENT'

    def test_invalid_attachment_type(self, client, writer_headers):
        response = client.patch('/api/releases/rel-1/attachment/att-1', headers=writer_headers,
                                json={'attachmentType': 'PAINTING'})
        assert response.status_code == 400

    def test_unknown_attachment(self, client, writer_headers):
        response = client.patch('/api/releases/rel-1/attachment/att-9', headers=writer_headers,
                                json={'checkStatus': 'ACCEPTED'})
        assert response.status_code == 404

    def test_reader_cannot_patch(self, client, reader_headers):
        response = client.patch('/api/releases/rel-1/attachment/att-1', headers=reader_headers,
                                json={'checkStatus': 'ACCEPTED'})
        assert response.status_code == 403


class TestAttachmentUpload:
    def test_upload_adds_attachment(self, client, writer_headers, datahandler):
        response = client.post('/api/releases/rel-3/attachments', headers=writer_headers,
                               content_type='multipart/form-data', data={
                                   'file': (io.BytesIO(b'hello'), 'hello.tar.gz'),
                                   'attachment': json.dumps({'attachmentType': 'SOURCE',
                                                             'createdComment': 'upstream tarball'}),
                               })
        assert response.status_code == 200
        embedded = response.get_json()['_embedded']['sw360:attachments']
        assert embedded[0]['filename'] == 'hello.tar.gz'

        stored = datahandler.releases['rel-3']['attachments'][0]
        assert stored['attachmentType'] == 'SOURCE'
        assert stored['sha1'] == hashlib.sha1(b'hello').hexdigest()
        assert stored['createdBy'] == 'admin@sw360.org'
        assert stored['checkStatus'] == 'NOTCHECKED'
        assert datahandler.contents[stored['attachmentContentId']] == b'hello'

    def test_invalid_type_stores_no_content(self, client, writer_headers, datahandler):
        response = client.post('/api/releases/rel-3/attachments', headers=writer_headers,
                               content_type='multipart/form-data', data={
                                   'file': (io.BytesIO(b'abc'), 'abc.txt'),
                                   'attachment': json.dumps({'attachmentType': 'BOGUS'}),
                               })
        assert response.status_code == 400
        assert len(datahandler.contents) == 3
        assert 'attachments' not in datahandler.releases['rel-3']

    def test_upload_without_file(self, client, writer_headers):
        response = client.post('/api/releases/rel-3/attachments', headers=writer_headers,
                               content_type='multipart/form-data',
                               data={'attachment': json.dumps({})})
        assert response.status_code == 400

    def test_upload_without_attachment_part(self, client, writer_headers):
        response = client.post('/api/releases/rel-3/attachments', headers=writer_headers,
                               content_type='multipart/form-data',
                               data={'file': (io.BytesIO(b'hello'), 'hello.txt')})
        assert response.status_code == 400
        assert 'attachment' in response.get_json()['message']


class TestAttachmentDelete:
    def test_accepted_attachments_are_kept(self, client, writer_headers, datahandler):
        response = client.delete('/api/releases/rel-2/attachments/att-2,att-3', headers=writer_headers)
        assert response.status_code == 200
        remaining = datahandler.releases['rel-2']['attachments']
        assert [attachment['attachmentContentId'] for attachment in remaining] == ['att-2']

    def test_nothing_deletable_fails(self, client, writer_headers):
        response = client.delete('/api/releases/rel-2/attachments/att-2', headers=writer_headers)
        assert response.status_code == 500
        assert response.get_json()['message'].startswith('Could not delete attachments')

    def test_attachments_in_use_are_kept(self, client, writer_headers, datahandler):
        datahandler.attachment_usages['att-1'] = 2
        response = client.delete('/api/releases/rel-1/attachments/att-1', headers=writer_headers)
        assert response.status_code == 500
        assert len(datahandler.releases['rel-1']['attachments']) == 1

    def test_delete_sent_to_moderator(self, client, writer_headers, datahandler):
        datahandler.update_status = 'SENT_TO_MODERATOR'
        response = client.delete('/api/releases/rel-2/attachments/att-3', headers=writer_headers)
        assert response.status_code == 202
