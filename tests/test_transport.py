"""
PortalClient: request shaping and response classification, against a
session double that returns canned ``requests.Response`` objects.
"""
import json

import pytest
import requests

from school_admin.screens import PortalClient, OutcomeKind, classify_status, Credentials, SectionDraft, SectionEdit


def _response(status_code, body=None, headers=None, text=None):
    response = requests.Response()
    response.status_code = status_code
    if body is not None:
        response._content = json.dumps(body).encode()
        response.headers['Content-Type'] = 'application/json'
    else:
        response._content = (text or '').encode()
        response.headers['Content-Type'] = 'text/html; charset=utf-8'
    response.encoding = 'utf-8'
    for key, value in (headers or {}).items():
        response.headers[key] = value
    return response


class FakeSession:

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def request(self, method, url, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self.request('GET', url, **kwargs)


def _client(response=None, error=None):
    session = FakeSession(response, error)
    return PortalClient('http://portal.test/', session=session), session


class TestClassifyStatus:

    @pytest.mark.parametrize('status, kind', [
        (200, OutcomeKind.SUCCESS),
        (204, OutcomeKind.SUCCESS),
        (302, OutcomeKind.CLIENT_ERROR),
        (404, OutcomeKind.CLIENT_ERROR),
        (422, OutcomeKind.CLIENT_ERROR),
        (500, OutcomeKind.SERVER_ERROR),
        (503, OutcomeKind.SERVER_ERROR),
    ])
    def test_classification(self, status, kind):
        assert classify_status(status) is kind

    def test_redirect_as_success(self):
        assert classify_status(302, redirect_is_success=True) is OutcomeKind.SUCCESS


class TestPortalClient:

    def test_login_redirect_is_success(self):
        client, session = _client(_response(302, headers={'Location': '/admin/dashboard'}))
        result = client.login(Credentials('admin', 'secret'))

        assert result.ok
        assert result.location == '/admin/dashboard'
        method, url, kwargs = session.requests[0]
        assert (method, url) == ('POST', 'http://portal.test/admin/login')
        assert kwargs['data'] == {'username': 'admin', 'password': 'secret'}
        assert kwargs['allow_redirects'] is False

    def test_login_field_errors(self):
        client, _ = _client(_response(422, {'errors': {'username': 'Invalid credentials'}}))
        result = client.login(Credentials('admin', 'wrong'))
        assert result.kind is OutcomeKind.CLIENT_ERROR
        assert result.errors == {'username': 'Invalid credentials'}

    def test_store_section_payload(self):
        client, session = _client(_response(200, {'message': 'Section added successfully', 'section': {'id': 5}}))
        result = client.store_section(SectionDraft('7-Diamond', 3))

        assert result.ok
        assert result.message == 'Section added successfully'
        assert result.data['section'] == {'id': 5}
        method, url, kwargs = session.requests[0]
        assert (method, url) == ('POST', 'http://portal.test/admin/section/store')
        assert kwargs['data'] == {'name': '7-Diamond', 'grade_level_id': 3}

    def test_update_is_post_with_method_override(self):
        client, session = _client(_response(200, {'message': 'Section updated successfully'}))
        client.update_section(SectionEdit(7, 'Emerald', 2))
        method, url, kwargs = session.requests[0]
        assert (method, url) == ('POST', 'http://portal.test/admin/section/update/7')
        assert kwargs['data'] == {'name': 'Emerald', 'grade_level_id': 2, '_method': 'PUT'}

    def test_delete_sends_csrf_header(self):
        client, session = _client(_response(200, {'message': 'Section deleted successfully'}))
        client.csrf_token = 'tok123'
        assert client.delete_section(9).ok
        method, url, kwargs = session.requests[0]
        assert (method, url) == ('DELETE', 'http://portal.test/admin/section/delete/9')
        assert kwargs['headers']['X-CSRF-TOKEN'] == 'tok123'
        assert kwargs['headers']['X-Requested-With'] == 'XMLHttpRequest'

    def test_redirect_outside_login_is_a_failure(self):
        client, _ = _client(_response(302, headers={'Location': '/admin/login'}))
        assert client.delete_section(9).kind is OutcomeKind.CLIENT_ERROR

    def test_server_error(self):
        client, _ = _client(_response(500, {'error': 'A server error occurred.'}))
        result = client.delete_section(9)
        assert result.kind is OutcomeKind.SERVER_ERROR
        assert result.message == 'A server error occurred.'

    def test_non_json_body_is_ignored(self):
        client, _ = _client(_response(500, text='<h1>Server Error</h1>'))
        result = client.list_sections()
        assert result.kind is OutcomeKind.SERVER_ERROR
        assert result.data == {}

    def test_network_failure(self):
        client, _ = _client(error=requests.ConnectionError('connection refused'))
        result = client.delete_section(9)
        assert result.kind is OutcomeKind.NETWORK_FAILURE
        assert result.status_code is None

    def test_fetch_csrf_token(self):
        page = '<html><head><meta name="csrf-token" content="abc-XYZ"></head></html>'
        client, session = _client(_response(200, text=page))
        assert client.fetch_csrf_token() == 'abc-XYZ'
        assert client.csrf_token == 'abc-XYZ'
        assert session.requests[0][1] == 'http://portal.test/admin/login'

    def test_fetch_csrf_token_without_meta_tag(self):
        client, _ = _client(_response(200, text='<html></html>'))
        assert client.fetch_csrf_token() is None

    def test_fetch_csrf_token_network_failure(self):
        client, _ = _client(error=requests.Timeout('slow'))
        assert client.fetch_csrf_token() is None
