import pytest
from django.http import HttpResponse
from django.test import RequestFactory

from school_admin.middleware import MethodOverrideMiddleware
from school_admin.sanitizer import sanitize_text


def _view(request):
    return HttpResponse()


def _method_seen_by_view(request):
    middleware = MethodOverrideMiddleware(_view)
    assert middleware.process_view(request, _view, (), {}) is None
    return request.method


class TestMethodOverrideMiddleware:

    @pytest.mark.parametrize('override', ['PUT', 'patch', 'DELETE'])
    def test_form_field_override(self, rf, override):
        request = rf.post('/admin/section/update/1', {'_method': override, 'name': 'x'})
        assert _method_seen_by_view(request) == override.upper()
        assert request.original_method == 'POST'
        assert request.POST['name'] == 'x'

    def test_header_override(self, rf):
        request = rf.post('/admin/section/delete/1', HTTP_X_HTTP_METHOD_OVERRIDE='DELETE')
        assert _method_seen_by_view(request) == 'DELETE'

    def test_unsupported_override_is_ignored(self, rf):
        request = rf.post('/admin/section/store', {'_method': 'GET'})
        assert _method_seen_by_view(request) == 'POST'

    def test_plain_post_untouched(self, rf):
        request = rf.post('/admin/section/store', {'name': 'x'})
        assert _method_seen_by_view(request) == 'POST'
        assert not hasattr(request, 'original_method')

    def test_json_post_body_is_not_parsed(self, rf):
        request = rf.post('/admin/section/store', {'_method': 'DELETE'}, content_type='application/json')
        assert _method_seen_by_view(request) == 'POST'

    def test_get_untouched(self):
        request = RequestFactory().get('/admin/sections', {'_method': 'DELETE'})
        assert _method_seen_by_view(request) == 'GET'

    def test_method_is_unchanged_before_view_resolution(self, rf):
        request = rf.post('/admin/section/update/1', {'_method': 'PUT'})
        seen = []
        middleware = MethodOverrideMiddleware(lambda r: seen.append(r.method) or HttpResponse())
        middleware(request)
        assert seen == ['POST']


class TestSanitizer:

    def test_plain_text_unchanged(self):
        assert sanitize_text('7-Diamond', 'name') == '7-Diamond'

    def test_tags_are_stripped(self):
        assert sanitize_text('<b>Narra</b>', 'name') == 'Narra'

    def test_ampersand_kept_as_text(self):
        assert sanitize_text('Rizal & Mabini', 'name') == 'Rizal & Mabini'

    def test_whitespace_trimmed(self):
        assert sanitize_text('  Acacia  ', 'name') == 'Acacia'

    def test_stripped_markup_is_logged(self, caplog):
        with caplog.at_level('WARNING', logger='security'):
            sanitize_text('<img src=x onerror=alert(1)>Molave', 'name')
        assert any('[XSS_BLOCKED]' in record.getMessage() for record in caplog.records)

    def test_non_string_passthrough(self):
        assert sanitize_text(None) is None

    @pytest.mark.parametrize('value, expected', [
        ('&lt;img src=x onerror=alert(1)&gt;', ''),
        ('&lt;b&gt;Narra&lt;/b&gt;', 'Narra'),
        ('&amp;lt;i&amp;gt;Yakal&amp;lt;/i&amp;gt;', 'Yakal'),
    ])
    def test_entity_encoded_tags_are_stripped(self, value, expected):
        cleaned = sanitize_text(value, 'name')
        assert cleaned == expected
        assert '<' not in cleaned

    def test_encoded_ampersand_is_not_logged(self, caplog):
        with caplog.at_level('WARNING', logger='security'):
            assert sanitize_text('Tom &amp; Jerry', 'name') == 'Tom & Jerry'
        assert not any('[XSS_BLOCKED]' in record.getMessage() for record in caplog.records)

    def test_less_than_sign_kept_as_text(self):
        assert sanitize_text('Grade < 8', 'name') == 'Grade < 8'
