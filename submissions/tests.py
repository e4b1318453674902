"""
Tests for the Submissions app
"""
import uuid
from datetime import date, datetime, timezone as dt_timezone

import pytest
from django.contrib import admin
from django.db.models import Q
from rest_framework import status

from submissions.filters import (
    PAGE_SIZE,
    And,
    Contains,
    GreaterOrEqual,
    LessOrEqual,
    Or,
    build_submission_query,
    end_of_day,
    paginate,
    start_of_day,
    to_q,
)
from submissions.models import Submission
from submissions.repositories import InvalidSubmissionId, SubmissionRepository
from submissions.sanitizers import sanitize_text
from submissions.serializers import (
    SubmissionCreateSerializer,
    SubmissionQuerySerializer,
    SubmissionResponseSerializer,
)

LIST_URL = '/api/submissions'


def detail_url(submission_id):
    return f'/api/submissions/{submission_id}'


def utc(*args):
    return datetime(*args, tzinfo=dt_timezone.utc)


class TestSanitizer:
    """Test markup stripping."""

    def test_removes_script_with_content(self):
        assert sanitize_text('<script>alert("XSS")</script>Hello') == 'Hello'

    def test_removes_tags_and_attributes(self):
        result = sanitize_text('<div class="test" onclick="malicious()">Content</div>')

        assert result == 'Content'
        assert 'onclick' not in result

    def test_multiple_elements(self):
        assert sanitize_text('<b>Bold</b> <i>Italic</i> <u>Underline</u>') == 'Bold Italic Underline'

    def test_nested_elements(self):
        assert sanitize_text('<div><p><span>Nested</span></p></div>') == 'Nested'

    def test_iframe_and_svg(self):
        assert sanitize_text('<iframe src="malicious.com"></iframe>Content') == 'Content'
        result = sanitize_text('<svg onload="alert(1)"><text>Logo</text></svg>')
        assert '<' not in result
        assert 'onload' not in result
        assert result == 'Logo'

    @pytest.mark.parametrize('markup', [
        '<script>evil()</script>Hi',
        '<style>body { display: none }</style>Hi',
        '<textarea>hidden</textarea>Hi',
        '<select><option>choice</option></select>Hi',
        '<noscript>fallback</noscript>Hi',
        '<iframe>evil</iframe>Hi',
        '<xmp>raw</xmp>Hi',
    ])
    def test_non_text_elements_dropped_with_content(self, markup):
        assert sanitize_text(markup) == 'Hi'

    def test_style_attribute_and_javascript_uri(self):
        result = sanitize_text('<a href="javascript:alert(1)" style="color:red">Click</a>')
        assert result == 'Click'

    def test_plain_text_unchanged(self):
        assert sanitize_text("'; DROP TABLE users; --") == "'; DROP TABLE users; --"

    def test_escaped_markup_stays_literal_text(self):
        result = sanitize_text('&lt;script&gt;x&lt;/script&gt;John')

        assert result == '&lt;script&gt;x&lt;/script&gt;John'
        assert '<' not in result
        assert sanitize_text('Tom & Jerry') == 'Tom &amp; Jerry'

    def test_trims_whitespace(self):
        assert sanitize_text('  <b>Text</b>  ') == 'Text'

    def test_non_string_returned_unchanged(self):
        assert sanitize_text(42) == 42
        assert sanitize_text(None) is None


class TestSubmissionCreateSerializer:
    """Test submission validation."""

    def test_valid_data_is_sanitized(self):
        serializer = SubmissionCreateSerializer(data={
            'name': '<script>x</script>John',
            'email': 'a@b.com',
            'message': '<b>hi</b>',
        })

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data['name'] == 'John'
        assert serializer.validated_data['message'] == 'hi'
        assert 'phone' not in serializer.validated_data

    def test_reports_every_violation(self):
        serializer = SubmissionCreateSerializer(data={
            'name': 'a' * 101,
            'email': 'invalid-email',
            'phone': '1' * 21,
            'message': '',
        })

        assert not serializer.is_valid()
        assert set(serializer.errors) == {'name', 'email', 'phone', 'message'}

    def test_unknown_fields_rejected_with_other_errors(self):
        serializer = SubmissionCreateSerializer(data={
            'email': 'test@example.com',
            'message': 'Hello',
            'website': 'http://spam.com',
        })

        assert not serializer.is_valid()
        assert 'website' in serializer.errors
        assert 'name' in serializer.errors

    def test_length_checked_after_sanitizing(self):
        serializer = SubmissionCreateSerializer(data={
            'name': '<b>' + 'a' * 100 + '</b>',
            'email': 'test@example.com',
            'message': 'Hello',
        })

        assert serializer.is_valid(), serializer.errors

    def test_markup_only_value_is_blank(self):
        serializer = SubmissionCreateSerializer(data={
            'name': '<b></b>',
            'email': 'test@example.com',
            'message': 'Hello',
        })

        assert not serializer.is_valid()
        assert 'name' in serializer.errors

    def test_non_string_rejected(self):
        serializer = SubmissionCreateSerializer(data={
            'name': 123,
            'email': 'test@example.com',
            'message': 'Hello',
        })

        assert not serializer.is_valid()
        assert 'name' in serializer.errors


class TestSubmissionQuerySerializer:
    """Test list query validation."""

    def test_defaults(self):
        serializer = SubmissionQuerySerializer(data={})

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data['page'] == 1
        assert serializer.validated_data['sortBy'] == 'createdAt'
        assert serializer.validated_data['sortOrder'] == 'desc'

    @pytest.mark.parametrize('params,field', [
        ({'page': '0'}, 'page'),
        ({'page': 'abc'}, 'page'),
        ({'sortBy': 'invalid'}, 'sortBy'),
        ({'sortOrder': 'up'}, 'sortOrder'),
        ({'startDate': 'yesterday'}, 'startDate'),
        ({'endDate': '2024-02-30'}, 'endDate'),
        ({'limit': '50'}, 'limit'),
    ])
    def test_invalid_params(self, params, field):
        serializer = SubmissionQuerySerializer(data=params)

        assert not serializer.is_valid()
        assert field in serializer.errors

    def test_dates_and_search_parsed(self):
        serializer = SubmissionQuerySerializer(data={
            'startDate': '2024-01-15',
            'endDate': '2024-01-20T10:30:00Z',
            'search': '  <i>john</i> ',
        })

        assert serializer.is_valid(), serializer.errors
        assert serializer.validated_data['search'] == 'john'
        start = serializer.validated_data['startDate']
        assert (start.year, start.month, start.day) == (2024, 1, 15)


class TestFilterBuilder:
    """Test query-to-filter translation."""

    def test_unfiltered_query(self):
        query = build_submission_query({'page': 1})

        assert query.filter is None
        assert query.sort_field == 'created_at'
        assert query.sort_direction == 'desc'
        assert query.skip == 0
        assert query.limit == PAGE_SIZE

    def test_skip_and_sort(self):
        query = build_submission_query({'page': 3, 'sortBy': 'name', 'sortOrder': 'asc'})

        assert query.skip == 20
        assert query.limit == 10
        assert query.sort_field == 'name'
        assert query.sort_direction == 'asc'

    def test_search_clause(self):
        query = build_submission_query({'search': 'john'})

        assert query.filter == Or((
            Contains('name', 'john'),
            Contains('email', 'john'),
            Contains('message', 'john'),
        ))

    def test_empty_search_adds_no_clause(self):
        assert build_submission_query({'search': ''}).filter is None

    def test_combined_clauses(self):
        query = build_submission_query({
            'search': 'john',
            'startDate': date(2024, 1, 15),
            'endDate': date(2024, 1, 20),
        })

        assert isinstance(query.filter, And)
        search, lower, upper = query.filter.clauses
        assert isinstance(search, Or)
        assert lower == GreaterOrEqual('created_at', start_of_day(date(2024, 1, 15)))
        assert upper == LessOrEqual('created_at', end_of_day(date(2024, 1, 20)))

    def test_day_bounds(self):
        start = start_of_day(date(2024, 1, 15))
        end = end_of_day(datetime(2024, 1, 20, 8, 30))

        assert (start.hour, start.minute, start.second, start.microsecond) == (0, 0, 0, 0)
        assert end.date() == date(2024, 1, 20)
        assert (end.hour, end.minute, end.second, end.microsecond) == (23, 59, 59, 999000)

    def test_to_q(self):
        assert to_q(None) == Q()
        assert to_q(Contains('name', 'x')) == Q(name__icontains='x')
        assert to_q(GreaterOrEqual('created_at', 5)) == Q(created_at__gte=5)
        assert to_q(LessOrEqual('created_at', 5)) == Q(created_at__lte=5)

    def test_unsupported_expression(self):
        with pytest.raises(TypeError):
            to_q('name = 1')


class TestPagination:
    """Test pagination metadata."""

    def test_no_items(self):
        meta = paginate(0, 1)

        assert meta['totalPages'] == 0
        assert meta['hasNext'] is False
        assert meta['hasPrev'] is False

    def test_first_page(self):
        assert paginate(15, 1) == {
            'page': 1,
            'pageSize': 10,
            'totalItems': 15,
            'totalPages': 2,
            'hasNext': True,
            'hasPrev': False,
        }

    def test_last_page(self):
        meta = paginate(20, 2)

        assert meta['totalPages'] == 2
        assert meta['hasNext'] is False
        assert meta['hasPrev'] is True

    def test_page_past_end_not_clamped(self):
        meta = paginate(15, 5)

        assert meta['page'] == 5
        assert meta['totalPages'] == 2
        assert meta['hasNext'] is False


@pytest.mark.django_db
class TestRepository:
    """Test ORM-backed persistence."""

    def test_find_by_id_malformed(self):
        with pytest.raises(InvalidSubmissionId):
            SubmissionRepository().find_by_id('not-an-id')

    def test_find_by_id_missing(self):
        assert SubmissionRepository().find_by_id(uuid.uuid4()) is None

    def test_count_with_or_filter(self, make_submission):
        make_submission(name='Alice', email='alice@example.com', message='hello')
        make_submission(name='Bob', email='bob@example.com', message='ask alice')
        make_submission(name='Carol', email='carol@example.com', message='hi')

        expression = Or((Contains('name', 'ALICE'), Contains('message', 'alice')))
        assert SubmissionRepository().count(expression) == 2


class TestResponseMapper:
    """Test the submission response shape."""

    def test_fields(self, make_submission):
        submission = make_submission()
        data = SubmissionResponseSerializer(submission).data

        assert set(data) == {'id', 'name', 'email', 'phone', 'message', 'createdAt', 'updatedAt'}
        assert data['id'] == str(submission.pk)

    def test_missing_phone_omitted(self, make_submission):
        data = SubmissionResponseSerializer(make_submission(phone=None)).data

        assert 'phone' not in data


@pytest.mark.django_db
class TestSubmissionCreateView:
    """Test POST /api/submissions."""

    def test_create_submission(self, api_client):
        data = {
            'name': 'John Doe',
            'email': 'john@example.com',
            'phone': '0501234567',
            'message': 'Test',
        }

        response = api_client.post(LIST_URL, data)

        assert response.status_code == status.HTTP_201_CREATED
        for key, value in data.items():
            assert response.data[key] == value
        assert 'id' in response.data
        assert 'createdAt' in response.data
        assert 'updatedAt' in response.data
        submission = Submission.objects.get()
        assert str(submission.pk) == response.data['id']
        assert submission.created_at <= submission.updated_at

    def test_create_without_phone(self, api_client):
        response = api_client.post(LIST_URL, {
            'name': 'Jane Doe',
            'email': 'jane@example.com',
            'message': 'Test message without phone',
        })

        assert response.status_code == status.HTTP_201_CREATED
        assert 'phone' not in response.data

    def test_markup_is_stripped(self, api_client):
        response = api_client.post(LIST_URL, {
            'name': '<script>x</script>John',
            'email': 'a@b.com',
            'message': '<b>hi</b>',
        })

        assert response.status_code == status.HTTP_201_CREATED
        submission = Submission.objects.get()
        assert submission.name == 'John'
        assert submission.message == 'hi'

    def test_validation_failure(self, api_client):
        response = api_client.post(LIST_URL, {'email': 'invalid-email'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False
        assert set(response.data['fields']) == {'name', 'email', 'message'}
        assert any(line.startswith('email:') for line in response.data['message'])
        assert Submission.objects.count() == 0

    def test_unknown_field(self, api_client):
        response = api_client.post(LIST_URL, {
            'name': 'John',
            'email': 'john@example.com',
            'message': 'Hello',
            'isAdmin': True,
        })

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'isAdmin' in response.data['fields']


@pytest.mark.django_db
class TestSubmissionListView:
    """Test GET /api/submissions."""

    def test_empty_list(self, api_client):
        response = api_client.get(LIST_URL)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data'] == []
        assert response.data['pagination']['totalPages'] == 0

    def test_first_page_of_fifteen(self, api_client, make_submission):
        for i in range(15):
            make_submission(email=f'user{i}@example.com')

        response = api_client.get(LIST_URL, {'page': 1})

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data['data']) == 10
        assert response.data['pagination']['totalItems'] == 15
        assert response.data['pagination']['totalPages'] == 2
        assert response.data['pagination']['hasNext'] is True

    def test_pages_cover_every_record(self, api_client, make_submission):
        for i in range(23):
            make_submission(email=f'user{i}@example.com')

        seen = []
        total_pages = api_client.get(LIST_URL).data['pagination']['totalPages']
        for page in range(1, total_pages + 1):
            response = api_client.get(LIST_URL, {'page': page})
            seen.extend(item['id'] for item in response.data['data'])
            if page == 1:
                assert response.data['pagination']['hasPrev'] is False
            if page == total_pages:
                assert response.data['pagination']['hasNext'] is False

        assert total_pages == 3
        assert len(seen) == 23
        assert len(set(seen)) == 23

    def test_page_past_end(self, api_client, make_submission):
        make_submission()

        response = api_client.get(LIST_URL, {'page': 4})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data'] == []
        assert response.data['pagination']['totalItems'] == 1

    def test_page_far_past_end(self, api_client, make_submission):
        make_submission()

        response = api_client.get(LIST_URL, {'page': 10**18})

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data'] == []
        assert response.data['pagination']['totalItems'] == 1
        assert response.data['pagination']['hasNext'] is False

    def test_default_sort_newest_first(self, api_client, make_submission):
        make_submission(name='Old', created_at=utc(2024, 1, 1, 9))
        make_submission(name='New', created_at=utc(2024, 3, 1, 9))
        make_submission(name='Mid', created_at=utc(2024, 2, 1, 9))

        response = api_client.get(LIST_URL)

        assert [item['name'] for item in response.data['data']] == ['New', 'Mid', 'Old']

    def test_sort_by_name_reverses(self, api_client, make_submission):
        for name in ['Charlie', 'alpha', 'Bravo', 'Delta', 'Bravo']:
            make_submission(name=name)

        asc = api_client.get(LIST_URL, {'sortBy': 'name', 'sortOrder': 'asc'}).data['data']
        desc = api_client.get(LIST_URL, {'sortBy': 'name', 'sortOrder': 'desc'}).data['data']

        assert [item['id'] for item in asc] == [item['id'] for item in reversed(desc)]

    def test_search_unique_email(self, api_client, make_submission):
        target = make_submission(email='unique-xyz@example.com')
        make_submission(email='other@example.com')
        make_submission(email='third@example.com')

        response = api_client.get(LIST_URL, {'search': 'UNIQUE-XYZ'})

        assert [item['id'] for item in response.data['data']] == [str(target.pk)]
        assert response.data['pagination']['totalItems'] == 1

    def test_search_matches_message(self, api_client, make_submission):
        make_submission(message='Question about poultry feed')
        make_submission(message='Unrelated')

        response = api_client.get(LIST_URL, {'search': 'poultry'})

        assert len(response.data['data']) == 1

    def test_search_treats_regex_literally(self, api_client, make_submission):
        make_submission(message='Price is $5.00 (approx)')
        make_submission(message='Price is 5000')

        response = api_client.get(LIST_URL, {'search': '(approx)'})

        assert len(response.data['data']) == 1

    def test_start_date(self, api_client, make_submission):
        make_submission(name='Before', created_at=utc(2024, 1, 14, 23, 59, 59))
        make_submission(name='Start', created_at=utc(2024, 1, 15, 0, 0, 0))
        make_submission(name='After', created_at=utc(2024, 1, 20, 12))

        response = api_client.get(LIST_URL, {'startDate': '2024-01-15'})

        names = {item['name'] for item in response.data['data']}
        assert names == {'Start', 'After'}

    def test_end_date_is_inclusive(self, api_client, make_submission):
        make_submission(name='Inside', created_at=utc(2024, 1, 15, 23, 59, 59))
        make_submission(name='Outside', created_at=utc(2024, 1, 16, 0, 0, 0))

        response = api_client.get(LIST_URL, {'endDate': '2024-01-15'})

        assert [item['name'] for item in response.data['data']] == ['Inside']

    def test_search_and_date_range(self, api_client, make_submission):
        make_submission(name='John A', email='a@example.com', created_at=utc(2024, 1, 10, 12))
        make_submission(name='John B', email='b@example.com', created_at=utc(2024, 1, 15, 12))
        make_submission(name='Jane C', email='c@example.com', created_at=utc(2024, 1, 15, 13))

        response = api_client.get(LIST_URL, {
            'search': 'john',
            'startDate': '2024-01-15',
            'endDate': '2024-01-15',
        })

        assert [item['name'] for item in response.data['data']] == ['John B']

    @pytest.mark.parametrize('params', [
        {'sortBy': 'invalid'},
        {'page': 0},
        {'sortOrder': 'sideways'},
        {'startDate': 'not-a-date'},
        {'pageSize': 50},
    ])
    def test_invalid_query(self, api_client, params):
        response = api_client.get(LIST_URL, params)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['success'] is False


@pytest.mark.django_db
class TestSubmissionDetailView:
    """Test GET /api/submissions/:id."""

    def test_get_submission(self, api_client, make_submission):
        submission = make_submission()

        response = api_client.get(detail_url(submission.pk))

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == str(submission.pk)
        assert response.data['name'] == 'John Doe'
        assert response.data['email'] == 'john@example.com'

    def test_trailing_slash(self, api_client, make_submission):
        submission = make_submission()

        response = api_client.get(detail_url(submission.pk) + '/')

        assert response.status_code == status.HTTP_200_OK

    def test_unknown_id_returns_empty_object(self, api_client):
        response = api_client.get(detail_url(uuid.uuid4()))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {}

    def test_malformed_id(self, api_client):
        response = api_client.get(detail_url('not-a-valid-id'))

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['error'] == 'Invalid submission id'


@pytest.mark.django_db
class TestSubmissionAdmin:
    """Test that the admin is read-only."""

    def test_superuser_can_only_view(self, rf, admin_user, make_submission):
        model_admin = admin.site._registry[Submission]
        request = rf.get('/admin/submissions/submission/')
        request.user = admin_user
        submission = make_submission()

        assert model_admin.has_view_permission(request, submission) is True
        assert model_admin.has_add_permission(request) is False
        assert model_admin.has_change_permission(request, submission) is False
        assert model_admin.has_delete_permission(request, submission) is False


def test_health(api_client):
    response = api_client.get('/api/health')

    assert response.status_code == status.HTTP_200_OK
    assert response.data == {'status': 'ok'}
