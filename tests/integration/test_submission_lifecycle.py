"""
End-to-end flow for contact submissions: submit through the public
form, then find the record again through the list and detail endpoints.
"""

import pytest
from rest_framework import status


pytestmark = pytest.mark.django_db


class TestSubmissionLifecycle:
    """Create submissions and read them back."""

    def test_create_then_fetch(self, api_client):
        """Fetching by the returned id yields the submitted fields."""
        payload = {
            'name': 'John Doe',
            'email': 'john@example.com',
            'phone': '0501234567',
            'message': 'Test',
        }

        created = api_client.post('/api/submissions', payload)
        assert created.status_code == status.HTTP_201_CREATED

        fetched = api_client.get(f"/api/submissions/{created.data['id']}")
        assert fetched.status_code == status.HTTP_200_OK
        for key, value in payload.items():
            assert fetched.data[key] == value
        assert fetched.data['createdAt'] == created.data['createdAt']

    def test_sanitized_values_are_stored(self, api_client):
        """Markup sent to the form never comes back out."""
        created = api_client.post('/api/submissions', {
            'name': '<script>alert("xss")</script>John Doe',
            'email': 'test@example.com',
            'message': '<b>Bold message</b> with <script>alert("xss")</script>',
        })
        assert created.status_code == status.HTTP_201_CREATED

        listed = api_client.get('/api/submissions', {'search': 'bold'})
        item = listed.data['data'][0]

        assert item['name'] == 'John Doe'
        assert item['message'] == 'Bold message with'
        assert '<' not in item['message']

    def test_list_walks_every_page(self, api_client):
        """Submitted records are all reachable through pagination."""
        for i in range(12):
            response = api_client.post('/api/submissions', {
                'name': f'Person {i:02d}',
                'email': f'person{i}@example.com',
                'message': f'Message number {i}',
            })
            assert response.status_code == status.HTTP_201_CREATED

        first = api_client.get('/api/submissions', {'sortBy': 'name', 'sortOrder': 'asc'})
        second = api_client.get('/api/submissions', {'sortBy': 'name', 'sortOrder': 'asc', 'page': 2})

        names = [item['name'] for item in first.data['data'] + second.data['data']]
        assert names == [f'Person {i:02d}' for i in range(12)]
        assert first.data['pagination']['hasNext'] is True
        assert second.data['pagination']['hasNext'] is False
        assert second.data['pagination']['hasPrev'] is True
