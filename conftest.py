"""
Shared pytest fixtures.
"""
import pytest
from rest_framework.test import APIClient


@pytest.fixture
def api_client():
    """API client for making requests."""
    return APIClient()


@pytest.fixture
def make_submission(db):
    """Factory creating submissions directly through the ORM."""
    from submissions.models import Submission

    def _make(created_at=None, **overrides):
        data = {
            'name': 'John Doe',
            'email': 'john@example.com',
            'phone': '0501234567',
            'message': 'This is a test message.',
        }
        data.update(overrides)
        submission = Submission.objects.create(**data)
        if created_at is not None:
            # auto_now_add ignores values passed to create()
            Submission.objects.filter(pk=submission.pk).update(created_at=created_at)
            submission.refresh_from_db()
        return submission

    return _make
