"""
Submission Views

API endpoints for submitting the contact form and browsing submissions.
"""
import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .repositories import InvalidSubmissionId
from .serializers import SubmissionCreateSerializer, SubmissionQuerySerializer
from .services import SubmissionService

logger = logging.getLogger(__name__)


def flatten_errors(errors):
    """Turn serializer errors into a flat list of 'field: message' strings."""
    messages = []
    for field, field_errors in errors.items():
        if not isinstance(field_errors, (list, tuple)):
            field_errors = [field_errors]
        for error in field_errors:
            messages.append(f"{field}: {error}")
    return messages


def validation_failed(errors):
    return Response(
        {
            'success': False,
            'error': 'Validation failed',
            'fields': errors,
            'message': flatten_errors(errors)
        },
        status=status.HTTP_400_BAD_REQUEST
    )


class SubmissionListCreateView(APIView):
    """
    Submit the contact form or list submissions.

    POST /api/submissions
    GET  /api/submissions

    Query Parameters (GET):
    - page: Page number (default: 1, page size fixed at 10)
    - search: Search in name, email, or message
    - sortBy: createdAt, name or email (default: createdAt)
    - sortOrder: asc or desc (default: desc)
    - startDate / endDate: ISO dates bounding createdAt (inclusive)
    """

    permission_classes = [AllowAny]
    service_class = SubmissionService

    def get(self, request):
        """List submissions."""
        serializer = SubmissionQuerySerializer(data=request.query_params.dict())

        if not serializer.is_valid():
            logger.info(f"Rejected submission query: {flatten_errors(serializer.errors)}")
            return validation_failed(serializer.errors)

        result = self.service_class().find_all(serializer.validated_data)
        return Response(result, status=status.HTTP_200_OK)

    def post(self, request):
        """Create a submission."""
        serializer = SubmissionCreateSerializer(data=request.data)

        if not serializer.is_valid():
            logger.info(f"Rejected submission: {flatten_errors(serializer.errors)}")
            return validation_failed(serializer.errors)

        submission = self.service_class().create(serializer.validated_data)
        return Response(submission, status=status.HTTP_201_CREATED)


class SubmissionDetailView(APIView):
    """
    Get a single submission.

    GET /api/submissions/:id

    An unknown id yields an empty object with status 200.
    """

    permission_classes = [AllowAny]
    service_class = SubmissionService

    def get(self, request, id):
        """Retrieve a submission."""
        try:
            submission = self.service_class().find_one(id)
        except InvalidSubmissionId:
            return Response(
                {'success': False, 'error': 'Invalid submission id'},
                status=status.HTTP_400_BAD_REQUEST
            )

        return Response(submission or {}, status=status.HTTP_200_OK)


class HealthView(APIView):
    """Liveness probe."""

    permission_classes = [AllowAny]

    def get(self, request):
        return Response({'status': 'ok'})
