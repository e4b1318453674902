"""
Submission Service

Coordinates persistence and response mapping for the submission
endpoints. Input reaching this module has already been sanitized and
validated by the request serializers.
"""
import logging

from .filters import build_submission_query, paginate
from .repositories import SubmissionRepository
from .serializers import SubmissionResponseSerializer

logger = logging.getLogger(__name__)


class SubmissionService:

    def __init__(self, repository=None):
        self.repository = repository or SubmissionRepository()

    def create(self, validated_data):
        """Persist a new submission and return its API representation."""
        submission = self.repository.create(validated_data)
        logger.info(f"Submission created: {submission.pk}")
        return SubmissionResponseSerializer(submission).data

    def find_all(self, params):
        """
        Run a list query.

        Returns:
            dict: {'data': [...], 'pagination': {...}}
        """
        query = build_submission_query(params)

        total_items = self.repository.count(query.filter)
        if query.skip >= total_items:
            # Past the last page
            submissions = []
        else:
            submissions = self.repository.find_all(query)

        page = params.get('page') or 1
        logger.debug(
            f"Listed submissions page={page} sort={query.sort_field} "
            f"{query.sort_direction} total={total_items}"
        )

        return {
            'data': SubmissionResponseSerializer(submissions, many=True).data,
            'pagination': paginate(total_items, page),
        }

    def find_one(self, submission_id):
        """
        Look up a single submission.

        Returns None when the id does not resolve. Raises
        InvalidSubmissionId for malformed ids.
        """
        submission = self.repository.find_by_id(submission_id)
        if submission is None:
            return None
        return SubmissionResponseSerializer(submission).data
