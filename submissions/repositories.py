"""
Submission persistence.

Thin wrapper over the Django ORM exposing the create/find/count
operations the service needs.
"""
import uuid

from .filters import to_q
from .models import Submission


class InvalidSubmissionId(Exception):
    """Raised when an identifier is not a well-formed submission id."""
    pass


class SubmissionRepository:

    def __init__(self, model=Submission):
        self.model = model

    def create(self, data):
        return self.model.objects.create(**data)

    def find_all(self, query):
        """Return one window of submissions matching ``query``."""
        prefix = '-' if query.sort_direction == 'desc' else ''
        ordering = [f'{prefix}{query.sort_field}']
        if query.sort_field != 'pk':
            # Stable order for equal sort values
            ordering.append(f'{prefix}pk')

        queryset = (
            self.model.objects
            .filter(to_q(query.filter))
            .order_by(*ordering)
        )
        return list(queryset[query.skip:query.skip + query.limit])

    def find_by_id(self, submission_id):
        try:
            pk = uuid.UUID(str(submission_id))
        except ValueError:
            raise InvalidSubmissionId(submission_id)

        return self.model.objects.filter(pk=pk).first()

    def count(self, expression=None):
        return self.model.objects.filter(to_q(expression)).count()
