"""
Submission Serializers

Request validation for the public form and list queries, and the
response shape for stored submissions.
"""
from collections.abc import Mapping

from django.utils.dateparse import parse_date, parse_datetime
from rest_framework import serializers

from .filters import DEFAULT_SORT_BY, DEFAULT_SORT_ORDER, SORT_FIELDS, SORT_ORDERS
from .models import Submission
from .sanitizers import sanitize_text


# ==============================================================================
# FIELDS
# ==============================================================================

class SanitizedFieldMixin:
    """
    Strip markup from the raw value before the field's own checks run,
    so length and blank rules apply to the sanitized text.
    """

    def run_validation(self, data=serializers.empty):
        if isinstance(data, str):
            data = sanitize_text(data)
        return super().run_validation(data)

    def to_internal_value(self, data):
        # Numbers and booleans are not coerced to strings
        if not isinstance(data, str):
            self.fail('invalid')
        return super().to_internal_value(data)


class SanitizedCharField(SanitizedFieldMixin, serializers.CharField):
    pass


class SanitizedEmailField(SanitizedFieldMixin, serializers.EmailField):
    pass


class IsoDateField(serializers.Field):
    """Accepts an ISO 8601 date or date-time string."""

    default_error_messages = {
        'invalid': 'Must be a valid ISO 8601 date string.',
    }

    def to_internal_value(self, data):
        if not isinstance(data, str):
            self.fail('invalid')

        value = data.strip()
        try:
            parsed = parse_datetime(value) or parse_date(value)
        except ValueError:
            # Well formatted but not a real date, e.g. 2024-02-30
            self.fail('invalid')

        if parsed is None:
            self.fail('invalid')
        return parsed

    def to_representation(self, value):
        return value.isoformat()


# ==============================================================================
# REQUEST SERIALIZERS
# ==============================================================================

class StrictSerializer(serializers.Serializer):
    """
    Serializer that rejects keys it does not declare.

    Unknown keys are reported together with every other field error.
    """

    def to_internal_value(self, data):
        errors = {}
        value = None

        try:
            value = super().to_internal_value(data)
        except serializers.ValidationError as exc:
            errors.update(exc.detail)

        if isinstance(data, Mapping):
            for key in data:
                if key not in self.fields:
                    errors[key] = ['This field is not allowed.']

        if errors:
            raise serializers.ValidationError(errors)
        return value


class SubmissionCreateSerializer(StrictSerializer):
    """
    Public contact form submission.

    Every text field is sanitized before validation.
    """

    name = SanitizedCharField(
        max_length=100,
        help_text="Name of the person contacting us"
    )

    email = SanitizedEmailField(
        max_length=254,
        help_text="Valid email address for follow-up"
    )

    phone = SanitizedCharField(
        max_length=20,
        required=False,
        allow_blank=True,
        help_text="Optional phone number"
    )

    message = SanitizedCharField(
        max_length=1000,
        help_text="Message content (up to 1000 characters)"
    )


class SubmissionQuerySerializer(StrictSerializer):
    """Query parameters accepted by the submission list endpoint."""

    page = serializers.IntegerField(
        min_value=1,
        required=False,
        default=1
    )

    search = SanitizedCharField(
        required=False,
        allow_blank=True
    )

    sortBy = serializers.ChoiceField(
        choices=list(SORT_FIELDS),
        required=False,
        default=DEFAULT_SORT_BY
    )

    sortOrder = serializers.ChoiceField(
        choices=list(SORT_ORDERS),
        required=False,
        default=DEFAULT_SORT_ORDER
    )

    startDate = IsoDateField(required=False)

    endDate = IsoDateField(required=False)


# ==============================================================================
# RESPONSE SERIALIZERS
# ==============================================================================

class SubmissionResponseSerializer(serializers.ModelSerializer):
    """
    API shape of a stored submission.

    Attributes missing on the record (e.g. no phone) are left out of
    the output instead of being rendered as null.
    """

    id = serializers.CharField(source='pk', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Submission
        fields = ['id', 'name', 'email', 'phone', 'message', 'createdAt', 'updatedAt']

    def to_representation(self, instance):
        data = super().to_representation(instance)
        return {key: value for key, value in data.items() if value is not None}
