"""
Submission Models

Database schema for contact form submissions.
"""
import uuid
from django.db import models


class Submission(models.Model):
    """
    A contact form submission.

    Created once from the public form and read-only afterwards.
    """

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False
    )

    name = models.CharField(
        max_length=100,
        help_text="Name of the person contacting us"
    )

    email = models.EmailField(
        max_length=254,
        help_text="Email address for follow-up"
    )

    phone = models.CharField(
        max_length=20,
        null=True,
        blank=True,
        help_text="Optional phone number"
    )

    message = models.TextField(
        max_length=1000,
        help_text="The actual message content"
    )

    # Timestamps
    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,
        help_text="When the submission was received"
    )

    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the submission was last updated"
    )

    class Meta:
        db_table = 'submissions'
        ordering = ['-created_at']
        verbose_name = 'Submission'
        verbose_name_plural = 'Submissions'
        indexes = [
            models.Index(fields=['email'], name='submissions_email_idx'),
            models.Index(fields=['name'], name='submissions_name_idx'),
        ]

    def __str__(self):
        return f"{self.name} <{self.email}>"
