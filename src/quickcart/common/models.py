"""Shared database model pieces.

Provides a TimestampMixin with created_at/updated_at columns and a helper
that produces KSUIDs (K-Sortable Unique IDentifiers), which the features use
as their public, URL-safe identifiers instead of exposing integer keys."""

from tortoise import fields, models
from ksuid import ksuid


def generate_ksuid():
    """Generate a KSUID string.

    KSUIDs are 27 characters, timestamp prefixed and sort chronologically.

    Returns:
        str: A string representation of the generated KSUID.
    """
    return str(ksuid.Ksuid())


class TimestampMixin(models.Model):
    created_at = fields.DatetimeField(auto_now_add=True)
    updated_at = fields.DatetimeField(auto_now=True)

    class Meta:
        abstract = True
