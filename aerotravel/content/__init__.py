"""SEO content generation."""

from .spinner import ContentSpinner

__all__ = ["ContentSpinner"]
