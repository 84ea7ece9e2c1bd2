"""
Content Spinner Service.

Provides a singleton instance of the ContentSpinner for API endpoints.
"""

from typing import Optional

from aerotravel.content.spinner import ContentSpinner

_content_spinner: Optional[ContentSpinner] = None


def get_content_spinner() -> ContentSpinner:
    global _content_spinner
    if _content_spinner is None:
        _content_spinner = ContentSpinner()
    return _content_spinner
