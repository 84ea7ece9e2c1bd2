"""
Content Endpoints.
"""

from fastapi import APIRouter

from aerotravel.core.models.io.content import SpinRequest, SpunContent
from aerotravel.server.services.deps import ContentSpinnerDep

router = APIRouter()


@router.post(
    "/spin",
    response_model=SpunContent,
    summary="Spin SEO Content",
    description=(
        "Generate an SEO article for a topic. When the LLM is unavailable or its output is unusable, "
        "a template article is returned with source 'fallback'."
    ),
)
async def spin_content(payload: SpinRequest, spinner: ContentSpinnerDep) -> SpunContent:
    return await spinner.spin(payload)
