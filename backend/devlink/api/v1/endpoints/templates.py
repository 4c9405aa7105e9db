from fastapi import APIRouter, Query
from typing import Optional

from devlink.schemas.template import TemplateInfo, TemplateListResponse
from devlink.services.template_catalog import list_templates

router = APIRouter()


@router.get("", response_model=TemplateListResponse)
async def get_templates(
    category: Optional[str] = Query(None, description="modern, classic, creative, minimal or all")
):
    """List selectable portfolio templates"""
    return TemplateListResponse(
        templates=[TemplateInfo(**t.to_dict()) for t in list_templates(category)]
    )
