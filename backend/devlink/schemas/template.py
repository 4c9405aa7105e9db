from pydantic import BaseModel
from typing import List


class TemplateInfo(BaseModel):
    id: str
    name: str
    description: str
    category: str


class TemplateListResponse(BaseModel):
    templates: List[TemplateInfo]
