from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any, Union


class GenerateContentRequest(BaseModel):
    type: str = Field(..., min_length=1)
    context: Optional[str] = None
    user_details: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GenerateContentResponse(BaseModel):
    content: str


class AboutDetails(BaseModel):
    """What the about-text generator reads out of user_details; every key optional"""
    name: Optional[str] = None
    professional_title: Optional[str] = None
    location: Optional[str] = None
    education: List[Dict[str, Any]] = []
    experience: List[Dict[str, Any]] = []
    skills: List[Union[Dict[str, Any], str]] = []
    # Comma-separated strings from the form, or already-split lists
    hobbies: Union[str, List[str], None] = None
    goals: Union[str, List[str], None] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")
