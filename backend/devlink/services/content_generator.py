"""
Content Generator - deterministic "AI" text for the portfolio editor

No model is called: every generator is a pure template-string function, so
the same input always produces the same text.
"""

from typing import Any, Dict, List, Optional, Union

from devlink.schemas.content import AboutDetails


DEFAULT_CONTENT = "Generated content based on your input."

PROJECT_DESCRIPTION = (
    "A comprehensive project that demonstrates modern development practices and "
    "innovative solutions. Built with cutting-edge technologies and designed for "
    "scalability and performance."
)

ABOUT_CLOSING = (
    "I'm always eager to learn new technologies and take on challenging projects "
    "that push the boundaries of what I can create."
)


def _split_list(value: Union[str, List[str], None]) -> List[str]:
    """'a, b' or ['a', 'b'] -> ['a', 'b']"""
    if not value:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [item.strip() for item in value if item and item.strip()]


def _skill_name(skill: Union[str, Dict[str, Any]]) -> str:
    if isinstance(skill, dict):
        return str(skill.get("name") or "")
    return str(skill)


def _technologies_text(value: Any) -> str:
    if isinstance(value, list):
        value = ", ".join(str(v) for v in value if v)
    return value or "various technologies"


def generate_about(user_details: Optional[Dict[str, Any]]) -> str:
    """
    Personalized about text:

        I'm {name}, a passionate {title} based in {location}. [education]
        [experience] [skills] [hobbies] [goals] {closing}

    Every sentence in brackets is included only when its input is present.
    """
    d = AboutDetails.model_validate(user_details or {})
    name = d.name or "the developer"
    professional_title = d.professional_title or "developer"
    location = d.location or "their location"

    about = f"I'm {name}, a passionate {professional_title} based in {location}. "

    if d.education:
        edu = d.education[0]
        about += (
            f"I'm currently pursuing {edu.get('degree')} in "
            f"{edu.get('field') or 'Computer Science'} at {edu.get('institution')}. "
        )

    if d.experience:
        exp = d.experience[0]
        about += (
            f"I work as a {exp.get('position')} at {exp.get('company')}, where I focus on "
            f"{_technologies_text(exp.get('technologies'))}. "
        )

    skill_names = [n for n in (_skill_name(s) for s in d.skills) if n]
    if skill_names:
        about += f"My technical expertise includes {', '.join(skill_names)}. "

    hobbies = _split_list(d.hobbies)
    if hobbies:
        about += f"When I'm not coding, I enjoy {', '.join(hobbies)}. "

    goals = _split_list(d.goals)
    if goals:
        about += f"My goal is to {' and '.join(goals)}. "

    about += ABOUT_CLOSING
    return about


def generate_project_description(context: Optional[str] = None) -> str:
    return PROJECT_DESCRIPTION


def generate_content(content_type: str, context: Optional[str] = None,
                     user_details: Optional[Dict[str, Any]] = None) -> str:
    """Dispatch on content type: about, project, anything else"""
    if content_type == "about":
        return generate_about(user_details)
    if content_type == "project":
        return generate_project_description(context)
    return DEFAULT_CONTENT
