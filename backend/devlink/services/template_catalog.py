"""Selectable visual templates. Ids are not validated on create/replace."""
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional


@dataclass(frozen=True)
class PortfolioTemplate:
    id: str
    name: str
    description: str
    category: str  # modern | classic | creative | minimal

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


TEMPLATES: List[PortfolioTemplate] = [
    PortfolioTemplate(
        id="modern",
        name="Modern",
        description="Default responsive layout with a clean card-based design",
        category="modern",
    ),
    PortfolioTemplate(
        id="dark-cyber",
        name="Cyber Dark",
        description="Modern dark theme with neon accents and cyberpunk aesthetics",
        category="modern",
    ),
    PortfolioTemplate(
        id="light-modern",
        name="Clean Modern",
        description="Clean and professional light theme with subtle animations",
        category="modern",
    ),
    PortfolioTemplate(
        id="gradient-vibrant",
        name="Vibrant Gradient",
        description="Bold gradient theme with vibrant colors and dynamic animations",
        category="creative",
    ),
    PortfolioTemplate(
        id="minimal-elegant",
        name="Minimal Elegant",
        description="Minimalist design with elegant typography and subtle interactions",
        category="minimal",
    ),
    PortfolioTemplate(
        id="glass-morphism",
        name="Glass Morphism",
        description="Modern glass effect with blur and transparency",
        category="modern",
    ),
    PortfolioTemplate(
        id="retro-wave",
        name="Retro Wave",
        description="80s inspired retro wave aesthetic with neon colors",
        category="creative",
    ),
]

CATEGORIES = ("modern", "classic", "creative", "minimal")


def list_templates(category: Optional[str] = None) -> List[PortfolioTemplate]:
    """All templates, or only those in category ("all" or None means no filter)"""
    if not category or category == "all":
        return list(TEMPLATES)
    return [t for t in TEMPLATES if t.category == category]


def get_template(template_id: str) -> Optional[PortfolioTemplate]:
    return next((t for t in TEMPLATES if t.id == template_id), None)
