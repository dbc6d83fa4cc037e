# causeway/templates.py
# ------------------------------------------------------------
# Preset design inputs for common causeway types. The UI offers them as
# starting points; every value can be edited before calculating.
#
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from .errors import UnknownCategoryError
from .models import DesignInput


@dataclass(frozen=True)
class DesignTemplate:
    name: str
    description: str
    inputs: DesignInput


TEMPLATES: List[DesignTemplate] = [
    DesignTemplate(
        "Small Pedestrian Bridge",
        "Lightweight design for foot traffic",
        DesignInput(length=30, width=3, height=1.5, water_depth=1.0,
                    soil_type="medium", load_type="pedestrian", safety_factor=2.5),
    ),
    DesignTemplate(
        "Standard Road Causeway",
        "Medium-duty for light vehicles",
        DesignInput(length=100, width=8, height=2, water_depth=1.5,
                    soil_type="medium", load_type="light", safety_factor=2.5),
    ),
    DesignTemplate(
        "Heavy Duty Bridge",
        "Reinforced for heavy vehicles",
        DesignInput(length=150, width=10, height=3, water_depth=2.5,
                    soil_type="hard", load_type="heavy", safety_factor=3.0),
    ),
    DesignTemplate(
        "Railway Crossing",
        "High-strength for rail traffic",
        DesignInput(length=200, width=12, height=3.5, water_depth=2.0,
                    soil_type="hard", load_type="railway", safety_factor=3.5),
    ),
    DesignTemplate(
        "Flood-Prone Area",
        "Elevated design for high water",
        DesignInput(length=120, width=8, height=4, water_depth=3.5,
                    soil_type="soft", load_type="light", safety_factor=3.0),
    ),
    DesignTemplate(
        "Urban Connector",
        "Compact design for city areas",
        DesignInput(length=50, width=6, height=1.8, water_depth=1.2,
                    soil_type="hard", load_type="light", safety_factor=2.5),
    ),
]


def template_names() -> List[str]:
    return [t.name for t in TEMPLATES]


def get_template(name: str) -> DesignTemplate:
    """Case-insensitive lookup; raises UnknownCategoryError for unknown names."""
    key = name.strip().lower()
    for template in TEMPLATES:
        if template.name.lower() == key:
            return template
    raise UnknownCategoryError("design template", name, template_names())


__all__ = ["DesignTemplate", "TEMPLATES", "template_names", "get_template"]
