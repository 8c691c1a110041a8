"""HiddenHeu Backend — Category Record."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Category:
    # icon and color_class are symbolic names the client maps to styles
    id: int
    name: str
    description: str
    icon: str
    color_class: Optional[str] = None
