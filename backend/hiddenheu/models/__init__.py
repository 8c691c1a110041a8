"""
HiddenHeu Backend — Stored Records
====================================

What:  Plain dataclass records held by the in-memory store.
Why:   Records are what the store owns and mutates (e.g. Place.review_count);
       Pydantic schemas in `hiddenheu.schemas` are what the API exposes.
       Keeping them apart means a password hash can never leak through a
       response model by accident.
"""

from hiddenheu.models.category import Category
from hiddenheu.models.city import City
from hiddenheu.models.favorite import Favorite
from hiddenheu.models.place import Place
from hiddenheu.models.review import Review
from hiddenheu.models.testimonial import Testimonial
from hiddenheu.models.user import SUPPORTED_LANGUAGES, User

__all__ = [
    "Category",
    "City",
    "Favorite",
    "Place",
    "Review",
    "Testimonial",
    "User",
    "SUPPORTED_LANGUAGES",
]
