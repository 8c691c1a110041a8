"""
HiddenHeu Backend — Application Package Initializer
===================================================

What: Marks the `hiddenheu` directory as a Python package.
Why:  Enables module imports like `from hiddenheu.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Uniqueness, auth, existence checks
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← Dataclass records + Pydantic
    ├─────────────────────────────────────┤
    │      Storage (In-Memory Store)      │  ← Collections + secondary indices
    └─────────────────────────────────────┘

    - Routes handle HTTP details (status codes, cookies) and delegate to services
    - Services own every policy decision; the store only stores and finds
    - Models are the stored records; Schemas are the camelCase API contract
    - Storage lives for the process lifetime and is re-seeded on every start
"""

__version__ = "1.0.0"
