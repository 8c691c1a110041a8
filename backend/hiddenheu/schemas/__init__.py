"""
HiddenHeu Backend — Pydantic Request/Response Schemas
=======================================================

What:  The API contract between the React client and this backend.
Why:   Input validation, camelCase serialization the client expects
       (`cityId`, `reviewCount`, `isFeatured`), and OpenAPI docs.
How:   Every schema derives from `APIModel`, which generates camelCase
       aliases, accepts either spelling on input, and can be built straight
       from a stored dataclass record (`from_attributes`).
"""
