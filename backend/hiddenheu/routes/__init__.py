"""
HiddenHeu Backend — API Routes Package
========================================

Route Inventory:
    - auth.py:          POST /api/auth/register, /api/auth/login, /api/auth/logout
                        GET  /api/auth/me
    - cities.py:        GET  /api/cities, /api/cities/{id}, /api/categories
    - places.py:        GET  /api/places, /api/places/featured, /api/places/nearby
                        GET  /api/places/{id}, /api/places/{id}/narration
                        GET/POST /api/places/{id}/reviews
    - favorites.py:     GET/POST /api/favorites
                        GET/DELETE /api/favorites/{placeId}
    - testimonials.py:  GET  /api/testimonials
    - translate.py:     POST /api/translate
    - health.py:        GET  /health

Routes stay thin: pull inputs out of the request, call a service, wrap
the result in a response schema. Errors are raised, never returned.
"""
