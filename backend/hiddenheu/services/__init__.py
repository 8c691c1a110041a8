"""
HiddenHeu Backend — Services Layer
====================================

What:  Business rules sitting between the routes (HTTP) and MemStorage.
How:   Services are stateless singletons. The store, session registry and
       translation service are handed to them by the routes, which get
       them from FastAPI dependencies.

Service Inventory:
    - AuthService:         register, login, logout, current user
    - CatalogService:      cities, categories, places, nearby search, narration
    - ReviewService:       list and create reviews
    - FavoriteService:     list, add, remove and check favorites
    - TranslationService:  language resolution and LRU cache over a provider
    - TranslationProvider (abstract) / GeminiTranslator: the provider itself
"""
