"""
Domain layer - Core business entities and domain logic.

This layer contains the product catalog entities and errors,
independent of Redis, FastAPI or any other infrastructure concern.
"""
