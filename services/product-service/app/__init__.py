"""
Product Service Package.

Product catalog CRUD over HTTP, stored in Redis.
"""

__version__ = "1.0.0"
