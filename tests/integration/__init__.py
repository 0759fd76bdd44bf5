"""
Integration tests for the product service.

Exercises the Redis repository against a live server:
1. Conditional writes (SET NX / SET XX) arbitrating concurrent requests
2. SSCAN cursor pagination over the product set
"""
