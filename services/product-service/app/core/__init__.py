"""
Core infrastructure shared by the service (store connection).
"""
