"""
Use cases for the accounts service.

Routers and scripts call these services instead of driving repositories
directly.
"""
