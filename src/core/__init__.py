"""
Core business logic package for the Cal.com booking sync webhook.

Authentication, payload models, booking operations and the data API client
live here. Lambda handlers in src/handlers/ are thin wrappers that call into
core/.
"""

__all__: list[str] = []
