"""
Placement intake engine.

Resolves anonymous clients into durable identities, walks them through a
staged onboarding record and allocates at most one active bed interest
per identity.
"""

__version__ = "0.1.0"
