"""SQLAlchemy Base class and model registry."""
from placement.models.base import Base


def import_models() -> None:
    """Import all models so they are registered on Base.metadata."""
    from placement.models import bed, interest, patient  # noqa: F401


import_models()

__all__ = ["Base", "import_models"]
