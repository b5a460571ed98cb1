"""Domain models for the application tracker."""

from .models import ActorContext, ActorRole, NormalizedApplication, PositionType, SourceKind
from .status import CanonicalStatus

__all__ = [
    "ActorContext",
    "ActorRole",
    "CanonicalStatus",
    "NormalizedApplication",
    "PositionType",
    "SourceKind",
]
