"""Status mutation coordinator and its result types."""

from .coordinator import StatusMutationCoordinator
from .models import BulkMutationResult, MutationResult

__all__ = ["StatusMutationCoordinator", "MutationResult", "BulkMutationResult"]
