from app.models.batch import Batch, BatchAnalysis, BatchInterval
from app.models.user import User

__all__ = [
    "Batch",
    "BatchAnalysis",
    "BatchInterval",
    "User",
]
