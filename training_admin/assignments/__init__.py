"""Post-training assignments.

Provides:
- Follow-up deliverables per employee and module
- Submission and review tracking
"""

from .models import PostSessionAssignment, PostSessionStatus


__all__ = [
    "PostSessionAssignment",
    "PostSessionStatus",
]
