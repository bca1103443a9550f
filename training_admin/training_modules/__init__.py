"""Training modules and their assessments."""

from .models import Assessment, TrainingModule, normalize_designations


__all__ = ["Assessment", "TrainingModule", "normalize_designations"]
