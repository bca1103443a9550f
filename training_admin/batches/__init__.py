"""Batches ("teams"): training cohorts, their members and modules."""

from .models import Batch, BatchEmployee, BatchModule


__all__ = ["Batch", "BatchEmployee", "BatchModule"]
