"""Data transformation package."""

from staycal.transformers.availability_transformer import AvailabilityTransformer

__all__ = [
    "AvailabilityTransformer",
]
