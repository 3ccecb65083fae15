"""Shared utilities for the intake service."""
from utils.masks import FIELD_MASKS, apply_mask, mask_field

__all__ = [
    "FIELD_MASKS",
    "apply_mask",
    "mask_field",
]
