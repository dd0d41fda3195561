"""
Common types shared across all modules.

This module provides standardized data types for upstream face analysis
artifacts, ensuring consistency and type safety across the landmark
helpers and the quality measures.
"""

from src.common.types import BBox, FaceLandmarks, ImageBuffer, Landmark

__all__ = ["ImageBuffer", "BBox", "Landmark", "FaceLandmarks"]
