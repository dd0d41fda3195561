"""
Shared Constants for the Face Quality Assessment Pipeline

This module contains constants used across multiple modules to ensure
consistency and avoid duplication.
"""

# ============================================================================
# Landmark Layout Constants
# ============================================================================
# WFLW / ADNet 98-point layout
NUM_LANDMARKS_98 = 98

# ============================================================================
# Face Parsing Labels (CelebAMask-HQ / BiSeNet, 19 classes)
# ============================================================================
PARSING_BACKGROUND = 0
PARSING_HAT = 18

# ============================================================================
# Photometric Thresholds
# ============================================================================
UNDER_EXPOSURE_LUMINANCE = 25  # Pixels darker than this count as underexposed
OVER_EXPOSURE_LUMINANCE = 247  # Pixels brighter than this count as overexposed
LUMINANCE_HISTOGRAM_BINS = 256
