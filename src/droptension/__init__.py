# DropTension
"""
Surface tension estimation from the outline of a droplet or container.

This package integrates:
- Contour validation for tall, centered, symmetric targets
- Pixel to millimeter calibration from a known reference diameter
- Algebraic circle fitting of the droplet apex
- Pendant drop and effective diameter surface tension models
"""

__version__ = "0.1.0"

from droptension.measurement import measure, MeasurementResult, MeasurementPipeline

__all__ = ['analysis', 'hardware', 'utils', 'measure', 'MeasurementResult', 'MeasurementPipeline']
