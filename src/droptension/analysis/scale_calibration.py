# Imports

## Packages
import numpy as np

## Custom code
from droptension.analysis.errors import (
    MissingCalibration,
    InsufficientCalibrationBand,
    InvalidScaleFactor,
)
from droptension.analysis.geometry import ImageSize, apex_band

CALIBRATION_BAND_FRACTION = 0.05  # fraction of image height below the apex
MIN_BAND_POINTS = 6

# Rough guess carried over from the first prototype. Only used when the
# settings opt in with allow_default_scale, never as a silent fallback.
DEFAULT_SCALE_MM_PER_PX = 0.01


class ScaleCalibrator:
    """
    Converts a known reference diameter (pipette, straw, needle) into a
    millimeter-per-pixel scale by measuring the width of the contour in a thin
    band below its topmost point.
    """

    def __init__(self, settings: dict = None):
        if settings is None:
            settings = {}
        calibration_settings = settings.get("calibration_settings", {})
        self.BAND_FRACTION = float(
            calibration_settings.get("band_fraction", CALIBRATION_BAND_FRACTION)
        )
        self.MIN_BAND_POINTS = int(
            calibration_settings.get("min_band_points", MIN_BAND_POINTS)
        )

    def band_width(self, pixel_points, image_size: ImageSize) -> float:
        band = apex_band(pixel_points, self.BAND_FRACTION * image_size.height)
        if len(band) < self.MIN_BAND_POINTS:
            raise InsufficientCalibrationBand(
                f"{len(band)} points in the reference band, "
                f"at least {self.MIN_BAND_POINTS} required"
            )
        width = float(band[:, 0].max() - band[:, 0].min())
        if not width > 0:
            raise InsufficientCalibrationBand("reference band has zero width")
        return width

    def calibrate(
        self, pixel_points, reference_diameter: float, image_size: ImageSize
    ) -> float:
        if reference_diameter is None or not reference_diameter > 0:
            raise MissingCalibration(
                f"reference diameter must be a positive number of millimeters, "
                f"got {reference_diameter!r}"
            )
        width_px = self.band_width(pixel_points, image_size)
        scale = reference_diameter / width_px
        check_scale_factor(scale)
        return scale


def check_scale_factor(scale: float) -> float:
    if scale is None or not np.isfinite(scale) or scale <= 0:
        raise InvalidScaleFactor(f"invalid scale factor {scale!r} mm/px")
    return scale


def calibrate(pixel_points, reference_diameter: float, image_size: ImageSize) -> float:
    return ScaleCalibrator().calibrate(pixel_points, reference_diameter, image_size)
