# Imports

## Packages
import numpy as np
from dataclasses import dataclass

## Custom code
from droptension.analysis.errors import InsufficientPoints, DegenerateCircleFit
from droptension.analysis.geometry import ImageSize, as_points, apex_band

APEX_BAND_FRACTION = 0.025  # fraction of image height below the apex
MIN_APEX_POINTS = 6
DENOMINATOR_TOLERANCE = 1e-6


@dataclass(frozen=True)
class FittedCircle:
    center_x: float
    center_y: float
    radius: float


def fit_circle(points, tolerance: float = DENOMINATOR_TOLERANCE) -> FittedCircle:
    """
    Algebraic least-squares circle fit (Kasa).

    Minimizes sum((x^2 + y^2 - D*x - E*y - F)^2) in closed form from the
    first to third order moments of the points, so the cost is a single pass
    over the data and no iterative refinement is done.

    Args:
        points: (N, 2) pixel coordinates.
        tolerance (float): smallest absolute determinant accepted.

    Returns:
        FittedCircle: center and RMS radius in pixels.

    Raises:
        DegenerateCircleFit: the points are (nearly) collinear or the radius
            comes out non-finite.
    """
    points = as_points(points)
    n = len(points)
    x = points[:, 0]
    y = points[:, 1]

    sum_x = x.sum()
    sum_y = y.sum()
    sum_xx = (x * x).sum()
    sum_yy = (y * y).sum()
    sum_xy = (x * y).sum()
    sum_xxx = (x * x * x).sum()
    sum_yyy = (y * y * y).sum()
    sum_xyy = (x * y * y).sum()
    sum_xxy = (x * x * y).sum()

    C = n * sum_xx - sum_x**2
    D = n * sum_xy - sum_x * sum_y
    E = n * sum_yy - sum_y**2
    G = 0.5 * (n * sum_xxx + n * sum_xyy - (sum_xx + sum_yy) * sum_x)
    H = 0.5 * (n * sum_yyy + n * sum_xxy - (sum_xx + sum_yy) * sum_y)

    denominator = C * E - D**2
    if not abs(denominator) > tolerance:
        raise DegenerateCircleFit(
            f"fit determinant {denominator:.3g} is within {tolerance:g} of zero"
        )

    center_x = (G * E - D * H) / denominator
    center_y = (C * H - D * G) / denominator

    mean_x = sum_x / n
    mean_y = sum_y / n
    radius_squared = (
        (center_x - mean_x) ** 2
        + (center_y - mean_y) ** 2
        + (sum_xx + sum_yy) / n
        - mean_x**2
        - mean_y**2
    )
    if not np.isfinite(radius_squared) or radius_squared <= 0:
        raise DegenerateCircleFit(f"fitted radius is not positive ({radius_squared!r})")

    return FittedCircle(
        center_x=float(center_x),
        center_y=float(center_y),
        radius=float(np.sqrt(radius_squared)),
    )


class ApexCircleFitter:
    def __init__(self, settings: dict = None):
        if settings is None:
            settings = {}
        circle_fit_settings = settings.get("circle_fit_settings", {})
        self.BAND_FRACTION = float(
            circle_fit_settings.get("band_fraction", APEX_BAND_FRACTION)
        )
        self.MIN_POINTS = int(circle_fit_settings.get("min_points", MIN_APEX_POINTS))
        self.TOLERANCE = float(
            circle_fit_settings.get("denominator_tolerance", DENOMINATOR_TOLERANCE)
        )

    def apex_points(self, pixel_points, image_size: ImageSize) -> np.ndarray:
        return apex_band(pixel_points, self.BAND_FRACTION * image_size.height)

    def fit(self, pixel_points, image_size: ImageSize) -> FittedCircle:
        band = self.apex_points(pixel_points, image_size)
        if len(band) < self.MIN_POINTS:
            raise InsufficientPoints(
                f"{len(band)} points in the apex band, at least {self.MIN_POINTS} required"
            )
        return fit_circle(band, tolerance=self.TOLERANCE)


def fit_apex_circle(pixel_points, image_size: ImageSize) -> FittedCircle:
    return ApexCircleFitter().fit(pixel_points, image_size)
