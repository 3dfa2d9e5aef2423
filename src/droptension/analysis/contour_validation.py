# Imports

## Packages
import numpy as np

## Custom code
from droptension.analysis.errors import (
    MeasurementFailure,
    InsufficientPoints,
    DegenerateShape,
)
from droptension.analysis.geometry import (
    ImageSize,
    as_points,
    bounding_box,
    to_pixel_space,
)

MIN_CONTOUR_POINTS = 200
MIN_NORMALIZED_HEIGHT = 0.30
CENTER_TOLERANCE = 0.25  # fraction of image width
N_SLICES = 6
SLICE_TOLERANCE = 0.03  # fraction of contour pixel height
MIN_SLICE_POINTS = 5  # slices with this many points or fewer are skipped
MIN_USABLE_SLICES = 3
MAX_WIDTH_DEVIATION = 0.25  # fraction of mean slice width
MAX_SYMMETRY_IMBALANCE = 0.20  # fraction of point count


class ContourValidator:
    """
    Decides whether a detected contour looks like a measurable target: a tall,
    centered, left-right symmetric silhouette of roughly constant width
    (cup, tube or droplet seen from the side).
    """

    def __init__(self, settings: dict = None):
        if settings is None:
            settings = {}
        validation_settings = settings.get("validation_settings", {})
        self.MIN_POINTS = int(
            validation_settings.get("min_points", MIN_CONTOUR_POINTS)
        )
        self.MIN_HEIGHT = float(
            validation_settings.get("min_normalized_height", MIN_NORMALIZED_HEIGHT)
        )
        self.CENTER_TOLERANCE = float(
            validation_settings.get("center_tolerance", CENTER_TOLERANCE)
        )
        self.N_SLICES = int(validation_settings.get("n_slices", N_SLICES))
        self.SLICE_TOLERANCE = float(
            validation_settings.get("slice_tolerance", SLICE_TOLERANCE)
        )
        self.MIN_SLICE_POINTS = int(
            validation_settings.get("min_slice_points", MIN_SLICE_POINTS)
        )
        self.MIN_USABLE_SLICES = int(
            validation_settings.get("min_usable_slices", MIN_USABLE_SLICES)
        )
        self.MAX_WIDTH_DEVIATION = float(
            validation_settings.get("max_width_deviation", MAX_WIDTH_DEVIATION)
        )
        self.MAX_SYMMETRY_IMBALANCE = float(
            validation_settings.get("max_symmetry_imbalance", MAX_SYMMETRY_IMBALANCE)
        )

    def validate(self, contour, image_size: ImageSize) -> bool:
        try:
            self.check(contour, image_size)
        except MeasurementFailure:
            return False
        return True

    def check(self, contour, image_size: ImageSize, pixel_points=None):
        """
        Run all checks in order and raise on the first one that fails.

        Args:
            contour: normalized contour points, both axes in [0, 1].
            image_size (ImageSize): size of the image the contour came from.
            pixel_points: the same contour already converted to pixel space.
                Converted here when not given.

        Raises:
            InsufficientPoints: fewer than MIN_POINTS points.
            DegenerateShape: any of the geometric checks failed.
        """
        normalized = as_points(contour)
        n_points = len(normalized)
        if n_points < self.MIN_POINTS:
            raise InsufficientPoints(
                f"contour has {n_points} points, at least {self.MIN_POINTS} required"
            )

        box = bounding_box(normalized)
        if not box.height > self.MIN_HEIGHT:
            raise DegenerateShape(
                f"normalized height {box.height:.3f} does not exceed {self.MIN_HEIGHT:.2f}"
            )
        if not box.height > box.width:
            raise DegenerateShape(
                f"contour is not taller than wide ({box.height:.3f} <= {box.width:.3f})"
            )

        if pixel_points is None:
            pixel_points = to_pixel_space(normalized, image_size)
        else:
            pixel_points = as_points(pixel_points)
        pixel_box = bounding_box(pixel_points)
        if not pixel_box.is_finite():
            raise DegenerateShape("pixel bounding box is not finite")

        self._check_centering(pixel_box, image_size)
        self._check_constant_width(pixel_points, pixel_box)
        self._check_symmetry(pixel_points, pixel_box)

    def _check_centering(self, pixel_box, image_size: ImageSize):
        offset = abs(pixel_box.center_x - image_size.width / 2)
        if offset > self.CENTER_TOLERANCE * image_size.width:
            raise DegenerateShape(
                f"contour is off-center by {offset:.1f}px "
                f"(limit {self.CENTER_TOLERANCE * image_size.width:.1f}px)"
            )

    def _check_constant_width(self, pixel_points: np.ndarray, pixel_box):
        widths = self.slice_widths(pixel_points, pixel_box)
        if len(widths) < self.MIN_USABLE_SLICES:
            raise DegenerateShape(
                f"only {len(widths)} usable slices, {self.MIN_USABLE_SLICES} required"
            )
        mean_width = float(np.mean(widths))
        if not mean_width > 0:
            raise DegenerateShape("mean slice width is zero")
        deviation = float(np.mean(np.abs(np.asarray(widths) - mean_width)))
        if deviation >= self.MAX_WIDTH_DEVIATION * mean_width:
            raise DegenerateShape(
                f"slice widths vary too much (deviation {deviation:.1f}px "
                f"on mean {mean_width:.1f}px)"
            )

    def slice_widths(self, pixel_points: np.ndarray, pixel_box) -> list:
        """
        Local horizontal width of the contour at evenly spaced heights.
        Slices with too few points are left out.
        """
        height = pixel_box.height
        tolerance = self.SLICE_TOLERANCE * height
        widths = []
        for i in range(self.N_SLICES):
            level = pixel_box.min_y + (i + 0.5) * height / self.N_SLICES
            in_band = np.abs(pixel_points[:, 1] - level) <= tolerance
            band_x = pixel_points[in_band, 0]
            if len(band_x) <= self.MIN_SLICE_POINTS:
                continue
            widths.append(float(band_x.max() - band_x.min()))
        return widths

    def _check_symmetry(self, pixel_points: np.ndarray, pixel_box):
        mid_x = pixel_box.center_x
        n_left = int(np.sum(pixel_points[:, 0] < mid_x))
        n_right = int(np.sum(pixel_points[:, 0] > mid_x))
        imbalance = abs(n_left - n_right)
        if imbalance >= self.MAX_SYMMETRY_IMBALANCE * len(pixel_points):
            raise DegenerateShape(
                f"contour is asymmetric ({n_left} points left, {n_right} right)"
            )


def validate(contour, image_size: ImageSize) -> bool:
    return ContourValidator().validate(contour, image_size)
