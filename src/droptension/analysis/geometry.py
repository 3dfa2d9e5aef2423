# Imports

## Packages
import numpy as np
from dataclasses import dataclass


@dataclass(frozen=True)
class ImageSize:
    width: int
    height: int

    def __post_init__(self):
        if int(self.width) <= 0 or int(self.height) <= 0:
            raise ValueError(
                f"image size must be positive, got {self.width}x{self.height}"
            )


@dataclass(frozen=True)
class BoundingBox:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center_x(self) -> float:
        return (self.min_x + self.max_x) / 2

    def is_finite(self) -> bool:
        return bool(
            np.all(np.isfinite([self.min_x, self.min_y, self.max_x, self.max_y]))
        )


def as_image_size(image_size) -> ImageSize:
    """Accept an ImageSize or a (width, height) pair in pixels."""
    if isinstance(image_size, ImageSize):
        return image_size
    width, height = image_size
    return ImageSize(width=int(width), height=int(height))


def as_points(contour) -> np.ndarray:
    """
    Coerce a contour (list of (x, y) pairs, OpenCV (N, 1, 2) array, ...) into
    a float (N, 2) array.
    """
    points = np.asarray(contour, dtype=float)
    if points.size == 0:
        return points.reshape(0, 2)
    return points.reshape(-1, 2)


def to_pixel_space(normalized_points, image_size: ImageSize) -> np.ndarray:
    points = as_points(normalized_points)
    return points * np.array([image_size.width, image_size.height], dtype=float)


def to_normalized_space(pixel_points, image_size: ImageSize) -> np.ndarray:
    points = as_points(pixel_points)
    return points / np.array([image_size.width, image_size.height], dtype=float)


def bounding_box(points) -> BoundingBox:
    points = as_points(points)
    if len(points) == 0:
        return BoundingBox(np.nan, np.nan, np.nan, np.nan)
    min_x, min_y = points.min(axis=0)
    max_x, max_y = points.max(axis=0)
    return BoundingBox(float(min_x), float(min_y), float(max_x), float(max_y))


def apex_band(pixel_points, band_height: float) -> np.ndarray:
    """
    Points lying within band_height below the topmost point (minimum y).
    """
    points = as_points(pixel_points)
    if len(points) == 0:
        return points
    top = points[:, 1].min()
    return points[points[:, 1] <= top + band_height]


def polygon_area(pixel_points) -> float:
    """
    Area enclosed by a closed contour using the Shoelace formula.
    Contours with fewer than three points enclose no area.
    """
    points = as_points(pixel_points)
    if len(points) < 3:
        return 0.0
    x = points[:, 0]
    y = points[:, 1]
    x_next = np.roll(x, -1)
    y_next = np.roll(y, -1)
    return float(abs(np.sum(x * y_next - x_next * y)) / 2)


def effective_diameter(area: float) -> float:
    """Diameter of the circle with the same area: d = 2 * sqrt(area / pi)."""
    return float(2 * np.sqrt(area / np.pi))
