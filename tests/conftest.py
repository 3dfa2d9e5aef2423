import numpy as np
import pytest

from droptension.analysis.geometry import ImageSize


def polygon_contour(vertices, points_per_edge):
    """Closed contour sampled evenly along each edge, end points excluded."""
    vertices = np.asarray(vertices, dtype=float)
    points = []
    for start, end in zip(vertices, np.roll(vertices, -1, axis=0)):
        t = np.arange(points_per_edge) / points_per_edge
        points.append(start + t[:, None] * (end - start))
    return np.concatenate(points)


def hexagon_contour(height=0.60, width=0.30, chamfer=0.02, n_points=600):
    """
    Tall hexagon centered on x = 0.5 with short pointed caps and vertical
    sides, in normalized coordinates.
    """
    top = 0.5 - height / 2
    bottom = 0.5 + height / 2
    left = 0.5 - width / 2
    right = 0.5 + width / 2
    vertices = [
        (left, top + chamfer),
        (0.5, top),
        (right, top + chamfer),
        (right, bottom - chamfer),
        (0.5, bottom),
        (left, bottom - chamfer),
    ]
    return polygon_contour(vertices, n_points // 6)


def capsule_contour(cap_points=200, side_points=150, chamfer_points=50):
    """
    Tube with a semicircular top (center (0.5, 0.35), radius 0.15) and a
    shallow pointed bottom, in normalized coordinates.
    """
    angles = np.linspace(np.pi, 2 * np.pi, cap_points, endpoint=False)
    cap = np.column_stack([0.5 + 0.15 * np.cos(angles), 0.35 + 0.15 * np.sin(angles)])
    lower = [(0.65, 0.35), (0.65, 0.78), (0.5, 0.8), (0.35, 0.78), (0.35, 0.35)]
    counts = [side_points, chamfer_points, chamfer_points, side_points]
    segments = [cap]
    for (start, end, count) in zip(lower[:-1], lower[1:], counts):
        start = np.asarray(start)
        end = np.asarray(end)
        t = np.arange(count) / count
        segments.append(start + t[:, None] * (end - start))
    return np.concatenate(segments)


def circle_points(center_x, center_y, radius, n_points, start=0.0, stop=2 * np.pi):
    angles = np.linspace(start, stop, n_points, endpoint=False)
    return np.column_stack(
        [center_x + radius * np.cos(angles), center_y + radius * np.sin(angles)]
    )


@pytest.fixture
def image_size():
    return ImageSize(width=1000, height=1000)


@pytest.fixture
def hexagon():
    return hexagon_contour()


@pytest.fixture
def settings(tmp_path):
    return {
        "file_settings": {
            "output_folder": str(tmp_path / "experiments"),
            "exp_tag": "test",
            "data_folder": "data",
            "meta_data_folder": "meta_data",
        },
        "measurement_settings": {
            "physics_model": "apex_circle_fit",
            "validate_contour": True,
            "reference_diameter_mm": 5.0,
            "density": 1000,
            "allow_default_scale": False,
        },
    }
