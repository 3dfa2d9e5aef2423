import numpy as np
import pytest

from droptension.analysis.circle_fitting import (
    ApexCircleFitter,
    fit_apex_circle,
    fit_circle,
)
from droptension.analysis.errors import DegenerateCircleFit, InsufficientPoints
from droptension.analysis.geometry import ImageSize

from conftest import circle_points


def test_eight_point_circle_is_recovered():
    points = circle_points(100, 100, 50, n_points=8)
    circle = fit_apex_circle(points, ImageSize(width=200, height=4000))

    assert circle.radius == pytest.approx(50, rel=0.01)
    assert circle.center_x == pytest.approx(100, abs=1e-6)
    assert circle.center_y == pytest.approx(100, abs=1e-6)


@pytest.mark.parametrize(
    "center_x, center_y, radius",
    [(0.0, 0.0, 1.0), (320.5, 240.25, 75.0), (1500.0, 3000.0, 12.5)],
)
def test_perfect_circle_round_trip(center_x, center_y, radius):
    circle = fit_circle(circle_points(center_x, center_y, radius, n_points=60))

    assert circle.center_x == pytest.approx(center_x, abs=1e-6 * max(radius, center_x, 1))
    assert circle.center_y == pytest.approx(center_y, abs=1e-6 * max(radius, center_y, 1))
    assert circle.radius == pytest.approx(radius, rel=1e-6)


def test_apex_cap_only_is_enough():
    # arc around the top of the circle (minimum y in image coordinates)
    points = circle_points(
        100, 100, 50, n_points=40, start=1.25 * np.pi, stop=1.75 * np.pi
    )
    circle = fit_apex_circle(points, ImageSize(width=200, height=4000))

    assert circle.radius == pytest.approx(50, rel=1e-6)
    assert circle.center_y == pytest.approx(100, rel=1e-6)


def test_only_the_apex_band_is_fitted():
    cap = circle_points(500, 300, 100, n_points=400)
    cap = cap[cap[:, 1] < 300]
    # straight sides below the cap would bias a fit over all points
    sides = np.concatenate(
        [
            np.column_stack([np.full(200, 400.0), np.linspace(300, 900, 200)]),
            np.column_stack([np.full(200, 600.0), np.linspace(300, 900, 200)]),
        ]
    )
    points = np.concatenate([cap, sides])
    image_size = ImageSize(width=1000, height=1000)

    fitter = ApexCircleFitter()
    band = fitter.apex_points(points, image_size)
    assert band[:, 1].max() <= 200 + 25

    circle = fitter.fit(points, image_size)
    assert circle.radius == pytest.approx(100, rel=1e-6)


def test_noisy_apex_stays_close():
    rng = np.random.default_rng(0)
    points = circle_points(400, 400, 120, n_points=300, start=np.pi, stop=2 * np.pi)
    points += rng.normal(scale=0.5, size=points.shape)
    circle = fit_apex_circle(points, ImageSize(width=800, height=800))

    assert circle.radius == pytest.approx(120, rel=0.05)


def test_horizontal_line_is_degenerate():
    points = np.column_stack([np.arange(10, dtype=float), np.full(10, 5.0)])
    with pytest.raises(DegenerateCircleFit):
        fit_apex_circle(points, ImageSize(width=100, height=4000))


def test_sloped_line_is_degenerate():
    x = np.arange(10, dtype=float)
    points = np.column_stack([x, 2 * x])
    with pytest.raises(DegenerateCircleFit):
        fit_apex_circle(points, ImageSize(width=100, height=4000))


def test_too_few_apex_points():
    points = circle_points(100, 100, 50, n_points=5)
    with pytest.raises(InsufficientPoints):
        fit_apex_circle(points, ImageSize(width=200, height=4000))


def test_band_fraction_from_settings():
    points = circle_points(100, 100, 50, n_points=8)
    fitter = ApexCircleFitter({"circle_fit_settings": {"band_fraction": 0.001}})
    # a 4px band only holds the topmost point
    with pytest.raises(InsufficientPoints):
        fitter.fit(points, ImageSize(width=200, height=4000))
