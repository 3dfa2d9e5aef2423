import numpy as np
import pytest

from droptension.analysis.errors import DegenerateShape, InvalidScaleFactor
from droptension.analysis.geometry import effective_diameter, polygon_area
from droptension.analysis.physics import (
    DEFAULT_DENSITY,
    PhysicsModel,
    effective_diameter_px,
    effective_diameter_surface_tension,
    estimate,
    pendant_drop_surface_tension,
    resolve_density,
)

from conftest import circle_points


def test_two_millimeter_radius_of_water():
    # 40px at 0.05 mm/px is a 2mm apex radius
    assert estimate(40, 0.05, 1000) == pytest.approx(19.62)
    assert pendant_drop_surface_tension(40, 0.05, 1000) == pytest.approx(19.62)


def test_effective_diameter_model():
    # 2mm effective diameter: 1000 * 9.81 * 0.002^2 in mN/m
    value = estimate(40, 0.05, 1000, model=PhysicsModel.EFFECTIVE_DIAMETER_AREA)
    assert value == pytest.approx(39.24)
    assert value == pytest.approx(effective_diameter_surface_tension(40, 0.05, 1000))


def test_estimate_increases_with_density():
    densities = [500, 800, 1000, 1200, 13500]
    values = [estimate(50, 0.04, density) for density in densities]
    assert all(a < b for a, b in zip(values, values[1:]))


def test_estimate_increases_with_radius():
    radii = [1, 10, 25, 50, 400]
    values = [estimate(radius, 0.04, 998) for radius in radii]
    assert all(a < b for a, b in zip(values, values[1:]))


@pytest.mark.parametrize("density", [None, 0, -10, float("nan")])
def test_missing_density_means_water(density):
    assert resolve_density(density) == DEFAULT_DENSITY
    assert estimate(40, 0.05, density) == pytest.approx(estimate(40, 0.05, 1000))


@pytest.mark.parametrize("scale", [0.0, -0.05, float("nan")])
def test_invalid_scale_is_rejected(scale):
    with pytest.raises(InvalidScaleFactor):
        estimate(40, scale, 1000)


def test_physics_model_from_setting():
    assert PhysicsModel.from_setting("apex_circle_fit") is PhysicsModel.APEX_CIRCLE_FIT
    assert (
        PhysicsModel.from_setting(" Effective_Diameter_Area ")
        is PhysicsModel.EFFECTIVE_DIAMETER_AREA
    )
    assert (
        PhysicsModel.from_setting(PhysicsModel.APEX_CIRCLE_FIT)
        is PhysicsModel.APEX_CIRCLE_FIT
    )
    with pytest.raises(ValueError, match="unknown physics model"):
        PhysicsModel.from_setting("young_laplace")


def test_polygon_area_of_square():
    square = np.array([[0, 0], [10, 0], [10, 10], [0, 10]], dtype=float)
    assert polygon_area(square) == pytest.approx(100)
    assert polygon_area(square[::-1]) == pytest.approx(100)
    assert polygon_area(square[:2]) == 0.0


def test_effective_diameter_of_circle():
    assert effective_diameter(np.pi) == pytest.approx(2.0)
    points = circle_points(0, 0, 30, n_points=2000)
    assert effective_diameter_px(points) == pytest.approx(60, rel=1e-4)


def test_effective_diameter_needs_enclosed_area():
    line = np.column_stack([np.linspace(0, 300, 300), np.full(300, 50.0)])
    with pytest.raises(DegenerateShape):
        effective_diameter_px(line)
    with pytest.raises(DegenerateShape):
        effective_diameter_px(line[:2])
