# Imports

## Packages
import numpy as np
from enum import Enum

## Custom code
from droptension.analysis.errors import DegenerateShape
from droptension.analysis.geometry import polygon_area, effective_diameter
from droptension.analysis.scale_calibration import check_scale_factor

GRAVITY_CONSTANT = 9.81  # m/s^2
DEFAULT_DENSITY = 1000.0  # kg/m^3, water; the operator may leave density empty
MIN_ENCLOSED_AREA_PX2 = 1.0


class PhysicsModel(Enum):
    """
    Formula used to turn the measured length into a surface tension.

    APEX_CIRCLE_FIT: pendant drop approximation on the apex radius,
        gamma = rho * g * R^2 / 2.
    EFFECTIVE_DIAMETER_AREA: diameter of the circle with the same area as the
        contour, gamma = rho * g * d_eff^2.
    """

    APEX_CIRCLE_FIT = "apex_circle_fit"
    EFFECTIVE_DIAMETER_AREA = "effective_diameter_area"

    @classmethod
    def from_setting(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            options = ", ".join(model.value for model in cls)
            raise ValueError(
                f"unknown physics model {value!r}, choose one of: {options}"
            ) from None


# decimals shown to the operator per model
REPORT_DECIMALS = {
    PhysicsModel.APEX_CIRCLE_FIT: 2,
    PhysicsModel.EFFECTIVE_DIAMETER_AREA: 1,
}


def resolve_density(density: float = None) -> float:
    if density is None or not np.isfinite(density) or density <= 0:
        return DEFAULT_DENSITY
    return float(density)


def pendant_drop_surface_tension(
    radius_px: float, scale_factor: float, density: float = None
) -> float:
    """Surface tension in mN/m from the apex radius in pixels."""
    check_scale_factor(scale_factor)
    radius_m = radius_px * scale_factor / 1000
    surface_tension = resolve_density(density) * GRAVITY_CONSTANT * radius_m**2 / 2
    return surface_tension * 1000


def effective_diameter_surface_tension(
    diameter_px: float, scale_factor: float, density: float = None
) -> float:
    """Surface tension in mN/m from the effective diameter in pixels."""
    check_scale_factor(scale_factor)
    diameter_m = diameter_px * scale_factor / 1000
    surface_tension = resolve_density(density) * GRAVITY_CONSTANT * diameter_m**2
    return surface_tension * 1000


def effective_diameter_px(pixel_points) -> float:
    area = polygon_area(pixel_points)
    # a line or a path traced back onto itself has no enclosed area
    if not np.isfinite(area) or area < MIN_ENCLOSED_AREA_PX2:
        raise DegenerateShape(f"contour encloses no area ({area:.3g} px^2)")
    return effective_diameter(area)


def estimate(
    length_px: float,
    scale_factor: float,
    density: float = None,
    model: PhysicsModel = PhysicsModel.APEX_CIRCLE_FIT,
) -> float:
    """
    Surface tension in mN/m.

    length_px is the apex radius for APEX_CIRCLE_FIT and the effective
    diameter for EFFECTIVE_DIAMETER_AREA, both in pixels.
    """
    model = PhysicsModel.from_setting(model)
    if model is PhysicsModel.APEX_CIRCLE_FIT:
        return pendant_drop_surface_tension(length_px, scale_factor, density)
    return effective_diameter_surface_tension(length_px, scale_factor, density)
