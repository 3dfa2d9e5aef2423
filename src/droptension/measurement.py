# Imports

## Packages
from dataclasses import dataclass

## Custom code
from droptension.analysis.errors import MeasurementFailure, MissingCalibration
from droptension.analysis.geometry import as_image_size, as_points, to_pixel_space
from droptension.analysis.contour_validation import ContourValidator
from droptension.analysis.scale_calibration import (
    ScaleCalibrator,
    DEFAULT_SCALE_MM_PER_PX,
)
from droptension.analysis.circle_fitting import ApexCircleFitter, FittedCircle
from droptension.analysis.physics import (
    PhysicsModel,
    REPORT_DECIMALS,
    estimate,
    effective_diameter_px,
    resolve_density,
)
from droptension.utils.utils import format_surface_tension


@dataclass
class MeasurementResult:
    physics_model: PhysicsModel
    density: float
    surface_tension: float = None  # mN/m
    failure: Exception = None  # MeasurementFailure, or the host's detection error
    scale_factor: float = None  # mm/px
    circle: FittedCircle = None
    effective_diameter_px: float = None

    @property
    def ok(self) -> bool:
        return self.failure is None and self.surface_tension is not None

    @property
    def reported_value(self) -> float:
        if not self.ok:
            return None
        return round(self.surface_tension, REPORT_DECIMALS[self.physics_model])

    def summary(self) -> str:
        """Short text for end users; the failure class stays on the result."""
        if not self.ok:
            return "Measurement failed"
        return format_surface_tension(
            self.surface_tension, REPORT_DECIMALS[self.physics_model]
        )


class MeasurementPipeline:
    """
    validate -> calibrate -> fit apex circle (or take the polygon area)
    -> estimate, configured from the settings dictionary.
    """

    def __init__(self, settings: dict = None):
        if settings is None:
            settings = {}
        measurement_settings = settings.get("measurement_settings", {})
        self.physics_model = PhysicsModel.from_setting(
            measurement_settings.get("physics_model", PhysicsModel.APEX_CIRCLE_FIT)
        )
        self.validate_contour = bool(measurement_settings.get("validate_contour", True))
        self.allow_default_scale = bool(
            measurement_settings.get("allow_default_scale", False)
        )
        self.validator = ContourValidator(settings)
        self.calibrator = ScaleCalibrator(settings)
        self.fitter = ApexCircleFitter(settings)

    def run(
        self,
        contour,
        image_size,
        reference_diameter: float = None,
        density: float = None,
        pixel_points=None,
    ) -> MeasurementResult:
        image_size = as_image_size(image_size)
        result = MeasurementResult(
            physics_model=self.physics_model, density=resolve_density(density)
        )
        normalized = as_points(contour)
        if pixel_points is None:
            pixel_points = to_pixel_space(normalized, image_size)

        try:
            if self.validate_contour:
                self.validator.check(normalized, image_size, pixel_points=pixel_points)

            result.scale_factor = self._scale_factor(
                pixel_points, reference_diameter, image_size
            )

            if self.physics_model is PhysicsModel.APEX_CIRCLE_FIT:
                result.circle = self.fitter.fit(pixel_points, image_size)
                length_px = result.circle.radius
            else:
                result.effective_diameter_px = effective_diameter_px(pixel_points)
                length_px = result.effective_diameter_px

            result.surface_tension = estimate(
                length_px,
                result.scale_factor,
                density=result.density,
                model=self.physics_model,
            )
        except MeasurementFailure as failure:
            result.failure = failure
        return result

    def _scale_factor(self, pixel_points, reference_diameter, image_size) -> float:
        try:
            return self.calibrator.calibrate(pixel_points, reference_diameter, image_size)
        except MissingCalibration:
            if self.allow_default_scale:
                return DEFAULT_SCALE_MM_PER_PX
            raise


def measure(
    contour,
    image_size,
    reference_diameter: float = None,
    density: float = None,
    settings: dict = None,
) -> MeasurementResult:
    """
    Estimate the surface tension of the liquid outlined by contour.

    Args:
        contour: normalized contour points (both axes in [0, 1], origin
            top-left), largest contour of the image.
        image_size: ImageSize or (width, height) in pixels.
        reference_diameter (float): known diameter of the reference object in
            mm, None when the operator gave none.
        density (float): liquid density in kg/m^3, None for water.
        settings (dict): optional settings with threshold overrides and the
            measurement_settings.physics_model choice.

    Returns:
        MeasurementResult: holds either the surface tension (mN/m) or the
        MeasurementFailure that stopped the pipeline.
    """
    return MeasurementPipeline(settings).run(
        contour, image_size, reference_diameter=reference_diameter, density=density
    )
