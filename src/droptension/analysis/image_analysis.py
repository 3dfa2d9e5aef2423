# Imports

## Packages
import os
import numpy as np
import pandas as pd

## Custom code
from droptension.analysis.geometry import as_image_size, as_points, to_pixel_space
from droptension.analysis.physics import PhysicsModel, resolve_density
from droptension.measurement import MeasurementPipeline, MeasurementResult
from droptension.hardware.contour_detection import ContourDetectionError, ContourDetector
from droptension.utils.load_save_functions import add_data_to_results, initialize_results
from droptension.utils.logger import Logger
from droptension.utils.utils import parse_positive_float


class SurfaceTensionAnalysis:
    """
    Host-side wrapper around the measurement pipeline: keeps the operator
    inputs from the settings, finds the contour in an image and logs every
    outcome.
    """

    def __init__(self, settings: dict):
        self.settings = settings
        self.file_settings = settings.get("file_settings", {})
        self.measurement_settings = settings.get("measurement_settings", {})
        self.reference_diameter_mm = parse_positive_float(
            self.measurement_settings.get("reference_diameter_mm")
        )
        self.density = parse_positive_float(self.measurement_settings.get("density"))
        self.pipeline = MeasurementPipeline(settings)
        self.detector = ContourDetector(settings)
        if self.file_settings:
            log_folder = f'{self.file_settings["output_folder"]}/{self.file_settings["exp_tag"]}/{self.file_settings["meta_data_folder"]}'
        else:
            log_folder = None
        self.logger = Logger(name="analysis", file_path=log_folder)

        self.image_size = None
        self.pixel_points = None
        self.result = None

    @property
    def physics_model(self) -> PhysicsModel:
        return self.pipeline.physics_model

    def set_operator_input(self, reference_diameter=None, density=None):
        """Operator text (or numbers) for the reference diameter and density."""
        self.reference_diameter_mm = parse_positive_float(reference_diameter)
        self.density = parse_positive_float(density)

    def measure_contour(self, contour, image_size) -> MeasurementResult:
        image_size = as_image_size(image_size)
        self.image_size = image_size
        self.pixel_points = to_pixel_space(as_points(contour), image_size)

        if self.density is None:
            self.logger.info("Analysis: no density given, assuming water.")
        self.result = self.pipeline.run(
            contour,
            image_size,
            reference_diameter=self.reference_diameter_mm,
            density=self.density,
            pixel_points=self.pixel_points,
        )

        if self.result.ok:
            self.logger.info(
                f"Analysis: {self.result.summary()} "
                f"(model {self.physics_model.value}, scale {self.result.scale_factor:.5f} mm/px)."
            )
        else:
            self.logger.warning(
                f"Analysis: {type(self.result.failure).__name__}: {self.result.failure}"
            )
        return self.result

    def _measure_detected(self, contour, image_size) -> MeasurementResult:
        self.logger.info(
            f"Analysis: contour with {len(contour)} points in {image_size.width}x{image_size.height} image."
        )
        return self.measure_contour(contour, image_size)

    def measure_image(self, image: np.ndarray) -> MeasurementResult:
        return self._measure_detected(*self.detector.find_contour(image))

    def measure_file(self, file_path: str) -> MeasurementResult:
        return self._measure_detected(*self.detector.find_contour_in_file(file_path))

    def measure_files(self, file_paths, plotter=None) -> pd.DataFrame:
        """
        Measure every image file and collect one results row per file.

        Files that are missing or hold no contour are logged and recorded as
        failed rows; the remaining files are still measured.
        """
        results = initialize_results()
        for file_path in file_paths:
            sample_id = os.path.splitext(os.path.basename(file_path))[0]
            try:
                result = self.measure_file(file_path)
            except (FileNotFoundError, ContourDetectionError) as e:
                self.logger.error(f"Analysis: {sample_id}: {e}")
                self.image_size = None
                self.pixel_points = None
                result = MeasurementResult(
                    physics_model=self.physics_model,
                    density=resolve_density(self.density),
                    failure=e,
                )
                self.result = result
            results = add_data_to_results(results, sample_id=sample_id, result=result)

            if plotter is not None and self.pixel_points is not None:
                plotter.plot_measurement(
                    self.pixel_points,
                    self.image_size,
                    result,
                    sample_id=sample_id,
                    apex_points=self.apex_points(),
                )
        return results

    def apex_points(self) -> np.ndarray:
        if self.pixel_points is None:
            return None
        return self.pipeline.fitter.apex_points(self.pixel_points, self.image_size)
