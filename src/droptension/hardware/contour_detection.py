# Imports

## Packages
import os
import cv2
import imutils
import numpy as np

## Custom code
from droptension.analysis.geometry import ImageSize, to_normalized_space


class ContourDetectionError(Exception):
    pass


class ContourDetector:
    """
    Turns a photo into the normalized outline the measurement pipeline works
    on: edge detection, closing of small gaps, then the external contour with
    the most points.
    """

    def __init__(self, settings: dict = None):
        if settings is None:
            settings = {}
        contour_settings = settings.get("contour_settings", {})
        self.BLUR_KERNEL = int(contour_settings.get("blur_kernel", 9))
        self.CANNY_LOWER = int(contour_settings.get("canny_lower", 10))
        self.CANNY_UPPER = int(contour_settings.get("canny_upper", 10))
        self.MORPH_ITERATIONS = int(contour_settings.get("morph_iterations", 1))
        self.raw_image = None
        self.processed_image = None

    def load_image(self, file_path: str) -> np.ndarray:
        if not os.path.exists(file_path):
            raise FileNotFoundError(f"Image not found at {file_path}")
        image = cv2.imread(file_path)
        if image is None:
            raise ContourDetectionError(f"Could not read image {file_path}")
        self.raw_image = image
        return image

    def process_image(self, image: np.ndarray) -> np.ndarray:
        if image.ndim == 3:
            gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        else:
            gray = image
        blur = cv2.GaussianBlur(gray, (self.BLUR_KERNEL, self.BLUR_KERNEL), 0)
        canny = cv2.Canny(blur, self.CANNY_LOWER, self.CANNY_UPPER)
        edged = cv2.dilate(canny, None, iterations=self.MORPH_ITERATIONS)
        self.processed_image = cv2.erode(edged, None, iterations=self.MORPH_ITERATIONS)
        return self.processed_image

    def find_contour(self, image: np.ndarray):
        """
        Detect the largest contour (by point count) of an image.

        Returns:
            tuple: (normalized_points, image_size) where normalized_points is an
            (N, 2) array with both axes in [0, 1], origin top-left.
        """
        height, width = image.shape[:2]
        image_size = ImageSize(width=width, height=height)
        processed = self.process_image(image)

        # every boundary pixel is kept, the validator counts points
        contours = imutils.grab_contours(
            cv2.findContours(
                image=processed.copy(),
                mode=cv2.RETR_EXTERNAL,
                method=cv2.CHAIN_APPROX_NONE,
            )
        )
        if len(contours) == 0:
            raise ContourDetectionError("No contour found in image")

        largest_contour = max(contours, key=len)
        pixel_points = largest_contour.reshape(-1, 2).astype(float)
        return to_normalized_space(pixel_points, image_size), image_size

    def find_contour_in_file(self, file_path: str):
        return self.find_contour(self.load_image(file_path))
