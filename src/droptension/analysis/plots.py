# Imports

## Packages
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend for headless hosts
import matplotlib.pyplot as plt
import pandas as pd
import numpy as np
import os

## Custom code
from droptension.analysis.geometry import ImageSize, as_points
from droptension.utils.load_save_functions import experiment_folder


class Plotter:
    def __init__(self, settings: dict):
        self.file_settings = settings["file_settings"]
        self.save_root = experiment_folder(settings)
        os.makedirs(self.save_root, exist_ok=True)
        self.fontsize_labels = 15

    def plot_measurement(
        self,
        pixel_points,
        image_size: ImageSize,
        result,
        sample_id: str,
        apex_points=None,
    ) -> str:
        """
        Figure of the contour in pixel space, with the apex band and the fitted
        circle when the apex model was used. Returns the saved file path.
        """
        points = as_points(pixel_points)
        fig, ax = plt.subplots(figsize=(5, 5 * image_size.height / image_size.width))
        ax.plot(points[:, 0], points[:, 1], lw=1, color="black", label="contour")

        if apex_points is not None and len(apex_points) > 0:
            apex_points = as_points(apex_points)
            ax.scatter(
                apex_points[:, 0], apex_points[:, 1], s=6, color="C1", label="apex band"
            )
        if result.circle is not None:
            angles = np.linspace(0, 2 * np.pi, 200)
            ax.plot(
                result.circle.center_x + result.circle.radius * np.cos(angles),
                result.circle.center_y + result.circle.radius * np.sin(angles),
                lw=1,
                ls="--",
                color="C0",
                label=f"R = {result.circle.radius:.1f}px",
            )

        ax.set_xlim(0, image_size.width)
        ax.set_ylim(image_size.height, 0)  # image coordinates, origin top-left
        ax.set_aspect("equal")
        ax.set_xlabel("x (px)", fontsize=self.fontsize_labels)
        ax.set_ylabel("y (px)", fontsize=self.fontsize_labels)
        ax.set_title(f"{sample_id}: {result.summary()}", fontsize=self.fontsize_labels)
        ax.legend(loc="lower right")
        plt.tight_layout()

        folder = f"{self.save_root}/{sample_id}"
        os.makedirs(folder, exist_ok=True)
        file_path = f"{folder}/measurement_plot.png"
        plt.savefig(file_path)
        plt.close(fig)
        return file_path

    def plot_results_sample_id(self, df: pd.DataFrame) -> str:
        df = df.dropna(subset=["surface tension (mN/m)"])
        if df.empty:
            return None
        sample_ids = df["sample id"]
        surface_tension = df["surface tension (mN/m)"].astype(float)

        fig, ax = plt.subplots()
        ax.bar(range(len(sample_ids)), surface_tension, color="C0")
        ax.set_xticks(range(len(sample_ids)))
        ax.set_xticklabels(sample_ids, rotation=90)
        ax.set_xlabel("Sample ID", fontsize=self.fontsize_labels)
        ax.set_ylabel("Surface Tension (mN/m)", fontsize=self.fontsize_labels)
        ax.set_title(f"{self.file_settings['exp_tag']}", fontsize=self.fontsize_labels)
        plt.tight_layout()

        file_path = f"{self.save_root}/results_plot.png"
        plt.savefig(file_path)
        plt.close(fig)
        return file_path
