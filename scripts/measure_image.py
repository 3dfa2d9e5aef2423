"""
Measure the surface tension of one or more droplet photos.

    python scripts/measure_image.py photo1.png photo2.png --diameter 5.0 --density 998
"""

import argparse

from droptension.analysis.image_analysis import SurfaceTensionAnalysis
from droptension.analysis.plots import Plotter
from droptension.utils.load_save_functions import load_settings, save_results


def main():
    parser = argparse.ArgumentParser(description="Surface tension from droplet photos")
    parser.add_argument("images", nargs="+", help="image files to measure")
    parser.add_argument("--settings", default="config/settings.json")
    parser.add_argument("--diameter", default=None, help="reference diameter (mm)")
    parser.add_argument("--density", default=None, help="liquid density (kg/m3)")
    parser.add_argument("--plot", action="store_true", help="save a figure per image")
    args = parser.parse_args()

    settings = load_settings(file_path=args.settings)
    analyzer = SurfaceTensionAnalysis(settings=settings)
    if args.diameter is not None or args.density is not None:
        analyzer.set_operator_input(
            reference_diameter=args.diameter
            if args.diameter is not None
            else analyzer.reference_diameter_mm,
            density=args.density if args.density is not None else analyzer.density,
        )
    plotter = Plotter(settings=settings) if args.plot else None

    results = analyzer.measure_files(args.images, plotter=plotter)
    for _, row in results.iterrows():
        print(f"{row['sample id']}: {row['status']}, {row['surface tension (mN/m)']} mN/m")

    file_name = save_results(results, settings)
    print(f"Results saved to {file_name}")
    if plotter is not None:
        plotter.plot_results_sample_id(results)


if __name__ == "__main__":
    main()
