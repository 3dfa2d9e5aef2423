# Imports

## Packages
import os
import json
import pandas as pd

RESULT_COLUMNS = [
    "sample id",
    "surface tension (mN/m)",
    "physics model",
    "scale (mm/px)",
    "apex radius (px)",
    "effective diameter (px)",
    "density (kg/m3)",
    "status",
    "failure reason",
]


def load_settings(file_path="config/settings.json") -> dict:
    """
    Load settings from json file

    :param file_path: Path of the settings file
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Settings file not found at {file_path}")
    with open(file_path, "r") as file:
        return json.load(file)


def save_settings(settings: dict, file_path="config/settings.json"):
    """
    Save settings to json file

    :param settings: Settings to save
    :param file_path: Path of the settings file
    """
    folder = os.path.dirname(file_path)
    if folder:
        os.makedirs(folder, exist_ok=True)
    with open(file_path, "w") as file:
        json.dump(settings, file, indent=4)


def experiment_folder(settings: dict, subfolder_key: str = "data_folder") -> str:
    file_settings = settings["file_settings"]
    return f"{file_settings['output_folder']}/{file_settings['exp_tag']}/{file_settings[subfolder_key]}"


def initialize_results() -> pd.DataFrame:
    # Initialize an empty DataFrame with the required columns
    return pd.DataFrame(columns=RESULT_COLUMNS)


def add_data_to_results(results: pd.DataFrame, sample_id: str, result) -> pd.DataFrame:
    """
    Append one MeasurementResult as a row; failed measurements keep their
    failure class and reason instead of a surface tension.
    """
    new_row = pd.DataFrame(
        {
            "sample id": [sample_id],
            "surface tension (mN/m)": [result.surface_tension],
            "physics model": [result.physics_model.value],
            "scale (mm/px)": [result.scale_factor],
            "apex radius (px)": [
                result.circle.radius if result.circle is not None else None
            ],
            "effective diameter (px)": [result.effective_diameter_px],
            "density (kg/m3)": [result.density],
            "status": ["ok" if result.ok else type(result.failure).__name__],
            "failure reason": [None if result.ok else str(result.failure)],
        }
    )
    if results.empty:
        return new_row[RESULT_COLUMNS]
    return pd.concat([results, new_row], ignore_index=True)


def save_results(results: pd.DataFrame, settings: dict) -> str:
    folder = experiment_folder(settings)
    os.makedirs(folder, exist_ok=True)
    file_name_results = f"{folder}/results.csv"
    results.to_csv(file_name_results, index=False)
    return file_name_results
