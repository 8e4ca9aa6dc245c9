import json
import os
from datetime import datetime

DEFAULT_CONFIG_PATH = "config/runtime_config.json"

DEFAULT_CONFIG = {
    "max_steps": 1000,
    "initial_tape": "0",
    "image_width": 900,
    "image_height": 1000,
    "origin_x": 0.5,
    "show_head_move": False,
    "zoom": 10.0,
    "batch_size": 4096,
    "output_directory": "logs/",
    "log_file_prefix": "bbtrace_",
    "image_directory": "images/"
}

# Expected types for validation
CONFIG_SCHEMA = {
    "max_steps": int,
    "initial_tape": str,
    "image_width": int,
    "image_height": int,
    "origin_x": (int, float),
    "show_head_move": bool,
    "zoom": (int, float),
    "batch_size": int,
    "output_directory": str,
    "log_file_prefix": str,
    "image_directory": str
}

POSITIVE_KEYS = ["image_width", "image_height", "zoom", "batch_size"]

def validate_config(config):
    for key, expected_type in CONFIG_SCHEMA.items():
        if key not in config:
            raise ValueError(f"Missing required configuration key: {key}")
        # bool is an int subclass; only accept it where a bool is expected
        if isinstance(config[key], bool) and expected_type is not bool:
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")
        if not isinstance(config[key], expected_type):
            raise TypeError(f"Config key '{key}' expected {expected_type}, got {type(config[key])}.")

    if config["max_steps"] < 0:
        raise ValueError("max_steps must be non-negative.")
    for key in POSITIVE_KEYS:
        if config[key] <= 0:
            raise ValueError(f"Config key '{key}' must be positive.")
    if not 0 <= config["origin_x"] <= 1:
        raise ValueError("origin_x must be a fraction of the image width between 0 and 1.")
    if set(config["initial_tape"]) - {"0", "1"}:
        raise ValueError("initial_tape must only contain '0' and '1'.")

def load_config(path=DEFAULT_CONFIG_PATH, verbose=False):
    if not os.path.exists(path):
        raise FileNotFoundError(f"Configuration file not found at: {path}")

    with open(path, "r", encoding="utf-8") as f:
        user_config = json.load(f)

    # Merge defaults with overrides
    config = DEFAULT_CONFIG.copy()
    config.update(user_config)

    # Validate schema
    validate_config(config)

    # Validate output directory
    os.makedirs(config["output_directory"], exist_ok=True)

    if verbose:
        print(f"[{datetime.now()}] Loaded config:")
        for key, value in config.items():
            print(f"  {key}: {value}")

    return config

def save_config(config, path=DEFAULT_CONFIG_PATH):
    validate_config(config)
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
