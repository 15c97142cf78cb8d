# bake_noise.py

"""
================================================================================
OFFLINE NOISE BAKER SCRIPT
================================================================================
This script is a command-line tool for sampling a region of a noise field
once and saving it to disk ("baking"). Consumers can then load the array
directly instead of evaluating the noise at runtime.

Output layout:
    <output_dir>/noise.npy       float64 array, shape (resolution_h, resolution_w)
    <output_dir>/manifest.json   parameters, content hash and value statistics

Usage:
    python bake_noise.py --config path/to/your/config.json
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import time
import hashlib
import numpy as np
from tqdm import tqdm

from gradient_noise.noise import Noise
from gradient_noise import sampling
from gradient_noise import config as DEFAULTS


def load_bake_parameters(config: dict) -> dict:
    """Merges the 'noise_parameters' section of a config over the defaults."""
    params = config.get('noise_parameters', {})
    return {
        'seed': params.get('seed', DEFAULTS.DEFAULT_SEED),
        'x_min': params.get('x_min', DEFAULTS.BAKE_X_MIN),
        'y_min': params.get('y_min', DEFAULTS.BAKE_Y_MIN),
        'width': params.get('width', DEFAULTS.BAKE_WIDTH),
        'height': params.get('height', DEFAULTS.BAKE_HEIGHT),
        'resolution_w': params.get('resolution_w', DEFAULTS.BAKE_RESOLUTION_W),
        'resolution_h': params.get('resolution_h', DEFAULTS.BAKE_RESOLUTION_H),
        'octaves': params.get('octaves', DEFAULTS.DEFAULT_OCTAVES),
        'persistence': params.get('persistence', DEFAULTS.DEFAULT_PERSISTENCE),
        'lacunarity': params.get('lacunarity', DEFAULTS.DEFAULT_LACUNARITY),
    }


def bake_noise(config_path: str, output_dir: str = None):
    """
    Loads a configuration, samples the configured noise region and saves it
    with a manifest. Returns the output directory, or None if the
    configuration could not be loaded.
    """
    logger = logging.getLogger("Baker")

    # 1. --- Load Configuration ---
    logger.info(f"Loading configuration from: {config_path}")
    try:
        with open(config_path, 'r') as f:
            config = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logger.critical(f"Failed to load or parse config file: {e}")
        return None

    params = load_bake_parameters(config)
    if output_dir is None:
        output_dir = os.path.join(DEFAULTS.BAKE_OUTPUT_ROOT, f"seed_{params['seed']}")

    # 2. --- Initialize the Noise Field ---
    logger.info(f"Initializing Noise with seed: {params['seed']}")
    noise = Noise(config={'seed': params['seed']}, logger=logger)

    x_max = params['x_min'] + params['width']
    y_max = params['y_min'] + params['height']

    # 3. --- Warm the Gradient Lattice ---
    # Precomputing every readable lattice point in a fixed order keeps the
    # lattice identical across runs with the same seed, whatever order the
    # samples are taken in.
    extent = sampling.lattice_extent(
        params['x_min'], x_max, params['y_min'], y_max,
        octaves=params['octaves'], lacunarity=params['lacunarity']
    )
    noise.precompute_gradients(*extent)
    logger.info(f"Precomputed {len(noise.gradients)} lattice gradients.")

    # 4. --- Sample Row by Row ---
    start_time = time.perf_counter()
    x_grid, y_grid = sampling.get_coordinate_grid(
        params['x_min'], params['y_min'], params['width'], params['height'],
        params['resolution_w'], params['resolution_h']
    )
    rows = []
    for row in tqdm(range(params['resolution_h']), desc="Baking Rows"):
        rows.append(sampling.sample_grid(
            noise, x_grid[row], y_grid[row],
            octaves=params['octaves'],
            persistence=params['persistence'],
            lacunarity=params['lacunarity']
        ))
    data = np.vstack(rows) if rows else np.zeros((0, params['resolution_w']))
    # The value cache is only useful within one bake.
    noise.clear_cache()

    # --- Finalization ---
    os.makedirs(output_dir, exist_ok=True)
    np.save(os.path.join(output_dir, "noise.npy"), data)

    manifest = {
        'noise_parameters': params,
        'shape': list(data.shape),
        'md5': hashlib.md5(data.tobytes()).hexdigest(),
        'stats': {
            'min': float(data.min()) if data.size else None,
            'max': float(data.max()) if data.size else None,
            'mean': float(data.mean()) if data.size else None,
        },
    }
    manifest_path = os.path.join(output_dir, "manifest.json")
    with open(manifest_path, 'w') as f:
        json.dump(manifest, f, indent=2)

    end_time = time.perf_counter()
    logger.info(f"Baking complete! Total time: {end_time - start_time:.2f} seconds.")
    logger.info(f"Baked noise and manifest.json saved to: {output_dir}")
    return output_dir


# --- Command-Line Interface ---
if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        stream=sys.stdout
    )
    parser = argparse.ArgumentParser(description="Offline Noise Baker for the gradient noise generator.")
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to the JSON configuration file describing the region to bake."
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help="Directory for noise.npy and manifest.json. Defaults to baked_noise/seed_<seed>."
    )
    args = parser.parse_args()

    result = bake_noise(args.config, args.output_dir)
    sys.exit(0 if result else 1)
