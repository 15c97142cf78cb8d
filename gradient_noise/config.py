# gradient_noise/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the noise
generator. These values are used if they are not explicitly provided by the
user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC PROJECT.
Instead, pass a configuration dictionary to the Noise instance.
================================================================================
"""
import math

# --- Randomness ---
# Seed for the default numpy random source. Only used when no random_source
# is injected into the Noise instance.
DEFAULT_SEED = 1337

# --- Output Range ---
# Values are nominally described as lying in [-1, 1]. For unit-length
# gradients the actual extreme of single-octave 2D gradient noise is
# sqrt(2)/2, reached at the centre of a cell. Output is never clamped.
NOMINAL_MIN = -1.0
NOMINAL_MAX = 1.0
THEORETICAL_BOUND = math.sqrt(2.0) / 2.0

# --- Fractal Sampling ---
# Used by sampling.sample_grid and the offline baker.
DEFAULT_OCTAVES = 1
DEFAULT_PERSISTENCE = 0.5
DEFAULT_LACUNARITY = 2.0

# --- Offline Baking ---
# The region of noise space sampled by bake_noise.py, in noise units.
# A width of 8.0 spans eight lattice cells.
BAKE_X_MIN = 0.0
BAKE_Y_MIN = 0.0
BAKE_WIDTH = 8.0
BAKE_HEIGHT = 8.0
BAKE_RESOLUTION_W = 256
BAKE_RESOLUTION_H = 256
BAKE_OUTPUT_ROOT = "baked_noise"
