# particle.py
"""
Manages the state of all particles in the network.

This module defines the ParticleSystem class, which is responsible for
initializing and storing particle data (position, velocity, radius,
opacity, color class) in NumPy arrays.
"""
import logging
from enum import IntEnum
from typing import Any, Dict, NamedTuple, Optional

import numpy as np

from constants import (
    ACCENT_THRESHOLD, INITIAL_SPEED_SPREAD, OPACITY_MIN, OPACITY_SPREAD, PARTICLE_COUNT,
    PRIMARY_THRESHOLD, RADIUS_MIN, RADIUS_SPREAD
)

# --- Data Contracts ---
#
# class ParticleSystem:
#   - __init__(self, params: Dict[str, Any], width: float, height: float):
#     - Inputs:
#       - params: Dictionary of network parameters.
#         - "seed": Optional[int]
#         - "particle_count": int
#       - width, height: logical bounds the particles are scattered in.
#     - Side Effects: Initializes internal NumPy arrays for particle state.
#     - Invariants:
#       - self.positions is a float64 array of shape (N, 2).
#       - self.velocities is a float64 array of shape (N, 2).
#       - self.radii is a float64 array of shape (N,), all > 0.
#       - self.opacities is a float64 array of shape (N,), all in [0, 1].
#       - self.color_classes is an int8 array of shape (N,).
#       - N never changes between reinitializations.


class ColorClass(IntEnum):
    ACCENT = 0
    PRIMARY = 1
    DIM = 2


class Particle(NamedTuple):
    """Read-only snapshot of one particle."""
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    opacity: float
    color_class: ColorClass


class ParticleSystem:
    """
    A container for all particles, managing their state via NumPy arrays.
    """
    def __init__(self, params: Dict[str, Any], width: float, height: float):
        """
        Initializes the particle system.

        Args:
            params (Dict[str, Any]): Network parameters from config.
            width (float): The width of the drawing area.
            height (float): The height of the drawing area.
        """
        self.particle_count = int(params.get('particle_count', PARTICLE_COUNT))
        self.seed: Optional[int] = params.get('seed')

        if self.particle_count < 0:
            msg = f"Configuration error: particle_count must be >= 0, got {self.particle_count}."
            logging.critical(msg)
            raise ValueError(msg)

        # All randomness is controlled by a single seed, one generator per instance.
        self.rng = np.random.default_rng(self.seed)

        self.reinitialize(width, height)

        logging.info(f"ParticleSystem initialized with {self.particle_count} particles.")

    def reinitialize(self, width: float, height: float) -> None:
        """Replaces the whole particle collection with a fresh random set."""
        n = self.particle_count
        rng = self.rng

        self.positions = rng.random((n, 2)) * np.array([width, height], dtype=np.float64)
        self.velocities = (rng.random((n, 2)) - 0.5) * INITIAL_SPEED_SPREAD
        self.radii = rng.random(n) * RADIUS_SPREAD + RADIUS_MIN
        self.opacities = rng.random(n) * OPACITY_SPREAD + OPACITY_MIN

        accent = rng.random(n) > ACCENT_THRESHOLD
        primary = rng.random(n) > PRIMARY_THRESHOLD
        self.color_classes = np.where(
            accent, ColorClass.ACCENT,
            np.where(primary, ColorClass.PRIMARY, ColorClass.DIM)
        ).astype(np.int8)

        logging.debug(
            f"Particle arrays created for bounds {width}x{height}. "
            f"Positions shape: {self.positions.shape}, "
            f"Velocities shape: {self.velocities.shape}"
        )

    def __len__(self) -> int:
        return self.particle_count

    def __getitem__(self, index: int) -> Particle:
        x, y = self.positions[index]
        vx, vy = self.velocities[index]
        return Particle(
            float(x), float(y), float(vx), float(vy),
            float(self.radii[index]),
            float(self.opacities[index]),
            ColorClass(int(self.color_classes[index]))
        )

    def speeds(self) -> np.ndarray:
        """Per-particle speed, shape (N,)."""
        return np.linalg.norm(self.velocities, axis=1)
