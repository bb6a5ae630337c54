# renderer.py
"""
Draws one frame of the particle network.

The Renderer clears the surface, draws every particle as a filled circle
and draws a faded edge between every pair of particles closer than the
connection distance. It keeps no per-frame state of its own.
"""
import logging
from typing import Any, Dict, List, Optional, Tuple

import numpy as np
import pygame
from numba import jit

from constants import (
    CONNECTION_DISTANCE, EDGE_MAX_ALPHA, EDGE_WIDTH, NETWORK_COLORS
)
from particle import ParticleSystem
from sizing import Bounds

# --- Data Contracts ---
#
# compute_edges(positions: np.ndarray, threshold: float) -> (i, j, alpha):
#   - Inputs: positions of shape (N, 2), a positive connection distance.
#   - Outputs: three arrays of equal length M. Each unordered pair (i < j)
#     with distance < threshold appears exactly once.
#   - Invariants: 0 < alpha <= EDGE_MAX_ALPHA.
#
# class Renderer:
#   - draw(self, context, particles: ParticleSystem, bounds: Bounds) -> int:
#     - Outputs: the number of edges drawn.
#     - Side Effects: Clears the context, draws particles and edges, then
#       resets context.global_alpha to 1.0.


@jit(nopython=True)
def edge_alpha(distance, threshold):
    """Edge opacity for two particles `distance` apart; 0 at the threshold."""
    if distance >= threshold:
        return 0.0
    return (1.0 - distance / threshold) * EDGE_MAX_ALPHA


@jit(nopython=True)
def _compute_edges_numba(positions, threshold):
    """
    Numba-jitted O(N^2) pair scan. Each unordered pair is evaluated once.
    """
    particle_count = positions.shape[0]
    max_edges = particle_count * (particle_count - 1) // 2
    first = np.empty(max_edges, dtype=np.int64)
    second = np.empty(max_edges, dtype=np.int64)
    alphas = np.empty(max_edges, dtype=np.float64)
    count = 0

    for i in range(particle_count):
        for j in range(i + 1, particle_count):
            dx = positions[i, 0] - positions[j, 0]
            dy = positions[i, 1] - positions[j, 1]
            dist = np.sqrt(dx * dx + dy * dy)
            if dist < threshold:
                first[count] = i
                second[count] = j
                alphas[count] = edge_alpha(dist, threshold)
                count += 1

    return first[:count], second[:count], alphas[:count]


def compute_edges(
    positions: np.ndarray, threshold: float = CONNECTION_DISTANCE
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Returns (i, j, alpha) arrays for every connected pair."""
    positions = np.ascontiguousarray(positions, dtype=np.float64)
    return _compute_edges_numba(positions, float(threshold))


def _initialize_palette(config_colors: Optional[list]) -> List[Tuple[int, int, int]]:
    """Loads the three class colors from config, falling back to the default palette."""
    default_palette = [tuple(color) for color in NETWORK_COLORS]

    if not config_colors:
        logging.info("No particle colors found in config. Using default palette.")
        return default_palette

    final_colors = []
    try:
        for value in config_colors:
            color = pygame.Color(value)
            final_colors.append((color.r, color.g, color.b))
    except (ValueError, TypeError) as e:
        logging.error(f"Could not parse colors from config due to invalid format: {e}. Falling back to default palette.")
        return default_palette

    num_loaded = len(final_colors)
    if num_loaded < len(default_palette):
        logging.warning(
            f"Config provides {num_loaded} colors, but {len(default_palette)} are needed. "
            f"Using the default palette for the remaining classes."
        )
        final_colors.extend(default_palette[num_loaded:])
    elif num_loaded > len(default_palette):
        logging.warning(
            f"Config provides {num_loaded} colors, but only {len(default_palette)} are needed. "
            "Ignoring excess colors."
        )
        final_colors = final_colors[:len(default_palette)]

    return final_colors


class Renderer:
    """
    Renders the particle network onto a 2D drawing context.
    """
    def __init__(self, params: Optional[Dict[str, Any]] = None):
        params = params if params is not None else {}
        self.connection_distance = float(params.get('connection_distance', CONNECTION_DISTANCE))
        if self.connection_distance <= 0:
            msg = f"Configuration error: connection_distance must be > 0, got {self.connection_distance}."
            logging.critical(msg)
            raise ValueError(msg)

        self.palette = _initialize_palette(params.get('particle_colors'))
        # Edges always use the accent color.
        self.edge_color = self.palette[0]
        self.edge_width = EDGE_WIDTH

    def draw(self, context, particles: ParticleSystem, bounds: Bounds) -> int:
        """
        Draws a full frame.

        Returns:
            int: The number of edges drawn.
        """
        context.clear_rect(0, 0, bounds.width, bounds.height)

        positions = particles.positions
        for i in range(particles.particle_count):
            context.global_alpha = float(particles.opacities[i])
            context.fill_circle(
                float(positions[i, 0]), float(positions[i, 1]),
                float(particles.radii[i]),
                self.palette[particles.color_classes[i]]
            )

        first, second, alphas = compute_edges(positions, self.connection_distance)
        for i, j, alpha in zip(first, second, alphas):
            context.global_alpha = float(alpha)
            context.stroke_line(
                float(positions[i, 0]), float(positions[i, 1]),
                float(positions[j, 0]), float(positions[j, 1]),
                self.edge_color, self.edge_width
            )

        context.global_alpha = 1.0
        return len(alphas)
