# simulation.py
"""
Handles the per-tick motion of the particle network.

This module defines the Simulation class, which is responsible for
advancing the state of the particle system by one tick: integrating
positions, reflecting and clamping at the bounds, applying the pointer's
repulsion and damping fast particles.
"""
import logging
from typing import Any, Dict, Optional, Tuple

import numpy as np
from numba import jit

from constants import DAMPING, POINTER_FORCE, POINTER_RADIUS, SPEED_CAP
from particle import ParticleSystem
from sizing import Bounds

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, particles: ParticleSystem, params: Dict[str, Any], bounds: Bounds):
#     - Inputs:
#       - particles: An initialized ParticleSystem object.
#       - params: Dictionary of network parameters.
#         - "pointer_radius": float
#         - "pointer_force": float
#         - "speed_cap": float
#         - "damping": float
#       - bounds: logical drawing area.
#
#   - step(self, pointer: Optional[Tuple[float, float]]) -> None:
#     - Inputs: a pointer snapshot, or None when the pointer is absent.
#     - Side Effects: Modifies positions and velocities in place.
#     - Invariants: Particle count remains constant. After the call every
#       position lies in [0, width] x [0, height].


@jit(nopython=True)
def _step_particles_numba(
    positions, velocities, width, height,
    has_pointer, pointer_x, pointer_y,
    pointer_radius, pointer_force, speed_cap, damping
):
    """
    Numba-jitted per-particle update.

    The order matters: velocity is reflected before the position is clamped,
    so a particle that overshoots a boundary is held at the edge rather than
    bounced back by the overshoot distance.
    """
    particle_count = positions.shape[0]
    for i in range(particle_count):
        x = positions[i, 0] + velocities[i, 0]
        y = positions[i, 1] + velocities[i, 1]
        vx = velocities[i, 0]
        vy = velocities[i, 1]

        # Reflect
        if x < 0.0 or x > width:
            vx = -vx
        if y < 0.0 or y > height:
            vy = -vy

        # Clamp
        x = max(0.0, min(width, x))
        y = max(0.0, min(height, y))

        # Pointer repulsion, linear falloff to zero at pointer_radius
        if has_pointer:
            dx = x - pointer_x
            dy = y - pointer_y
            dist = np.sqrt(dx * dx + dy * dy)
            if 0.0 < dist < pointer_radius:
                force = (pointer_radius - dist) / pointer_radius
                vx += (dx / dist) * force * pointer_force
                vy += (dy / dist) * force * pointer_force

        # Soft speed cap
        speed = np.sqrt(vx * vx + vy * vy)
        if speed > speed_cap:
            vx *= damping
            vy *= damping

        positions[i, 0] = x
        positions[i, 1] = y
        velocities[i, 0] = vx
        velocities[i, 1] = vy


class Simulation:
    """
    Advances the particle network one tick at a time.
    """
    def __init__(self, particles: ParticleSystem, params: Dict[str, Any], bounds: Bounds):
        """
        Initializes the simulation.

        Args:
            particles (ParticleSystem): The particle system to animate.
            params (Dict[str, Any]): Network parameters from config.
            bounds (Bounds): The logical drawing area.
        """
        self.particles = particles
        self.bounds = bounds
        self.pointer_radius = float(params.get('pointer_radius', POINTER_RADIUS))
        self.pointer_force = float(params.get('pointer_force', POINTER_FORCE))
        self.speed_cap = float(params.get('speed_cap', SPEED_CAP))
        self.damping = float(params.get('damping', DAMPING))

        # Enforce data contracts. Validate parameters on initialization.
        if self.pointer_radius <= 0:
            msg = f"Configuration error: pointer_radius must be > 0, got {self.pointer_radius}."
            logging.critical(msg)
            raise ValueError(msg)
        if not 0.0 < self.damping <= 1.0:
            msg = f"Configuration error: damping must be in (0, 1], got {self.damping}."
            logging.critical(msg)
            raise ValueError(msg)

        logging.info(
            f"Simulation initialized: pointer radius {self.pointer_radius}, "
            f"pointer force {self.pointer_force}, speed cap {self.speed_cap}, "
            f"damping {self.damping}."
        )

    def resize(self, bounds: Bounds) -> None:
        """Replaces the bounds. Particles are pulled back in by the next step."""
        self.bounds = bounds
        logging.debug(f"Simulation bounds set to {bounds.width}x{bounds.height}.")

    def step(self, pointer: Optional[Tuple[float, float]] = None) -> None:
        """
        Executes one tick of the simulation.

        Args:
            pointer: The pointer snapshot for this tick, or None if absent.
        """
        has_pointer = pointer is not None
        pointer_x, pointer_y = pointer if has_pointer else (0.0, 0.0)

        _step_particles_numba(
            self.particles.positions, self.particles.velocities,
            float(self.bounds.width), float(self.bounds.height),
            has_pointer, float(pointer_x), float(pointer_y),
            self.pointer_radius, self.pointer_force,
            self.speed_cap, self.damping
        )
