# network.py
"""
Owns the animation loop of one particle network.

A ParticleNetwork is bound to a single drawing surface and a frame timer.
Construction sizes the surface, scatters the particles and performs the
first tick; every tick then requests exactly one more frame until
destroy() is called.
"""
import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from particle import ParticleSystem
from pointer import PointerState
from renderer import Renderer
from simulation import Simulation
from sizing import Bounds, fit_surface

# --- Data Contracts ---
#
# class ParticleNetwork:
#   - __init__(self, surface, frame_timer, params: Optional[Dict[str, Any]] = None,
#              log_throttle_steps: int = 300):
#     - Inputs:
#       - surface: host drawing surface (see sizing.fit_surface) that also
#         supports add_event_listener(name, callback).
#       - frame_timer: exposes request_frame(callback) -> handle and
#         cancel_frame(handle).
#       - params: network parameters (see utils.network_params).
#     - Side Effects: Registers "pointermove", "pointerleave" and "resize"
#       listeners on the surface, sizes it, and runs the first tick.
#     - Raises: ValueError if the surface or its drawing context is missing,
#       or a parameter is invalid. Nothing is registered on the surface then.
#
#   - destroy(self) -> None:
#     - Side Effects: Cancels the pending frame. No further ticks run.
#     - Invariants: STOPPED is terminal; calling destroy() twice is harmless.


class LifecycleState(Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class ParticleNetwork:
    """
    Drives the simulate-then-render tick for one surface.
    """
    def __init__(self, surface, frame_timer, params: Optional[Dict[str, Any]] = None,
                 log_throttle_steps: int = 300):
        if surface is None:
            msg = "ParticleNetwork requires a drawing surface, got None."
            logging.critical(msg)
            raise ValueError(msg)

        self.context = surface.get_context()
        if self.context is None:
            msg = "Drawing surface did not provide a 2D context."
            logging.critical(msg)
            raise ValueError(msg)

        params = params if params is not None else {}
        self.surface = surface
        self.frame_timer = frame_timer
        self.log_throttle_steps = max(1, int(log_throttle_steps))
        self.pointer = PointerState()
        self.frame_count = 0
        self._frame_handle = None

        self.bounds = fit_surface(surface)
        self.particles = ParticleSystem(params, self.bounds.width, self.bounds.height)
        self.simulation = Simulation(self.particles, params, self.bounds)
        self.renderer = Renderer(params)

        # Listeners go on only once every component has validated its parameters.
        self.listeners: List[Tuple[str, Callable]] = [
            ("pointermove", self._on_pointer_move),
            ("pointerleave", self._on_pointer_leave),
            ("resize", self._on_resize),
        ]
        for name, callback in self.listeners:
            surface.add_event_listener(name, callback)

        self.state = LifecycleState.RUNNING
        logging.info(
            f"ParticleNetwork started on a {self.bounds.width}x{self.bounds.height} surface."
        )
        self._tick()

    @property
    def running(self) -> bool:
        return self.state is LifecycleState.RUNNING

    def _on_pointer_move(self, x: float, y: float) -> None:
        self.pointer.move(x, y)

    def _on_pointer_leave(self) -> None:
        self.pointer.leave()

    def _on_resize(self, *args) -> None:
        self.resize()

    def resize(self) -> Bounds:
        """Refits the surface to its container and updates the bounds."""
        self.bounds = fit_surface(self.surface)
        self.simulation.resize(self.bounds)
        logging.info(f"Surface resized to {self.bounds.width}x{self.bounds.height}.")
        return self.bounds

    def reinitialize(self) -> None:
        """Replaces the particle set with a fresh one for the current bounds."""
        self.particles.reinitialize(self.bounds.width, self.bounds.height)
        logging.info("Particle set reinitialized.")

    def _tick(self, timestamp: Optional[float] = None) -> None:
        if self.state is not LifecycleState.RUNNING:
            return
        self._frame_handle = None

        # Failures are logged; the next frame is requested regardless.
        # frame_count only counts ticks that completed.
        try:
            self.simulation.step(self.pointer.snapshot())
            self.renderer.draw(self.context, self.particles, self.bounds)
        except Exception:
            logging.exception(f"Tick after {self.frame_count} completed ticks failed.")
        else:
            self.frame_count += 1
            # Hot loops must throttle logs
            if self.frame_count % self.log_throttle_steps == 0:
                avg_speed = float(self.particles.speeds().mean()) if len(self.particles) else 0.0
                logging.debug(f"Tick {self.frame_count} | Average Speed: {avg_speed:.4f}")

        self._frame_handle = self.frame_timer.request_frame(self._tick)

    def destroy(self) -> None:
        """Stops the animation. Listener removal is left to the caller."""
        if self.state is LifecycleState.STOPPED:
            return
        if self._frame_handle is not None:
            self.frame_timer.cancel_frame(self._frame_handle)
            self._frame_handle = None
        self.state = LifecycleState.STOPPED
        logging.info(f"ParticleNetwork stopped after {self.frame_count} ticks.")
