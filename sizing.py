# sizing.py
"""
Fits the drawing surface to its container.

The backing store is sized in physical pixels (logical size times the
display pixel ratio) while drawing coordinates stay in logical units.
"""
import logging
from typing import NamedTuple

# --- Data Contracts ---
#
# fit_surface(surface) -> Bounds:
#   - Inputs:
#     - surface: any object exposing container_size(), pixel_ratio,
#       set_backing_size(w, h), set_display_size(w, h) and get_context().
#   - Outputs: the new logical Bounds.
#   - Side Effects: resizes the backing store and rescales the context.
#   - Invariants: never touches particle state. Zero or negative sizes are
#     accepted as degenerate bounds.


class Bounds(NamedTuple):
    width: float
    height: float


def fit_surface(surface) -> Bounds:
    """Resizes the surface's backing store for the current container size."""
    width, height = surface.container_size()
    ratio = surface.pixel_ratio or 1.0

    if width <= 0 or height <= 0:
        logging.warning(
            f"Surface container has degenerate size {width}x{height}. "
            "Particles will be clamped to the degenerate bounds."
        )

    # Backing store sizes cannot be negative; logical bounds keep the raw values.
    surface.set_backing_size(max(0, int(width * ratio)), max(0, int(height * ratio)))
    surface.set_display_size(width, height)
    surface.get_context().set_transform(ratio)

    logging.debug(f"Surface fitted to {width}x{height} at pixel ratio {ratio}.")
    return Bounds(float(width), float(height))
