# visualization.py
"""
Hosts the particle network in a Pygame window.

This module provides the pieces of the host environment the network
depends on: a 2D drawing context, a resizable drawing surface with event
listeners, and a frame timer that runs requested callbacks once per
display refresh.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

import pygame

from constants import (
    BACKGROUND_COLOR, DEFAULT_WINDOW_HEIGHT, DEFAULT_WINDOW_WIDTH, FPS
)

# --- Data Contracts ---
#
# class CanvasContext:
#   - Drawing coordinates are logical units, multiplied by the transform
#     scale set with set_transform().
#   - global_alpha (float in [0, 1]) applies to every subsequent draw.
#   - Edges are collected on a line layer and composited by flush().
#
# class PygameCanvas:
#   - __init__(self, window: pygame.Surface, pixel_ratio: Optional[float] = None):
#     - window: the surface the canvas is presented onto.
#     - pixel_ratio: fixed display density, or None to detect it.
#   - present(self) -> None:
#     - Side Effects: Flushes the context and copies the backing store onto
#       the window, scaling it to the window size.
#
# class PygameHost:
#   - __init__(self, vis_params: Optional[Dict[str, Any]] = None):
#     - Side Effects: Initializes Pygame and creates the display window.
#   - request_frame(callback) -> int / cancel_frame(handle) -> None
#   - run_frame(self) -> bool:
#     - Outputs: False once the user has quit, True otherwise.


class CanvasContext:
    """
    A minimal 2D drawing context on top of a pygame.Surface.
    """
    def __init__(self, target: pygame.Surface):
        self.global_alpha = 1.0
        self.scale = 1.0
        self._sprites: Dict[Tuple[Tuple[int, int, int], int], pygame.Surface] = {}
        self.set_target(target)

    def set_target(self, target: pygame.Surface) -> None:
        """Points the context at a new backing surface."""
        self.target = target
        self._line_layer = pygame.Surface(target.get_size(), pygame.SRCALPHA)

    def set_transform(self, scale: float) -> None:
        self.scale = float(scale)
        # Cached sprites are sized in physical pixels.
        self._sprites.clear()

    def _alpha_byte(self) -> int:
        return int(round(max(0.0, min(1.0, self.global_alpha)) * 255))

    def clear_rect(self, x: float, y: float, width: float, height: float) -> None:
        s = self.scale
        rect = pygame.Rect(int(x * s), int(y * s), int(max(0, width) * s), int(max(0, height) * s))
        self.target.fill(BACKGROUND_COLOR, rect)
        self._line_layer.fill((0, 0, 0, 0), rect)

    def _circle_sprite(self, color: Tuple[int, int, int], radius_px: int) -> pygame.Surface:
        key = (tuple(color), radius_px)
        sprite = self._sprites.get(key)
        if sprite is None:
            diameter = radius_px * 2 + 1
            sprite = pygame.Surface((diameter, diameter), pygame.SRCALPHA)
            pygame.draw.circle(sprite, color, (radius_px, radius_px), radius_px)
            self._sprites[key] = sprite
        return sprite

    def fill_circle(self, x: float, y: float, radius: float, color: Tuple[int, int, int]) -> None:
        s = self.scale
        radius_px = max(1, int(round(radius * s)))
        sprite = self._circle_sprite(color, radius_px)
        sprite.set_alpha(self._alpha_byte())
        self.target.blit(sprite, (int(x * s) - radius_px, int(y * s) - radius_px))

    def stroke_line(self, x1: float, y1: float, x2: float, y2: float,
                    color: Tuple[int, int, int], width: float) -> None:
        s = self.scale
        width_px = max(1, int(round(width * s)))
        rgba = (color[0], color[1], color[2], self._alpha_byte())
        pygame.draw.line(
            self._line_layer, rgba,
            (int(x1 * s), int(y1 * s)), (int(x2 * s), int(y2 * s)),
            width_px
        )

    def flush(self) -> None:
        """Composites the line layer onto the target and clears it."""
        self.target.blit(self._line_layer, (0, 0))
        self._line_layer.fill((0, 0, 0, 0))


class PygameCanvas:
    """
    The drawing surface: a backing store sized in physical pixels,
    presented onto the window at its logical size.
    """
    def __init__(self, window: pygame.Surface, pixel_ratio: Optional[float] = None):
        self.window = window
        self._pixel_ratio = pixel_ratio
        self.display_size: Tuple[float, float] = self._window_size()
        self.backing = pygame.Surface(window.get_size(), 0, 32)
        self._context = CanvasContext(self.backing)
        self._listeners: Dict[str, List[Callable]] = {}

    def _window_size(self) -> Tuple[int, int]:
        # Screen coordinates can differ from drawable pixels on high-density displays.
        if pygame.display.get_init() and pygame.display.get_surface() is self.window:
            return pygame.display.get_window_size()
        return self.window.get_size()

    def get_context(self) -> CanvasContext:
        return self._context

    def container_size(self) -> Tuple[int, int]:
        return self._window_size()

    @property
    def pixel_ratio(self) -> float:
        if self._pixel_ratio:
            return float(self._pixel_ratio)
        logical_width = self._window_size()[0]
        if logical_width <= 0:
            return 1.0
        return self.window.get_width() / logical_width

    def set_backing_size(self, width: int, height: int) -> None:
        self.backing = pygame.Surface((width, height), 0, 32)
        self._context.set_target(self.backing)

    def set_display_size(self, width: float, height: float) -> None:
        self.display_size = (width, height)

    def add_event_listener(self, name: str, callback: Callable) -> None:
        self._listeners.setdefault(name, []).append(callback)

    def remove_event_listener(self, name: str, callback: Callable) -> None:
        callbacks = self._listeners.get(name, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def dispatch(self, name: str, *args) -> None:
        for callback in list(self._listeners.get(name, [])):
            callback(*args)

    def present(self) -> None:
        self._context.flush()
        target_size = self.window.get_size()
        if self.backing.get_size() == target_size:
            self.window.blit(self.backing, (0, 0))
        elif min(target_size) > 0 and min(self.backing.get_size()) > 0:
            self.window.blit(pygame.transform.smoothscale(self.backing, target_size), (0, 0))


class PygameHost:
    """
    Owns the Pygame window, translates its events for the canvas and runs
    requested frame callbacks once per display refresh.
    """
    def __init__(self, vis_params: Optional[Dict[str, Any]] = None):
        """
        Initializes Pygame and the display window.
        """
        vis_params = vis_params if vis_params is not None else {}
        pygame.init()

        width = int(vis_params.get('window_width', DEFAULT_WINDOW_WIDTH))
        height = int(vis_params.get('window_height', DEFAULT_WINDOW_HEIGHT))
        flags = pygame.RESIZABLE if vis_params.get('resizable', True) else 0
        self.window = pygame.display.set_mode((width, height), flags)
        pygame.display.set_caption("Particle Network")

        self.clock = pygame.time.Clock()
        self.fps = int(vis_params.get('fps', FPS))
        self.canvas = PygameCanvas(self.window, vis_params.get('pixel_ratio'))

        self._callbacks: Dict[int, Callable] = {}
        self._next_handle = 1
        self.running = True

        logging.info(f"PygameHost initialized with display ({width}x{height}) at {self.fps} FPS.")

    def request_frame(self, callback: Callable) -> int:
        """Schedules callback for the next frame and returns a cancel handle."""
        handle = self._next_handle
        self._next_handle += 1
        self._callbacks[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._callbacks.pop(handle, None)

    def handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down host.")
                self.running = False

            elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                logging.info("ESC key pressed. Shutting down host.")
                self.running = False

            elif event.type == pygame.MOUSEMOTION:
                self.canvas.dispatch("pointermove", *event.pos)

            elif event.type == pygame.WINDOWLEAVE:
                self.canvas.dispatch("pointerleave")

            elif event.type in (pygame.VIDEORESIZE, pygame.WINDOWSIZECHANGED):
                # The display surface is replaced on resize. A user resize
                # emits both events; refitting twice is harmless.
                self.window = pygame.display.get_surface()
                self.canvas.window = self.window
                logging.debug(f"Window resized to {self.window.get_width()}x{self.window.get_height()}.")
                self.canvas.dispatch("resize")

    def run_frame(self) -> bool:
        """
        Processes events, runs the callbacks requested for this frame and
        presents the canvas.

        Returns:
            bool: False if the host should exit, True otherwise.
        """
        self.handle_events()
        if not self.running:
            return False

        callbacks, self._callbacks = self._callbacks, {}
        timestamp = pygame.time.get_ticks()
        for callback in callbacks.values():
            callback(timestamp)

        self.canvas.present()
        pygame.display.flip()
        self.clock.tick(self.fps)
        return True

    @property
    def pending_frames(self) -> int:
        return len(self._callbacks)

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
