"""Shared fakes for the host environment the particle network runs in."""
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest


class RecordingContext:
    """Drawing context that records every call instead of drawing."""

    def __init__(self):
        self.global_alpha = 1.0
        self.scale = None
        self.calls = []

    def set_transform(self, scale):
        self.scale = scale
        self.calls.append(("set_transform", scale))

    def clear_rect(self, x, y, width, height):
        self.calls.append(("clear_rect", x, y, width, height))

    def fill_circle(self, x, y, radius, color):
        self.calls.append(("fill_circle", x, y, radius, color, self.global_alpha))

    def stroke_line(self, x1, y1, x2, y2, color, width):
        self.calls.append(("stroke_line", x1, y1, x2, y2, color, width, self.global_alpha))

    def of(self, name):
        return [call for call in self.calls if call[0] == name]


class FakeSurface:
    def __init__(self, width=800, height=600, pixel_ratio=1.0, context=None):
        self.size = (width, height)
        self.pixel_ratio = pixel_ratio
        self.context = context if context is not None else RecordingContext()
        self.backing_size = None
        self.display_size = None
        self.listeners = {}

    def get_context(self):
        return self.context

    def container_size(self):
        return self.size

    def set_backing_size(self, width, height):
        self.backing_size = (width, height)

    def set_display_size(self, width, height):
        self.display_size = (width, height)

    def add_event_listener(self, name, callback):
        self.listeners.setdefault(name, []).append(callback)

    def remove_event_listener(self, name, callback):
        self.listeners.get(name, []).remove(callback)

    def dispatch(self, name, *args):
        for callback in list(self.listeners.get(name, [])):
            callback(*args)


class ManualFrameTimer:
    """Frame timer advanced explicitly by the test."""

    def __init__(self):
        self.pending = {}
        self.next_handle = 1
        self.cancelled = []
        self.now = 0.0

    def request_frame(self, callback):
        handle = self.next_handle
        self.next_handle += 1
        self.pending[handle] = callback
        return handle

    def cancel_frame(self, handle):
        self.cancelled.append(handle)
        self.pending.pop(handle, None)

    def advance(self, frames=1):
        for _ in range(frames):
            self.now += 1000.0 / 60
            callbacks, self.pending = self.pending, {}
            for callback in callbacks.values():
                callback(self.now)


@pytest.fixture
def surface():
    return FakeSurface()


@pytest.fixture
def frame_timer():
    return ManualFrameTimer()


@pytest.fixture
def params():
    return {
        "seed": 1234,
        "particle_count": 80,
        "connection_distance": 180.0,
        "pointer_radius": 150.0,
        "pointer_force": 0.02,
        "speed_cap": 1.0,
        "damping": 0.99,
        "particle_colors": None,
    }
