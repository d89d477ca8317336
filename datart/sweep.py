"""Complexity sweep: drives complexity back and forth between 0 and 100.

The sweep only produces new ``GenerationOptions``; callers rebuild the whole
generation state from them on every tick.
"""

from __future__ import annotations

from dataclasses import replace

from datart.core.options import COMPLEXITY_RANGE, DEFAULT_COMPLEXITY, GenerationOptions

SWEEP_SPEED = 30.0  # complexity units per second


class ComplexitySweep:
    """Bouncing complexity animator.

    ``step(options, dt)`` advances by ``speed * dt`` in the current
    direction, clamps at either end and reverses there.
    """

    def __init__(self, speed: float = SWEEP_SPEED, direction: int = 1):
        if direction not in (1, -1):
            raise ValueError(f"direction must be 1 or -1, got {direction!r}")
        self.speed = speed
        self.direction = direction

    def advance(self, complexity: float, dt: float) -> float:
        lo, hi = COMPLEXITY_RANGE
        value = complexity + self.direction * self.speed * dt
        if value >= hi:
            value = float(hi)
            self.direction = -1
        elif value <= lo:
            value = float(lo)
            self.direction = 1
        return value

    def step(self, options: GenerationOptions, dt: float) -> GenerationOptions:
        current = options.complexity
        if current is None:
            current = DEFAULT_COMPLEXITY
        return replace(options, complexity=self.advance(current, dt))

    def frames(self, options: GenerationOptions, count: int, fps: float = 30.0):
        """Yield ``count`` successive options, one per frame at ``fps``."""
        dt = 1.0 / fps
        for _ in range(count):
            options = self.step(options, dt)
            yield options
