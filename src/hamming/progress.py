# src/hamming/progress.py
from __future__ import annotations

import sys
import time


class Progress:
    def __init__(self, total: int, *, enabled: bool = True, label: str = ""):
        self.total = max(1, int(total))
        # redirected output gets no carriage-return redraws
        self.enabled = enabled and sys.stdout.isatty()
        self.label = label
        self.start = time.perf_counter()
        self.last_draw = 0.0
        self.spin = "|/-\\"
        self.i = 0

    def update(self, done: int, total: int | None = None):
        THROTTLE = 0.05
        if not self.enabled:
            return
        now = time.perf_counter()
        if now - self.last_draw < THROTTLE:  # throttle to avoid flicker
            return
        self.last_draw = now
        if total:
            self.total = max(1, int(total))
        self.i = (self.i + 1) % len(self.spin)
        frac = min(max(done / self.total, 0.0), 1.0)
        pct = int(frac * 100)
        bar_len = 24
        fill = int(frac * bar_len)
        bar = "#" * fill + "-" * (bar_len - fill)
        msg = f"\r[{self.spin[self.i]}] [{bar}] {pct:3d}%  {self.label[:50]}"
        sys.stdout.write(msg)
        sys.stdout.flush()

    # Solver.on_progress signature
    __call__ = update

    def done(self):
        if not self.enabled:
            return
        sys.stdout.write("\r" + " " * 80 + "\r")
        sys.stdout.flush()
