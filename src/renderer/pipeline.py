# renderer/pipeline.py
import math
import time
from typing import Callable, Iterator, List, NamedTuple, Optional, Tuple
from core.errors import RenderInProgressError
from core.vector import Vector3
from geometry.scene import Scene
from renderer.edges import detect_edges
from renderer.framebuffer import FrameBuffer
from renderer.shading import ray_color
from renderer.tone_mapping import to_rgb

# Anti-aliasing usually runs a little slower per ray than the first pass.
ESTIMATE_SAFETY_FACTOR = 1.3

Chunk = Tuple[int, int, int, int]  # x0, y0, x1, y1 (exclusive)

class RenderStep(NamedTuple):
    """Progress report yielded between units of work."""
    phase: str  # "render", "edges" or "antialias"
    done: int
    total: int

class RenderStats:
    def __init__(self):
        self.render_time = 0.0
        self.elapsed = 0.0
        self.flagged = 0
        self.estimate = 0.0

    def __repr__(self) -> str:
        return (f"RenderStats(render_time={self.render_time:.3f}, elapsed={self.elapsed:.3f}, "
                f"flagged={self.flagged}, estimate={self.estimate:.3f})")

def chunk_grid(width: int, height: int, chunk_count: int) -> List[Chunk]:
    """
    Split the image into a chunk_count x chunk_count grid of square tiles
    whose side covers the longer image dimension. Tiles are clipped to the
    image and empty ones dropped. Columns are walked left to right, each
    bottom to top.
    """
    side = math.ceil(max(width, height) / chunk_count)
    chunks = []
    for i in range(chunk_count):
        for j in range(chunk_count):
            x0, y0 = i * side, j * side
            x1, y1 = min(x0 + side, width), min(y0 + side, height)
            if x0 < x1 and y0 < y1:
                chunks.append((x0, y0, x1, y1))
    return chunks

class RenderPipeline:
    """
    Progressive renderer: one primary ray per pixel, chunk by chunk, then
    edge detection over the finished image, then supersampling of the
    flagged pixels only.

    steps() is a generator so a host loop can draw the frame buffer between
    chunks. Only one render may be active per pipeline at a time.
    """
    def __init__(self, framebuffer: FrameBuffer, chunk_count: int = 6, alias_samples: int = 3,
                 edge_threshold: float = 9, alias_batch: int = 256, highlight_edges: bool = True,
                 status: Optional[Callable[[str], None]] = print):
        if chunk_count < 1:
            raise ValueError(f"chunk_count must be at least 1, got {chunk_count}")
        if alias_samples < 1:
            raise ValueError(f"alias_samples must be at least 1, got {alias_samples}")
        self.framebuffer = framebuffer
        self.chunk_count = chunk_count
        self.alias_samples = alias_samples
        self.edge_threshold = edge_threshold
        self.alias_batch = max(1, alias_batch)
        self.highlight_edges = highlight_edges
        self.status = status if status is not None else (lambda message: None)
        self.stats = RenderStats()
        self._active = False

    @property
    def active(self) -> bool:
        return self._active

    def render(self, scene: Scene) -> RenderStats:
        """Run every phase to completion."""
        for _ in self.steps(scene):
            pass
        return self.stats

    def steps(self, scene: Scene) -> Iterator[RenderStep]:
        """
        Claim the pipeline and return an iterator over the render's steps.
        Raises RenderInProgressError at once if another render is active.
        The claim is released when the iterator is exhausted or closed.
        """
        if self._active:
            raise RenderInProgressError("render already in progress")
        self._active = True
        guarded = self._guarded(scene)
        next(guarded)
        return guarded

    def _guarded(self, scene: Scene) -> Iterator[RenderStep]:
        try:
            # Parked here by steps() so close() reaches the finally block
            # even before the first step.
            yield
            yield from self._run(scene)
        finally:
            self._active = False

    def _run(self, scene: Scene) -> Iterator[RenderStep]:
        fb = self.framebuffer
        stats = self.stats = RenderStats()
        start = time.perf_counter()

        self.status("RENDERING...")
        fb.clear()
        chunks = chunk_grid(fb.width, fb.height, self.chunk_count)
        for index, chunk in enumerate(chunks, 1):
            self._render_chunk(scene, chunk)
            yield RenderStep("render", index, len(chunks))
        stats.render_time = time.perf_counter() - start

        self.status("DETECTING EDGES...")
        flagged = detect_edges(fb, self.edge_threshold, self.highlight_edges)
        stats.flagged = len(flagged)
        yield RenderStep("edges", 1, 1)

        # flagged pixels * rays per pixel * time per ray, padded
        time_per_ray = stats.render_time / (fb.width * fb.height)
        stats.estimate = (stats.flagged * self.alias_samples ** 2 * time_per_ray
                          * ESTIMATE_SAFETY_FACTOR)
        self.status(f"ANTI-ALIASING... [Estimated {stats.estimate:.2f}s]")

        pending = sorted(flagged)
        for batch_start in range(0, len(pending), self.alias_batch):
            batch = pending[batch_start:batch_start + self.alias_batch]
            for x, y in batch:
                fb.set_pixel(x, y, to_rgb(self._supersample(scene, x, y)))
            yield RenderStep("antialias", batch_start + len(batch), len(pending))

        stats.elapsed = time.perf_counter() - start
        self.status(f"Finished in {stats.elapsed:.2f}s")

    def _render_chunk(self, scene: Scene, chunk: Chunk):
        fb = self.framebuffer
        camera = scene.camera
        x0, y0, x1, y1 = chunk
        for x in range(x0, x1):
            for y in range(y0, y1):
                ray = camera.get_ray(x / fb.width, y / fb.height)
                fb.set_pixel(x, y, to_rgb(ray_color(ray, scene)))

    def _supersample(self, scene: Scene, x: int, y: int) -> Vector3:
        """Average a samples x samples grid of rays inside the pixel."""
        fb = self.framebuffer
        camera = scene.camera
        samples = self.alias_samples
        color = Vector3(0, 0, 0)
        for a in range(samples):
            for b in range(samples):
                u = (x + a / samples) / fb.width
                v = (y + b / samples) / fb.height
                color = color + ray_color(camera.get_ray(u, v), scene)
        return color * (1.0 / (samples * samples))
