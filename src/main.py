# main.py
import argparse
from typing import List, Optional, Sequence
import pygame
from core.errors import MalformedSceneError, RenderInProgressError
from core.vector import Vector3
from camera.camera import Camera
from geometry.scene import Scene, SceneEntry
from renderer.framebuffer import FrameBuffer
from renderer.pipeline import RenderPipeline

# Spheres of the default scene: two small ones resting on a huge "ground" sphere.
DEFAULT_SPHERES: List[SceneEntry] = [
    {"center": (0, 0, -1), "radius": 0.3, "color": (255, 0, 0)},
    {"center": (0, 0.2, -0.8), "radius": 0.15, "color": (0, 0, 255)},
    {"center": (0, -100.5, -1), "radius": 100, "color": (0, 255, 0)},
]

def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Progressive Phong ray tracer")
    parser.add_argument("--width", type=int, default=400, help="image width in pixels")
    parser.add_argument("--height", type=int, default=300, help="image height in pixels")
    parser.add_argument("--obj", action="append", default=[], metavar="PATH",
                        help="OBJ file to add to the scene (repeatable)")
    parser.add_argument("--scale", type=float, default=0.2, help="scale applied to every OBJ model")
    parser.add_argument("--offset", type=float, nargs=3, default=(0.0, 0.0, -1.0),
                        metavar=("X", "Y", "Z"), help="position of every OBJ model")
    parser.add_argument("--color", type=float, nargs=3, default=(200.0, 200.0, 200.0),
                        metavar=("R", "G", "B"), help="0-255 color of every OBJ model")
    parser.add_argument("--chunks", type=int, default=6, help="chunks per side of the render grid")
    parser.add_argument("--samples", type=int, default=3, help="anti-alias samples per pixel side")
    parser.add_argument("--no-spheres", action="store_true", help="leave out the default spheres")
    return parser.parse_args(argv)

def build_description(args: argparse.Namespace) -> List[SceneEntry]:
    """Turn command line options into scene description entries."""
    entries: List[SceneEntry] = [] if args.no_spheres else [dict(e) for e in DEFAULT_SPHERES]
    for path in args.obj:
        with open(path, 'r') as f:
            source = f.read()
        entries.append({
            "source": source,
            "scale": args.scale,
            "offset": tuple(args.offset),
            "color": tuple(args.color),
        })
    return entries

class Application:
    def __init__(self, args: argparse.Namespace):
        pygame.init()
        self.width = args.width
        self.height = args.height
        self.screen = pygame.display.set_mode((self.width, self.height))
        pygame.display.set_caption("Ray Tracer")
        self.font = pygame.font.Font(None, 24)

        self.description = build_description(args)
        self.framebuffer = FrameBuffer(self.width, self.height)
        self.pipeline = RenderPipeline(
            self.framebuffer,
            chunk_count=args.chunks,
            alias_samples=args.samples,
            status=self.set_status
        )
        self.status_text = ""
        self.steps = None

    def set_status(self, message: str):
        print(message)
        self.status_text = message

    def generate(self):
        """Rebuild the scene from its description and start a new render."""
        camera = Camera.for_image(self.width, self.height, position=Vector3(0, 0, 0))
        try:
            scene = Scene.from_description(self.description, camera)
        except MalformedSceneError as e:
            self.set_status(f"Scene error: {e}")
            return

        try:
            self.steps = self.pipeline.steps(scene)
        except RenderInProgressError as e:
            self.set_status(str(e))
            return
        self.advance()

    def advance(self):
        """Run one unit of render work, if any is pending."""
        if self.steps is None:
            return
        try:
            next(self.steps)
        except StopIteration:
            self.steps = None

    def draw(self):
        surface = pygame.surfarray.make_surface(self.framebuffer.pixels)
        self.screen.blit(surface, (0, 0))
        if self.status_text:
            text = self.font.render(self.status_text, True, (255, 255, 255), (0, 0, 0))
            self.screen.blit(text, (8, 8))
        pygame.display.flip()

    def run(self):
        clock = pygame.time.Clock()
        self.generate()
        running = True
        try:
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        if event.key == pygame.K_ESCAPE:
                            running = False
                        elif event.key == pygame.K_g:
                            self.generate()

                self.advance()
                self.draw()
                # Idle politely once the render is done
                clock.tick(60 if self.steps is None else 0)
        finally:
            if self.steps is not None:
                self.steps.close()
            pygame.quit()

def main(argv: Optional[Sequence[str]] = None):
    args = parse_args(argv)
    app = Application(args)
    app.run()

if __name__ == "__main__":
    main()
