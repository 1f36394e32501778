# whitted/main.py
import argparse
import sys
from whitted.config import ASSETS_PATH, EPSILON, MAX_DEPTH, BACKGROUND_COLOR, RenderSettings
from whitted.errors import SceneError
from whitted.renderer.framebuffer import FrameBuffer
from whitted.renderer.image_io import save_image
from whitted.renderer.raytracer import Raytracer
from whitted.scene.loader import load_scene


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Whitted-style triangle mesh ray tracer")
    parser.add_argument("scene", help="Path to the JSON scene file")
    parser.add_argument("-o", "--output", default="output.ppm",
                        help="Output image; format follows the extension (default: output.ppm)")
    parser.add_argument("--assets", default=ASSETS_PATH,
                        help=f"Directory holding meshes and textures (default: {ASSETS_PATH})")
    parser.add_argument("--max-depth", type=int, default=MAX_DEPTH,
                        help=f"Maximum reflection depth (default: {MAX_DEPTH})")
    parser.add_argument("--epsilon", type=float, default=EPSILON,
                        help=f"Intersection tolerance and ray offset (default: {EPSILON})")
    parser.add_argument("--background", type=float, nargs=3, metavar=("R", "G", "B"),
                        default=list(BACKGROUND_COLOR), help="Background color in [0, 1]")
    parser.add_argument("--workers", type=int, default=1,
                        help="Worker processes, rows are split between them (default: 1)")
    parser.add_argument("--preview", action="store_true",
                        help="Show the finished image in a window")
    parser.add_argument("--quiet", action="store_true", help="Only report errors")
    return parser


def show_preview(framebuffer: FrameBuffer, title: str = "Ray Tracer"):
    """Blocks until the preview window is closed or Escape is pressed."""
    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((framebuffer.width, framebuffer.height))
        pygame.display.set_caption(title)
        # surfarray is indexed [x, y]
        surface = pygame.surfarray.make_surface(framebuffer.pixels.swapaxes(0, 1))
        screen.blit(surface, (0, 0))
        pygame.display.flip()

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    verbose = not args.quiet

    try:
        settings = RenderSettings(max_depth=args.max_depth, epsilon=args.epsilon,
                                  background=args.background, workers=args.workers,
                                  verbose=verbose)
        scene = load_scene(args.scene, args.assets, verbose=verbose)
        tracer = Raytracer(scene, settings)
    except SceneError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: invalid settings: {e}", file=sys.stderr)
        return 2

    framebuffer = tracer.render()
    save_image(framebuffer, args.output, verbose=verbose)

    if args.preview:
        show_preview(framebuffer, title=args.scene)
    return 0


if __name__ == "__main__":
    sys.exit(main())
