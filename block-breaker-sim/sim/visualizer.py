"""Pygame frontend — window, input wiring and a RenderTarget for the engine."""

import logging

try:
    import pygame
except ImportError:
    pygame = None

from breaker.controls import InputSource
from breaker.render import RenderTarget
from breaker.session import Session
from breaker.types import Command, GameConfig

logger = logging.getLogger(__name__)

WINDOW_SCALE = 1.25
FPS = 60

KEY_COMMANDS = {}
if pygame is not None:
    KEY_COMMANDS = {
        pygame.K_SPACE: Command.LAUNCH,
        pygame.K_p: Command.PAUSE_TOGGLE,
        pygame.K_ESCAPE: Command.PAUSE_TOGGLE,
        pygame.K_r: Command.RESTART,
    }


class PygameTarget(RenderTarget):
    """Draws engine primitives onto a pygame Surface."""

    def __init__(self, surface):
        self.surface = surface
        self._fonts = {}

    def _font(self, style: dict):
        key = (style.get("font", "monospace"), style.get("size", 14), style.get("bold", False))
        if key not in self._fonts:
            self._fonts[key] = pygame.font.SysFont(key[0], key[1], bold=key[2])
        return self._fonts[key]

    def fill_circle(self, x, y, r, color):
        pygame.draw.circle(self.surface, color, (int(round(x)), int(round(y))), int(round(r)))

    def fill_rect(self, x, y, w, h, color):
        pygame.draw.rect(self.surface, color, pygame.Rect(int(x), int(y), int(w), int(h)))

    def draw_text(self, text, x, y, style):
        img = self._font(style).render(text, True, style.get("color", (255, 255, 255)))
        if style.get("align") == "center":
            rect = img.get_rect(center=(int(x), int(y)))
        else:
            # Canvas-style baseline: y is roughly the bottom of the text
            rect = img.get_rect(bottomleft=(int(x), int(y)))
        self.surface.blit(img, rect)


def _dispatch_event(event, source: InputSource, window_w: int) -> bool:
    """Translate one pygame event into input-source calls. False means quit."""
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_q:
            return False
        command = KEY_COMMANDS.get(event.key)
        if command is not None:
            source.request(command)
    elif event.type == pygame.MOUSEMOTION:
        source.pointer_moved(event.pos[0])
    elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
        source.request(Command.LAUNCH_RANDOM)
    elif event.type == pygame.FINGERMOTION:
        # Finger coordinates are normalised to the window
        source.touch_moved([event.x * window_w])
    elif event.type == pygame.FINGERDOWN:
        source.request(Command.LAUNCH_RANDOM)
    return True


def _open_tracker(playfield_width: int):
    """Camera and marker tracker, or (None, None) after printing why not."""
    try:
        from sim.tracker import MarkerTracker, open_camera
    except ImportError:
        print("ERROR: OpenCV is not installed. Run: pip install opencv-python")
        return None, None
    camera = open_camera()
    if camera is None:
        print("ERROR: no camera available")
        return None, None
    return camera, MarkerTracker(playfield_width)


def run_visualizer(config: GameConfig = None, use_camera: bool = False) -> bool:
    """Launch the game window. Returns False if a frontend is unavailable."""
    if pygame is None:
        print("ERROR: pygame is not installed. Run: pip install pygame")
        return False

    cfg = config or GameConfig()
    window_w = int(cfg.width * WINDOW_SCALE)
    window_h = int(cfg.height * WINDOW_SCALE)

    tracker = camera = None
    if use_camera:
        camera, tracker = _open_tracker(cfg.width)
        if tracker is None:
            return False

    pygame.init()
    screen = pygame.display.set_mode((window_w, window_h))
    pygame.display.set_caption("Block Breaker")
    clock = pygame.time.Clock()

    canvas = pygame.Surface((int(cfg.width), int(cfg.height)))
    target = PygameTarget(canvas)

    source = InputSource(cfg.width, rect_left=0, rect_width=window_w)
    session = Session(cfg)
    session.init()
    session.attach_input(source)

    running = True
    try:
        while running:
            clock.tick(FPS)

            for event in pygame.event.get():
                if not _dispatch_event(event, source, window_w):
                    running = False

            if tracker is not None:
                ok, frame = camera.read()
                if ok:
                    tracker.feed(frame, source)
                else:
                    logger.warning("Camera frame grab failed")

            session.frame(pygame.time.get_ticks() / 1000.0)

            session.render(target)
            pygame.transform.scale(canvas, (window_w, window_h), screen)
            pygame.display.flip()
    finally:
        session.dispose()
        if camera is not None:
            camera.release()
        pygame.quit()
    return True
