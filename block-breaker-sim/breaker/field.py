"""Playfield dimensions and tuning constants.

All values in logical pixels, seconds and degrees. Y grows downward, so
negative launch angles point up the screen.
"""

# Playfield (logical canvas size)
SCREEN_WIDTH = 480
SCREEN_HEIGHT = 640

# Paddle: centred horizontally, top edge PADDLE_BOTTOM_GAP above the floor
PADDLE_WIDTH_RATIO = 0.25  # fraction of the playfield width
PADDLE_HEIGHT = 12
PADDLE_BOTTOM_GAP = 100

# Ball
BALL_RADIUS = 8
BALL_GAP = 1  # px between a stuck ball and the paddle top
BASE_SPEED = 300.0  # px/s

# Launch angles (degrees, negative = upward)
KEY_LAUNCH_ANGLE = -60.0
POINTER_LAUNCH_MIN = -135.0
POINTER_LAUNCH_MAX = -45.0

# Paddle deflection: hit offset -1..1 maps linearly onto +-MAX_BOUNCE_ANGLE
MAX_BOUNCE_ANGLE_DEG = 75.0

# Brick grid
BRICK_COLS = 10
BRICK_ROWS = 6
BRICK_TILE_HEIGHT = 24
BRICK_OFFSET_X = 0
BRICK_OFFSET_Y = 60
BRICK_SCORE = 50
BRICK_HP = 1
BRICK_INSET = 1  # px drawn inside each tile edge

# Separation applied when pushing the ball out of a brick
SEPARATION_EPSILON = 0.1

# Frame timing: deltas above this are clamped (stalls, tab switches)
MAX_DT = 1.0 / 30.0

# Colours (RGB)
BG_COLOR = (11, 15, 19)
PADDLE_COLOR = (51, 170, 255)
BALL_IDLE_COLOR = (170, 170, 170)
BALL_LIVE_COLOR = (255, 170, 51)
HUD_COLOR = (153, 170, 221)
OVERLAY_COLOR = (0, 0, 0)

# Brick gradient: hue sweeps across columns, lightness drops per row
BRICK_SATURATION = 0.70
BRICK_LIGHTNESS_TOP = 0.60
BRICK_LIGHTNESS_STEP = 0.05
