# --- Display ---
WIDTH = 400
HEIGHT = 600
FPS = 60

# --- Simulation ---
SIM_DT = 1.0 / 60.0         # fixed physics step (s), independent of render FPS
MAX_FRAME_S = 0.25          # clamp stalls: at most this much time is caught up per frame

# --- Avatar ---
AVATAR_X = 100              # avatar's fixed x (world scrolls left)
AVATAR_W = 35
AVATAR_H = 30
GRAVITY = 900.0             # px/s^2, pulls down
FLAP_VELOCITY = -300.0      # px/s, upward impulse
MAX_FALL_SPEED = 450.0      # clamp vertical velocity (terminal fall speed)
ROTATION_PER_VY = 0.08      # degrees per px/s
MAX_ROTATION_DEG = 25.0
FLAP_ANIM_FRAMES = 10
MIN_FLAP_INTERVAL_MS = 100  # tap debounce

# --- Obstacles ---
OBSTACLE_W = 36
OBSTACLE_CAP_H = 25         # visual only
OBSTACLE_MARGIN = 50        # min distance between a gap edge and the field edge
SPAWN_SPACING = 200         # spawn when the newest obstacle is this far in from the right edge
BASE_SPEED = 2.0            # px per tick
MIN_GAP = 110
MAX_GAP = 170

# --- Difficulty ---
MILESTONE_DISTANCE = 50     # every 50 m ...
SPEED_STEP = 0.1            # ... +10% speed
GAP_STEP = 5                # ... +5 px gap
POINTS_PER_OBSTACLE = 10

# --- Game flow ---
COUNTDOWN_FROM = 3
COUNTDOWN_STEP_MS = 1000
DEFAULT_PLAYER_NAME = "Nameless"
MAX_NAME_LEN = 16

# --- Clouds ---
CLOUD_COUNT = 8
CLOUD_MIN_SIZE = 20
CLOUD_MAX_SIZE = 60
CLOUD_MIN_SPEED = 0.2
CLOUD_MAX_SPEED = 0.7
CLOUD_MIN_OPACITY = 0.1
CLOUD_MAX_OPACITY = 0.4
CLOUD_BAND = 0.6            # clouds live in the top 60% of the field

# --- Effects ---
EFFECT_LIFE = 60            # ticks
EFFECT_VY = -2.0            # px per tick
EFFECT_FADE = 1.0 / 60.0    # opacity lost per tick

# --- Colors (RGB) ---
COLOR_SKY_TOP = (135, 206, 235)
COLOR_SKY_BOTTOM = (152, 216, 232)
COLOR_CLOUD = (255, 255, 255)
COLOR_PIPE_LIGHT = (76, 175, 80)
COLOR_PIPE_DARK = (46, 125, 50)
COLOR_PIPE_CAP = (129, 199, 132)
COLOR_AVATAR = (255, 215, 0)
COLOR_WING = (255, 165, 0)
COLOR_EYE = (0, 0, 0)
COLOR_FG = (255, 255, 255)
COLOR_GOLD = (255, 215, 0)
COLOR_PINK = (255, 105, 180)
COLOR_MINT = (144, 238, 144)
COLOR_SKY_TEXT = (135, 206, 235)
