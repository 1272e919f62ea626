"""
Constants and configuration values for Mirage.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the application.
"""

# Program identity
PROGRAM_NAME = "mirage"

# Synthetic canvas (generate / fractal)
CANVAS_WIDTH = 800
CANVAS_HEIGHT = 800
CANVAS_SIZE = (CANVAS_WIDTH, CANVAS_HEIGHT)

# Gradient counter wraps back to 1 after this value
GRADIENT_CYCLE = 255

# Fractal generator
JULIA_CONSTANT = complex(-0.4, 0.6)
FRACTAL_MAX_ITERATIONS = 255
FRACTAL_ESCAPE_RADIUS = 2.0
FRACTAL_SPAN = 3.0
FRACTAL_OFFSET = 1.5
FRACTAL_BACKGROUND_FACTOR = 0.3

# Channel bounds
CHANNEL_MIN = 0
CHANNEL_MAX = 255
U32_MAX = 2 ** 32 - 1

# Command defaults
DEFAULT_BLUR_SIGMA = 2.0
DEFAULT_BRIGHTEN_DELTA = 10
DEFAULT_FRACTAL_WORKERS = 1
MAX_FRACTAL_WORKERS = 256
# sigma used when a non-positive one is given
FALLBACK_BLUR_SIGMA = 1.0
ROTATION_ANGLES = (90, 180, 270)

# Output
DEFAULT_JPEG_QUALITY = 95
TEMP_FILE_PREFIX = ".mirage-"

# Command names
COMMAND_BLUR = "blur"
COMMAND_BRIGHTEN = "brighten"
COMMAND_CROP = "crop"
COMMAND_ROTATE = "rotate"
COMMAND_GENERATE = "generate"
COMMAND_INVERT = "invert"
COMMAND_GRAYSCALE = "grayscale"
COMMAND_FRACTAL = "fractal"

# Process exit codes
EXIT_OK = 0
EXIT_USAGE_ERROR = 1
EXIT_ARGUMENT_ERROR = 2
EXIT_DECODE_ERROR = 3
EXIT_ENCODE_ERROR = 4
