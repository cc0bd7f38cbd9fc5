BREAKOUT_R2 = 4

# width of the plane shown at zoom 1, i.e. the real axis spans [-2, 2)
PLANE_WIDTH = 4
MAX_IMAGE_DIMENSION = 8192

BROT_COLOUR = (0, 0, 0)
OPAQUE = 255

# defaults of the canvas page
DEFAULT_IMAGE_SIZE = 750
DEFAULT_SELECTION = "julia"
DEFAULT_REAL = -0.15
DEFAULT_IMAGINARY = 0.65
DEFAULT_MAX_ITERATIONS = 500
