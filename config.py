"""Central configuration for light bar detection.

All tunable parameters are defined here with descriptive names.
The dataclass configs in preprocessing/ and detection/ read their defaults
from this module, so changing a value here changes the default pipeline.

HSV values follow the OpenCV 8-bit convention: hue in [0, 180) half-degrees,
saturation and value in [0, 255].
"""

# =============================================================================
# PREVIEW PREPROCESSING
# =============================================================================

# Kernel size for the box (mean) blur preview. Must be a positive odd integer.
MEAN_BLUR_KERNEL_SIZE = 5

# Kernel size and sigma for the Gaussian blur preview
GAUSSIAN_BLUR_KERNEL_SIZE = 5
GAUSSIAN_BLUR_SIGMA = 1.0

# =============================================================================
# COLOR SEGMENTATION
# =============================================================================

# Upper bound of each HSV channel (inclusive) in the OpenCV 8-bit convention
HSV_CHANNEL_MAX = (180, 255, 255)

# Red wraps around hue 0, so it needs two sub-ranges
RED_HSV_RANGES = (
    ((0, 100, 100), (10, 255, 255)),
    ((160, 100, 100), (180, 255, 255)),
)

BLUE_HSV_RANGES = (
    ((100, 100, 100), (130, 255, 255)),
)

# =============================================================================
# MORPHOLOGY
# =============================================================================

# Side length of the square structuring element used for open/close
MORPH_KERNEL_SIZE = 3

# =============================================================================
# REGION ACCEPTANCE
# =============================================================================

# Contour area in pixels (shoelace area of the boundary polygon).
# Both bounds are exclusive.
MIN_REGION_AREA = 50
MAX_REGION_AREA = 5000

# Bounding box height / width. Light bars are tall and thin.
MIN_REGION_ASPECT_RATIO = 1.5
MAX_REGION_ASPECT_RATIO = 8.0

# Minimum bounding box size in pixels (exclusive)
MIN_REGION_WIDTH = 3
MIN_REGION_HEIGHT = 10

# =============================================================================
# ANNOTATION
# =============================================================================

# Colors are BGR
ANNOTATION_BOX_COLOR = (0, 255, 0)
ANNOTATION_BOX_THICKNESS = 2
ANNOTATION_TEXT_COLOR = (0, 255, 0)
ANNOTATION_TEXT_THICKNESS = 1
ANNOTATION_FONT_SCALE = 0.4

# Vertical distance between the top of a box and the label baseline
ANNOTATION_LABEL_OFFSET = 5

# =============================================================================
# OUTPUT ARTIFACTS
# =============================================================================

# Suffixes appended to the input file stem when saving results
ARTIFACT_SUFFIXES = {
    "gray": "_gray.jpg",
    "blur": "_blur.jpg",
    "gaussian": "_gaussian.jpg",
    "mask": "_mask.png",
    "result": "_result.jpg",
    "report": "_report.json",
}

DEFAULT_OUTPUT_DIR = "output"
