from enum import Enum


class AspectRatio(str, Enum):
    """Aspect ratios offered for the generated photograph."""
    SQUARE = "1:1"
    LANDSCAPE_4_3 = "4:3"
    PORTRAIT_3_4 = "3:4"
    WIDESCREEN = "16:9"
    VERTICAL = "9:16"


class LightingStyle(str, Enum):
    """Lighting styles offered for the generated photograph."""
    STUDIO = "Studio"
    NATURAL = "Natural"
    DRAMATIC = "Dramatic"
    SOFT = "Soft"
    CINEMATIC = "Cinematic"
    HIGH_KEY = "High-Key"


class CameraPerspective(str, Enum):
    """Camera perspectives offered for the generated photograph."""
    EYE_LEVEL = "Eye-level"
    HIGH_ANGLE = "High-angle"
    LOW_ANGLE = "Low-angle"
    DUTCH_ANGLE = "Dutch-angle"
    OVERHEAD = "Overhead"
    CLOSE_UP = "Close-up"


class ImageOrigin(str, Enum):
    """Where an image payload came from."""
    UPLOADED = "UPLOADED"
    GENERATED = "GENERATED"


class StyleSource(str, Enum):
    """Which style input feeds the Style Inspiration section of the prompt."""
    STYLE_IMAGE = "STYLE_IMAGE"
    KEYWORDS = "KEYWORDS"
    NONE = "NONE"


class SessionState(str, Enum):
    """Lifecycle state of the studio session."""
    IDLE = "IDLE"
    VALIDATING = "VALIDATING"
    INVALID_INPUT = "INVALID_INPUT"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
