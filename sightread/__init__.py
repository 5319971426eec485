"""Random two-hand piano sight-reading exercises in ABC notation."""

from sightread.config import ExerciseConfig
from sightread.errors import ConfigurationError
from sightread.generator import generate, generate_exercise

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ExerciseConfig",
    "__version__",
    "generate",
    "generate_exercise",
]
