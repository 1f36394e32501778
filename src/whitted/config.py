# whitted/config.py
from typing import Optional, Tuple

# Intersection / self-intersection offset tolerance
EPSILON = 1e-5
# Reflection recursion bound
MAX_DEPTH = 5
# |det| below this means the matrix is not invertible
SINGULAR_EPSILON = 1e-10
BACKGROUND_COLOR = (0.0, 0.0, 0.0)
ASSETS_PATH = "Assets/"


class RenderSettings:
    """
    Tunables for a single render. Anything left as None falls back to the
    module defaults above.
    """
    def __init__(self, max_depth: int = MAX_DEPTH, epsilon: float = EPSILON,
                 background: Optional[Tuple[float, float, float]] = None,
                 workers: int = 1, verbose: bool = True):
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")
        if epsilon <= 0:
            raise ValueError(f"epsilon must be positive, got {epsilon}")
        self.max_depth = max_depth
        self.epsilon = epsilon
        self.background = tuple(background) if background is not None else BACKGROUND_COLOR
        self.workers = max(1, int(workers))
        self.verbose = verbose

    def __repr__(self) -> str:
        return (f"RenderSettings(max_depth={self.max_depth}, epsilon={self.epsilon}, "
                f"background={self.background}, workers={self.workers})")
