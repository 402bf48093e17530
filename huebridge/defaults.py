"""Central place for huebridge default settings."""

# Canonical space
CANONICAL_MODEL: str = "xyz-d65"

# Rounding
DEFAULT_PRECISION: int = 5

# Fitting
DEFAULT_FIT_METHOD: str = "clip"
FIT_METHODS: tuple[str, ...] = ("none", "round-only", "clip", "chroma-reduction", "css-gamut-map")
GAMUT_EPSILON: float = 1e-5  # Tolerance for in-gamut checks

# Lightness range search (chroma reduction, step 3)
LIGHTNESS_RANGE_CHROMA: float = 0.05  # Reference chroma that must stay in gamut
LIGHTNESS_RANGE_EPSILON: float = 1e-5

# Chroma reduction bisection
CHROMA_REDUCTION_EPSILON: float = 1e-6
CHROMA_REDUCTION_MAX_CHROMA: float = 1.0
CHROMA_REDUCTION_THRESHOLD: float = 2.0  # delta_e_ok (x100 scale) accepting a clipped projection

# CSS Color 4 gamut mapping (section 13.2)
CSS_GAMUT_MAP_JND: float = 0.02  # Compared against the x100 delta_e_ok, see DESIGN.md
CSS_GAMUT_MAP_EPSILON: float = 1e-4

# Mixing
DEFAULT_MIX_AMOUNT: float = 0.5
DEFAULT_HUE_INTERPOLATION: str = "shorter"
DEFAULT_EASING: str = "linear"
DEFAULT_MIX_GAMMA: float = 1.0

# Scales
DEFAULT_SCALE_STEPS: int = 10
DEFAULT_SCALE_MODEL: str = "lab"

# Color difference
DEFAULT_DELTA_E_METHOD: str = "94"
DELTA_E_OK_SCALE: float = 100.0

# Expression safety limits (relative colors)
EXPR_MAX_DEPTH: int = 20
EXPR_MAX_NODES: int = 100

# Palette clustering (k-means++ in OKLab)
CLUSTER_RUNS: int = 5
CLUSTER_MAX_ITERATIONS: int = 100
