"""
Numeric tolerances and thresholds used by the curve routines.
"""

# Condition number of the Bernstein basis above which a fit is reported
# as ill-conditioned
ILL_CONDITIONED = 1e12

# Trailing derivative coefficients below this fraction of the largest
# coefficient are dropped before root finding
COEFF_ZERO_TOL = 1e-14

# Slope samples per unit of parameter and per degree when bracketing
# projection minima
PROJECTION_GRID_DENSITY = 200

# Unclamped projection brackets minima on [-margin, 1 + margin]
UNCLAMPED_MARGIN = 1.0

# Newton steps applied to power-basis root estimates
NEWTON_STEPS = 4

# Entries kept in the matrix cache before the least recently used is evicted
MATRIX_CACHE_SIZE = 128
