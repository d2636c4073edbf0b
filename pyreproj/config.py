"""
Numeric configuration for PyReproj.

Iteration caps and convergence thresholds shared by the iterative inverse
routines, chosen so that iterative inverses agree with their forward
formulas to well below a millimetre, plus the factory cache size.
"""

# Upper bound on Newton / fixed-point iterations in any inverse routine
MAX_ITERATIONS = 15

# Convergence threshold for latitudes, in radians (~6e-6 mm on the ellipsoid)
ANGULAR_TOLERANCE = 1e-12

# Convergence threshold for projected coordinates, in metres
LINEAR_TOLERANCE = 1e-6

# Latitudes closer than this to +/-90 degrees are treated as the pole
POLE_TOLERANCE = 1e-10

# Transformations kept by each factory before the least recently used is dropped
CACHE_SIZE = 256
