"""
Configuration constants for minorephem.

This module centralizes all configuration parameters used throughout the application,
making them easily configurable and maintainable.
"""

# Physical Constants
# Gaussian gravitational constant (AU^1.5 / day)
GAUSSIAN_GRAVITATIONAL_CONSTANT = 0.01720209895
# Speed of light in AU/day (IAU 2012 astronomical unit)
SPEED_OF_LIGHT_AU_PER_DAY = 173.1446326846693

# Mean obliquity of the ecliptic at J2000.0 (23°26'21.448")
SIN_OBLIQUITY_J2000 = 0.397777155931913701597179975942380896684
COS_OBLIQUITY_J2000 = 0.917482062069181825744000384639406458043

J2000_JDE = 2451545.0
DAYS_PER_JULIAN_CENTURY = 36525.0

# Kepler Solver Configuration
DEFAULT_KEPLER_TOLERANCE = 1e-12             # Convergence tolerance for Newton step size
DEFAULT_KEPLER_MAX_ITERATIONS = 15           # Newton iteration cap before falling back
BISECTION_STEPS = 53                         # Sinnott halvings, one per bit of a double mantissa
HIGH_ECCENTRICITY_THRESHOLD = 0.7            # Threshold for high-e initial guess
HIGH_E_COEFFICIENT = 0.85                    # Coefficient for high-e initial guess
DANGEROUS_ECCENTRICITY_WARNING = 0.95        # Issue warnings above this eccentricity
KEPLER_LOGGING_PRECISION = 6                 # Decimal places for logging

# Photometry (IAU H-G system, Bowell et al. 1989)
DEFAULT_SLOPE_PARAMETER = 0.15
HG_PHI1_A = 3.33
HG_PHI1_B = 0.63
HG_PHI2_A = 1.87
HG_PHI2_B = 1.22

# Presentation: a magnitude is printed only when V >= this value
DEFAULT_MAGNITUDE_DISPLAY_THRESHOLD = 6.0
MAGNITUDE_DISPLAY_FORMAT = "{:4.1f}"
RA_DISPLAY_PRECISION = 1    # decimal places on seconds of time
ANGLE_DISPLAY_PRECISION = 0  # decimal places on arcseconds

# MPCORB.DAT Column Specifications
# Based on the MPC export format documentation (1-based columns converted to 0-based slices)
MPCORB_COLSPECS = {
    'designation': (0, 7),
    'H': (8, 13),
    'G': (14, 19),
    'epoch': (20, 25),
    'mean_anomaly': (26, 35),
    'peri': (37, 46),
    'node': (48, 57),
    'incl': (59, 68),
    'e': (70, 79),
    'n': (80, 91),
    'a': (92, 103),
    'readable_designation': (166, 194),
}
MPCORB_MIN_RECORD_LENGTH = 103

# MPC packed date characters
PACKED_CENTURY_CODES = {'I': 1800, 'J': 1900, 'K': 2000}
PACKED_DIGITS = '0123456789ABCDEFGHIJKLMNOPQRSTUV'

# ObsCodes.html Column Specifications
OBSCODES_COLSPECS = [
    (0, 3),    # Code
    (4, 13),   # Longitude (degrees east)
    (13, 21),  # rho * cos(phi')
    (21, 30),  # rho * sin(phi')
    (30, 120), # Name
]
OBSCODES_COLUMN_NAMES = ['code', 'longitude_deg', 'rho_cos_phi', 'rho_sin_phi', 'name']

# Earth mean orbital elements, J2000 ecliptic (Standish, JPL approximate positions)
EARTH_MEAN_ELEMENTS_J2000 = {
    'a': 1.00000261,
    'e': 0.01671123,
    'i_deg': 0.0,
    'Omega_deg': 0.0,
    'varpi_deg': 102.93768193,   # longitude of perihelion
    'L_deg': 100.46457166,       # mean longitude at J2000
}

# Default file locations
DEFAULT_CATALOG_PATH = "MPCORB.DAT"
DEFAULT_OBSCODES_PATH = "ObsCodes.html"
DEFAULT_SKYFIELD_KERNEL = "de421.bsp"
AVAILABLE_EPHEMERIS_SOURCES = ['skyfield', 'keplerian']
DEFAULT_EPHEMERIS_SOURCE = 'skyfield'

# Job File Configuration
JOB_REQUIRED_KEYS = ['designation', 'start']
JOB_OPTIONAL_KEYS = ['end', 'site', 'catalog', 'magnitude_threshold']

# Timestamp Parsing
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# I/O Configuration
CSV_ANGLE_PRECISION = 6  # decimal places for degrees in CSV export
ENCODING_FALLBACK_ORDER = ['utf-8', 'latin-1']

# Logging Configuration
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
