"""Centralized configuration for bigcalc.

This module defines:
- Default precision, rounding and angle mode
- Iteration caps for series and root refinement
- Numeric tolerances used by the analysis routines
- Input validation limits and cache sizes
- Regex patterns for tokenizing

Every value can be overridden via environment variables prefixed with BIGCALC_.
"""

import os
import re

# Version is defined in pyproject.toml [project] section
try:
    import importlib.metadata

    VERSION = importlib.metadata.version("bigcalc")
except Exception:
    # Fallback if package not installed
    VERSION = "1.0.0"

# Precision defaults
DEFAULT_PRECISION = int(os.getenv("BIGCALC_DEFAULT_PRECISION", "50"))  # significant digits
DEFAULT_ROUNDING = os.getenv("BIGCALC_DEFAULT_ROUNDING", "ROUND_HALF_UP")
DEFAULT_ANGLE_MODE = os.getenv("BIGCALC_DEFAULT_ANGLE_MODE", "DEGREES")
GUARD_DIGITS = int(os.getenv("BIGCALC_GUARD_DIGITS", "10"))

# Series configuration
ATAN_MAX_TERMS = int(os.getenv("BIGCALC_ATAN_MAX_TERMS", "10000"))
ATAN_EXTRA_DIGITS = int(
    os.getenv("BIGCALC_ATAN_EXTRA_DIGITS", "5")
)  # term cutoff is 10^-(precision + extra)
ATAN_REDUCTION_THRESHOLD = os.getenv("BIGCALC_ATAN_REDUCTION_THRESHOLD", "0.5")
LANCZOS_DIGITS = int(
    os.getenv("BIGCALC_LANCZOS_DIGITS", "15")
)  # accuracy of the double-precision Lanczos coefficients

# Numerical analysis configuration
ANALYSIS_PRECISION = int(os.getenv("BIGCALC_ANALYSIS_PRECISION", "34"))
BISECTION_MAX_ITERATIONS = int(os.getenv("BIGCALC_BISECTION_MAX_ITERATIONS", "80"))
BISECTION_INTERVAL_TOLERANCE = os.getenv(
    "BIGCALC_BISECTION_INTERVAL_TOLERANCE", "1e-12"
)
ZERO_TOLERANCE = os.getenv("BIGCALC_ZERO_TOLERANCE", "1e-12")
ROOT_DISTINCT_TOLERANCE = os.getenv("BIGCALC_ROOT_DISTINCT_TOLERANCE", "1e-9")
DERIVATIVE_STEP_BASE = os.getenv("BIGCALC_DERIVATIVE_STEP_BASE", "1e-6")
DERIVATIVE_STEP_SCALE = os.getenv("BIGCALC_DERIVATIVE_STEP_SCALE", "1e-6")
INTEGRATION_STEPS = int(os.getenv("BIGCALC_INTEGRATION_STEPS", "1000"))
ROOT_SEARCH_STEPS = int(os.getenv("BIGCALC_ROOT_SEARCH_STEPS", "200"))

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("BIGCALC_MAX_INPUT_LENGTH", "10000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("BIGCALC_MAX_EXPRESSION_DEPTH", "100")
)  # tree depth

# Cache configuration
CACHE_SIZE_PARSE = int(os.getenv("BIGCALC_CACHE_SIZE_PARSE", "1024"))
CACHE_SIZE_CONSTANTS = int(os.getenv("BIGCALC_CACHE_SIZE_CONSTANTS", "32"))

# Reserved names
SUMMATION_VARIABLE = "k"
INTEGRATION_VARIABLE = "x"
CONSTANT_NAMES = ("pi", "π", "e")

VAR_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

NUMBER_REGEX = re.compile(r"(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
IDENTIFIER_REGEX = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
INVERSE_SUFFIX = "⁻¹"
SCIENTIFIC_TEXT_REGEX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)[eE][+-]?\d+$")
