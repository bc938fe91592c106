"""cprflags — compiler flag and macro resolver for Fortran/C builds.

Resolves, for one configuration run, the compiler flags and preprocessor
macros to use for the detected OS and compiler vendors (NAG, GNU, XL,
Intel), including the opt-in HARSH profile and CESM build types, and
provides the rule that turns NAG's printed ``STOP`` codes into test
failures.
"""

__version__ = "0.1.0"
