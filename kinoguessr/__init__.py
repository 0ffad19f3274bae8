"""
KinoGuessr - Guess the film from its cast.

A single-session guessing game engine:
- Immutable game session state driven by a pure reducer
- Progressive reveal of five actor portraits, then the poster
- Session controller sequencing calls to an external film catalog
- REST API for a presentation layer
"""

__version__ = "0.1.0"
