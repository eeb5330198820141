"""Music Memory: play-count ranked views over a personal music library."""

__version__ = "0.4.0"
