"""PeopleFinder - search a local data folder for people records."""

__version__ = "0.1.0"
