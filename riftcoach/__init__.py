"""Post-match analysis engine for Summoner's Rift."""

__version__ = "0.1.0"
