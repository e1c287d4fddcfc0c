"""Creator/Sponsor Matchmaker: discovery, matching and campaign estimation."""

__version__ = "1.0.0"
