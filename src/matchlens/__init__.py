"""matchlens: match-timeline analysis and cross-match aggregation."""

__version__ = "0.1.0"
