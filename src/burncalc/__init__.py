"""SLO error budget and multi-window burn-rate alert calculator."""

__version__ = "0.1.0"
