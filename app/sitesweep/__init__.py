"""sitesweep - Destination cleanup for static-site builds."""

__version__ = "0.1.0"
