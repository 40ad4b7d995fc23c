"""Compare preference declaration files and report the differences."""

__version__ = "0.1.0"
