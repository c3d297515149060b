"""userhub - layered REST API for users."""

__version__ = "1.0.0"
