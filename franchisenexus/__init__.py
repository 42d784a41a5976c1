"""FranchiseNexus - franchise marketplace backend"""
from franchisenexus.version import __version__

__all__ = ["__version__"]
