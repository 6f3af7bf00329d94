"""Explorer API Package.

This package provides the backend integration layers of the block explorer:
Solana wallet and transaction endpoints, and dependency health reporting.
"""

__version__ = "0.1.0"
__author__ = "Explorer API Developers"
__email__ = "dev@explorer.example.com"
