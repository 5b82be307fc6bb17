"""
Rat25F Command-Line Interface
=============================

This package provides the Rat25F command-line tools:

- **ratc**: Rat25F syntax analyzer (production trace + token echo)

Each tool is implemented as a Click-based CLI application.
"""

__all__ = ["ratc"]
