"""
vm8asm Command-Line Interface
=============================

- **vmasm**: VM8 assembler

Implemented as a Click application with help and error reporting.
"""

__all__ = ["vmasm"]
