"""
Neander Assembler Command-Line Interface
========================================

- **ndrasm**: Neander assembler

The tool is a Click-based CLI application with help and error reporting.
"""

__all__ = ["ndrasm"]
