"""
tamc Command-Line Interface
===========================

This package provides the command-line tools:

- **tamc**: compiles a source file to TAM code
- **tamlex**: lists the tokens the lexer produces

Each tool is implemented as a Click-based CLI application.
"""

__all__ = ["tamc", "tamlex"]
