"""
tamc Configuration
==================

Compiler options. Values come from:
- Default values (defined here)
- Environment variables, via CompilerOptions.from_env()
- Command-line flags, applied on top by the CLI

Environment variables (all optional):
    TAMC_OUTPUT_SUFFIX: Suffix for generated code files (default ".tam")
    TAMC_LOG_LEVEL: Logging level name (default "WARNING")
    TAMC_ENCODING: Encoding used to read and write files (default "utf-8")
"""

import logging
import os
from dataclasses import dataclass


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        output_suffix: Suffix replacing the source suffix for the output file
        capture_ast: Keep the printed AST on the CompilationResult
        log_level: Logging level name for the tamc loggers
        encoding: Text encoding for source and output files
    """
    output_suffix: str = ".tam"
    capture_ast: bool = False
    log_level: str = "WARNING"
    encoding: str = "utf-8"

    def __post_init__(self):
        if not self.output_suffix.startswith("."):
            self.output_suffix = "." + self.output_suffix
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"unknown log level '{self.log_level}'")

    @classmethod
    def from_env(cls) -> "CompilerOptions":
        """Create CompilerOptions from TAMC_* environment variables."""
        options = {}

        if suffix := os.environ.get("TAMC_OUTPUT_SUFFIX"):
            options["output_suffix"] = suffix

        if level := os.environ.get("TAMC_LOG_LEVEL"):
            options["log_level"] = level

        if encoding := os.environ.get("TAMC_ENCODING"):
            options["encoding"] = encoding

        return cls(**options)

    def configure_logging(self) -> None:
        """Apply log_level to the tamc package logger."""
        logging.getLogger("tamc").setLevel(self.log_level)
