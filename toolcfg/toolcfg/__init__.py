"""toolcfg - Schema-driven configuration renderer for CMock and gcovr.

Turns typed, versioned settings into the configuration files those tools read.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
