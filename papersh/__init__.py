"""papersh - a shell for your paper bibliography.

Papers are listed, narrowed, and navigated with filesystem-like
commands (``ls``, ``cd``, ``rm``, ...) chained with pipes.
"""

__version__ = "0.1.0"

from papersh.config import Settings
from papersh.models.paper import Paper

__all__ = ["Paper", "Settings", "__version__"]
