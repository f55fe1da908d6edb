"""Command-line entry points.

``run_compact`` builds the zoneinfo artifacts; ``run_inspect`` decodes an
existing index for spot checks.
"""

from .compact import main as run_compact
from .inspect import main as run_inspect

__all__ = ["run_compact", "run_inspect"]
