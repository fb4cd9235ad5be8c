"""``director-config`` console script.

Lives outside ``adapters`` so the CLI never imports the composition root
itself; production adapters are wired here.
"""

from __future__ import annotations

from .adapters.cli.main import main as cli_main
from .composition import build_production


def main() -> int:
    """Run the CLI against production adapters and return its exit code."""
    return cli_main(services_factory=build_production)


__all__ = ["main"]
