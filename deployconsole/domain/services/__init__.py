"""
Domain Services Package

Architectural Intent:
- Contains side-effect-free services over domain entities
"""

from deployconsole.domain.services.row_rendering import DeploymentRow, build_rows

__all__ = [
    "DeploymentRow",
    "build_rows",
]
