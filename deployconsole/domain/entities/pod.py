"""
Pod Module

Architectural Intent:
- Read-only summary of one pod from the namespace pod listing
- Only the fields an operator scans for are kept; the rest of the
  server document is ignored
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Pod:
    name: str
    phase: str = "Unknown"
    node_name: Optional[str] = None
    pod_ip: Optional[str] = None
    restarts: int = 0

    @staticmethod
    def from_dict(data: Any) -> "Pod":
        """Parse a pod document such as {"metadata": {"name": ...}, "status": {...}}.

        Raises ValueError when the entry is not a mapping or has no name.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Pod entry must be an object, got {type(data).__name__}")
        metadata = data.get("metadata") or {}
        name = metadata.get("name") if isinstance(metadata, dict) else None
        if not name or not isinstance(name, str):
            raise ValueError("Pod entry has no metadata.name")

        spec = data.get("spec")
        status = data.get("status")
        spec = spec if isinstance(spec, dict) else {}
        status = status if isinstance(status, dict) else {}
        restarts = sum(
            int(c.get("restartCount") or 0)
            for c in status.get("containerStatuses") or []
            if isinstance(c, dict)
        )
        return Pod(
            name=name,
            phase=status.get("phase") or "Unknown",
            node_name=spec.get("nodeName"),
            pod_ip=status.get("podIP"),
            restarts=restarts,
        )
