from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Project:
    project_id: int
    code: str
    name: str
    travel_billable: bool = True
    is_active: bool = True
