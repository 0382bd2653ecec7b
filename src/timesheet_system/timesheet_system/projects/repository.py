from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Project


class ProjectRepository(Protocol):
    def get_by_id(self, project_id: int) -> Optional[Project]:
        raise NotImplementedError

    def get_by_code(self, code: str) -> Optional[Project]:
        raise NotImplementedError

    def list_all(self, *, active_only: bool = False) -> Sequence[Project]:
        raise NotImplementedError

    def create(self, *, code: str, name: str, travel_billable: bool) -> int:
        raise NotImplementedError

    def update(
        self,
        *,
        project_id: int,
        name: Optional[str] = None,
        travel_billable: Optional[bool] = None,
        is_active: Optional[bool] = None,
    ) -> bool:
        """Only the non-None fields are written."""

        raise NotImplementedError
