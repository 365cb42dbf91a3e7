"""Project repository interface."""

from typing import Protocol

from weekwise.core.projects import Project


class ProjectStore(Protocol):
    """Interface for loading and saving projects from any backend."""

    def list_projects(self) -> list[Project]:
        """Load all projects, in stored order."""
        ...

    def save_projects(self, projects: list[Project]) -> None:
        """Replace the stored projects."""
        ...
