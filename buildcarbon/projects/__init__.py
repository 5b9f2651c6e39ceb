"""Projects, their versions and building elements."""

from buildcarbon.projects.elements import (
    BuildingElement,
    assigned_elements,
    flatten_elements,
    group_by_buildup,
    update_element,
)
from buildcarbon.projects.project import Project, ProjectVersion, create_project

__all__ = [
    "BuildingElement",
    "Project",
    "ProjectVersion",
    "assigned_elements",
    "create_project",
    "flatten_elements",
    "group_by_buildup",
    "update_element",
]
