"""Projects — general and building information with versions of elements.

A project is created with a first version whose building elements are
seeded from the taxonomy; later versions start empty.  Like the carbon
engine, every editing method returns a new :class:`Project`.
"""

from __future__ import annotations

import datetime
import logging
from collections.abc import Iterable, Mapping
from typing import Any, Literal

from pydantic import BaseModel, Field

from buildcarbon.config import DEFAULT_ELEMENT_ROOTS
from buildcarbon.models.buildup import new_id
from buildcarbon.projects.elements import BuildingElement, flatten_elements, group_by_buildup, update_element
from buildcarbon.taxonomy.nrm_data import NRM_DATA

logger = logging.getLogger(__name__)

Typology = Literal["Residential", "Fit-out"]


class ProjectVersion(BaseModel):
    """One version of a project's building elements."""

    id: str = Field(default_factory=new_id)
    name: str
    building_elements: dict[str, BuildingElement] = Field(default_factory=dict)

    def element(self, element_id: str) -> BuildingElement:
        try:
            return self.building_elements[element_id]
        except KeyError:
            raise KeyError(f"Building element not found: {element_id}") from None

    def with_element(self, element_id: str, **updates: Any) -> ProjectVersion:
        """Return a copy with one element updated (see :func:`update_element`)."""
        updated = update_element(self.element(element_id), **updates)
        return self.model_copy(
            update={"building_elements": {**self.building_elements, element_id: updated}}
        )

    def elements_by_buildup(self) -> dict[str, list[BuildingElement]]:
        return group_by_buildup(self.building_elements.values())


class Project(BaseModel):
    """A project record.

    GIA values are square metres; the ``has_*`` flags stay *None* until
    answered.
    """

    id: str = Field(default_factory=new_id)
    name: str
    code: str = ""
    address: str = ""
    typology: Typology | None = None
    stage: str | None = None
    year_of_completion: int = Field(default_factory=lambda: datetime.date.today().year)

    gia_demolition: float = Field(default=0.0, ge=0)
    gia_newbuild: float = Field(default=0.0, ge=0)
    gia_retrofit: float = Field(default=0.0, ge=0)
    has_digital_model: bool | None = None
    has_bim_model: bool | None = None
    has_bill_of_quantities: bool | None = None
    has_energy_modelling: bool | None = None

    versions: list[ProjectVersion] = Field(default_factory=list)

    @property
    def total_gia(self) -> float:
        return self.gia_demolition + self.gia_newbuild + self.gia_retrofit

    def version(self, version_id: str) -> ProjectVersion:
        """Return the version with *version_id*.

        Raises
        ------
        KeyError
            If the project has no such version.
        """
        for version in self.versions:
            if version.id == version_id:
                return version
        raise KeyError(f"Project version not found: {version_id}")

    def add_version(self) -> Project:
        """Append an empty ``Version <n>``."""
        version = ProjectVersion(name=f"Version {len(self.versions) + 1}")
        logger.info("Project %s: added %s (%s)", self.id, version.name, version.id)
        return self.model_copy(update={"versions": [*self.versions, version]})

    def update_element(self, version_id: str, element_id: str, **updates: Any) -> Project:
        """Return a copy with one building element of one version updated."""
        target = self.version(version_id).with_element(element_id, **updates)
        versions = [target if v.id == version_id else v for v in self.versions]
        return self.model_copy(update={"versions": versions})


def create_project(
    name: str,
    *,
    definition: Mapping[str, Any] = NRM_DATA,
    roots: Iterable[str] | None = DEFAULT_ELEMENT_ROOTS,
    **fields: Any,
) -> Project:
    """Create a project whose ``Version 1`` holds elements flattened from
    *definition*.

    Extra keyword arguments set :class:`Project` fields.
    """
    first = ProjectVersion(name="Version 1", building_elements=flatten_elements(definition, roots))
    project = Project(name=name, versions=[first], **fields)
    logger.info("Created project %s (%s) with %d elements", project.name, project.id, len(first.building_elements))
    return project
