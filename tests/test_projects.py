"""Tests for project building elements seeded from the NRM taxonomy."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from buildcarbon.projects.elements import (
    BuildingElement,
    assigned_elements,
    flatten_elements,
    group_by_buildup,
    update_element,
)
from buildcarbon.projects.project import Project, ProjectVersion, create_project
from buildcarbon.taxonomy.nrm_data import NRM_DATA


class TestFlattenElements:
    """Test flatten_elements."""

    def test_ids_and_names(self):
        elements = flatten_elements(NRM_DATA)
        key = "2 Super structure-2.5 External walls-2.5.1 External walls - structural"
        assert key in elements
        assert elements[key].name == "2 Super structure - 2.5 External walls - 2.5.1 External walls - structural"

    def test_every_node_present(self):
        elements = flatten_elements(NRM_DATA)
        assert "1 Sub-structure" in elements
        assert "1 Sub-structure-1.1 Foundations and piling" in elements
        assert len(elements) == 39

    def test_numeric_order(self):
        elements = flatten_elements({"2 Top": {"2.10 Ten": {}, "2.2 Two": {}}}, roots=None)
        assert list(elements) == ["2 Top", "2 Top-2.2 Two", "2 Top-2.10 Ten"]

    def test_root_filter(self):
        elements = flatten_elements({"1 Sub-structure": {}, "9 Other": {"9.1 x": {}}})
        assert list(elements) == ["1 Sub-structure"]

    def test_no_filter(self):
        elements = flatten_elements({"9 Other": {}}, roots=None)
        assert list(elements) == ["9 Other"]


class TestUpdateElement:
    """Test area rules."""

    def test_width_and_length_give_area(self):
        element = BuildingElement(id="e", name="E")
        element = update_element(element, width=1.234)
        assert element.area is None
        element = update_element(element, length=2)
        assert element.area == pytest.approx(2.47)

    def test_direct_area_clears_dimensions(self):
        element = BuildingElement(id="e", name="E", width=2, length=3, area=6)
        updated = update_element(element, area=10)
        assert updated.area == 10
        assert updated.width is None
        assert updated.length is None

    def test_clearing_width_clears_area(self):
        element = BuildingElement(id="e", name="E", width=2, length=3, area=6)
        assert update_element(element, width=None).area is None

    def test_buildup_link_keeps_area(self):
        element = BuildingElement(id="e", name="E", area=12)
        assert update_element(element, buildup_id="b1").area == 12

    def test_unknown_field(self):
        with pytest.raises(KeyError):
            update_element(BuildingElement(id="e", name="E"), height=3)


class TestGrouping:
    """Test grouping helpers."""

    def test_group_by_buildup(self):
        elements = [
            BuildingElement(id="a", name="A", buildup_id="wall"),
            BuildingElement(id="b", name="B"),
            BuildingElement(id="c", name="C", buildup_id="wall"),
            BuildingElement(id="d", name="D", buildup_id="roof"),
        ]
        grouped = group_by_buildup(elements)
        assert list(grouped) == ["wall", "roof"]
        assert [e.id for e in grouped["wall"]] == ["a", "c"]

    def test_assigned_elements(self):
        elements = [
            BuildingElement(id="a", name="A", area=4),
            BuildingElement(id="b", name="B"),
        ]
        assert [e.id for e in assigned_elements(elements)] == ["a"]


class TestProject:
    """Test project records and versions."""

    def test_create_seeds_first_version(self):
        project = create_project("Riverside", code="RS-01", typology="Residential")
        assert [v.name for v in project.versions] == ["Version 1"]
        assert len(project.versions[0].building_elements) == 39
        assert project.code == "RS-01"

    def test_total_gia(self):
        project = Project(name="P", gia_demolition=100, gia_newbuild=250.5, gia_retrofit=49.5)
        assert project.total_gia == pytest.approx(400.0)
        assert Project(name="Empty").total_gia == 0

    def test_negative_gia_rejected(self):
        with pytest.raises(ValidationError):
            Project(name="P", gia_newbuild=-1)

    def test_unknown_typology_rejected(self):
        with pytest.raises(ValidationError):
            Project(name="P", typology="Industrial")

    def test_add_version_starts_empty(self):
        project = create_project("P").add_version()
        assert [v.name for v in project.versions] == ["Version 1", "Version 2"]
        assert project.versions[1].building_elements == {}

    def test_update_element_in_version(self):
        project = create_project("P", definition={"1 Sub-structure": {"1.1 Foundations": {}}})
        version_id = project.versions[0].id
        element_id = "1 Sub-structure-1.1 Foundations"

        updated = project.update_element(version_id, element_id, width=2, length=3, buildup_id="slab")
        element = updated.version(version_id).element(element_id)
        assert element.area == 6
        assert project.version(version_id).element(element_id).area is None
        assert [e.id for e in updated.versions[0].elements_by_buildup()["slab"]] == [element_id]

    def test_missing_version_or_element(self):
        project = create_project("P", definition={"1 Sub-structure": {}})
        with pytest.raises(KeyError):
            project.version("missing")
        with pytest.raises(KeyError):
            project.versions[0].element("missing")

    def test_version_records(self):
        version = ProjectVersion(name="Version 1", building_elements={"e": BuildingElement(id="e", name="E", area=3)})
        restored = ProjectVersion.model_validate(version.model_dump(mode="json"))
        assert restored == version
