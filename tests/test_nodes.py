"""
Tests for hierarchy navigation on the default registry.
"""

import random

import pytest

from eventtaxonomy import (
    CUSTOM_TYPES,
    FILE_MODIFIED,
    FILE_SYSTEM,
    MESSAGE,
    OTHER,
    REGISTRY,
    ROOT_EVENT_TYPE,
    WEB_ACTIVITY,
    WEB_HISTORY,
    ArtifactEventType,
    AttributeType,
    LeafEventType,
    Record,
    RecordType,
    TypeLevel,
)


class TestTreeShape:
    """Parent/child links agree everywhere."""

    def test_every_node_is_listed_under_its_parent(self, registry):
        for node in registry:
            if node is ROOT_EVENT_TYPE:
                continue
            assert node in node.super_type.sub_types()

    def test_siblings_are_parent_children(self, registry):
        for node in registry:
            if node is ROOT_EVENT_TYPE:
                continue
            assert node.sibling_types() == node.super_type.sub_types()

    def test_root_is_its_only_sibling(self):
        assert ROOT_EVENT_TYPE.sibling_types() == (ROOT_EVENT_TYPE,)

    def test_children_ordered_by_id(self, registry):
        for node in registry:
            ids = [child.id for child in node.sub_types()]
            assert ids == sorted(ids)

    def test_leaves_have_no_sub_types(self):
        assert FILE_MODIFIED.sub_types() == ()
        assert MESSAGE.sub_types() == ()

    def test_levels(self, registry):
        assert ROOT_EVENT_TYPE.level is TypeLevel.ROOT
        for base in ROOT_EVENT_TYPE.sub_types():
            assert base.level is TypeLevel.BASE
            for sub in base.sub_types():
                assert sub.level is TypeLevel.SUB


class TestBaseType:
    """Base type resolution."""

    def test_root_is_its_own_base(self):
        assert ROOT_EVENT_TYPE.base_type() is ROOT_EVENT_TYPE

    def test_base_types_are_their_own_base(self):
        for base in ROOT_EVENT_TYPE.sub_types():
            assert base.base_type() is base

    def test_sub_types_resolve_to_parent(self, registry):
        for node in registry:
            if node.level is TypeLevel.SUB:
                assert node.base_type() is node.super_type

    def test_examples(self):
        assert FILE_MODIFIED.base_type() is FILE_SYSTEM
        assert WEB_HISTORY.base_type() is WEB_ACTIVITY
        assert OTHER.base_type() is CUSTOM_TYPES


class TestOrdering:
    """Ids are unique and define the order of nodes."""

    def test_ids_are_unique(self, registry):
        ids = [node.id for node in registry]
        assert len(ids) == 29
        assert len(set(ids)) == 29

    def test_ids_cover_zero_to_twenty_eight(self, registry):
        assert sorted(node.id for node in registry) == list(range(29))

    def test_sorting_matches_id_order(self, registry):
        nodes = list(registry)
        rng = random.Random(1234)
        for _ in range(20):
            subset = rng.sample(nodes, rng.randint(2, len(nodes)))
            assert sorted(subset) == sorted(subset, key=lambda n: n.id)

    def test_compare_to(self):
        assert FILE_SYSTEM.compare_to(WEB_ACTIVITY) < 0
        assert WEB_ACTIVITY.compare_to(FILE_SYSTEM) > 0
        assert MESSAGE.compare_to(MESSAGE) == 0

    def test_equality_and_hash_follow_id(self):
        assert FILE_SYSTEM == REGISTRY.get(1)
        assert len({FILE_SYSTEM, REGISTRY.get(1)}) == 1
        assert FILE_SYSTEM != WEB_ACTIVITY


class TestSubTypeLookup:
    def test_by_display_name(self):
        assert WEB_ACTIVITY.sub_type("Web History") is WEB_HISTORY

    def test_by_key(self):
        assert WEB_ACTIVITY.sub_type("WEB_HISTORY") is WEB_HISTORY

    def test_missing(self):
        assert WEB_ACTIVITY.sub_type("File Modified") is None
        assert MESSAGE.sub_type("anything") is None


class TestImmutability:
    """Nodes are frozen once the registry is built."""

    def test_cannot_rename(self):
        with pytest.raises(AttributeError):
            FILE_MODIFIED._display_name = "Renamed"

    def test_cannot_reparent(self):
        with pytest.raises(AttributeError):
            FILE_MODIFIED._super_type = WEB_ACTIVITY

    def test_sub_types_are_tuples(self):
        assert isinstance(FILE_SYSTEM.sub_types(), tuple)


class TestArtifactTypes:
    def test_file_system_leaves_are_not_artifact_types(self):
        assert isinstance(FILE_MODIFIED, LeafEventType)
        assert not isinstance(FILE_MODIFIED, ArtifactEventType)

    def test_source_record_and_time_attribute(self):
        assert WEB_HISTORY.source_record_type is RecordType.TSK_WEB_HISTORY
        assert WEB_HISTORY.time_attribute_type is AttributeType.TSK_DATETIME_ACCESSED

    def test_matches(self):
        assert MESSAGE.matches(Record(record_type=RecordType.TSK_MESSAGE))
        assert not MESSAGE.matches(Record(record_type=RecordType.TSK_CALLLOG))

    def test_event_time(self):
        record = Record(attributes={"TSK_DATETIME": 1577836800})
        assert MESSAGE.event_time(record) == 1577836800
        assert WEB_HISTORY.event_time(record) is None

    def test_display_names(self):
        assert str(WEB_HISTORY) == "Web History"
        assert ROOT_EVENT_TYPE.display_name == "Event Types"
        assert TypeLevel.BASE.display_name() == "Base Type"
