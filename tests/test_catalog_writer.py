"""Tests for the user type catalog writer."""

from __future__ import annotations

import io

import pytest
from lxml import etree

from s2dood.angles import radians_to_degrees, to_precision
from s2dood.catalog_writer import CatalogWriter
from s2dood.constants import CATALOG_FIELDS
from s2dood.errors import WriterStateError
from s2dood.objects import DoodadRecord, derive_flags


def make_record(flags=None, **attributes) -> DoodadRecord:
    return DoodadRecord(attributes=dict(attributes), flags=list(flags or []))


def run(documents) -> str:
    sink = io.StringIO()
    writer = CatalogWriter()
    writer.open(sink)
    writer.begin()
    index = 0
    for name, records in documents:
        writer.begin_document(name)
        for record in records:
            writer.process_object(record, derive_flags(record), index)
            index += 1
        writer.end_document(name)
    writer.end()
    return sink.getvalue()


def parse(text: str) -> etree._Element:
    return etree.fromstring(text.encode("utf-8"))


def wrappers(instance: etree._Element):
    """[(kind, field id, value), ...] in document order."""
    return [
        (wrapper.tag, wrapper.find("Field").get("Id"), wrapper.get(wrapper.tag))
        for wrapper in instance
    ]


def test_document_layout() -> None:
    text = run([("map", [make_record(Type="T1", Position="1,2,3")])])

    assert text.startswith('<?xml version="1.0" encoding="utf-8"?>\n<Catalog>\n    <CUser id="map">\n')
    assert '        <Fields Id="Type" Type="GameLink" GameLinkType="Actor" EditorColumn="1"/>\n' in text
    assert text.endswith('    </CUser>\n</Catalog>\n')


def test_schema_preamble_lists_every_field() -> None:
    root = parse(run([("map", [])]))
    fields = root.find("CUser").findall("Fields")

    assert [(f.get("Id"), f.get("Type")) for f in fields] == CATALOG_FIELDS
    assert [f.get("EditorColumn") for f in fields] == [str(i) for i in range(1, len(CATALOG_FIELDS) + 1)]
    assert [f.get("GameLinkType") for f in fields if f.get("Type") == "GameLink"] == ["Actor"]


def test_minimal_instance_always_has_flags() -> None:
    root = parse(run([("map", [make_record(Type="T1", Position="1,2,3")])]))
    instance = root.find("CUser/Instances")

    assert instance.get("Id") == "0"
    assert wrappers(instance) == [
        ("GameLink", "Type", "T1"),
        ("Fixed", "X", "1"),
        ("Fixed", "Y", "2"),
        ("Fixed", "Z", "3"),
        ("Int", "Flags", "0"),
    ]


def test_every_field_in_emission_order() -> None:
    record = make_record(
        flags=["HeightOffset"],
        TeamColor="2",
        TintColor="255,128,0,255 1.5",
        Roll="0",
        Pitch="3.141592653589793",
        Rotation="3.14159",
        Scale="1,2,0.5",
        Variation="3",
        Position="10.5,20,1",
        Type="Rock",
    )

    root = parse(run([("map", [record])]))

    assert wrappers(root.find("CUser/Instances")) == [
        ("GameLink", "Type", "Rock"),
        ("Fixed", "X", "10.5"),
        ("Fixed", "Y", "20"),
        ("Fixed", "Z", "1"),
        ("Int", "Variation", "3"),
        ("Fixed", "ScaleX", "1"),
        ("Fixed", "ScaleY", "2"),
        ("Fixed", "ScaleZ", "0.5"),
        ("Fixed", "Yaw", "-179.99985"),
        ("Fixed", "Pitch", "180.00000"),
        ("Fixed", "Roll", "0.0000000"),
        ("Color", "TintColor", "255,128,0,255"),
        ("Fixed", "TintHDR", "1.5"),
        ("Int", "TeamColor", "2"),
        ("Int", "Flags", str(0x3F01)),
    ]


def test_instances_use_document_local_indices() -> None:
    root = parse(run([
        ("first", [make_record(Type="A", Position="0,0,0")]),
        ("second", [make_record(Type="B", Position="0,0,0"), make_record(Type="C", Position="0,0,0")]),
    ]))

    user_types = root.findall("CUser")
    assert [user_type.get("id") for user_type in user_types] == ["first", "second"]
    assert [i.get("Id") for i in user_types[0].findall("Instances")] == ["0"]
    assert [i.get("Id") for i in user_types[1].findall("Instances")] == ["0", "1"]


def test_user_type_ids_are_sanitized() -> None:
    root = parse(run([("My Map-2 (v1.3)", [])]))

    assert root.find("CUser").get("id") == "My_Map_2__v1_3_"


def test_attribute_values_are_escaped() -> None:
    root = parse(run([("map", [make_record(Type='Rock "A" & <B>', Position="0,0,0")])]))

    assert root.find("CUser/Instances/GameLink").get("GameLink") == 'Rock "A" & <B>'


def test_process_object_outside_document_raises() -> None:
    writer = CatalogWriter()
    writer.open(io.StringIO())
    writer.begin()
    record = make_record(Type="T", Position="0,0,0")

    with pytest.raises(WriterStateError):
        writer.process_object(record, derive_flags(record), 0)


def test_end_with_open_document_raises() -> None:
    writer = CatalogWriter()
    writer.open(io.StringIO())
    writer.begin()
    writer.begin_document("map")

    with pytest.raises(WriterStateError):
        writer.end()


def test_close_closes_sink_once() -> None:
    sink = io.StringIO()
    writer = CatalogWriter()
    writer.open(sink)
    writer.begin()
    writer.end()

    writer.close()
    writer.close()

    assert sink.closed


def test_non_numeric_angle_is_written_as_nan() -> None:
    record = make_record(Type="T1", Position="1,2,3", Rotation="abc", Roll="1.5e0x")

    root = parse(run([("map", [record, make_record(Type="T2", Position="4,5,6")])]))
    first, second = root.findall("CUser/Instances")

    assert ("Fixed", "Yaw", "NaN") in wrappers(first)
    assert ("Fixed", "Roll", to_precision(radians_to_degrees(1.5))) in wrappers(first)
    assert wrappers(second)[0] == ("GameLink", "Type", "T2")
