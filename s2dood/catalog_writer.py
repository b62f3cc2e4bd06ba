"""
User type catalog writer.

Produces a Catalog document with one CUser type per source document. The
type starts with its field schema and holds one Instances entry per object:

    <CUser id="Foo">
        <Fields Id="Type" Type="GameLink" GameLinkType="Actor" EditorColumn="1"/>
        ...
        <Instances Id="0">
            <GameLink GameLink="Rock01">
                <Field Id="Type"/>
            </GameLink>
            <Fixed Fixed="12.5">
                <Field Id="X"/>
            </Fixed>
            ...
        </Instances>
    </CUser>
"""

from typing import Optional, TextIO

from lxml import etree

from .angles import parse_float, radians_to_degrees, to_precision
from .constants import (
    CATALOG_FIELD_DEFINITION,
    CATALOG_FIELD_REF,
    CATALOG_FIELDS,
    CATALOG_GAME_LINK_TYPE,
    CATALOG_INSTANCE,
    CATALOG_ROOT,
    CATALOG_USER_TYPE,
    KIND_COLOR,
    KIND_FIXED,
    KIND_GAME_LINK,
    KIND_INT,
)
from .errors import WriterStateError
from .logging_config import get_logger
from .objects import DoodadRecord, ObjectWriterFlags
from .utils import sanitize_name

logger = get_logger('catalog_writer')

INDENT = "    "


def build_user_type(name: str) -> etree._Element:
    """Create the CUser element of a document with its field schema."""
    user_type = etree.Element(CATALOG_USER_TYPE, id=sanitize_name(name))
    for column, (field_id, kind) in enumerate(CATALOG_FIELDS, start=1):
        definition = etree.SubElement(user_type, CATALOG_FIELD_DEFINITION, Id=field_id, Type=kind)
        if kind == KIND_GAME_LINK:
            definition.set("GameLinkType", CATALOG_GAME_LINK_TYPE)
        definition.set("EditorColumn", str(column))
    return user_type


class CatalogWriter:
    """Writes objects as user type instances."""

    def __init__(self):
        self.object_count = 0
        self.local_count = 0
        self._catalog: Optional[TextIO] = None
        self._document: Optional[str] = None
        self._user_type: Optional[etree._Element] = None
        self._closed = False

    def open(self, sink: TextIO) -> None:
        self._catalog = sink

    def begin(self) -> None:
        self._require_open()
        self.object_count = 0
        self._catalog.write('<?xml version="1.0" encoding="utf-8"?>\n')
        self._catalog.write(f"<{CATALOG_ROOT}>\n")

    def begin_document(self, name: str) -> None:
        self._require_open()
        if self._document is not None:
            raise WriterStateError(f"Document {self._document!r} is still open")

        self._document = name
        self._user_type = build_user_type(name)
        self.local_count = 0

    def process_object(self, record: DoodadRecord, flags: ObjectWriterFlags, global_index: int) -> None:
        """Append one Instances entry, keyed by the object's index in its document."""
        if self._document is None:
            raise WriterStateError("process_object called outside a document")

        instance = etree.SubElement(self._user_type, CATALOG_INSTANCE, Id=str(self.local_count))

        def add(kind: str, field_id: str, value: str) -> None:
            wrapper = etree.SubElement(instance, kind)
            wrapper.set(kind, value)
            etree.SubElement(wrapper, CATALOG_FIELD_REF, Id=field_id)

        add(KIND_GAME_LINK, "Type", record.type or "")

        x, y, z = record.position
        add(KIND_FIXED, "X", x)
        add(KIND_FIXED, "Y", y)
        add(KIND_FIXED, "Z", z)

        if record.variation is not None:
            add(KIND_INT, "Variation", record.variation)

        if record.scale is not None:
            scale_x, scale_y, scale_z = record.scale
            add(KIND_FIXED, "ScaleX", scale_x)
            add(KIND_FIXED, "ScaleY", scale_y)
            add(KIND_FIXED, "ScaleZ", scale_z)

        for field_id, angle in (("Yaw", record.rotation), ("Pitch", record.pitch), ("Roll", record.roll)):
            if angle is not None:
                add(KIND_FIXED, field_id, to_precision(radians_to_degrees(parse_float(angle))))

        tint = record.tint_color
        if tint is not None:
            color, multiplier = tint
            add(KIND_COLOR, "TintColor", color)
            if multiplier is not None:
                add(KIND_FIXED, "TintHDR", multiplier)

        if record.team_color is not None:
            add(KIND_INT, "TeamColor", record.team_color)

        add(KIND_INT, "Flags", str(int(flags)))

        logger.debug(f"{self._document}[{self.local_count}] -> #{global_index} {record.type}")
        self.local_count += 1
        self.object_count += 1

    def end_document(self, name: str) -> None:
        if self._document is None or self._document != name:
            raise WriterStateError(f"end_document({name!r}) does not match the open document")

        etree.indent(self._user_type, space=INDENT, level=1)
        self._catalog.write(INDENT)
        self._catalog.write(etree.tostring(self._user_type, encoding="unicode"))
        self._catalog.write("\n")
        self._document = None
        self._user_type = None

    def end(self) -> None:
        self._require_open()
        if self._document is not None:
            raise WriterStateError(f"Document {self._document!r} is still open")
        self._catalog.write(f"</{CATALOG_ROOT}>\n")

    def close(self) -> None:
        if self._closed or self._catalog is None:
            return
        self._catalog.flush()
        self._catalog.close()
        self._closed = True

    def _require_open(self) -> None:
        if self._catalog is None or self._closed:
            raise WriterStateError("Writer has no open sink")
