"""
Galaxy script writer.

Each document becomes its own populate routine that fills gv__o[] starting
at a base index. The base of every document is only known once all of them
have been read, so the final gf__opopulate() routine walks the documents in
order, passes the running gv__oc as the base and adds each document's count.
"""

from typing import List, Optional, TextIO, Tuple

from .angles import format_number, parse_float, radians_to_degrees, to_precision
from .constants import (
    GALAXY_BASE_PARAM,
    GALAXY_OBJECTS_ARRAY,
    GALAXY_OBJECTS_COUNT,
    GALAXY_POPULATE_ROUTINE,
    TINT_CHANNEL_DIVISOR,
    TINT_CHANNELS,
)
from .errors import WriterStateError
from .logging_config import get_logger
from .objects import DoodadRecord, ObjectWriterFlags
from .utils import sanitize_name

logger = get_logger('galaxy_writer')


def convert_angle(value: str) -> str:
    """Editor radians to the degrees text written for lv_yaw/lv_pitch/lv_roll."""
    return to_precision(radians_to_degrees(parse_float(value)))


def convert_tint_color(color: str) -> str:
    """'255,128,0,255' -> '102,51.2,0' (Color() channels are 0-100)."""
    channels = color.split(',')[:TINT_CHANNELS]
    return ','.join(format_number(parse_float(channel) / TINT_CHANNEL_DIVISOR) for channel in channels)


class GalaxyWriter:
    """Writes objects as Galaxy assignment statements."""

    def __init__(self):
        self.object_count = 0
        self.local_count = 0
        # (routine name, object count) in the order documents were seen
        self.documents: List[Tuple[str, int]] = []
        self._script: Optional[TextIO] = None
        self._document: Optional[str] = None
        self._routine: Optional[str] = None
        self._closed = False

    def open(self, sink: TextIO) -> None:
        self._script = sink

    def begin(self) -> None:
        self._require_open()
        self.object_count = 0
        self.documents = []

    def begin_document(self, name: str) -> None:
        self._require_open()
        if self._document is not None:
            raise WriterStateError(f"Document {self._document!r} is still open")

        self._document = name
        self._routine = self._routine_name(name)
        self.local_count = 0
        self._script.write(f"void {self._routine}(int {GALAXY_BASE_PARAM}) {{\n")

    def process_object(self, record: DoodadRecord, flags: ObjectWriterFlags, global_index: int) -> None:
        """
        Write the assignments for one object.

        The statement index is relative to the routine's base, so global_index
        is only used for logging.
        """
        if self._document is None:
            raise WriterStateError("process_object called outside a document")

        target = f"{GALAXY_OBJECTS_ARRAY}[{GALAXY_BASE_PARAM} + {self.local_count}]"

        def assign(field: str, value: str) -> None:
            self._script.write(f"{target}.lv_{field} = {value};\n")

        assign("type", f'"{record.type or ""}"')

        x, y, z = record.position
        assign("x", x)
        assign("y", y)
        assign("z", z)

        if record.variation is not None:
            assign("variation", record.variation)

        if record.scale is not None:
            scale_x, scale_y, scale_z = record.scale
            assign("scale_x", scale_x)
            assign("scale_y", scale_y)
            assign("scale_z", scale_z)

        if record.rotation is not None:
            assign("yaw", convert_angle(record.rotation))
        if record.pitch is not None:
            assign("pitch", convert_angle(record.pitch))
        if record.roll is not None:
            assign("roll", convert_angle(record.roll))

        tint = record.tint_color
        if tint is not None:
            color, multiplier = tint
            assign("tint_col", f"Color({convert_tint_color(color)})")
            if multiplier is not None:
                assign("tint_hdr", multiplier)

        if record.team_color is not None:
            assign("teamc", record.team_color)

        if flags:
            assign("flags", f"0x{int(flags):x}")

        logger.debug(f"{self._document}[{self.local_count}] -> #{global_index} {record.type}")
        self.local_count += 1
        self.object_count += 1

    def end_document(self, name: str) -> None:
        if self._document is None or self._document != name:
            raise WriterStateError(f"end_document({name!r}) does not match the open document")

        self._script.write("}\n\n")
        self.documents.append((self._routine, self.local_count))
        self._document = None
        self._routine = None

    def end(self) -> None:
        """Write the routine that places every document's objects."""
        self._require_open()
        if self._document is not None:
            raise WriterStateError(f"Document {self._document!r} is still open")

        self._script.write(f"void {GALAXY_POPULATE_ROUTINE}() {{\n")
        self._script.write(f"{GALAXY_OBJECTS_COUNT} = 0;\n")
        for routine, count in self.documents:
            self._script.write(f"{routine}({GALAXY_OBJECTS_COUNT});\n")
            self._script.write(f"{GALAXY_OBJECTS_COUNT} += {count};\n")
        self._script.write("}\n")

    def close(self) -> None:
        if self._closed or self._script is None:
            return
        self._script.flush()
        self._script.close()
        self._closed = True

    def _routine_name(self, name: str) -> str:
        base = f"{GALAXY_POPULATE_ROUTINE}_{sanitize_name(name)}"
        taken = {routine for routine, _ in self.documents}
        routine = base
        suffix = 2
        while routine in taken:
            routine = f"{base}_{suffix}"
            suffix += 1
        return routine

    def _require_open(self) -> None:
        if self._script is None or self._closed:
            raise WriterStateError("Writer has no open sink")
