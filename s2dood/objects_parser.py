"""
Streaming reader for SC2 Objects files.

The document is pushed through an lxml pull parser in chunks and interpreted
one event at a time, so a map with tens of thousands of doodads never needs
to sit in memory as a tree. Each object is handed to a callback as soon as
its closing tag is read.
"""

from enum import Enum
from pathlib import Path
from typing import Callable, Mapping, Optional, Union

from lxml import etree

from .constants import (
    FLAG_ENABLED,
    FLAG_INDEX_ATTR,
    FLAG_TAG,
    FLAG_VALUE_ATTR,
    READ_CHUNK_SIZE,
)
from .logging_config import get_logger
from .objects import DoodadRecord, ObjectKind

logger = get_logger('objects_parser')

_KINDS = {kind.value: kind for kind in ObjectKind}


class ParserState(Enum):
    """Whether an object is currently being read."""
    IDLE = "idle"
    BUILDING = "building"


class ObjectsParser:
    """
    Turns Objects file markup into DoodadRecord instances.

    Malformed markup is recovered by lxml; each error is logged once and
    parsing carries on with whatever lxml makes of the rest.
    """

    def __init__(self, on_object: Callable[[DoodadRecord], None], source_name: str = "<objects>"):
        """
        Initialize ObjectsParser.

        Args:
            on_object: Called with every completed record
            source_name: Name used in log messages
        """
        self.on_object = on_object
        self.source_name = source_name
        self.state = ParserState.IDLE
        self.error_count = 0
        self._current: Optional[DoodadRecord] = None
        self._parser = etree.XMLPullParser(events=("start", "end"), recover=True)
        self._reported_errors = 0

    def feed(self, data: Union[str, bytes]) -> None:
        """
        Push a chunk of the document and handle the events it completes.

        Text chunks are passed on as UTF-8; feed bytes to let the document's
        own encoding declaration apply.
        """
        if isinstance(data, str):
            data = data.encode('utf-8')
        try:
            self._parser.feed(data)
        except etree.XMLSyntaxError as e:
            self._report_error(str(e))
        self._drain()

    def close(self) -> None:
        """Finish the document. An object left open is dropped."""
        try:
            self._parser.close()
        except etree.XMLSyntaxError as e:
            self._report_error(str(e))
        self._drain()

        if self.state is ParserState.BUILDING:
            logger.warning(
                f"{self.source_name}: document ended inside <{self._current.kind.value}>, object dropped"
            )
            self._current = None
            self.state = ParserState.IDLE

    def parse_file(self, path: Path) -> None:
        """Stream a whole file through the parser and close it."""
        with open(path, 'rb') as f:
            while True:
                chunk = f.read(READ_CHUNK_SIZE)
                if not chunk:
                    break
                self.feed(chunk)
        self.close()

    def handle_start(self, tag: str, attributes: Mapping[str, str]) -> None:
        """React to an opening tag."""
        if self.state is ParserState.IDLE:
            kind = _KINDS.get(tag)
            if kind is None:
                return
            self._current = DoodadRecord(kind=kind, attributes=dict(attributes), flags=[])
            self.state = ParserState.BUILDING
            return

        # Objects do not nest; anything but a flag is ignored while building
        if tag != FLAG_TAG:
            return
        if attributes.get(FLAG_VALUE_ATTR) != FLAG_ENABLED:
            return
        index = attributes.get(FLAG_INDEX_ATTR)
        if index is not None:
            self._current.flags.append(index)

    def handle_end(self, tag: str) -> bool:
        """
        React to a closing tag.

        Returns:
            True if the tag completed an object
        """
        if self.state is not ParserState.BUILDING or self._current.kind.value != tag:
            return False

        record = self._current
        self._current = None
        self.state = ParserState.IDLE
        self.on_object(record)
        return True

    def _drain(self) -> None:
        for event, element in self._parser.read_events():
            tag = etree.QName(element).localname
            if event == "start":
                self.handle_start(tag, element.attrib)
            elif self.handle_end(tag):
                # Finished objects are not needed any more
                element.clear(keep_tail=True)
                while element.getprevious() is not None:
                    del element.getparent()[0]
        self._report_parser_errors()

    def _report_parser_errors(self) -> None:
        entries = list(self._parser.error_log)
        for entry in entries[self._reported_errors:]:
            self._report_error(f"line {entry.line}, column {entry.column}: {entry.message}")
        self._reported_errors = len(entries)

    def _report_error(self, message: str) -> None:
        self.error_count += 1
        logger.warning(f"{self.source_name}: malformed markup, {message}")
