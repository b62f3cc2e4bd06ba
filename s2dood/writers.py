"""
Output writers.

Both formats follow one lifecycle:

    open(sink)
    begin()
        begin_document(name)
            process_object(record, flags, global_index)  # zero or more
        end_document(name)
        ...                                              # one block per document
    end()
    close()
"""

from typing import Protocol, TextIO

from .catalog_writer import CatalogWriter
from .errors import UnknownFormatError
from .galaxy_writer import GalaxyWriter
from .objects import DoodadRecord, ObjectWriterFlags


class ObjectWriter(Protocol):
    """Emits converted objects to a text stream."""

    object_count: int

    def open(self, sink: TextIO) -> None: ...

    def begin(self) -> None: ...

    def begin_document(self, name: str) -> None: ...

    def process_object(self, record: DoodadRecord, flags: ObjectWriterFlags, global_index: int) -> None: ...

    def end_document(self, name: str) -> None: ...

    def end(self) -> None: ...

    def close(self) -> None: ...


FORMATS = ("galaxy", "catalog")


def create_writer(format_name: str) -> ObjectWriter:
    """
    Create the writer for an output format.

    Raises:
        UnknownFormatError: If no writer handles format_name
    """
    if format_name == "galaxy":
        return GalaxyWriter()
    if format_name == "catalog":
        return CatalogWriter()
    raise UnknownFormatError(format_name)
