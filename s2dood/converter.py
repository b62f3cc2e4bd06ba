"""
Multi-document converter - streams Objects files from one or more maps into a
single writer.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from .logging_config import get_logger
from .objects import DoodadRecord, derive_flags
from .objects_parser import ObjectsParser
from .utils import document_name, find_objects_file
from .writers import ObjectWriter

logger = get_logger('converter')


@dataclass
class ConversionSummary:
    """What a conversion run produced."""
    # (document name, object count) in conversion order
    documents: List[Tuple[str, int]] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    markup_errors: int = 0

    @property
    def total_objects(self) -> int:
        return sum(count for _, count in self.documents)

    @property
    def converted(self) -> int:
        return len(self.documents)


class ObjectsConverter:
    """
    Feeds documents through ObjectsParser into a writer.

    The converter owns the global object index: every object gets the count
    of objects written before it, across all documents, in arrival order.
    """

    def __init__(self, writer: ObjectWriter):
        self.writer = writer
        self.object_count = 0
        self.summary = ConversionSummary()

    def convert(self, sources: Iterable[Union[str, Path]]) -> ConversionSummary:
        """
        Convert every source in order, then finish the writer's output.

        Sources whose Objects file is missing are logged and skipped.
        """
        self.object_count = 0
        self.summary = ConversionSummary()

        self.writer.begin()
        for source in sources:
            self.convert_document(source)
        self.writer.end()

        return self.summary

    def convert_document(self, source: Union[str, Path]) -> Optional[int]:
        """
        Convert one map.

        Args:
            source: Map directory or Objects file

        Returns:
            Number of objects the document contributed, or None if skipped
        """
        objects_path = find_objects_file(source)
        name = document_name(source)

        if not objects_path.is_file():
            logger.error(f"Objects file not found for {name}: {objects_path}")
            self.summary.skipped.append(name)
            return None

        logger.info(f"Reading {objects_path}")
        first_index = self.object_count

        self.writer.begin_document(name)
        parser = ObjectsParser(self._process_object, source_name=name)
        parser.parse_file(objects_path)
        self.writer.end_document(name)

        count = self.object_count - first_index
        self.summary.documents.append((name, count))
        self.summary.markup_errors += parser.error_count
        logger.info(f"  {name}: {count} objects")
        return count

    def _process_object(self, record: DoodadRecord) -> None:
        self.writer.process_object(record, derive_flags(record), self.object_count)
        self.object_count += 1
