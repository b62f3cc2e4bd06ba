"""
s2dood - SC2 doodad exporter

Converts the doodads placed in StarCraft II maps (the Objects file of each
map) into a Galaxy script that fills a runtime array, or into a user type
catalog holding the same objects as data instances.
"""

__version__ = "0.2.0"

from .angles import radians_to_degrees, to_precision, wrap_angle
from .converter import ConversionSummary, ObjectsConverter
from .errors import S2DoodError, UnknownFormatError, WriterStateError
from .objects import (
    DoodadRecord,
    ObjectFlag,
    ObjectKind,
    ObjectWriterFlags,
    derive_flags,
)
from .objects_parser import ObjectsParser, ParserState
from .writers import ObjectWriter, create_writer
from .galaxy_writer import GalaxyWriter
from .catalog_writer import CatalogWriter
