"""
Utility functions for s2dood.
"""

import re
from pathlib import Path
from typing import Union

from .constants import OBJECTS_FILENAME

_IDENTIFIER_INVALID = re.compile(r'[^A-Za-z0-9_]')


def sanitize_name(name: str) -> str:
    """Make a free-form name usable as an identifier ('My Map-2' -> 'My_Map_2')."""
    return _IDENTIFIER_INVALID.sub('_', name)


def find_objects_file(source: Union[str, Path]) -> Path:
    """
    Resolve the Objects file of a source.

    A map directory (e.g. "Foo.SC2Map") resolves to its Objects file; any
    other path is taken as the Objects file itself. Existence is not checked.
    """
    source = Path(source)
    if source.is_dir():
        return source / OBJECTS_FILENAME
    return source


def document_name(source: Union[str, Path]) -> str:
    """
    Derive a document name from a source path.

    Examples:
        Maps/Foo.SC2Map        -> Foo
        Maps/Foo.SC2Map/Objects -> Foo
        Foo.xml                -> Foo
    """
    source = Path(source)
    if source.name == OBJECTS_FILENAME and source.parent.name:
        source = source.parent
    return source.stem or source.name
