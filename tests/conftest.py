from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest


OBJECTS_TEMPLATE = """<?xml version="1.0" encoding="utf-8"?>
<PlacedObjects Version="27">
{body}
</PlacedObjects>
"""


@pytest.fixture()
def make_map(tmp_path: Path) -> Callable[[str, str], Path]:
    """Create ``<name>.SC2Map/Objects`` holding the given doodad markup."""

    def _make_map(name: str, body: str) -> Path:
        map_dir = tmp_path / "Maps" / f"{name}.SC2Map"
        map_dir.mkdir(parents=True)
        (map_dir / "Objects").write_text(OBJECTS_TEMPLATE.format(body=body), encoding="utf-8")
        return map_dir

    return _make_map
