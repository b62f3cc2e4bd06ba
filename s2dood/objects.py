"""
Object records read from an SC2 Objects file and the flags derived from them.

A record keeps the attributes of its tag as raw text; writers decide how each
value is rendered. The properties below only pick values out and split them
into components, they never convert numbers.
"""

import re
from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Dict, List, Optional, Tuple

from .constants import DEFAULT_POSITION_Z, DEFAULT_SCALE_COMPONENT

_COMPONENT_SEPARATOR = re.compile(r"[,\s]+")


class ObjectKind(str, Enum):
    """Object tags recognized in an Objects file."""
    DOODAD = "ObjectDoodad"


class ObjectFlag(str, Enum):
    """Flag names the editor writes as <Flag Index="..."/>."""
    HEIGHT_ABSOLUTE = "HeightAbsolute"
    FORCE_PLACEMENT = "ForcePlacement"
    NO_DOODAD_FOOTPRINT = "NoDoodadFootprint"
    HEIGHT_OFFSET = "HeightOffset"
    DISABLE_NO_FLY_ZONE = "DisableNoFlyZone"


class ObjectWriterFlags(IntFlag):
    """Bitmask written next to each object (lv_flags / Flags)."""
    NONE = 0
    HEIGHT_OFFSET = 1 << 0
    CONTAINS_SCALE = 1 << 8
    CONTAINS_MODEL_VARIATION = 1 << 9
    CONTAINS_ROTATION = 1 << 10
    CONTAINS_YPR = 1 << 11  # Pitch and roll share one bit
    CONTAINS_TINT = 1 << 12
    CONTAINS_TEAM_COLOR = 1 << 13


def split_components(text: str) -> List[str]:
    """Split "1,2,3" or "1 2 3" into its components, order preserved."""
    text = text.strip()
    if not text:
        return []
    return _COMPONENT_SEPARATOR.split(text)


def _pad(components: List[str], size: int, filler: str) -> Tuple[str, ...]:
    padded = list(components[:size])
    while len(padded) < size:
        padded.append(filler)
    return tuple(padded)


@dataclass
class DoodadRecord:
    """One placed object, as authored."""
    kind: ObjectKind = ObjectKind.DOODAD
    attributes: Dict[str, str] = field(default_factory=dict)
    flags: List[str] = field(default_factory=list)

    def get(self, name: str) -> Optional[str]:
        """Return an attribute, or None when it is missing or empty."""
        value = self.attributes.get(name)
        if not value:
            return None
        return value

    @property
    def type(self) -> Optional[str]:
        return self.get("Type")

    @property
    def position(self) -> Tuple[str, str, str]:
        """(x, y, z); z reads as "0" when the editor left it out."""
        components = split_components(self.get("Position") or "")
        x, y = _pad(components, 2, "0")
        z = components[2] if len(components) > 2 else DEFAULT_POSITION_Z
        return (x, y, z)

    @property
    def scale(self) -> Optional[Tuple[str, str, str]]:
        text = self.get("Scale")
        if text is None:
            return None
        return _pad(split_components(text), 3, DEFAULT_SCALE_COMPONENT)

    @property
    def rotation(self) -> Optional[str]:
        return self.get("Rotation")

    @property
    def pitch(self) -> Optional[str]:
        return self.get("Pitch")

    @property
    def roll(self) -> Optional[str]:
        return self.get("Roll")

    @property
    def variation(self) -> Optional[str]:
        return self.get("Variation")

    @property
    def tint_color(self) -> Optional[Tuple[str, Optional[str]]]:
        """
        Tint as (color text, multiplier text).

        The editor writes "r,g,b,a multiplier"; the multiplier may be missing.
        """
        text = self.get("TintColor")
        if text is None:
            return None
        parts = text.split()
        if not parts:
            return None
        multiplier = parts[1] if len(parts) > 1 else None
        return (parts[0], multiplier)

    @property
    def team_color(self) -> Optional[str]:
        return self.get("TeamColor")

    def has_flag(self, flag: ObjectFlag) -> bool:
        return flag.value in self.flags


def derive_flags(record: DoodadRecord) -> ObjectWriterFlags:
    """
    Compute the writer bitmask for a record.

    A bit is set when its field is present, whatever its value. Only the
    HeightOffset flag is carried over; other flag names are ignored.
    """
    flags = ObjectWriterFlags.NONE

    if record.scale is not None:
        flags |= ObjectWriterFlags.CONTAINS_SCALE
    if record.variation is not None:
        flags |= ObjectWriterFlags.CONTAINS_MODEL_VARIATION
    if record.rotation is not None:
        flags |= ObjectWriterFlags.CONTAINS_ROTATION
    if record.pitch is not None or record.roll is not None:
        flags |= ObjectWriterFlags.CONTAINS_YPR
    if record.tint_color is not None:
        flags |= ObjectWriterFlags.CONTAINS_TINT
    if record.team_color is not None:
        flags |= ObjectWriterFlags.CONTAINS_TEAM_COLOR

    for name in record.flags:
        if name == ObjectFlag.HEIGHT_OFFSET.value:
            flags |= ObjectWriterFlags.HEIGHT_OFFSET

    return flags
