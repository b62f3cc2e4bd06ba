"""
Constants for the SC2 Objects format and the generated artifacts.

Every value here is part of the output contract: the generated script and
catalog are consumed by the map's triggers, so changing one changes what the
engine sees.
"""

# =============================================================================
# Objects file
# =============================================================================

OBJECTS_FILENAME = "Objects"

FLAG_TAG = "Flag"
FLAG_INDEX_ATTR = "Index"
FLAG_VALUE_ATTR = "Value"
FLAG_ENABLED = "1"  # Any other Value leaves the flag unset

# Bytes per read when streaming a document into the parser
READ_CHUNK_SIZE = 64 * 1024

# =============================================================================
# Value conversion
# =============================================================================

# Galaxy Color() takes 0-100 channels, the editor stores 0-255
TINT_CHANNEL_DIVISOR = 2.5
TINT_CHANNELS = 3

ANGLE_PRECISION = 8  # Significant digits for yaw/pitch/roll

DEFAULT_POSITION_Z = "0"
DEFAULT_SCALE_COMPONENT = "1"

# =============================================================================
# Galaxy script
# =============================================================================

GALAXY_OBJECTS_ARRAY = "gv__o"
GALAXY_OBJECTS_COUNT = "gv__oc"
GALAXY_POPULATE_ROUTINE = "gf__opopulate"
GALAXY_BASE_PARAM = "lp_base"

# =============================================================================
# Catalog (user type)
# =============================================================================

CATALOG_ROOT = "Catalog"
CATALOG_USER_TYPE = "CUser"
CATALOG_FIELD_DEFINITION = "Fields"
CATALOG_INSTANCE = "Instances"
CATALOG_FIELD_REF = "Field"
CATALOG_GAME_LINK_TYPE = "Actor"

# Wrapper element kinds; the element name doubles as its value attribute
KIND_GAME_LINK = "GameLink"
KIND_INT = "Int"
KIND_FIXED = "Fixed"
KIND_COLOR = "Color"

# (field id, kind) in emission order; EditorColumn is the 1-based position
CATALOG_FIELDS: list[tuple[str, str]] = [
    ("Type", KIND_GAME_LINK),
    ("X", KIND_FIXED),
    ("Y", KIND_FIXED),
    ("Z", KIND_FIXED),
    ("Variation", KIND_INT),
    ("ScaleX", KIND_FIXED),
    ("ScaleY", KIND_FIXED),
    ("ScaleZ", KIND_FIXED),
    ("Yaw", KIND_FIXED),
    ("Pitch", KIND_FIXED),
    ("Roll", KIND_FIXED),
    ("TintColor", KIND_COLOR),
    ("TintHDR", KIND_FIXED),
    ("TeamColor", KIND_INT),
    ("Flags", KIND_INT),
]
