"""
BIFF Record Catalog
===================

Static classification data for record type codes (sids) that biffkit does
not parse structurally. The catalog is used for diagnostics only: it names
records in rendered output and never affects how records are read or
written.

Classification Tiers
--------------------
- **Documented**: the sid has a published meaning but no structured record
  class yet. These are candidates for eventually being implemented.
- **Observed**: the sid has been seen in real files, but its meaning is not
  documented. These are worth investigating. Displayed as UNKNOWN-<hex>.
- **Unknown**: neither of the above. Displayed as UNKNOWNRECORD.

Sub-record Ranges
-----------------
Sids 0x1000-0x1070 belong to chart records. Several of them are also found
embedded inside another record's payload, where they act as sub-records in
a separate number space. Finding one of these codes in the observed tier
only means "this code has been seen", not that it is safe to handle as a
standalone top-level record. Unknown sids 0x0004-0x0013 are most likely OBJ
sub-records that escaped their parent record.

Maintenance
-----------
Any time a structured record class is added for a sid, delete that sid from
this catalog. A code cannot be both opaque and understood.

Reference
---------
- [MS-XLS] Excel Binary File Format: https://learn.microsoft.com/openspecs/office_file_formats/ms-xls
"""

from enum import Enum, IntEnum
from typing import Optional


# =============================================================================
# Milestone Sids
# =============================================================================

class MilestoneSid(IntEnum):
    """
    Catalog sids used as milestones in the record stream.

    The surrounding reader uses these to locate positions in a sheet's
    record sequence, even though the records themselves stay opaque.
    """
    PLS_004D = 0x004D
    SHEETPR_0081 = 0x0081
    STANDARDWIDTH_0099 = 0x0099
    SCL_00A0 = 0x00A0
    BITMAP_00E9 = 0x00E9
    PHONETICPR_00EF = 0x00EF
    LABELRANGES_015F = 0x015F
    QUICKTIP_0800 = 0x0800
    SHEETEXT_0862 = 0x0862          # OpenOffice calls this SHEETLAYOUT
    SHEETPROTECTION_0867 = 0x0867
    RANGEPROTECTION_0868 = 0x0868


# =============================================================================
# Documented Tier
# =============================================================================

# Records with a published meaning that are not yet parsed structurally.
# Kept as an ordered list of pairs so duplicates can be detected; if a sid
# were listed twice the later entry would win when building the dict.
_DOCUMENTED_ENTRIES: tuple[tuple[int, str], ...] = (
    (MilestoneSid.PLS_004D, "PLS"),
    (0x0050, "DCON"),
    (0x007F, "IMDATA"),
    (MilestoneSid.SHEETPR_0081, "SHEETPR"),
    (0x0090, "SORT"),
    (0x0094, "LHRECORD"),
    (MilestoneSid.STANDARDWIDTH_0099, "STANDARDWIDTH"),
    (0x009D, "AUTOFILTERINFO"),
    (MilestoneSid.SCL_00A0, "SCL"),
    (0x00AE, "SCENMAN"),
    (0x00D3, "OBPROJ"),
    (0x00DC, "PARAMQRY"),
    (0x00DE, "OLESIZE"),
    (MilestoneSid.BITMAP_00E9, "BITMAP"),
    (MilestoneSid.PHONETICPR_00EF, "PHONETICPR"),

    (MilestoneSid.LABELRANGES_015F, "LABELRANGES"),
    (0x01BA, "CODENAME"),
    (0x01A9, "USERBVIEW"),
    (0x01AA, "USERSVIEWBEGIN"),
    (0x01AB, "USERSVIEWEND"),
    (0x01AD, "QSI"),

    (0x01C0, "EXCEL9FILE"),

    (0x0802, "QSISXTAG"),
    (0x0803, "DBQUERYEXT"),
    (0x0805, "TXTQUERY"),

    (MilestoneSid.QUICKTIP_0800, "QUICKTIP"),
    (0x0850, "CHARTFRTINFO"),
    (0x0852, "STARTBLOCK"),
    (0x0853, "ENDBLOCK"),
    (0x0856, "CATLAB"),
    (MilestoneSid.SHEETEXT_0862, "SHEETEXT"),
    (0x0863, "BOOKEXT"),
    (MilestoneSid.SHEETPROTECTION_0867, "SHEETPROTECTION"),
    (MilestoneSid.RANGEPROTECTION_0868, "RANGEPROTECTION"),
    (0x086B, "DATALABEXTCONTENTS"),
    (0x086C, "CELLWATCH"),
    (0x0874, "DROPDOWNOBJIDS"),
    (0x0876, "DCONN"),
    (0x087B, "CFEX"),
    (0x087C, "XFCRC"),
    (0x087D, "XFEXT"),
    (0x088B, "PLV"),
    (0x088C, "COMPAT12"),
    (0x088D, "DXF"),
    (0x088E, "TABLESTYLES"),
    (0x0892, "STYLEEXT"),
    (0x0896, "THEME"),
    (0x0897, "GUIDTYPELIB"),
    (0x089A, "MTRSETTINGS"),
    (0x089B, "COMPRESSPICTURES"),
    (0x089C, "HEADERFOOTER"),
    (0x08A3, "FORCEFULLCALCULATION"),
    (0x08A4, "SHAPEPROPSSTREAM"),
    (0x08A5, "TEXTPROPSSTREAM"),
    (0x08A6, "RICHTEXTSTREAM"),

    (0x08C8, "PLV{Mac Excel}"),

    (0x1051, "SHAPEPROPSSTREAM"),
)

DOCUMENTED_NAMES: dict[int, str] = {int(sid): name for sid, name in _DOCUMENTED_ENTRIES}


# =============================================================================
# Observed Tier
# =============================================================================

# Sids seen in real files with no documented meaning. Must stay disjoint
# from DOCUMENTED_NAMES (0x1051 is documented, so it is not listed here).
OBSERVED_UNDOCUMENTED: frozenset[int] = frozenset({
    0x0033,  # 2 bytes of data: 0x0001 or 0x0003
    0x0034,  # written by MS Access, text "[Microsoft JET Created Table]0021010",
             # after the last cell value record and before WINDOW2
    0x01BD,
    0x01C2,  # Excel 2007, payload is a multiple of 12 bytes, after the last
             # cell value record and before WINDOW2 or drawing records
    0x089D,
    0x089E,
    0x08A7,

    # chart sub-record range
    0x1001, 0x1006, 0x1007, 0x1009, 0x100A, 0x100B, 0x100C,
    0x1014, 0x1017, 0x1018, 0x1019, 0x101A, 0x101B, 0x101D, 0x101E, 0x101F,
    0x1020, 0x1021, 0x1022, 0x1024, 0x1025, 0x1026, 0x1027,
    0x1032, 0x1033, 0x1034, 0x1035, 0x103A,
    0x1041, 0x1043, 0x1044, 0x1045, 0x1046, 0x104A, 0x104B, 0x104E, 0x104F,
    0x105C, 0x105D, 0x105F,
    0x1060, 0x1062, 0x1063, 0x1064, 0x1065, 0x1066,
})

# Chart records that may also appear embedded in another record's payload,
# and OBJ sub-record codes, which live in their own number space.
CHART_SUBRECORD_RANGE = range(0x1000, 0x1071)
OBJ_SUBRECORD_RANGE = range(0x0004, 0x0014)

GENERIC_NAME = "UNKNOWNRECORD"


# =============================================================================
# Classification
# =============================================================================

class Classification(Enum):
    """Catalog tier a sid falls into."""
    DOCUMENTED = "documented"
    OBSERVED = "observed"
    UNKNOWN = "unknown"

    def get_description(self) -> str:
        """Get a human-readable description of the tier."""
        descriptions = {
            Classification.DOCUMENTED: "documented, not yet implemented",
            Classification.OBSERVED: "observed in real files, undocumented",
            Classification.UNKNOWN: "not in catalog",
        }
        return descriptions[self]


def lookup_documented_name(sid: int) -> Optional[str]:
    """Return the documented name of a sid, or None if it has none."""
    return DOCUMENTED_NAMES.get(sid)


def is_observed_undocumented(sid: int) -> bool:
    """
    Check whether a sid has been observed in real files without documentation.

    A True result does not mean the sid is safe to handle as a standalone
    record: codes in CHART_SUBRECORD_RANGE may be embedded sub-records.
    """
    return sid in OBSERVED_UNDOCUMENTED


def is_subrecord_range(sid: int) -> bool:
    """
    Check if a sid lies in a range also used by sub-records.

    Covers the chart range (0x1000-0x1070) and the OBJ sub-record range
    (0x0004-0x0013).
    """
    return sid in CHART_SUBRECORD_RANGE or sid in OBJ_SUBRECORD_RANGE


def classification_of(sid: int) -> Classification:
    """Get the catalog tier of a sid."""
    if sid in DOCUMENTED_NAMES:
        return Classification.DOCUMENTED
    if sid in OBSERVED_UNDOCUMENTED:
        return Classification.OBSERVED
    return Classification.UNKNOWN


def get_biff_name(sid: int) -> Optional[str]:
    """
    Get the two-tier catalog name of a sid.

    Returns:
        The documented name, "UNKNOWN-<HEX>" for observed sids, or None
        when the sid is in neither tier.
    """
    name = lookup_documented_name(sid)
    if name is not None:
        return name
    if is_observed_undocumented(sid):
        return f"UNKNOWN-{sid:X}"
    return None


def classify(sid: int) -> str:
    """
    Get the display name of a sid.

    Example:
        >>> classify(0x0081)
        'SHEETPR'
        >>> classify(0x0033)
        'UNKNOWN-33'
        >>> classify(0xABCD)
        'UNKNOWNRECORD'
    """
    name = get_biff_name(sid)
    return name if name is not None else GENERIC_NAME
