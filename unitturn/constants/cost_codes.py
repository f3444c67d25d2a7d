# unitturn/constants/cost_codes.py
"""
Accounting cost code registry.

Every template line item carries an integer cost code that maps it to a
general-ledger account and a GL classification (UT / R&M / Cap Ex).
The classification only decides the reporting bucket; it never takes part
in any arithmetic.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from unitturn.db.enums import GLClassification


@dataclass(frozen=True)
class CostCodeEntry:
    code: int
    gl_account: str
    description: str
    classification: GLClassification

    @property
    def label(self) -> str:
        return f"{self.code} - {self.description} ({self.gl_account})"


UT = GLClassification.UT
RM = GLClassification.RM
CAPEX = GLClassification.CAPEX

COST_CODES: Tuple[CostCodeEntry, ...] = (
    CostCodeEntry(1, "58005", "Irrigation Repair and Maintenance", UT),
    CostCodeEntry(2, "58010", "Plumbing", UT),
    CostCodeEntry(3, "58015", "Electrical", UT),
    CostCodeEntry(4, "58020", "Appliance R&M", UT),
    CostCodeEntry(5, "58030", "Windows and doors", UT),
    CostCodeEntry(6, "58035", "Cabinets and Countertops", UT),
    CostCodeEntry(8, "58040", "Tub/Shower Repairs", UT),
    CostCodeEntry(9, "58045", "Gate/Fence Repairs", UT),
    CostCodeEntry(10, "58260", "Drywall Repairs", UT),
    CostCodeEntry(11, "58305", "Power Wash/Steam Cleaning", UT),
    CostCodeEntry(12, "58310", "Trash Removal", UT),
    CostCodeEntry(13, "58100", "Carpet Cleaning", UT),
    CostCodeEntry(14, "58250", "Flooring Repairs", UT),
    CostCodeEntry(15, "58300", "General Unit Cleaning", UT),
    CostCodeEntry(16, "58350", "Interior Painting", UT),
    CostCodeEntry(17, "58400", "Blinds", UT),
    CostCodeEntry(18, "60050", "Appliance Purchase", CAPEX),
    CostCodeEntry(19, "60100", "Electrical", CAPEX),
    CostCodeEntry(20, "60150", "Carpet/Vinyl Replacement", CAPEX),
    CostCodeEntry(21, "60200", "Tile/Hardwood Flooring Replacement", CAPEX),
    CostCodeEntry(22, "60250", "HVAC", CAPEX),
    CostCodeEntry(23, "60300", "Plumbing", CAPEX),
    CostCodeEntry(24, "60350", "Roofing", CAPEX),
    CostCodeEntry(27, "60450", "Landscape Improvements", CAPEX),
    CostCodeEntry(28, "60550", "Water Heaters", CAPEX),
    CostCodeEntry(29, "60700", "Tub/Shower Replacement", CAPEX),
    CostCodeEntry(32, "60450", "Fence Replacement", CAPEX),
    CostCodeEntry(33, "60460", "Pool Equipment", CAPEX),
    CostCodeEntry(35, "58265", "HVAC R&M", UT),
    CostCodeEntry(36, "56700", "Tree Trimming", RM),
    CostCodeEntry(37, "57340", "Roof Repairs", RM),
    CostCodeEntry(38, "58255", "Concrete Repairs", UT),
    CostCodeEntry(39, "57580", "Lock and Key", RM),
    CostCodeEntry(40, "57510", "Garage Doors", RM),
    CostCodeEntry(41, "60400", "Doors/Windows", CAPEX),
    CostCodeEntry(42, "58050", "Carpet Replacement", UT),
    CostCodeEntry(43, "58150", "Hardwood LVP Replacement", UT),
)

_BY_CODE: Dict[int, CostCodeEntry] = {entry.code: entry for entry in COST_CODES}


def get_cost_code(code: int) -> Optional[CostCodeEntry]:
    '''Look up a registry row; None when the code is not registered.'''
    return _BY_CODE.get(code)


def describe_cost_code(code: int) -> str:
    '''
    Display label for a cost code.
    Unknown codes fall back to the raw number so callers never have to
    special-case a missing registry row.
    '''
    entry = get_cost_code(code)
    if entry is None:
        return str(code)
    return entry.label


def is_known_cost_code(code: int) -> bool:
    return code in _BY_CODE
