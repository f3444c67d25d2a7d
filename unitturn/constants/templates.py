# unitturn/constants/templates.py
"""
Default unit-turn template catalog.

The catalog is static reference data: sections in display order, each with
a fixed ordered list of line items carrying a stable id, a cost code, an
area label and a default unit of measure. It is built once at import as
immutable tuples; create_default_template() turns it into a fresh, zeroed,
editable UnitTurnTemplate on every call.
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Mapping, Tuple

from unitturn.domain.unit_turn_template import (
    TemplateItem,
    TemplateSection,
    UnitTurnTemplate,
)

DEFAULT_TEMPLATE_ID = "default-unit-turn"
DEFAULT_TEMPLATE_NAME = "Standard Unit Turn Template"

# unit options offered by the editor
UNIT_OPTIONS: Tuple[str, ...] = ("ls", "ea", "sf", "lf", "hr")


@dataclass(frozen=True)
class CatalogItem:
    id: str
    cost_code: int
    area: str
    units: str = "ls"
    notes: str = ""


@dataclass(frozen=True)
class CatalogSection:
    id: str
    name: str
    items: Tuple[CatalogItem, ...]


DEFAULT_CATALOG: Tuple[CatalogSection, ...] = (
    CatalogSection(
        "exterior-building",
        "Exterior (Building)",
        (
            CatalogItem("ext-build-1", 16, "Main Body Paint T.U"),
            CatalogItem("ext-build-2", 16, "Trim & Door Paint T.U"),
            CatalogItem("ext-build-3", 40, "Garage Door Repairs"),
            CatalogItem("ext-build-4", 5, "Entry Door"),
            CatalogItem("ext-build-5", 37, "Roofing Repairs"),
            CatalogItem("ext-build-6", 37, "Gutter Repairs"),
            CatalogItem("ext-build-7", 38, "Patios & Walks"),
            CatalogItem("ext-build-8", 12, "Yard Trash out"),
            CatalogItem("ext-build-9", 11, "Pressure Wash Exterior Decks"),
            CatalogItem("ext-build-10", 38, "Driveway Repairs"),
            CatalogItem("ext-build-11", 3, "Misc Electrical"),
            CatalogItem("ext-build-12", 39, "Lockbox & Keys"),
            CatalogItem("ext-build-13", 2, "Misc Plumbing"),
            CatalogItem("ext-build-14", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "exterior-lot",
        "Exterior (Lot)",
        (
            CatalogItem("ext-lot-1", 1, "Front Landscaping"),
            CatalogItem("ext-lot-2", 1, "Rear Landscaping"),
            CatalogItem("ext-lot-3", 1, "Sprinklers & Timers"),
            CatalogItem("ext-lot-4", 38, "Concrete Repairs"),
            CatalogItem("ext-lot-5", 9, "Fencing Repairs"),
            CatalogItem("ext-lot-6", 9, "Gate Repairs"),
            CatalogItem("ext-lot-7", 39, "Mailbox"),
            CatalogItem("ext-lot-8", 36, "Tree Trimming"),
            CatalogItem("ext-lot-9", 2, "Misc Plumbing"),
        ),
    ),
    CatalogSection(
        "interior-general",
        "Interior (General)",
        (
            CatalogItem("int-gen-1", 35, "HVAC Repairs (under $1,000)"),
            CatalogItem("int-gen-2", 35, "HVAC Filters"),
            CatalogItem("int-gen-3", 35, "Thermostats"),
            CatalogItem("int-gen-4", 3, "Smoke Detectors", units="ea"),
            CatalogItem("int-gen-5", 3, "CO2 Detectors", units="ea"),
            CatalogItem("int-gen-6", 16, "Paint T.U Whole House"),
            CatalogItem("int-gen-7", 10, "Drywall Repairs"),
            CatalogItem("int-gen-8", 16, "Repaint Whole House"),
            CatalogItem("int-gen-9", 15, "Hard Floors Cleaning"),
            CatalogItem("int-gen-10", 13, "Carpet Cleaning"),
            CatalogItem("int-gen-11", 15, "Final Clean"),
            CatalogItem("int-gen-12", 20, "Carpet Replacement (ANY ROOM)"),
            CatalogItem("int-gen-13", 20, "Hardwood LVP Replacement"),
        ),
    ),
    CatalogSection(
        "entry",
        "Entry",
        (
            CatalogItem("entry-1", 39, "Lockset & Keys"),
            CatalogItem("entry-2", 14, "Flooring Repairs"),
            CatalogItem("entry-3", 16, "Paint T.U"),
            CatalogItem("entry-4", 10, "Drywall"),
            CatalogItem("entry-5", 3, "Electrical"),
            CatalogItem("entry-6", 5, "Door/Window Repairs"),
            CatalogItem("entry-7", 17, "Blinds", units="ea"),
            CatalogItem("entry-8", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "living-dining",
        "Living Room / Dining",
        (
            CatalogItem("living-1", 16, "Paint T.U"),
            CatalogItem("living-2", 10, "Drywall"),
            CatalogItem("living-3", 14, "Flooring Repairs"),
            CatalogItem("living-4", 3, "Electrical"),
            CatalogItem("living-5", 5, "Door/Window Repairs"),
            CatalogItem("living-6", 17, "Blinds"),
            CatalogItem("living-7", 39, "Lockset & Keys"),
            CatalogItem("living-8", 5, "Fireplace"),
            CatalogItem("living-9", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "kitchen-nook",
        "Kitchen & Nook",
        (
            CatalogItem("kitchen-1", 6, "Cabinets Repairs"),
            CatalogItem("kitchen-2", 6, "Counter Tops Repairs"),
            CatalogItem("kitchen-3", 4, "Appliance Repairs"),
            CatalogItem("kitchen-4", 2, "Plumbing"),
            CatalogItem("kitchen-5", 3, "Electrical"),
            CatalogItem("kitchen-6", 14, "Flooring Repairs"),
            CatalogItem("kitchen-7", 16, "Paint T.U"),
            CatalogItem("kitchen-8", 10, "Drywall"),
            CatalogItem("kitchen-9", 5, "Door/Window Repairs"),
            CatalogItem("kitchen-10", 17, "Blinds"),
            CatalogItem("kitchen-11", 39, "Lockset & Keys"),
            CatalogItem("kitchen-12", 15, "Misc Cleaning"),
            CatalogItem("kitchen-13", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "family-room",
        "Family room",
        (
            CatalogItem("family-1", 16, "Paint T.U"),
            CatalogItem("family-2", 10, "Drywall"),
            CatalogItem("family-3", 14, "Flooring Repairs"),
            CatalogItem("family-4", 3, "Electrical"),
            CatalogItem("family-5", 5, "Door/Window Repairs"),
            CatalogItem("family-6", 17, "Blinds"),
            CatalogItem("family-7", 39, "Lockset & Keys"),
            CatalogItem("family-8", 5, "Fireplace"),
            CatalogItem("family-9", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "powder-room",
        "Powder room",
        (
            CatalogItem("powder-1", 6, "Cabinets Repairs"),
            CatalogItem("powder-2", 6, "Counter Tops Repairs"),
            CatalogItem("powder-3", 2, "Tub/Shower/Toilet"),
            CatalogItem("powder-4", 2, "Plumbing"),
            CatalogItem("powder-5", 3, "Electrical"),
            CatalogItem("powder-6", 14, "Flooring Repairs"),
            CatalogItem("powder-7", 16, "Paint T.U"),
            CatalogItem("powder-8", 10, "Drywall"),
            CatalogItem("powder-9", 5, "Door/Window Repairs"),
            CatalogItem("powder-10", 17, "Blinds"),
            CatalogItem("powder-11", 5, "Door Hardware"),
            CatalogItem("powder-12", 5, "Mirrors"),
            CatalogItem("powder-13", 15, "Misc Cleaning"),
            CatalogItem("powder-14", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "hallway-stairs",
        "Hallway & Stairs",
        (
            CatalogItem("hallway-1", 16, "Paint T.U"),
            CatalogItem("hallway-2", 10, "Drywall"),
            CatalogItem("hallway-3", 14, "Flooring Repairs"),
            CatalogItem("hallway-4", 3, "Electrical"),
            CatalogItem("hallway-5", 3, "Smoke Detectors"),
            CatalogItem("hallway-6", 3, "CO2 Detectors"),
            CatalogItem("hallway-7", 5, "Door Hardware"),
            CatalogItem("hallway-8", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "master-bedroom",
        "Master bedroom",
        (
            CatalogItem("master-bed-1", 16, "Paint T.U"),
            CatalogItem("master-bed-2", 10, "Drywall"),
            CatalogItem("master-bed-3", 14, "Flooring Repairs"),
            CatalogItem("master-bed-4", 3, "Electrical"),
            CatalogItem("master-bed-5", 3, "Smoke Detectors"),
            CatalogItem("master-bed-6", 3, "CO2 Detectors"),
            CatalogItem("master-bed-7", 5, "Door/Window Repairs"),
            CatalogItem("master-bed-8", 17, "Blinds"),
            CatalogItem("master-bed-9", 5, "Door Hardware"),
            CatalogItem("master-bed-10", 5, "Closets"),
            CatalogItem("master-bed-11", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "master-bath",
        "Master Bath",
        (
            CatalogItem("master-bath-1", 6, "Cabinets Repairs"),
            CatalogItem("master-bath-2", 6, "Counter Tops Repairs"),
            CatalogItem("master-bath-3", 2, "Tub/Shower/Toilet"),
            CatalogItem("master-bath-4", 2, "Plumbing"),
            CatalogItem("master-bath-5", 3, "Electrical"),
            CatalogItem("master-bath-6", 14, "Flooring Repairs"),
            CatalogItem("master-bath-7", 16, "Paint T.U"),
            CatalogItem("master-bath-8", 10, "Drywall"),
            CatalogItem("master-bath-9", 5, "Door/Window Repairs"),
            CatalogItem("master-bath-10", 17, "Blinds"),
            CatalogItem("master-bath-11", 5, "Door Hardware"),
            CatalogItem("master-bath-12", 5, "Mirrors"),
            CatalogItem("master-bath-13", 15, "Misc Cleaning"),
            CatalogItem("master-bath-14", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "bath-2",
        "Bath 2",
        (
            CatalogItem("bath-2-1", 6, "Cabinets Repairs"),
            CatalogItem("bath-2-2", 6, "Counter Tops Repairs"),
            CatalogItem("bath-2-3", 2, "Tub/Shower/Toilet"),
            CatalogItem("bath-2-4", 2, "Plumbing"),
            CatalogItem("bath-2-5", 3, "Electrical"),
            CatalogItem("bath-2-6", 14, "Flooring Repairs"),
            CatalogItem("bath-2-7", 16, "Paint T.U"),
            CatalogItem("bath-2-8", 10, "Drywall"),
            CatalogItem("bath-2-9", 5, "Door/Window Repairs"),
            CatalogItem("bath-2-10", 17, "Blinds"),
            CatalogItem("bath-2-11", 5, "Door Hardware"),
            CatalogItem("bath-2-12", 5, "Mirrors"),
            CatalogItem("bath-2-13", 15, "Misc Cleaning"),
            CatalogItem("bath-2-14", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "bath-3",
        "Bath 3",
        (
            CatalogItem("bath-3-1", 6, "Cabinets Repairs"),
            CatalogItem("bath-3-2", 6, "Counter Tops Repairs"),
            CatalogItem("bath-3-3", 2, "Tub/Shower/Toilet"),
            CatalogItem("bath-3-4", 2, "Plumbing"),
            CatalogItem("bath-3-5", 3, "Electrical"),
            CatalogItem("bath-3-6", 14, "Flooring Repairs"),
            CatalogItem("bath-3-7", 16, "Paint T.U"),
            CatalogItem("bath-3-8", 17, "Drywall"),
            CatalogItem("bath-3-9", 5, "Door/Window Repairs"),
            CatalogItem("bath-3-10", 17, "Blinds"),
            CatalogItem("bath-3-11", 5, "Door Hardware"),
            CatalogItem("bath-3-12", 5, "Mirrors"),
            CatalogItem("bath-3-13", 15, "Misc Cleaning"),
            CatalogItem("bath-3-14", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "bed-2",
        "Bed 2",
        (
            CatalogItem("bed-2-1", 16, "Paint T.U"),
            CatalogItem("bed-2-2", 10, "Drywall"),
            CatalogItem("bed-2-3", 14, "Flooring Repairs"),
            CatalogItem("bed-2-4", 3, "Electrical"),
            CatalogItem("bed-2-5", 3, "Smoke Detectors"),
            CatalogItem("bed-2-6", 3, "CO2 Detectors"),
            CatalogItem("bed-2-7", 5, "Door/Window Repairs"),
            CatalogItem("bed-2-8", 17, "Blinds"),
            CatalogItem("bed-2-9", 5, "Door Hardware"),
            CatalogItem("bed-2-10", 5, "Closets"),
            CatalogItem("bed-2-11", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "bed-3",
        "Bed 3",
        (
            CatalogItem("bed-3-1", 16, "Paint T.U"),
            CatalogItem("bed-3-2", 10, "Drywall"),
            CatalogItem("bed-3-3", 14, "Flooring Repairs"),
            CatalogItem("bed-3-4", 3, "Electrical"),
            CatalogItem("bed-3-5", 3, "Smoke Detectors"),
            CatalogItem("bed-3-6", 3, "CO2 Detectors"),
            CatalogItem("bed-3-7", 5, "Door/Window Repairs"),
            CatalogItem("bed-3-8", 17, "Blinds"),
            CatalogItem("bed-3-9", 5, "Door Hardware"),
            CatalogItem("bed-3-10", 5, "Closets"),
            CatalogItem("bed-3-11", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "bed-4-office",
        "Bed 4 or Office/Den",
        (
            CatalogItem("bed-4-1", 16, "Paint T.U"),
            CatalogItem("bed-4-2", 10, "Drywall"),
            CatalogItem("bed-4-3", 14, "Flooring Repairs"),
            CatalogItem("bed-4-4", 3, "Electrical"),
            CatalogItem("bed-4-5", 3, "Smoke Detectors"),
            CatalogItem("bed-4-6", 3, "CO2 Detectors"),
            CatalogItem("bed-4-7", 5, "Door/Window Repairs"),
            CatalogItem("bed-4-8", 17, "Blinds"),
            CatalogItem("bed-4-9", 5, "Door Hardware"),
            CatalogItem("bed-4-10", 5, "Closets"),
            CatalogItem("bed-4-11", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "bed-5-office",
        "Bed 5 or Office/ Den",
        (
            CatalogItem("bed-5-1", 16, "Paint T.U"),
            CatalogItem("bed-5-2", 10, "Drywall"),
            CatalogItem("bed-5-3", 14, "Flooring Repairs"),
            CatalogItem("bed-5-4", 3, "Electrical"),
            CatalogItem("bed-5-5", 3, "Smoke Detectors"),
            CatalogItem("bed-5-6", 3, "CO2 Detectors"),
            CatalogItem("bed-5-7", 5, "Door/Window Repairs"),
            CatalogItem("bed-5-8", 17, "Blinds"),
            CatalogItem("bed-5-9", 5, "Door Hardware"),
            CatalogItem("bed-5-10", 5, "Closets"),
            CatalogItem("bed-5-11", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "bed-6-office",
        "Bed 6 or Office/Den",
        (
            CatalogItem("bed-6-1", 16, "Paint T.U"),
            CatalogItem("bed-6-2", 10, "Drywall"),
            CatalogItem("bed-6-3", 14, "Flooring Repairs"),
            CatalogItem("bed-6-4", 3, "Electrical"),
            CatalogItem("bed-6-5", 3, "Smoke Detectors"),
            CatalogItem("bed-6-6", 3, "CO2 Detectors"),
            CatalogItem("bed-6-7", 5, "Door/Window Repairs"),
            CatalogItem("bed-6-8", 17, "Blinds"),
            CatalogItem("bed-6-9", 5, "Door Hardware"),
            CatalogItem("bed-6-10", 5, "Closets"),
            CatalogItem("bed-6-11", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "basement",
        "Basement",
        (
            CatalogItem("basement-1", 16, "Paint T.U"),
            CatalogItem("basement-2", 10, "Drywall"),
            CatalogItem("basement-3", 14, "Flooring Repairs"),
            CatalogItem("basement-4", 3, "Electrical"),
            CatalogItem("basement-5", 3, "Smoke Detectors"),
            CatalogItem("basement-6", 3, "CO2 Detectors"),
            CatalogItem("basement-7", 5, "Door/Window Repairs"),
            CatalogItem("basement-8", 17, "Blinds"),
            CatalogItem("basement-9", 5, "Door Hardware"),
            CatalogItem("basement-10", 5, "Closets"),
            CatalogItem("basement-11", 15, "Misc Cleaning"),
            CatalogItem("basement-12", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "laundry-room",
        "Laundry room",
        (
            CatalogItem("laundry-1", 6, "Cabinets Repairs"),
            CatalogItem("laundry-2", 6, "Counter Top Repairs"),
            CatalogItem("laundry-3", 4, "Appliance Repairs"),
            CatalogItem("laundry-4", 2, "Plumbing"),
            CatalogItem("laundry-5", 3, "Electrical"),
            CatalogItem("laundry-6", 14, "Flooring Repairs"),
            CatalogItem("laundry-7", 16, "Paint T.U"),
            CatalogItem("laundry-8", 10, "Drywall"),
            CatalogItem("laundry-9", 5, "Door/Window Repairs"),
            CatalogItem("laundry-10", 17, "Blinds"),
            CatalogItem("laundry-11", 5, "Door Hardware"),
            CatalogItem("laundry-12", 2, "Dryer Vent"),
            CatalogItem("laundry-13", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "garage",
        "Garage",
        (
            CatalogItem("garage-1", 3, "Garage Door Opener", notes="GDO Remotes?"),
            CatalogItem("garage-2", 39, "Lockset & Keys"),
            CatalogItem("garage-3", 3, "Electrical"),
            CatalogItem("garage-4", 2, "Water heater Straps"),
            CatalogItem("garage-5", 11, "Pressure Wash Floor"),
            CatalogItem("garage-6", 5, "Misc Door/Window"),
            CatalogItem("garage-7", 15, "Misc Cleaning"),
        ),
    ),
    CatalogSection(
        "cap-x",
        "CAP-X - Over $1,000",
        (
            CatalogItem("cap-x-1", 18, "Appliance Replacement (ANY cost)"),
            CatalogItem("cap-x-2", 22, "HVAC Replacement (ANY cost)"),
            CatalogItem("cap-x-3", 29, "Tub/Shower replacement"),
            CatalogItem("cap-x-4", 19, "Major Electrical"),
            CatalogItem("cap-x-5", 41, "Exterior Doors"),
            CatalogItem("cap-x-6", 41, "Window Replacement"),
            CatalogItem("cap-x-7", 27, "Complete Landscaping Replace"),
            CatalogItem("cap-x-8", 27, "Complete Irrigation"),
            CatalogItem("cap-x-9", 20, "LVP / Vinyl Floors Replace (Any cost)"),
            CatalogItem("cap-x-10", 20, "Carpet Replacement (Any Full Room)"),
            CatalogItem("cap-x-11", 28, "Water Heaters (Any cost)"),
            CatalogItem("cap-x-12", 41, "Garage Doors (Any Cost)"),
            CatalogItem("cap-x-13", 24, "Roofing"),
            CatalogItem("cap-x-14", 24, "Gutter Systems"),
            CatalogItem("cap-x-15", 33, "Pool Equipment"),
            CatalogItem("cap-x-16", 32, "Fencing Replacement"),
        ),
    ),
)


def build_template(
    catalog: Iterable[CatalogSection],
    *,
    template_id: str = DEFAULT_TEMPLATE_ID,
    name: str = DEFAULT_TEMPLATE_NAME,
) -> UnitTurnTemplate:
    '''Materialise a catalog into a new template with every amount at zero.'''
    sections = []
    for catalog_section in catalog:
        items = [
            TemplateItem(
                id=c.id,
                cost_code=c.cost_code,
                area=c.area,
                description=c.area,
                units=c.units,
                notes=c.notes,
            )
            for c in catalog_section.items
        ]
        sections.append(
            TemplateSection(id=catalog_section.id, name=catalog_section.name, items=items)
        )
    return UnitTurnTemplate(id=template_id, name=name, sections=sections)


def create_default_template() -> UnitTurnTemplate:
    return build_template(DEFAULT_CATALOG)


def _index_catalog(catalog: Tuple[CatalogSection, ...]) -> Mapping[str, str]:
    index = {}
    for section in catalog:
        for item in section.items:
            if item.id in index:
                raise ValueError(f"Duplicate catalog item id: {item.id}")
            index[item.id] = section.name
    return MappingProxyType(index)


# computed once; item ids are stable literals so these never drift
DEFAULT_SECTION_NAMES: Tuple[str, ...] = tuple(s.name for s in DEFAULT_CATALOG)
DEFAULT_ITEM_SECTIONS: Mapping[str, str] = _index_catalog(DEFAULT_CATALOG)
