"""
Master facilities and package facility templates.

A package lists what it includes and excludes as free text or codes. Those
lists are normalized against :data:`MASTER_FACILITIES` and merged on top of a
per-package-type default template. Only master facilities survive a merge;
unknown entries are dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional

from aerotravel.core.logging_config import get_logger
from aerotravel.core.models.domain.enums import FacilityCategory, FacilitySource, FacilityStatus
from aerotravel.core.models.io.facilities import MergedFacility

logger = get_logger(__name__)


@dataclass(frozen=True)
class FacilityItem:
    code: str
    name: str
    category: FacilityCategory
    description: str = ""
    icon: str = ""


def _facility(code: str, name: str, category: FacilityCategory, description: str, icon: str) -> FacilityItem:
    return FacilityItem(code=code, name=name, category=category, description=description, icon=icon)


_C = FacilityCategory

# Insertion order matters: partial name matching walks the table in this order.
MASTER_FACILITIES: Dict[str, FacilityItem] = {
    item.code: item
    for item in (
        _facility("transport_pp", "Transportasi PP", _C.transport, "Transportasi pulang pergi dari meeting point", "🚌"),
        _facility("transport_boat", "Kapal/Penyebrangan", _C.transport, "Kapal atau perahu untuk penyeberangan", "⛴️"),
        _facility("transport_car", "Transportasi Darat", _C.transport, "Transportasi kendaraan darat", "🚗"),
        _facility("meal_fullboard", "Makan Full Board", _C.consumption, "Makan 3x sehari (pagi, siang, malam)", "🍽️"),
        _facility("meal_3x", "Makan 3x", _C.consumption, "Makan 3x (sesuai durasi trip)", "🍽️"),
        _facility("meal_2x", "Makan 2x", _C.consumption, "Makan 2x (sesuai durasi trip)", "🍽️"),
        _facility("snack", "Snack", _C.consumption, "Snack/camilan selama trip", "🍿"),
        _facility("drink", "Minuman", _C.consumption, "Air mineral dan minuman", "🥤"),
        _facility("snorkeling_gear", "Alat Snorkeling", _C.equipment, "Perlengkapan snorkeling lengkap", "🤿"),
        _facility("life_jacket", "Pelampung", _C.equipment, "Life jacket untuk keselamatan", "🦺"),
        _facility("waterproof_bag", "Dry Bag", _C.equipment, "Tas kedap air untuk barang", "🎒"),
        _facility("tent", "Tenda Camping", _C.accommodation, "Tenda untuk camping", "⛺"),
        _facility("homestay", "Homestay", _C.accommodation, "Penginapan homestay", "🏠"),
        _facility("liveaboard", "Live On Board", _C.accommodation, "Menginap di kapal", "🛥️"),
        _facility("guide_service", "Tour Guide", _C.guide, "Layanan tour guide", "👤"),
        _facility("local_guide", "Guide Lokal", _C.guide, "Guide lokal destinasi", "👤"),
        _facility("travel_insurance", "Asuransi Perjalanan", _C.insurance, "Asuransi perjalanan", "🛡️"),
        _facility("entrance_ticket", "Tiket Masuk", _C.ticket, "Tiket masuk destinasi", "🎫"),
        _facility("snorkeling", "Aktivitas Snorkeling", _C.activity, "Snorkeling di spot terpilih", "🏊"),
        _facility("island_hopping", "Island Hopping", _C.activity, "Kunjungan ke beberapa pulau", "🏝️"),
        _facility("photo_video", "Foto & Video", _C.documentation, "Dokumentasi foto dan video", "📸"),
    )
}

DEFAULT_FACILITY_TEMPLATES: Dict[str, List[str]] = {
    "boat_trip": [
        "transport_pp",
        "transport_boat",
        "meal_3x",
        "snorkeling_gear",
        "life_jacket",
        "tent",
        "guide_service",
        "travel_insurance",
    ],
    "land_trip": [
        "transport_pp",
        "transport_car",
        "meal_2x",
        "snack",
        "homestay",
        "guide_service",
        "travel_insurance",
        "entrance_ticket",
    ],
    "default": [
        "transport_pp",
        "meal_2x",
        "guide_service",
        "travel_insurance",
    ],
}

# Display order of categories in merged lists
CATEGORY_ORDER: List[FacilityCategory] = [
    _C.transport,
    _C.accommodation,
    _C.consumption,
    _C.equipment,
    _C.activity,
    _C.ticket,
    _C.guide,
    _C.insurance,
    _C.documentation,
    _C.other,
]


def get_facility_by_code(code: str) -> Optional[FacilityItem]:
    return MASTER_FACILITIES.get(code)


def get_facilities_by_category(category: FacilityCategory | str) -> List[FacilityItem]:
    category = FacilityCategory(category)
    return [item for item in MASTER_FACILITIES.values() if item.category == category]


def get_default_template(package_type: Optional[str] = None) -> List[str]:
    """A copy of the template for ``package_type``; unknown or missing types get the default one."""
    template = DEFAULT_FACILITY_TEMPLATES.get(package_type or "", DEFAULT_FACILITY_TEMPLATES["default"])
    return list(template)


def normalize_to_master_code(value: str) -> Optional[str]:
    """Resolve a facility code or name to its master code.

    Tried in order: exact code, case-insensitive code, case-insensitive exact
    name, then a name containing the input or contained in it.

    >>> normalize_to_master_code("Transport_PP")
    'transport_pp'
    >>> normalize_to_master_code("Tiket")
    'entrance_ticket'
    """
    normalized = (value or "").strip()
    if not normalized:
        return None

    if normalized in MASTER_FACILITIES:
        return normalized

    lowered = normalized.lower()
    for code in MASTER_FACILITIES:
        if code.lower() == lowered:
            return code

    for code, item in MASTER_FACILITIES.items():
        if item.name.lower() == lowered:
            return code

    for code, item in MASTER_FACILITIES.items():
        name = item.name.lower()
        if lowered in name or name in lowered:
            return code

    return None


def sample_quantity(code: str, status: FacilityStatus) -> int:
    """Deterministic placeholder quantity used when no quantity was supplied."""
    if status != FacilityStatus.included:
        return 0
    seed = sum(ord(char) for char in code) % 100
    return seed % 10 + 1


def _merged(
    item: FacilityItem,
    status: FacilityStatus,
    source: FacilitySource,
    quantities: Optional[Mapping[str, int]],
) -> MergedFacility:
    if quantities is not None and item.code in quantities:
        quantity = quantities[item.code]
    else:
        quantity = sample_quantity(item.code, status)
    return MergedFacility(
        code=item.code,
        name=item.name,
        category=item.category,
        description=item.description,
        icon=item.icon,
        status=status,
        source=source,
        quantity=quantity,
    )


def merge_facilities(
    default_template: Iterable[str],
    inclusions: Iterable[str] = (),
    exclusions: Iterable[str] = (),
    quantities: Optional[Mapping[str, int]] = None,
) -> List[MergedFacility]:
    """Merge a default template with a package's inclusions and exclusions.

    Template entries start as included. Inclusions add or re-include an
    entry; exclusions are applied last and always win, even for facilities
    that were never in the template. Entries that do not resolve to a master
    facility are ignored.

    Args:
        default_template: Template codes or names
        inclusions: Package inclusions as codes or names
        exclusions: Package exclusions as codes or names
        quantities: Quantity per master code; missing codes get a sample quantity

    Returns:
        Merged facilities sorted by category, then included before excluded, then name
    """
    merged: Dict[str, MergedFacility] = {}
    passes = (
        (default_template, FacilityStatus.included, FacilitySource.default),
        (inclusions, FacilityStatus.included, FacilitySource.override),
        (exclusions, FacilityStatus.excluded, FacilitySource.override),
    )
    for entries, status, source in passes:
        for entry in entries:
            code = normalize_to_master_code(entry)
            if code is None:
                logger.debug(f"Ignoring facility not in master list: {entry!r}")
                continue
            merged[code] = _merged(MASTER_FACILITIES[code], status, source, quantities)

    return sorted(
        merged.values(),
        key=lambda f: (
            CATEGORY_ORDER.index(f.category),
            f.status != FacilityStatus.included,
            f.name.casefold(),
        ),
    )
