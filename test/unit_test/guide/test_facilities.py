"""Unit tests for master facilities and template merging."""

from __future__ import annotations

import pytest

from aerotravel.core.models.domain.enums import FacilityCategory, FacilitySource, FacilityStatus
from aerotravel.guide.facilities import (
    CATEGORY_ORDER,
    DEFAULT_FACILITY_TEMPLATES,
    MASTER_FACILITIES,
    get_default_template,
    get_facilities_by_category,
    get_facility_by_code,
    merge_facilities,
    normalize_to_master_code,
    sample_quantity,
)


class TestMasterFacilities:
    def test_catalogue_size(self):
        assert len(MASTER_FACILITIES) == 21

    def test_templates_only_reference_master_codes(self):
        for codes in DEFAULT_FACILITY_TEMPLATES.values():
            assert all(code in MASTER_FACILITIES for code in codes)

    def test_every_category_is_ordered(self):
        assert set(CATEGORY_ORDER) == set(FacilityCategory)

    def test_lookup_by_code(self):
        assert get_facility_by_code("life_jacket").name == "Pelampung"
        assert get_facility_by_code("unknown") is None

    def test_by_category(self):
        codes = [item.code for item in get_facilities_by_category("guide")]

        assert codes == ["guide_service", "local_guide"]


class TestDefaultTemplate:
    def test_known_type(self):
        assert get_default_template("boat_trip") == DEFAULT_FACILITY_TEMPLATES["boat_trip"]

    @pytest.mark.parametrize("package_type", [None, "", "space_trip"])
    def test_unknown_type_uses_default(self, package_type):
        assert get_default_template(package_type) == DEFAULT_FACILITY_TEMPLATES["default"]

    def test_returns_copy(self):
        template = get_default_template("land_trip")
        template.append("snorkeling")

        assert "snorkeling" not in DEFAULT_FACILITY_TEMPLATES["land_trip"]


class TestNormalize:
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("snack", "snack"),
            ("SNACK", "snack"),
            ("Transport_PP", "transport_pp"),
            ("pelampung", "life_jacket"),
            ("Dry Bag", "waterproof_bag"),
            ("Tiket", "entrance_ticket"),
            ("Island Hopping ke 3 pulau", "island_hopping"),
            ("  Homestay  ", "homestay"),
        ],
    )
    def test_resolves(self, value, expected):
        assert normalize_to_master_code(value) == expected

    @pytest.mark.parametrize("value", ["", "   ", "helikopter"])
    def test_unresolved(self, value):
        assert normalize_to_master_code(value) is None


class TestSampleQuantity:
    def test_excluded_is_zero(self):
        assert sample_quantity("snack", FacilityStatus.excluded) == 0

    def test_included_is_deterministic_and_positive(self):
        first = sample_quantity("snack", FacilityStatus.included)

        assert first == sample_quantity("snack", FacilityStatus.included)
        assert 1 <= first <= 10


class TestMerge:
    def test_template_only(self):
        merged = merge_facilities(get_default_template("default"))

        assert {f.code for f in merged} == set(DEFAULT_FACILITY_TEMPLATES["default"])
        assert all(f.status == FacilityStatus.included for f in merged)
        assert all(f.source == FacilitySource.default for f in merged)

    def test_inclusion_adds_override(self):
        merged = merge_facilities(["transport_pp"], inclusions=["Alat Snorkeling"])

        by_code = {f.code: f for f in merged}
        assert by_code["snorkeling_gear"].source == FacilitySource.override
        assert by_code["transport_pp"].source == FacilitySource.default

    def test_exclusion_wins_over_template_and_inclusion(self):
        merged = merge_facilities(
            ["travel_insurance", "meal_2x"],
            inclusions=["travel_insurance"],
            exclusions=["Asuransi Perjalanan"],
        )

        by_code = {f.code: f for f in merged}
        assert by_code["travel_insurance"].status == FacilityStatus.excluded
        assert by_code["travel_insurance"].source == FacilitySource.override
        assert by_code["travel_insurance"].quantity == 0
        assert by_code["meal_2x"].status == FacilityStatus.included

    def test_exclusion_of_facility_outside_template(self):
        merged = merge_facilities(["transport_pp"], exclusions=["tenda"])

        assert [(f.code, f.status) for f in merged] == [
            ("transport_pp", FacilityStatus.included),
            ("tent", FacilityStatus.excluded),
        ]

    def test_unknown_entries_dropped(self):
        merged = merge_facilities(["transport_pp", "jetski"], inclusions=["karaoke"], exclusions=["spa"])

        assert [f.code for f in merged] == ["transport_pp"]

    def test_explicit_quantities(self):
        merged = merge_facilities(["meal_3x", "life_jacket"], quantities={"life_jacket": 12})

        by_code = {f.code: f for f in merged}
        assert by_code["life_jacket"].quantity == 12
        assert by_code["meal_3x"].quantity == sample_quantity("meal_3x", FacilityStatus.included)

    def test_sort_order(self):
        merged = merge_facilities(
            ["travel_insurance", "snack", "transport_pp", "drink", "homestay"],
            exclusions=["snack"],
        )

        assert [f.code for f in merged] == [
            "transport_pp",  # transport
            "homestay",  # accommodation
            "drink",  # consumption, included
            "snack",  # consumption, excluded
            "travel_insurance",  # insurance
        ]
