"""Application tests for CafeRepository.list_active — listing filters."""

import json

from cafehub.cafe.cafe import Cafe
from cafehub.cafe.registration import RegisterCafe
from protean import current_domain


def _register_cafe(
    name,
    city="Kochi",
    state="Kerala",
    min_budget=100.0,
    max_budget=300.0,
    amenities=(),
    description="Coffee and conversation.",
):
    return current_domain.process(
        RegisterCafe(
            owner_id="owner-001",
            name=name,
            description=description,
            city=city,
            state=state,
            min_budget=min_budget,
            max_budget=max_budget,
            amenities=json.dumps(list(amenities)),
        ),
        asynchronous=False,
    )


def _listed(**filters):
    page = current_domain.repository_for(Cafe).list_active(**filters)
    return sorted(c.name for c in page.items)


class TestCafeListingFilters:
    def test_city_matches_substring_ignoring_case(self):
        _register_cafe("Fort Cafe", city="Fort Kochi")
        _register_cafe("Hill Cafe", city="Munnar")
        assert _listed(city="KOCHI") == ["Fort Cafe"]

    def test_state_filter(self):
        _register_cafe("Kerala Cafe", state="Kerala")
        _register_cafe("Goa Cafe", city="Panaji", state="Goa")
        _register_cafe("Stateless Cafe", state=None)
        assert _listed(state="goa") == ["Goa Cafe"]

    def test_budget_bounds(self):
        _register_cafe("Cheap", min_budget=50.0, max_budget=150.0)
        _register_cafe("Mid", min_budget=200.0, max_budget=400.0)
        _register_cafe("Posh", min_budget=800.0, max_budget=2000.0)

        assert _listed(max_budget=500) == ["Cheap", "Mid"]
        assert _listed(min_budget=150) == ["Mid", "Posh"]
        assert _listed(min_budget=100, max_budget=500) == ["Mid"]

    def test_amenities_match_any_of(self):
        _register_cafe("Laptop Cafe", amenities=["wifi"])
        _register_cafe("Garden Cafe", amenities=["outdoor-seating", "pet-friendly"])
        _register_cafe("Plain Cafe")

        assert _listed(amenities=["wifi", "pet-friendly"]) == ["Garden Cafe", "Laptop Cafe"]
        assert _listed(amenities=["live-music"]) == []

    def test_search_over_name_description_and_city(self):
        _register_cafe("Roastery", description="Small batch beans.")
        _register_cafe("Tea Room", description="Chai and a roast of the day.")
        _register_cafe("Corner Cup", city="Roastwood")
        _register_cafe("Unrelated", description="Juice bar.")

        assert _listed(search="roast") == ["Corner Cup", "Roastery", "Tea Room"]

    def test_filters_combine(self):
        _register_cafe("Kochi Wifi", amenities=["wifi"], max_budget=250.0)
        _register_cafe("Kochi Pricey Wifi", amenities=["wifi"], max_budget=900.0)
        _register_cafe("Munnar Wifi", city="Munnar", amenities=["wifi"], max_budget=250.0)

        assert _listed(city="kochi", amenities=["wifi"], max_budget=300) == ["Kochi Wifi"]

    def test_blank_filters_ignored(self):
        _register_cafe("Anywhere")
        assert _listed(city="  ", search="", amenities=[]) == ["Anywhere"]
