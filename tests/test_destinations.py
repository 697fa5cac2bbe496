from driver_eta.destinations import default_destinations, search
from driver_eta.models import Coordinate


def test_catalogue_contents():
    catalogue = default_destinations()
    assert len(catalogue) == 15
    assert len({d.id for d in catalogue}) == 15
    assert catalogue[0].coordinate == Coordinate(34.2702, -6.5802)
    assert catalogue[1].coordinate == Coordinate(34.261, -6.583)


def test_catalogue_is_a_fresh_copy():
    first = default_destinations()
    first[0].is_favorite = True
    assert not default_destinations()[0].is_favorite


def test_search_matches_name_and_address_case_insensitively():
    assert [d.id for d in search("GARE")] == ["3"]
    assert {d.id for d in search("mehdia")} == {"8", "15"}
    assert {d.id for d in search("avenue mohammed v")} == {"3", "10", "14"}


def test_empty_query_returns_everything():
    assert len(search("   ")) == 15


def test_search_custom_pool():
    pool = default_destinations()[:2]
    assert search("kénitra", pool) == pool
    assert search("nowhere", pool) == []
