import pytest

from easyseas.casino.ports import (
    is_mexican_port,
    is_nearshore_us_port,
    is_sea_day_name,
    is_us_port,
    is_us_restricted_port,
    is_us_territory,
    port_kind,
)


@pytest.mark.parametrize("port", ["Miami", "Port Canaveral, FL", "Galveston, Texas USA", "Key West"])
def test_us_ports(port):
    assert is_us_port(port)
    assert is_us_restricted_port(port)


@pytest.mark.parametrize("port", ["San Juan, Puerto Rico", "St. Thomas", "Charlotte Amalie, St. Thomas"])
def test_us_territories_are_restricted(port):
    assert is_us_territory(port)
    assert is_us_restricted_port(port)


def test_catalina_is_not_restricted():
    assert is_nearshore_us_port("Catalina Island")
    assert not is_us_restricted_port("Catalina Island")
    assert port_kind("Avalon, Catalina Island") == "Nearshore US port"


@pytest.mark.parametrize("port", ["Cozumel", "Ensenada, Mexico", "Cabo San Lucas"])
def test_mexican_ports(port):
    assert is_mexican_port(port)
    assert not is_us_restricted_port(port)
    assert port_kind(port) == "Mexican port"


@pytest.mark.parametrize("port", ["Nassau, Bahamas", "CocoCay", "Barcelona"])
def test_foreign_ports(port):
    assert not is_us_restricted_port(port)
    assert port_kind(port) == "Foreign port"


@pytest.mark.parametrize("port,expected", [
    ("At Sea", True),
    ("Cruising", True),
    ("Sea Day", True),
    ("Cozumel", False),
    (None, False),
])
def test_sea_day_names(port, expected):
    assert is_sea_day_name(port) is expected


def test_empty_port_is_nothing():
    assert not is_us_port("")
    assert not is_us_territory(None)
