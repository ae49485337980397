"""CLI tests over the offline providers."""

import json

import pytest

from routecast import cli
from routecast.adapters.geocode import mock as mock_geocode
from routecast.adapters.route import mock as mock_route
from routecast.adapters.weather import mock as mock_weather
from routecast.domain.models import Coordinate
from routecast.persistence.weight_store import InMemoryWeightStore
from routecast.services.route_service import RouteService


@pytest.fixture
def service():
    return RouteService(mock_route, mock_weather, mock_geocode, InMemoryWeightStore())


def test_parse_coordinate():
    assert cli.parse_coordinate("-20.17, 28.63") == Coordinate(lat=-20.17, lon=28.63)
    assert cli.parse_coordinate("NUST University") is None


def test_route_by_place_names(service, capsys):
    code = cli.main(
        ["route", "--from", "NUST University", "--to", "Bulawayo City Hall", "--departure", "15"],
        service=service,
    )
    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("BEST")
    assert "+15m" in out


def test_route_json_output(service, capsys):
    code = cli.main(["route", "--from=-20.1744,28.6336", "--to=-20.1553,28.5836", "--json"], service=service)
    data = json.loads(capsys.readouterr().out)
    assert code == 0
    assert data["routes"]
    assert data["departure_minutes"] == 0


def test_southern_coordinates_parse_as_values():
    args = cli.build_parser().parse_args(["route", "--from=-20.1744,28.6336", "--to=-20.1553,28.5836"])
    assert args.origin == "-20.1744,28.6336"
    assert cli.parse_coordinate(args.destination) == Coordinate(lat=-20.1553, lon=28.5836)


def test_unknown_place(service, capsys):
    code = cli.main(["route", "--from", "Atlantis", "--to", "Bulawayo City Hall"], service=service)
    assert code == 2
    assert "Atlantis" in capsys.readouterr().err


def test_negative_departure_rejected(service):
    assert cli.main(["route", "--from", "NUST", "--to", "City Hall", "--departure", "-3"], service=service) == 2


def test_train(service, capsys):
    code = cli.main(["train", "via Cecil Ave", "10", "15"], service=service)
    assert code == 0
    assert "multiplier=1.100" in capsys.readouterr().out
