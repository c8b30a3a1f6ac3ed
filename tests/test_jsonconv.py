from dataclasses import dataclass

import pytest

from kumaclient.dockerhost import DockerHost, DockerHostConfig
from kumaclient.jsonconv import convert, to_json_object
from kumaclient.maintenance import Maintenance, new_manual_maintenance


@dataclass
class _Point:
    x: int
    y: int

    def to_dict(self):
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data):
        return cls(x=data["x"], y=data["y"])


def test_to_json_object_copies_mapping():
    source = {"a": [1, 2], "b": {"c": "d"}}
    result = to_json_object(source)
    assert result == source
    assert result is not source
    result["b"]["c"] = "changed"
    assert source["b"]["c"] == "d"


def test_to_json_object_uses_to_dict():
    assert to_json_object(_Point(3, 4)) == {"x": 3, "y": 4}


def test_to_json_object_nested_objects():
    result = to_json_object({"points": [_Point(1, 2)]})
    assert result == {"points": [{"x": 1, "y": 2}]}


def test_to_json_object_rejects_non_object():
    with pytest.raises(ValueError):
        to_json_object([1, 2, 3])


def test_to_json_object_rejects_unserializable():
    with pytest.raises(ValueError):
        to_json_object({"value": object()})


def test_to_json_object_rejects_nan():
    with pytest.raises(ValueError):
        to_json_object({"value": float("nan")})


def test_to_json_object_config_omits_zero_id():
    config = DockerHostConfig(
        name="Local Docker",
        docker_daemon="unix:///var/run/docker.sock",
        docker_type="socket",
    )
    result = to_json_object(config)
    assert "id" not in result
    assert result["name"] == "Local Docker"


def test_convert_from_dict():
    host = convert({"id": 7, "name": "Remote Docker"}, DockerHost)
    assert host.id == 7
    assert host.name == "Remote Docker"


def test_convert_from_object_round_trip():
    point = _Point(5, 6)
    assert convert(point, _Point) == point


def test_convert_maintenance_round_trip():
    original = new_manual_maintenance("Emergency Maintenance", "Manual window")
    assert convert(original, Maintenance) == original


def test_convert_requires_from_dict():
    with pytest.raises(TypeError):
        convert({"x": 1}, int)


def test_convert_wraps_bad_data():
    with pytest.raises(ValueError):
        convert({"x": 1}, _Point)