import json

from kumaclient.dockerhost import ConnectionTestResult, DockerHost, DockerHostConfig


def _local_host():
    return DockerHost(
        id=1,
        user_id=100,
        docker_daemon="unix:///var/run/docker.sock",
        docker_type="socket",
        name="Local Docker",
    )


def test_docker_host_id():
    assert DockerHost(id=42).id == 42


def test_docker_host_str():
    got = str(_local_host())
    assert "id: 1" in got
    assert 'dockerDaemon: "unix:///var/run/docker.sock"' in got
    assert 'name: "Local Docker"' in got


def test_docker_host_str_full():
    assert str(_local_host()) == (
        'id: 1, userId: 100, dockerDaemon: "unix:///var/run/docker.sock", '
        'dockerType: "socket", name: "Local Docker"'
    )


def test_docker_host_marshal_json():
    result = json.loads(json.dumps(_local_host().to_dict()))
    assert result["id"] == 1
    assert result["dockerDaemon"] == "unix:///var/run/docker.sock"


def test_docker_host_unmarshal_json():
    json_str = """{
        "id": 1,
        "userId": 100,
        "dockerDaemon": "unix:///var/run/docker.sock",
        "dockerType": "socket",
        "name": "Local Docker"
    }"""
    host = DockerHost.from_dict(json.loads(json_str))
    assert host.id == 1
    assert host.user_id == 100
    assert host.docker_daemon == "unix:///var/run/docker.sock"
    assert host.docker_type == "socket"
    assert host.name == "Local Docker"


def test_docker_host_round_trip():
    host = _local_host()
    assert DockerHost.from_dict(host.to_dict()) == host


def test_config_marshal_json():
    config = DockerHostConfig(
        id=1,
        name="Test Docker",
        docker_daemon="tcp://192.168.1.100:2375",
        docker_type="tcp",
    )
    result = json.loads(json.dumps(config.to_dict()))
    assert result["name"] == "Test Docker"
    assert result["dockerType"] == "tcp"
    assert result["id"] == 1


def test_config_omits_zero_id():
    config = DockerHostConfig(
        name="Remote Docker",
        docker_daemon="tcp://192.168.1.100:2375",
        docker_type="tcp",
    )
    assert "id" not in config.to_dict()


def test_test_result_string_version():
    json_str = '{"ok": true, "msg": "Connected Successfully.", "version": "20.10.17"}'
    result = ConnectionTestResult.from_dict(json.loads(json_str))
    assert result.ok is True
    assert result.version == "20.10.17"


def test_test_result_object_version():
    json_str = """{
        "ok": true,
        "msg": "Connected Successfully.",
        "version": {"Version": "20.10.17", "ApiVersion": "1.41"}
    }"""
    result = ConnectionTestResult.from_dict(json.loads(json_str))
    assert result.ok is True
    assert result.version == "20.10.17"


def test_test_result_missing_version():
    json_str = '{"ok": false, "msg": "Connection failed"}'
    result = ConnectionTestResult.from_dict(json.loads(json_str))
    assert result.ok is False
    assert result.version == ""
    assert result.msg == "Connection failed"