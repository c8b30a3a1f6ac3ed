"""Docker host records, configurations and connection test results."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any


def _quote(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


@dataclass
class DockerHost:
    """A Docker daemon known to the server."""

    id: int = 0
    user_id: int = 0
    docker_daemon: str = ""
    docker_type: str = ""
    name: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DockerHost:
        return cls(
            id=int(data.get("id") or 0),
            user_id=int(data.get("userId") or 0),
            docker_daemon=str(data.get("dockerDaemon") or ""),
            docker_type=str(data.get("dockerType") or ""),
            name=str(data.get("name") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "userId": self.user_id,
            "dockerDaemon": self.docker_daemon,
            "dockerType": self.docker_type,
            "name": self.name,
        }

    def __str__(self) -> str:
        return ", ".join(
            f"{key}: {_quote(value) if isinstance(value, str) else value}"
            for key, value in self.to_dict().items()
        )


@dataclass
class DockerHostConfig:
    """Settings for creating or updating a Docker host; ``id`` 0 means new."""

    name: str = ""
    docker_daemon: str = ""
    docker_type: str = ""
    id: int = 0

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.id:
            result["id"] = self.id
        result["name"] = self.name
        result["dockerDaemon"] = self.docker_daemon
        result["dockerType"] = self.docker_type
        return result


@dataclass
class ConnectionTestResult:
    """Outcome of testing a Docker host connection."""

    ok: bool = False
    msg: str = ""
    version: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ConnectionTestResult:
        raw = data.get("version")
        version = ""
        if isinstance(raw, str):
            version = raw
        elif isinstance(raw, dict) and isinstance(raw.get("Version"), str):
            version = raw["Version"]
        return cls(
            ok=bool(data.get("ok", False)),
            msg=str(data.get("msg") or ""),
            version=version,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"ok": self.ok, "msg": self.msg, "version": self.version}