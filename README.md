# kumaclient

Asynchronous building blocks for working with an Uptime Kuma server:

- `kumaclient.socketio` – a small Socket.IO v5 client over the Engine.IO v4
  WebSocket transport, with event handlers and acknowledgement callbacks.
- `kumaclient.dbsetup` – the first-run step that configures SQLite on a
  server still asking for a database, then waits for it to restart.
- `kumaclient.maintenance` – maintenance window models and helpers for every
  scheduling strategy.
- `kumaclient.dockerhost` – Docker host records, configurations and
  connection test results.
- `kumaclient.jsonconv` – conversion between these models and plain JSON
  structures.
- `kumaclient.errors` – the exception types.

Python 3.10 or later is required. The package depends on `websockets` and
`httpx`.

## Installation

```
pip install kumaclient
```

## Socket.IO transport

`SocketIOClient(url, open_timeout=10.0)` accepts an `http`, `https`, `ws` or
`wss` URL and connects to `<path>/socket.io/` on the default namespace.
Handlers registered with `on(event, handler)` receive the event's arguments;
`"connect"` and `"disconnect"` handlers receive none. `on_any(handler)` is
called with the event name and the list of arguments for every event.
Handlers may be plain functions or coroutine functions; exceptions they raise
are logged, not propagated.

```python
import asyncio

from kumaclient.socketio import SocketIOClient


async def main():
    client = SocketIOClient("http://localhost:3001")
    connected = asyncio.Event()
    client.on("connect", connected.set)
    client.on("monitorList", lambda monitors: print(len(monitors), "monitors"))

    await client.connect()
    await connected.wait()

    answered = asyncio.Event()

    def on_ack(response):
        print(response)
        answered.set()

    await client.emit("getMonitorList", ack=on_ack)
    await answered.wait()
    await client.close()


asyncio.run(main())
```

`connect()` performs the Engine.IO handshake (its data is kept in
`session`) and returns once the namespace has been requested; the
`"connect"` event follows when the server accepts. `emit(event, *args,
ack=None)` sends an event; values with a `to_dict` method, such as the models
below, are serialized through it. The client answers server pings itself.
`connected` tells whether the transport is open. Transport and protocol
failures raise `SocketIOError`.

`Packet` and `PacketType` expose the packet encoding:
`Packet(PacketType.EVENT, ["hello", 1], 7).encode()` gives
`'27["hello",1]'`, and `Packet.decode` parses that form back. Binary packets
are recognised but their attachments are not handled.

## First-run database setup

```python
from kumaclient.dbsetup import setup_database

performed = await setup_database("ws://localhost:3001")
```

`setup_database(base_url, http_client=None, restart_timeout=30.0,
poll_interval=0.1)` turns a `ws://`/`wss://` URL into its HTTP form
(`http_url` does this on its own), reads `/api/entry-page`, and if the server
reports `setup-database`, posts an SQLite configuration to
`/setup-database`. It then polls the entry page until the server has left
that stage. It returns `True` if setup was performed and `False` if none was
needed. Connection errors on the first check are raised unchanged, so the
caller may retry; other failures, including the restart timeout, raise
`KumaError`. An existing `httpx.AsyncClient` may be passed in.

## Maintenance windows

```python
from datetime import datetime, timedelta, timezone

from kumaclient.maintenance import (
    TimeOfDay,
    new_cron_maintenance,
    new_manual_maintenance,
    new_recurring_day_of_month_maintenance,
    new_recurring_interval_maintenance,
    new_recurring_weekday_maintenance,
    new_single_maintenance,
)

start = datetime.now(timezone.utc) + timedelta(hours=1)
upgrade = new_single_maintenance(
    "Server Upgrade", "Planned server upgrade", start, start + timedelta(hours=2), "UTC"
)

backup = new_recurring_weekday_maintenance(
    "Weekly Backup",
    "Weekly database backup",
    [1, 3],  # Monday and Wednesday
    [TimeOfDay(hours=2), TimeOfDay(hours=4)],
    "UTC",
)

cleanup = new_recurring_interval_maintenance(
    "Periodic Cleanup", "Every 3 days", 3, [TimeOfDay(hours=3), TimeOfDay(hours=4)], "UTC"
)
month_end = new_recurring_day_of_month_maintenance(
    "End of Month", "Last days of the month", ["lastDay1", "lastDay2"],
    [TimeOfDay(hours=23), TimeOfDay(hours=23, minutes=59, seconds=59)], "UTC",
)
nightly = new_cron_maintenance("Daily Backup", "Daily automated backup", "0 2 * * *", 30, "UTC")
emergency = new_manual_maintenance("Emergency Maintenance", "Manual window")
```

Every helper returns an active `Maintenance` with its `Strategy` set.
Weekdays run from 1 (Monday) to 7 (Sunday); days of the month are numbers
1–31 or the strings `"lastDay1"` to `"lastDay4"`. Recurring, cron and manual
windows carry `date_range=[None, None]`.

`Maintenance.to_dict()` produces the server's JSON field names
(`intervalDay`, `dateRange`, `timezoneOption`, …), leaving out optional fields
that are empty or zero, and writes times in RFC 3339 form.
`Maintenance.from_dict()` reads them back; an unknown strategy is kept as a
plain string. `TimeOfDay` and `Timeslot` have the same pair of methods.

## Docker hosts

```python
from kumaclient.dockerhost import ConnectionTestResult, DockerHost, DockerHostConfig

config = DockerHostConfig(
    name="Local Docker",
    docker_daemon="unix:///var/run/docker.sock",
    docker_type="socket",
)
config.to_dict()  # no "id" key while id is 0

host = DockerHost.from_dict({"id": 1, "userId": 100, "name": "Local Docker",
                             "dockerDaemon": "unix:///var/run/docker.sock",
                             "dockerType": "socket"})
print(host)
# id: 1, userId: 100, dockerDaemon: "unix:///var/run/docker.sock", dockerType: "socket", name: "Local Docker"

result = ConnectionTestResult.from_dict(
    {"ok": True, "msg": "Connected Successfully.", "version": {"Version": "20.10.17"}}
)
result.version  # "20.10.17"
```

`ConnectionTestResult.from_dict` accepts the version either as a string or as
an object with a `Version` field.

## JSON conversion

`to_json_object(value)` returns a fresh dict for any value that serializes to
a JSON object (models go through their `to_dict`), and `convert(data,
target)` builds an instance of a class with `from_dict` from such data. Both
raise `ValueError` when the data does not fit.

## Errors

`kumaclient.errors` defines `KumaError`, its subclass `NotFoundError` (also a
`LookupError`) and `CommandError`, which carries the `command` and the
server's `message`. `setup_database` raises `KumaError`; the Socket.IO
transport raises its own `SocketIOError`.

## What this package does not do

There is no ready-made logged-in client here: nothing logs in to the server,
keeps a cache of the lists it pushes, or offers calls to create, update,
pause or delete monitors, maintenance windows or Docker hosts. Those steps
have to be built on top of `SocketIOClient` and the models above. The
package has no command-line tool.

## Running the tests

```
pip install "kumaclient[test]"
pytest
```