# s2sgeo

Location tracking and geospatial context for voice assistants.

`s2sgeo` smooths GPS fixes with a Kalman filter and places the result in
hierarchical S2 cells. When the smoothed position enters a new cell, a
pluggable context provider is asked what is around it. The `cycling` provider
reports road surface, traffic and gradient. The `dating` provider reports
nearby users and venues. The smoothed state and its context are written to a
named shared-memory ring buffer. On the reading side, changes in that buffer
become system-instruction prompts for a speech-to-speech session.

## Installation

```
pip install s2sgeo
```

Python 3.10 or later is required. The only runtime dependency is numpy.

To run the tests:

```
pip install "s2sgeo[test]"
pytest
```

## Running the daemon

```
s2sgeo-daemon
```

The daemon does the following:

1. Creates the shared memory segment. It replaces any stale segment of the same name.
2. Registers the `cycling` and `dating` providers and activates `cycling`.
3. Starts the location service in a background thread.
4. Injects a run of simulated fixes heading north from 37.7749, -122.4194.
5. Keeps publishing state until interrupted with Ctrl+C.
6. On exit, removes the segment.

Options:

| Option | Meaning |
| --- | --- |
| `--injections N` | number of test locations to inject (default 50) |
| `--interval SECONDS` | pause between injected locations (default 0.1) |
| `--run-for SECONDS` | stop this many seconds after injection, instead of waiting for an interrupt |
| `--shm-name NAME` | shared memory segment name (default `s2sgeo_shm`) |

If the segment cannot be created, the daemon exits with status 1.

## Modules

| Module | Contents |
| --- | --- |
| `s2sgeo.structs` | Dataclasses `LocationFix`, `WorldState`, `ContextFrame`, `RingBufferEntry`, `SharedMemoryHeader` |
| `s2sgeo.interfaces` | Abstract `ContextProvider`, `GeometryIndex` and `LocationFilter` |
| `s2sgeo.kalman` | `KalmanFilter`: a constant-velocity filter over latitude/longitude, with optional step counting (`enable_pdr`) |
| `s2sgeo.step_detector` | `StepDetector`: accelerometer peak detection with a 0.3 s minimum step interval |
| `s2sgeo.sensors` | `poll_gps` and `poll_imu`: simulated readings, optionally at a given timestamp |
| `s2sgeo.s2cell` | S2 cell ids: `cell_id_from_lat_lng`, `parent`, `cell_level`, `is_valid`, `edge_neighbors`, `cell_center`, `cell_vertices`, `cell_area` (steradians) |
| `s2sgeo.geometry` | `S2GeometryIndex`: cell lookup, neighbours, level-16 boundary crossing, cell centre and area in m², haversine `distance_meters` |
| `s2sgeo.world_state` | `WorldStateStore`, a lock-guarded holder of the current state, and `get_world_state()` |
| `s2sgeo.shared_memory` | `SharedMemoryManager`, `SharedHeaderView`, `SharedMemoryError` and `get_shared_memory_manager()` |
| `s2sgeo.ipc` | `write_state`, `update_location`, `signal_alive`, `read_latest_state`, `is_location_service_alive`, `active_plugin`, `accuracy_level` |
| `s2sgeo.plugins` | `PluginRegistry`, `UnknownProviderError` and `get_plugin_registry()` |
| `s2sgeo.cycling`, `s2sgeo.dating` | `CyclingContextProvider` and `DatingContextProvider` |
| `s2sgeo.dispatcher` | `CommandDispatcher` and `UnknownCommandError` |
| `s2sgeo.location_service` | `LocationService`: filter → cell → context → ring buffer, as a thread or one `step()` at a time |
| `s2sgeo.daemon` | `main()`, behind the `s2sgeo-daemon` command |
| `s2sgeo.context_injector` | `format_context_prompt` and `build_system_instruction` |
| `s2sgeo.websocket_manager` | `WebSocketManager` and `NotConnectedError` |
| `s2sgeo.s2s_client` | `S2SClient` |
| `s2sgeo.gemini` | `GeminiIntegration` and `hash_context` |

Functions in `s2sgeo.ipc`, `CommandDispatcher`, `LocationService` and
`GeminiIntegration` take an optional `SharedMemoryManager`. Without one, they
use the process-wide manager from `get_shared_memory_manager()`.

## Examples

### Smoothing fixes

```python
from s2sgeo.kalman import KalmanFilter
from s2sgeo.structs import LocationFix

kf = KalmanFilter()
kf.update(LocationFix(latitude=37.7749, longitude=-122.4194, timestamp_ms=1000))
state = kf.smoothed_state()
print(state.smoothed_lat, state.smoothed_lon, state.is_moving)
```

### Cells and distances

```python
from s2sgeo.geometry import S2GeometryIndex

index = S2GeometryIndex()
cell = index.lat_lon_to_cell(37.7749, -122.4194, 16)
print(index.cell_center(cell))         # (lat, lon) in degrees
print(index.neighbors(cell))           # up to four edge neighbours
print(index.crossed_boundary(37.7749, -122.4194, 37.7750, -122.4193))  # False

print(S2GeometryIndex.distance_meters(37.7749, -122.4194, 34.0522, -118.2437))
```

### Writing and reading the ring buffer

```python
from s2sgeo import ipc
from s2sgeo.shared_memory import SharedMemoryManager
from s2sgeo.structs import ContextFrame, WorldState

server = SharedMemoryManager("demo_shm")
server.initialize_server()
ipc.write_state(WorldState(smoothed_lat=37.7749, smoothed_lon=-122.4194),
                ContextFrame(road_name="Main St"), server)

client = SharedMemoryManager("demo_shm")
client.connect_client()
state, context = ipc.read_latest_state(client)
print(state.smoothed_lat, context.road_name)

client.cleanup()
server.cleanup()
```

`read_latest_state` returns `None` when the manager is not ready. The string
fields are truncated to the sizes the segment reserves for them.

### Choosing a provider by voice command

```python
from s2sgeo.cycling import CyclingContextProvider
from s2sgeo.dating import DatingContextProvider
from s2sgeo.dispatcher import CommandDispatcher
from s2sgeo.plugins import get_plugin_registry

registry = get_plugin_registry()
registry.register_provider("cycling", CyclingContextProvider)
registry.register_provider("dating", DatingContextProvider)

dispatcher = CommandDispatcher()
dispatcher.process_command("Let's go for a bike ride")
print(dispatcher.active_plugin())      # "cycling"
```

Keywords are checked in this order:

| Keywords | Provider activated | Accuracy level |
| --- | --- | --- |
| "cycling", "bike" | `cycling` | unchanged |
| "dating", "tinder" | `dating` | unchanged |
| "delivery" | `delivery` | unchanged |
| "running", "walking" | `cycling` | 1.0 |
| "driving", "car" | `cycling` | 0.5 |

The accuracy level is written to the shared header when the segment is ready.
A command that matches no keyword raises `UnknownCommandError`. A keyword whose
provider is not registered raises `UnknownProviderError`; no `delivery` provider
is bundled.

### Turning context into a prompt

```python
from s2sgeo.context_injector import format_context_prompt
from s2sgeo.cycling import CyclingContextProvider

provider = CyclingContextProvider()
print(format_context_prompt(provider.get_context(37.7749, -122.4194)))
```

### Following the ring buffer in a session

```python
from s2sgeo.gemini import GeminiIntegration

with GeminiIntegration() as session:
    session.start(api_key="placeholder")
    # Every 0.5 s, the latest context is read from the ring buffer. When its
    # road type or gradient has changed, a new system instruction is sent.
```

`check_for_update()` runs one such pass. It returns the prompt it sent, or
`None`.

## What this package does not do

- **No real sensors.** `poll_gps` and `poll_imu` return simulated readings. Real
  positions reach the service only through `LocationService.inject_location`.
- **No map lookups.** The context providers make no network requests. The
  cycling provider returns fixed road, traffic, gradient and hazard values,
  cached for 5 seconds per location. The dating provider returns a fixed venue
  and list of nearby people. `prefetch_context` returns the points it would
  fetch and fetches nothing.
- **No network sessions.** `S2SClient` and `WebSocketManager` open no sockets.
  They build the messages and keep them in `sent_messages`. `S2SClient.send_audio`
  answers its callback with one second of silence.
- **No command for the session side.** The only command is `s2sgeo-daemon`.
  `GeminiIntegration` is used from Python.