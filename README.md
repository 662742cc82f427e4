# brpkit

Tools for working with Bevy projects from Python. The package discovers the
apps and examples in Cargo projects and workspaces, launches them detached
with their output captured in a log file, and interprets the format errors
that the Bevy Remote Protocol (BRP) reports.

Project discovery runs `cargo metadata`, so `cargo` must be on your `PATH`
for scanning, listing and launching.

## Field paths

`brpkit.path_parser` and `brpkit.field_mapper` map mutation paths that name a
colour or vector field onto the tuple indices that BRP expects:

```python
from brpkit.path_parser import parse_path_to_field_access, parse_generic_enum_field_access
from brpkit.field_mapper import map_field_to_tuple_index

access = parse_path_to_field_access(".Vec3.x")
map_field_to_tuple_index(access)                           # ".0.0"

parse_generic_enum_field_access(".LinearRgba.red")         # ".0.0"
parse_generic_enum_field_access(".SomeLabColor.a")         # ".0.1"
parse_generic_enum_field_access(".SomeEnum.custom_field")  # ".0.custom_field"
```

Simple paths such as `.x` give `None` from `parse_path_to_field_access`.

## Reading BRP error messages

`brpkit.detection.match_error_pattern(message)` checks an error message
against the known Bevy error shapes in priority order (enum variant access
errors, access errors, type mismatches, missing fields, unknown components,
f32 sequence lengths, expected types, math types that need arrays, paths) and
returns a small frozen dataclass such as `AccessError` or `MissingField`, or
`None`.

`analyze_schema_for_type(type_name, schema_data)` takes a registry schema
response, either an object keyed by type path or an array of schemas with
`typePath`, and returns a message saying whether the type has both the
`Serialize` and `Deserialize` reflect traits. Any other shape of response
raises `FormatDiscoveryError`.

`extract_crate_name` and `extract_path_from_error_context` pull the crate and
a field path out of type names and error messages. `TierManager` records the
steps of a multi-step discovery and `tier_info_to_debug_strings` renders them.

Field names, parameter names and network defaults (such as `DEFAULT_BRP_PORT`
and `BRP_PORT_ENV_VAR`) live in `brpkit.constants`.

## Finding and listing projects

```python
from pathlib import Path
from brpkit.collection_strategy import BevyAppsStrategy, BevyExamplesStrategy, BrpAppsStrategy
from brpkit.listing import list_items

search_paths = [Path("~/code").expanduser()]
print(list_items(search_paths, BevyAppsStrategy()))
```

`brpkit.scanning.iter_cargo_project_paths` looks at each search path and its
immediate subdirectories, skipping hidden directories and `target`. Members of
a workspace are reported under their workspace root. Each listed app or
example carries a `relative_path` that can be passed back as `path` to choose
between items of the same name.

- `BevyAppsStrategy` lists binaries of packages that depend on `bevy`, with
  the built state of their `debug` and `release` binaries.
- `BrpAppsStrategy` lists binaries of packages whose `bevy` dependency has the
  `bevy_remote` feature (or no explicit features) and whose `src` files import
  `RemotePlugin` or `BrpExtrasPlugin`.
- `BevyExamplesStrategy` lists examples of packages that depend on `bevy`, and
  of `bevy` itself.

`brpkit.cargo_detector.CargoDetector` answers the same questions for a single
project, and `brpkit.selection.find_required_app` and `find_required_example`
pick out exactly one item by name.

## Launching

```python
from brpkit.runner import launch_bevy_app, launch_bevy_example

launch_bevy_app("my_game", "debug", None, 15702, search_paths, False)
launch_bevy_example("breakout", "release", None, None, search_paths, True)
```

Apps are started from their built binary under `target/<profile>` of the
workspace; examples are started with `cargo run --example`. When a port is
given it is passed to the process in the `BRP_PORT` environment variable, and
`CARGO_MANIFEST_DIR` is set to the package directory, which is also the
working directory. Where the platform supports it the process is put in its
own process group. Its stdout and stderr go to a log file in the system
temporary directory (see `brpkit.logs`), and the returned response holds the
PID, the log file path and the workspace root. With `debug=True` the response
also carries `debug_info` lines with timings.

## Errors

All errors derive from `brpkit.errors.BrpKitError`. If a name matches several
projects, `PathDisambiguationError` lists the candidate paths; if nothing
matches, or an app's binary has not been built, `ConfigurationError` is
raised. Log file failures raise `LogOperationError` and failures to start a
process raise `ProcessManagementError`.

## What it does not do

brpkit does not talk to a running app: it has no BRP client, so it cannot
send requests, check whether an app answers on its port, ask an app to shut
down, or query a live registry schema (you pass the schema response to
`analyze_schema_for_type` yourself). It provides no server and no
command-line program; everything is used from Python.