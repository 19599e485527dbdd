# supbot

A toolkit for chat bot plugins: the types and runtime plugins are written
against, a set of ready-made plugins, a small SQLite-backed key-value
store, and tools to build, publish and consume a plugin registry.

## Installation

```
pip install .
```

For running the test suite:

```
pip install ".[test]"
pytest
```

## Version information

```
supbot-version
```

This prints the package version, the build date (`unknown` unless one was
recorded), the Python version and the operating system and architecture.
The same text is returned by `supbot.version.version_text()`.

## Writing a plugin

A plugin subclasses `supbot.sdk.types.Plugin` and implements `name`,
`topics`, `handle_message`, `get_help`, `get_required_env_vars` and
`version`. `handle_message` receives an `Input` (`message`, `sender` and
an `info` of type `MessageInfo` with `id`, `timestamp`, `push_name` and
`is_group`) and returns an `Output`. Replies are built with `success`,
errors with `error`, and help text with `new_help_output`.

```python
from supbot.sdk.types import Plugin, success, error, new_help_output


class GreeterPlugin(Plugin):
    def name(self):
        return "greeter"

    def topics(self):
        return ["greeter"]

    def handle_message(self, request):
        if not request.message:
            return error("Tell me who to greet")
        return success(f"Hello {request.message}!")

    def get_help(self):
        return new_help_output(
            "greeter", "Greets people", ".sup greeter <name>",
            [".sup greeter world"], "examples",
        )

    def get_required_env_vars(self):
        return []

    def version(self):
        return "0.1.0"
```

A topic of `"*"` is meant for plugins that receive every message.

## Running a plugin

`supbot.sdk.runtime.PluginRunner` wraps a plugin and exposes the entry
points a host calls: `handle_message`, `get_help`,
`get_required_env_vars`, `get_name`, `get_topics` and `get_version`, or
any of them by name through `call`. Each returns a `CallResult` of
`code` (0 on success, 1 on failure) and `output` bytes; `handle_message`
takes a JSON `Input` and answers with a JSON `Output`.

```python
from supbot.sdk.runtime import PluginRunner
from supbot.plugins.echo import EchoPlugin

runner = PluginRunner(EchoPlugin())
result = runner.call(
    "handle_message",
    b'{"message": "hi", "sender": "someone@example.com",'
    b' "info": {"push_name": "Ann"}}',
)
print(result.code, result.output)
```

Plugins that need the host's services (reading files, listing
directories, sending images, cache and persistent storage) receive a
`PluginContext` built on an implementation of the abstract `Host`.
Failures reported by the host raise `HostError`.
`PluginContext.storage()` returns a `Storage` with `get` and `set`.

## Bundled plugins

- `supbot.plugins.counter.CounterPlugin(context)`: per-sender named
  counters (`increment`/`inc`/`+`, `decrement`/`dec`/`-`, `reset`;
  anything else shows the value). Decrementing stops at 0.
- `supbot.plugins.echo.EchoPlugin()`: echoes messages; `reverse`,
  `upper`, `lower` and `info` commands.
- `supbot.plugins.random_number.RandomPlugin(rng=None)`: random number
  in `[min, max]`, with `min` defaulting to 0.
- `supbot.plugins.hello.HelloPlugin()`: a minimal greeting plugin.
- `supbot.plugins.eat_bcn.EatBcnPlugin(restaurant_data, rng=None)`:
  three distinct random restaurant suggestions. The data is a header line
  followed by `name#url#cuisine#rating#cost` lines.
- `supbot.plugins.ruleta.RuletaPlugin(context, rng=None)`: sends the
  sender a random image found recursively under a directory.
- `supbot.plugins.wildcard_logger.WildcardLoggerPlugin(stream=None)`:
  writes a line for every message (to standard output by default) and
  answers "hello bot" and "bot status".

## Key-value store

```python
from supbot.store import Store

with Store("bot.db") as store:
    counters = store.namespace("counter")
    counters.put(b"visits", b"1")
    print(counters.get(b"visits"))
```

Keys and values may be `bytes` or `str`; `get` raises `KeyError` for a
missing key. Namespaces share the database and prefix keys with `name:`.

## Plugin registry

Build an index from a directory laid out as
`plugins/<name>/<version>/<name>.wasm`, with an optional
`plugins/<name>/metadata.json`:

```python
from supbot.registry.builder import Builder

builder = Builder("registry")
index = builder.build_index()
builder.write_index(index, "public")
```

This writes `index.json`, `index.json.gz` and `index.json.gz.sha256`.
The latest version of each plugin is the one whose file was most recently
modified.

Consume a registry with `RegistryClient`:

```python
from supbot.registry.client import RegistryClient

client = RegistryClient("http://localhost:8080")
for info in client.list_plugins():
    print(info.name, info.version, info.installed)
client.download_plugin("echo", "latest", "plugins")
```

The index and every download are checked against their SHA-256 checksums;
failures raise `RegistryError`. `installed` reports whether
`~/.local/share/sup/plugins/<name>.wasm` exists.

## Other helpers

- `supbot.log`: a process-wide logger writing `key=value` lines to
  standard output (`debug`, `info`, `warn`, `error`, `set_level`,
  `disable`, `enable`).
- `supbot.botfs`: the data directory `~/.local/share/sup`, its
  `handlers` directory and per-handler directories.
- `supbot.media`: `mime_type` for a file path and `validate_image`,
  which checks that a file exists and has an image extension.

## What this package does not do

It does not connect to a chat service: there is no client, no account
registration, no command for sending messages, files or images, and no
status check. It also does not load or execute `.wasm` plugin files;
plugins run in-process as Python classes through `PluginRunner`, and the
`Host` that serves them has to be supplied by the caller.