# chainkeeper

Core pieces of a toolchain manager, usable as a library.

## Modules

- `chainkeeper.settings`: the `Settings` dataclass (metadata version, default
  host triple, default toolchain and per-directory overrides) with
  `parse`/`stringify` for TOML text, `from_toml`/`into_toml` for decoded
  tables, and `add_override`, `remove_override` and `dir_override`. Override
  keys are the resolved real path when the directory exists. Only metadata
  versions `"2"` and `"12"` are accepted; others raise
  `UnknownMetadataVersionError`. `SettingsFile` reads the file once and caches
  it: `read()` returns the settings (writing a default file if none exists)
  and `edit()` is a context manager that saves the settings when the block
  finishes without an error.
- `chainkeeper.notifications`: `Notification(kind, *args)` built from a
  `NotificationKind`; `level()` gives its `NotificationLevel` and `str()` its
  message. The `INSTALL`, `UTILS` and `TEMP` kinds wrap another notification
  object and delegate to it.
- `chainkeeper.errors`: the `ChainkeeperError` hierarchy, for example
  `ToolchainNotInstalledError`, `UnknownMetadataVersionError`,
  `ParsingSettingsError` and `BinaryNotFoundError`, whose message includes the
  hint from `install_msg`.
- `chainkeeper.tools`: the `TOOLS` and `DUP_TOOLS` name lists, and
  `component_for_bin`, which tells which component provides a given binary.
- `chainkeeper.command`: the `Command` dataclass (program, arguments,
  environment overrides) and `run_command_for_dir`, which appends arguments
  and starts the command. On POSIX it replaces the current process; on
  Windows it waits and returns the exit code. A failure to start raises
  `RunningCommandError`.
- `chainkeeper.env_var`: `prepend_path` and `append_path` build a path-list
  variable from the current environment for a `Command`; `inc` sets a
  variable to one more than its current integer value (0 if unset or not a
  number).
- `chainkeeper.term2`: `AutomationFriendlyTerminal(stream, term_name)`, also
  obtained from `stdout()` or `stderr()` (which use `TERM`). Colour,
  attribute, reset and cursor-up controls are dropped when the stream is not a
  TTY, and features the terminal type lacks are ignored rather than raised.
  Bold falls back to a bright white foreground.
- `chainkeeper.diskio`: executors for bulk directory creation and file
  writes.
  - `diskio.core`: `Item.make_dir` and `Item.write_file` describe one
    operation; after it runs, `item.error` holds any `OSError` and `item.ok`
    tells whether it succeeded. `Executor` is the base class; `perform`,
    `write_file` and `create_dir` do the work in the calling thread.
  - `diskio.immediate`: `ImmediateUnpacker` performs each item at once.
  - `diskio.threaded`: `Threaded` runs items on a thread pool, makes new work
    wait while five or more items are queued, and reports progress through an
    optional handler called with a `TrackerEvent` and a value. `close()` (or
    leaving a `with` block) finishes pending work and stops the threads.
  - `diskio.factory`: `get_executor` reads `CHAINKEEPER_IO_THREADS`:
    `disabled` selects `ImmediateUnpacker`, a number sets the thread count of
    `Threaded`, and anything else or nothing uses one thread per CPU.

## Installing

```
pip install .
```

## Example

```python
from pathlib import Path

from chainkeeper.settings import SettingsFile

settings_file = SettingsFile(Path("settings.toml"))
with settings_file.edit() as settings:
    settings.default_toolchain = "stable"

print(settings_file.read().default_toolchain)
```

Writing files through an executor:

```python
from pathlib import Path

from chainkeeper.diskio.core import Item
from chainkeeper.diskio.factory import get_executor

with get_executor(None) as executor:
    for done in executor.execute(Item.make_dir(Path("out"), 0o755)):
        print(done.full_path, done.ok)
    for done in executor.execute(Item.write_file(Path("out/hello.txt"), b"hi", 0o644)):
        print(done.full_path, done.ok)
    for done in executor.join():
        print(done.full_path, done.ok)
```

The iterator returned by `execute` must be consumed for the item to be
accepted.

## What it does not do

There is no command-line program. The package does not download, install,
update or remove toolchains, does not resolve toolchain names or channels, and
does not read manifests or component lists; it provides the settings storage,
messages, errors, process launching, terminal output and disk IO pieces that
such a program would be built on.

## Running the tests

```
pip install .[test]
pytest
```