# izumi

A terminal viewer for pipeline trace dumps. Each instruction of the trace is
drawn on two lines: its position and program counter, then its disassembly,
on the left, and its pipeline stages as a timeline on the right. Several
traces can be shown in stacked panels, and panels can scroll together.

The viewer draws with the standard `curses` module, so it needs a terminal
and a Python that ships `curses` (as on Linux and other POSIX systems).

## Installing

    pip install .

## Running

    izumi trace1.log trace2.log

Each path named on the command line gets its own panel; paths that are
regular files are loaded into it. If a trace holds a line that cannot be
read, the viewer stops, prints `Error: ...` and exits with status 1.

## Keys

Normal mode:

- `j` / Down: scroll down. A number typed first, as in `10j`, scrolls that
  many lines.
- `k` / Up: scroll up, also taking a number typed first.
- `n` / `N`: jump to the next or previous match of the last search.
- `:`: enter command mode.

Command mode: type a command and press Enter to run it, Backspace to delete
the last character, or Escape to leave without running it.

## Commands

| Command | Alias | Effect |
|---|---|---|
| `newpanel` | `n` | open an empty panel and focus it |
| `closepanel [id]` | `c` | close the focused panel, or panel `id` |
| `closeallpanels` | `ca` | close every panel |
| `open FILE` | `o` | load a trace into the focused panel, creating one if there is none |
| `panelcmd j` / `panelcmd k` | | move focus to the next or previous panel |
| `panelsync` / `paneldesync` | | scroll all panels together, or only the focused one |
| `findpc PATTERN` | | jump down to the first instruction, from the top line on, whose address PATTERN begins with |
| `findinst PATTERN` | | the same, for the instruction's mnemonic |
| `next` / `prev` | | repeat the panel's last search downwards or upwards |
| `set bar_offset N` | | column of the bar that separates text from stages (default 32) |
| `set stage_width N` | | width of one cycle column (default 3) |
| `set color ELEMENT FG BG [bold]` | | change a colour |
| `quit` | `q` | leave |

For `set color`, ELEMENT is one of `commands`, `box`, `text`, `status`, or
`stage1` to `stage6`. FG and BG are each one of `black`, `white`, `red`,
`green`, `yellow`, `blue`, `cyan` or `magenta`. Other `set` names are
accepted and ignored.

## Configuration

At start-up, the commands in `$HOME/.config/izumi/config` run, one per line,
before any file named on the command line is opened. Empty lines and lines
that start with `#` are skipped:

    # wider stage columns
    set stage_width 5
    set color stage1 white blue bold

## Trace format

Each line starts with a letter naming what it does; lines starting with any
other letter are ignored. Fields are separated by whitespace.

- `C n`: advance the current cycle by `n`.
- `I id sim_id thread_id`: create instruction `id`.
- `L id type addr text`: set the address and disassembly of instruction `id`.
- `S id stage_id name`: start stage `name` of instruction `id` at the current cycle.
- `E id stage_id name`: end that stage at the current cycle.
- `R id retire_id type`: retire instruction `id`; type `1` marks it flushed,
  drawn as an `X` after its last stage.

## Using the library

    from izumi.parser import parse_file
    from izumi.finder import find, FindDataKind, SearchDirection

    tables = parse_file("trace.log")
    position = find(tables, "add", FindDataKind.INST, SearchDirection.DOWN, 0)
    if position is not None:
        instruction = tables.get(position)
        print(instruction.mem_addr, [stage.name for stage in instruction.stages])

- `izumi.parser`: `parse_file(path)`, `parse_lines(lines)` and the
  line-by-line `TraceParser`; unreadable lines raise `ParseError`.
- `izumi.data_structs`: `InstructionTableArray` with `get`, `put`, `clear`
  and iteration over `(position, Instruction)` pairs; `Instruction` and `Stage`.
- `izumi.finder`: `find` and `matches`.
- `izumi.state`: `ApplicationData`, `Panel` and `Configuration`, the viewer's
  state without any drawing.
- `izumi.commands`: the command table `COMMANDS` and `run(app_data)`, which
  runs the line held in `app_data.command`.