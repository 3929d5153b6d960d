# cellview

Building blocks for terminal user interfaces. Widgets draw onto a cell-based
screen, which is a grid where each cell holds one character and a style.

## What is included

- `cellview.ansi`: `AnsiWriter` and `translate_ansi`. They turn ANSI escape
  codes into colour tags such as `[red::b]`. SGR codes become tags and
  `ESC [ n E` becomes `n` newlines. All other escape sequences are removed.
  `AnsiWriter` wraps any object that has a `write(str)` method and keeps its
  parser state between writes.
- `cellview.screen`:
  - `Style`, a frozen dataclass of foreground, background and attributes.
  - `AttrMask`, the text attributes.
  - `Align`, the horizontal alignment of text.
  - `Screen`, the abstract screen interface.
  - `MemoryScreen`, an in-memory screen. It receives events through
    `post_event` and shows its contents through `row_text`.
  - `text_width`, which counts the cells a string occupies and handles wide
    characters.
  - `print_text`, which prints clipped, aligned text into a row.
- `cellview.events`:
  - `KeyEvent`, `MouseEvent`, `ResizeEvent` and `ErrorEvent`.
  - The `Key`, `MouseAction` and `ButtonMask` enumerations.
- `cellview.box`:
  - `Box`, the base primitive. It handles the rectangle, border, title,
    padding, focus, and input and mouse capture.
  - `BorderSet` and the module-level `BORDERS` instance, which hold the border
    characters.
- `cellview.button`: `Button`. Enter or a left click calls its
  `selected_func`. Tab, Backtab and Escape call its `exit_func`.
- `cellview.checkbox`: `Checkbox`. Space, Enter or a left click on its first
  row toggles `checked` and calls `changed_func`. Tab, Backtab and Escape call
  `done_func` and `finished_func`.
- `cellview.application`: `Application`, which runs the event loop.
  - It polls the screen in a background thread and routes key events to the
    focused root primitive.
  - It turns raw mouse events into clicks, double clicks, drags and scrolls.
  - It redraws the screen and manages focus.
  - Ctrl-C stops it.
  - `queue_update` and `queue_update_draw` run code in the event loop from
    other threads.

## Installation

```
pip install cellview
```

## Example

```python
from cellview.application import Application
from cellview.button import Button
from cellview.screen import MemoryScreen

screen = MemoryScreen(40, 5)
app = Application()
button = Button("Quit")
button.selected_func = app.stop

app.set_screen(screen)
app.set_root(button, False)
app.force_draw()
print(screen.row_text(0))
```

To run the event loop, call `app.run()` in one thread. Feed it events from
another thread with `screen.post_event(...)`, for example
`KeyEvent(Key.ENTER)`. `run` returns once `stop` is called. If the screen
reported an `ErrorEvent`, `run` raises it instead.

## Converting ANSI output

```python
from cellview.ansi import translate_ansi

translate_ansi("\x1b[1;31mError\x1b[0m")
# '[red::b]Error[-:-:-]'
```

## What this package does not do

- There is no real terminal backend. `MemoryScreen` is the only `Screen`
  provided. To show anything on an actual terminal, you need your own
  `Screen` subclass.
- `Application.run` raises `RuntimeError` if no screen has been set.
- Colour tags such as `[red]` inside labels and titles are printed as plain
  text. They are not interpreted.
- The only widgets are `Box`, `Button` and `Checkbox`. There are no layout
  containers, lists, tables, input fields or forms.
- There is no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```