"""eep CLI entry point.

Allows running via `python -m eep` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .version import get_version_string

logger = logging.getLogger(__name__)

USAGE = "usage: eep [--version] [--keytest] [--textual] [--log] [filename]"


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def run_keyboard_test() -> None:
    """Echo parsed input events until ESC is pressed.

    Uses the editor's own TerminalInterface and KeyboardHandler, so what is
    printed is exactly what the editor would receive.
    """
    from .keyboard import KeyboardHandler, KeyType, MouseEvent
    from .terminal import TerminalInterface

    print("Keyboard test mode: press keys or scroll to see parsed events.")
    print("Quit with ESC.")

    with TerminalInterface() as term:
        kb = KeyboardHandler(term)
        while True:
            ev = kb.get_event(timeout=None)
            if ev is None:
                continue
            if isinstance(ev, MouseEvent):
                print(f"mouse scroll={ev.direction.value} raw='{_escape_bytes(ev.raw)}'\r")
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                print("Exiting keyboard test.\r")
                break
            parts = [f"type={ev.key_type.value}", f"value={_escape_bytes(ev.value)}",
                     f"raw='{_escape_bytes(ev.raw)}'"]
            flags = [name for name, on in (('alt', ev.is_alt), ('ctrl', ev.is_ctrl),
                                           ('seq', ev.is_sequence)) if on]
            if flags:
                parts.append(f"flags={'+'.join(flags)}")
            print(' '.join(parts) + '\r')


def parse_args(args: list[str]) -> tuple[set[str], Optional[str]]:
    """Split arguments into flags and the optional filename.

    Raises:
        ValueError: on an unknown flag or a second filename.
    """
    flags: set[str] = set()
    filename: Optional[str] = None
    known = {'--version', '-V', '--keytest', '--keyboard-test', '--textual', '--log', '--help', '-h'}
    for arg in args:
        if arg.startswith('-') and arg != '-':
            if arg not in known:
                raise ValueError(f"unknown option {arg}")
            flags.add(arg)
        elif filename is None:
            filename = arg
        else:
            raise ValueError(f"unexpected argument {arg}")
    return flags, filename


def main() -> None:
    try:
        flags, filename = parse_args(sys.argv[1:])
    except ValueError as e:
        print(f"eep: {e}\n{USAGE}", file=sys.stderr)
        sys.exit(2)

    if flags & {'--help', '-h'}:
        print(USAGE)
        return
    if flags & {'--version', '-V'}:
        print(get_version_string())
        return

    from .logging_config import configure_logging
    log_path = configure_logging(enabled='--log' in flags)

    if flags & {'--keytest', '--keyboard-test'}:
        run_keyboard_test()
        return

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    from .settings import SettingsStore

    editor = Editor(settings=SettingsStore().load())
    if filename:
        try:
            editor.load_file(filename)
        except OSError as e:
            logger.error(f"Failed to open {filename}: {e}")
            print(f"Failed to open {filename}: {e.strerror or e}", file=sys.stderr)
            sys.exit(1)

    if '--textual' in flags:
        from .textual_app import run_textual
        run_textual(editor)
    else:
        editor.run()

    if log_path is not None:
        print(f"Log written to {log_path}")


if __name__ == "__main__":  # pragma: no cover
    main()
