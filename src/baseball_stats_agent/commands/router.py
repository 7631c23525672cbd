from __future__ import annotations

from collections.abc import Callable

QUIT_WORDS = frozenset({"quit", "exit"})


class CommandRouter:
    """Recognises local commands. Keywords match case-insensitively."""

    def __init__(
        self,
        *,
        on_quit: Callable[[], None],
        on_clear: Callable[[], None],
        on_usage: Callable[[], None],
        on_model: Callable[[str], None],
        on_help: Callable[[], None],
    ) -> None:
        self._on_quit = on_quit
        self._on_clear = on_clear
        self._on_usage = on_usage
        self._on_model = on_model
        self._on_help = on_help

    def try_handle(self, user_input: str) -> bool:
        trimmed = user_input.strip()
        keyword, _, argument = trimmed.partition(" ")
        keyword = keyword.lower()

        if not argument:
            if keyword in QUIT_WORDS:
                self._on_quit()
                return True
            if keyword == "clear":
                self._on_clear()
                return True
            if keyword == "usage":
                self._on_usage()
                return True
            if keyword == "help":
                self._on_help()
                return True

        if keyword == "model":
            self._on_model(argument.strip().lower())
            return True

        return False
