from __future__ import annotations

from collections.abc import Callable

from ..logging.init import get_logger, log_alert
from ..models.storage import PromptButton, PromptResponse

"""Terminal implementations of the prompt, alert and link display services.

Console prompt keys: Enter confirms, Ctrl-C cancels, Ctrl-D (end of input)
closes the prompt.
"""


class ConsolePrompt:
    def __init__(self, read_line: Callable[[str], str] | None = None) -> None:
        self._read_line = read_line if read_line is not None else input

    def prompt_text(self, title: str, placeholder: str) -> PromptResponse:
        print(title)
        try:
            text = self._read_line(f"{placeholder}: ")
        except KeyboardInterrupt:
            print()
            return PromptResponse(PromptButton.CANCEL)
        except EOFError:
            print()
            return PromptResponse(PromptButton.CLOSE)
        return PromptResponse(PromptButton.OK, text)


class PresetPrompt:
    """Answers every prompt with a fixed text, for non-interactive runs."""

    def __init__(self, text: str) -> None:
        self.text = text

    def prompt_text(self, title: str, placeholder: str) -> PromptResponse:
        return PromptResponse(PromptButton.OK, self.text)


class ConsoleUI:
    def alert(self, message: str) -> None:
        log_alert(message)

    def show_link(self, url: str) -> None:
        get_logger().info(f"document: {url}")
