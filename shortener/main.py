"""
Console Application Entry Point

This module wires the datastore, the service layer and an interactive
numbered command menu.

Design Decisions:
- Commands only prompt, call the service and print its Result
- Input and output streams are injectable so the menu can be driven
  from tests
- An unexpected error inside a command is logged and reported, and the
  menu keeps running
"""

import logging
import os
import sys
from typing import Callable, List, Optional, TextIO, Tuple

from shortener.core.logging_config import setup_logging
from shortener.core.setting import settings
from shortener.core.validators import EMPTY_INPUT, sanitize_input
from shortener.db.memory_store import InMemoryUrlDatastore
from shortener.services.url_service import URLShorteningService

logger = logging.getLogger(__name__)

ENTER_COMMAND = "Enter a command:"
INVALID_COMMAND = "Invalid command."


class CommandManager:
    """
    Prompts for a command number and runs the matching command.
    """

    def __init__(
        self,
        url_service: URLShorteningService,
        input_stream: Optional[TextIO] = None,
        output_stream: Optional[TextIO] = None,
    ):
        self.url_service = url_service
        self.input_stream = input_stream or sys.stdin
        self.output_stream = output_stream or sys.stdout

        self._commands: List[Tuple[Callable[[], bool], str]] = [
            (self.shorten_url, "Shorten URL"),
            (self.shorten_url_with_custom_code, "Shorten URL with custom code"),
            (self.expand_short_url, "Expand short URL"),
            (self.delete_short_url, "Delete short URL"),
            (self.delete_all_short_urls, "Delete all short URLs associated to the original URL"),
            (self.get_click_count, "Get the click count of a short URL"),
            (self.export_datastore, "Export the datastore to a json file"),
            (self.import_datastore, "Import the datastore from a json file"),
            (self.exit, "Exit"),
        ]
        self.commands_directive = self._build_commands_directive()

    def _build_commands_directive(self) -> str:
        lines = [ENTER_COMMAND]
        for i, (_, description) in enumerate(self._commands, start=1):
            lines.append(f"{i}: {description}")
        return "\n".join(lines)

    def _write(self, text: str = "") -> None:
        self.output_stream.write(text + "\n")
        self.output_stream.flush()

    def _read_line(self) -> Optional[str]:
        """Read one line; None at end of input."""
        line = self.input_stream.readline()
        if line == "":
            return None
        return line.rstrip("\r\n")

    def _prompt(self, directive: str) -> Optional[str]:
        self._write(directive)
        text = sanitize_input(self._read_line())
        if text is None:
            self._write(EMPTY_INPUT)
        return text

    def execute_command(self, choice: str) -> bool:
        """
        Run the command numbered `choice`.

        Returns:
            False when the menu should stop, True otherwise
        """
        choice = choice.strip()
        if not choice.isdigit() or not 1 <= int(choice) <= len(self._commands):
            self._write(INVALID_COMMAND)
            return True

        handler, description = self._commands[int(choice) - 1]
        try:
            return handler()
        except Exception as e:
            logger.error(f"Command '{description}' failed: {e}", exc_info=True)
            self._write(f"Something unexpected happened. {e}")
            self._write("Please try again.")
            return True

    def run(self) -> None:
        """Show the menu and execute commands until Exit or end of input."""
        logger.info("Console is starting")
        while True:
            self._write(self.commands_directive)
            line = self._read_line()
            if line is None:
                break
            if not self.execute_command(line):
                break
            self._write()
        logger.info("Console is stopping")

    def shorten_url(self) -> bool:
        long_url = self._prompt("Enter a URL to shorten:")
        if long_url is not None:
            self._report(self.url_service.shorten_url(long_url), "Shortened URL")
        return True

    def shorten_url_with_custom_code(self) -> bool:
        long_url = self._prompt("Enter a URL to shorten:")
        if long_url is None:
            return True
        code = self._prompt("Enter a custom code:")
        if code is not None:
            self._report(self.url_service.shorten_url(long_url, code), "Shortened URL")
        return True

    def expand_short_url(self) -> bool:
        short_url = self._prompt("Enter a short URL to retrieve the original URL:")
        if short_url is not None:
            self._report(self.url_service.get_original_url(short_url), "Expanded URL")
        return True

    def delete_short_url(self) -> bool:
        short_url = self._prompt("Enter a short URL to delete:")
        if short_url is not None:
            self._report(self.url_service.delete_short_url(short_url), "Short URL Deleted")
        return True

    def delete_all_short_urls(self) -> bool:
        long_url = self._prompt("Enter a long URL to delete all associated short URLs:")
        if long_url is not None:
            self._report(
                self.url_service.delete_all_short_urls_by_original_url(long_url),
                "All short URLs Deleted",
            )
        return True

    def get_click_count(self) -> bool:
        short_url = self._prompt(
            "Enter a short URL to retrieve the number of times it has been clicked:"
        )
        if short_url is not None:
            self._report(self.url_service.get_click_count(short_url), "Click count")
        return True

    def export_datastore(self) -> bool:
        path = self._prompt("Enter a file path to save the datastore as a json file:")
        if path is None:
            return True
        result = self.url_service.export_datastore(path)
        if result.is_success:
            self._write("Datastore exported successfully.")
        else:
            self._write(f"An error occurred while exporting the datastore: {result.error_message}")
        return True

    def import_datastore(self) -> bool:
        path = self._prompt("Enter a file path to load the datastore from a json file:")
        if path is None:
            return True
        result = self.url_service.import_datastore(path)
        if result.is_success:
            self._write("Datastore imported successfully.")
        else:
            self._write(f"An error occurred while importing the datastore: {result.error_message}")
        return True

    def exit(self) -> bool:
        self._write("Exiting...")
        return False

    def _report(self, result, label: str) -> None:
        if result.is_success:
            self._write(f"{label}: {result.value}")
        else:
            self._write(result.error_message)


def create_service() -> URLShorteningService:
    """
    Build the datastore and service, importing the start-up snapshot if
    AUTOLOAD_SNAPSHOT_PATH points at an existing file.
    """
    datastore = InMemoryUrlDatastore()
    service = URLShorteningService(datastore)

    path = settings.AUTOLOAD_SNAPSHOT_PATH
    if path and os.path.isfile(path):
        result = service.import_datastore(path)
        if result.is_success:
            logger.info(f"Loaded start-up snapshot from {path}")
        else:
            logger.warning(f"Could not load start-up snapshot {path}: {result.error_message}")
    return service


def main() -> int:
    setup_logging(level=settings.LOG_LEVEL, log_file=settings.LOG_FILE)
    manager = CommandManager(create_service())
    try:
        manager.run()
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
