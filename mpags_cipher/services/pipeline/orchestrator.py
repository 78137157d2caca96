"""
Run orchestrator - wires one command-line invocation end to end.

1. Parse the command line
2. Short-circuit on help or version
3. Read and normalize the input text
4. Build the cipher once
5. Transform the text through the chunk scheduler
6. Write the result
"""

import logging
import sys
from typing import Sequence, TextIO

from mpags_cipher import __version__
from mpags_cipher.cli.command_line import USAGE, process_command_line
from mpags_cipher.core.config import Settings, get_settings
from mpags_cipher.core.exceptions import ArgumentError, InputOutputError
from mpags_cipher.models.schemas import RunConfiguration
from mpags_cipher.services.engines.registry import EngineRegistry
from mpags_cipher.services.pipeline.scheduler import ChunkScheduler
from mpags_cipher.services.preprocessing.normalizer import TextNormalizer

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class CipherOrchestrator:
    """
    Turns raw command-line tokens into an exit status.

    Every user-facing failure (argument errors, a rejected key, a file
    that cannot be opened) is reported on the error stream as
    "[error] <category>: <detail>" and mapped to exit status 1.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
        stderr: TextIO | None = None,
    ):
        self.settings = settings or get_settings()
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr
        self.registry = EngineRegistry()
        self.normalizer = TextNormalizer()
        self.scheduler = ChunkScheduler(
            worker_count=self.settings.worker_count,
            poll_interval=self.settings.poll_interval_seconds,
        )

    def run(self, tokens: Sequence[str]) -> int:
        """
        Run the whole program for one set of tokens.

        Args:
            tokens: Full argv, program name included

        Returns:
            Process exit status
        """
        try:
            config = process_command_line(tokens)
        except ArgumentError as e:
            return self._fail(e.kind.value, e.message)

        if config.help_requested:
            print(USAGE, end="", file=self.stdout)
            return EXIT_SUCCESS

        if config.version_requested:
            print(__version__, file=self.stdout)
            return EXIT_SUCCESS

        logger.debug("Run configuration: %s", config)

        try:
            text = self._read_input(config)
        except InputOutputError as e:
            return self._fail(e.category, e.message)

        try:
            cipher = self.registry.construct(config.cipher_type, config.cipher_key)
        except ArgumentError as e:
            return self._fail(e.kind.value, e.message)

        output = self.scheduler.run(text, cipher, config.cipher_mode)

        try:
            self._write_output(config, output)
        except InputOutputError as e:
            return self._fail(e.category, e.message)

        return EXIT_SUCCESS

    def _read_input(self, config: RunConfiguration) -> str:
        """Read and normalize the input file, or stdin when none is set."""
        if not config.input_file:
            return self.normalizer.normalize_stream(self.stdin)

        try:
            with open(config.input_file, encoding="utf-8", errors="replace") as stream:
                return self.normalizer.normalize_stream(stream)
        except OSError as e:
            raise InputOutputError(config.input_file, "input", e.strerror) from e

    def _write_output(self, config: RunConfiguration, output: str) -> None:
        """Write output and a trailing newline to the output file, or stdout."""
        if not config.output_file:
            print(output, file=self.stdout)
            return

        try:
            with open(config.output_file, "w", encoding="utf-8") as stream:
                stream.write(output + "\n")
        except OSError as e:
            raise InputOutputError(config.output_file, "output", e.strerror) from e

    def _fail(self, category: str, detail: str) -> int:
        print(f"[error] {category}: {detail}", file=self.stderr)
        return EXIT_FAILURE
