"""
Chunked cipher pipeline.

Text is cut into a fixed number of contiguous chunks, each chunk is
enciphered on its own worker thread, and the results are joined back
together in chunk order. Completion order of the workers never affects
the output.
"""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass
from typing import Callable

from mpags_cipher.models.schemas import CipherMode
from mpags_cipher.services.engines.base import CipherEngine

logger = logging.getLogger(__name__)

# Called with (chunk index, finished) each time a result is polled
ProgressCallback = Callable[[int, bool], None]


@dataclass(frozen=True)
class Chunk:
    """A contiguous slice of the input assigned to one worker."""

    index: int
    text: str


@dataclass(frozen=True)
class ChunkResult:
    """Transformed text for one chunk."""

    index: int
    text: str


def partition(text: str, worker_count: int) -> list[Chunk]:
    """
    Split text into worker_count contiguous chunks.

    Every chunk but the last has length len(text) // worker_count; the last
    one also takes the remainder. Empty text yields empty chunks.

    Args:
        text: Text to split
        worker_count: Number of chunks, at least 1

    Returns:
        Chunks in index order
    """
    if worker_count < 1:
        raise ValueError(f"worker_count must be at least 1, got {worker_count}")

    base = len(text) // worker_count
    last = base + len(text) % worker_count

    chunks = []
    for i in range(worker_count):
        start = base * i
        length = last if i == worker_count - 1 else base
        chunks.append(Chunk(index=i, text=text[start:start + length]))
    return chunks


def _transform(cipher: CipherEngine, chunk: Chunk, mode: CipherMode) -> ChunkResult:
    return ChunkResult(index=chunk.index, text=cipher.apply(chunk.text, mode))


class ChunkScheduler:
    """
    Runs a cipher over text split across a fixed set of worker threads.

    Each call to run() starts its own executor with one thread per chunk
    and discards it afterwards. The cipher instance is shared by all
    workers and must not be mutated by apply().
    """

    def __init__(
        self,
        worker_count: int = 4,
        poll_interval: float | None = 1.0,
        progress_callback: ProgressCallback | None = None,
    ):
        """
        Args:
            worker_count: Number of chunks and worker threads
            poll_interval: Seconds between progress checks while waiting
                on a chunk, or None to wait without polling
            progress_callback: Optional hook told about every poll
        """
        if worker_count < 1:
            raise ValueError(f"worker_count must be at least 1, got {worker_count}")
        self.worker_count = worker_count
        self.poll_interval = poll_interval
        self.progress_callback = progress_callback

    def run(self, text: str, cipher: CipherEngine, mode: CipherMode) -> str:
        """
        Transform text chunk by chunk and reassemble it in order.

        A worker's exception is re-raised here when its chunk is reached.
        Other workers are left to finish on their own.

        Args:
            text: Normalized input text
            cipher: Engine shared by every worker
            mode: Encrypt or decrypt

        Returns:
            Reassembled output text
        """
        chunks = partition(text, self.worker_count)

        executor = ThreadPoolExecutor(
            max_workers=self.worker_count, thread_name_prefix="CipherWorker"
        )
        try:
            futures = [executor.submit(_transform, cipher, chunk, mode) for chunk in chunks]
            logger.debug(
                "Dispatched %d chunks of %d characters to %s",
                len(chunks), len(text), cipher.name,
            )
            results = [self._collect(index, future) for index, future in enumerate(futures)]
        finally:
            # Siblings of a failed chunk are neither cancelled nor awaited
            executor.shutdown(wait=False)

        return "".join(result.text for result in results)

    def _collect(self, index: int, future: Future[ChunkResult]) -> ChunkResult:
        """Wait for one chunk, reporting progress on every poll."""
        if self.poll_interval is not None:
            while True:
                done, _ = wait([future], timeout=self.poll_interval)
                if done:
                    break
                logger.info("Worker %d still running...", index)
                self._report(index, False)

        result = future.result()
        logger.debug("Worker %d complete", index)
        self._report(index, True)
        return result

    def _report(self, index: int, finished: bool) -> None:
        if self.progress_callback is not None:
            self.progress_callback(index, finished)
