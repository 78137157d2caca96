"""Tests for the chunked cipher pipeline."""

import itertools
import threading

import pytest

from mpags_cipher.models.schemas import CipherMode, CipherType
from mpags_cipher.services.engines.base import CipherEngine
from mpags_cipher.services.engines.registry import construct
from mpags_cipher.services.pipeline.scheduler import Chunk, ChunkScheduler, partition

WAIT_SECONDS = 5.0


class RecordingEngine(CipherEngine):
    """
    Lowercases text and records the order chunks finish in.

    A chunk whose text appears in `gates` blocks until that gate is set.
    """

    name = "Recording engine"
    cipher_type = CipherType.CAESAR

    def __init__(self, gates=None, failing=None):
        super().__init__("")
        self.gates = gates or {}
        self.failing = failing
        self.finished: list[str] = []
        self._lock = threading.Lock()

    def encrypt(self, plaintext):
        gate = self.gates.get(plaintext)
        if gate is not None:
            assert gate.wait(WAIT_SECONDS)
        if plaintext == self.failing:
            raise RuntimeError(f"cannot transform {plaintext}")
        with self._lock:
            self.finished.append(plaintext)
        return plaintext.lower()

    def decrypt(self, ciphertext):
        return ciphertext.upper()


class TestPartition:
    """Chunk boundaries."""

    def test_remainder_goes_to_last_chunk(self):
        chunks = partition("ABCDEFGHIJ", 4)

        assert [len(c.text) for c in chunks] == [2, 2, 2, 4]
        assert [c.text for c in chunks] == ["AB", "CD", "EF", "GHIJ"]
        assert [c.index for c in chunks] == [0, 1, 2, 3]

    def test_exact_division(self):
        assert [c.text for c in partition("ABCDEFGH", 4)] == ["AB", "CD", "EF", "GH"]

    def test_empty_text(self):
        assert partition("", 4) == [Chunk(0, ""), Chunk(1, ""), Chunk(2, ""), Chunk(3, "")]

    def test_shorter_than_worker_count(self):
        assert [c.text for c in partition("ABC", 4)] == ["", "", "", "ABC"]

    def test_single_worker(self):
        assert partition("ABCDE", 1) == [Chunk(0, "ABCDE")]

    @pytest.mark.parametrize("length", [0, 1, 3, 4, 7, 10, 101])
    @pytest.mark.parametrize("workers", [1, 2, 3, 4, 8])
    def test_chunks_are_contiguous(self, length, workers):
        text = "".join(chr(ord("A") + i % 26) for i in range(length))
        chunks = partition(text, workers)

        assert len(chunks) == workers
        assert "".join(c.text for c in chunks) == text

    def test_zero_workers_rejected(self):
        with pytest.raises(ValueError):
            partition("ABC", 0)


class TestChunkScheduler:
    """Dispatch, ordering and failure handling."""

    @pytest.fixture
    def scheduler(self):
        return ChunkScheduler(worker_count=4, poll_interval=0.01)

    def test_reassembles_in_index_order(self, scheduler):
        engine = RecordingEngine()
        assert scheduler.run("ABCDEFGHIJ", engine, CipherMode.ENCRYPT) == "abcdefghij"

    def test_mode_is_passed_to_workers(self, scheduler):
        engine = RecordingEngine()
        assert scheduler.run("abcdefghij", engine, CipherMode.DECRYPT) == "ABCDEFGHIJ"

    def test_empty_text(self, scheduler):
        assert scheduler.run("", RecordingEngine(), CipherMode.ENCRYPT) == ""

    def test_reverse_completion_order(self, scheduler):
        """Each chunk waits for the one after it, so the last finishes first."""
        gates = {text: threading.Event() for text in ("AA", "BB", "CC", "DD")}
        order = ["AA", "BB", "CC", "DD"]

        class ChainedEngine(RecordingEngine):
            def encrypt(self, plaintext):
                result = super().encrypt(plaintext)
                position = order.index(plaintext)
                if position > 0:
                    gates[order[position - 1]].set()
                return result

        engine = ChainedEngine(gates={text: gates[text] for text in order[:-1]})

        output = scheduler.run("AABBCCDD", engine, CipherMode.ENCRYPT)

        assert engine.finished == ["DD", "CC", "BB", "AA"]
        assert output == "aabbccdd"

    def test_output_independent_of_completion_order(self):
        """Every permutation of finishing order gives the same text."""
        outputs = set()
        for permutation in itertools.permutations(["AAB", "BBC", "CCD", "DDEE"]):
            gates = {text: threading.Event() for text in permutation}

            class OrderedEngine(RecordingEngine):
                def encrypt(self, plaintext, _perm=permutation, _gates=gates):
                    result = super().encrypt(plaintext)
                    position = _perm.index(plaintext)
                    if position + 1 < len(_perm):
                        _gates[_perm[position + 1]].set()
                    return result

            gates[permutation[0]].set()
            engine = OrderedEngine(gates=gates)
            scheduler = ChunkScheduler(worker_count=4, poll_interval=None)

            outputs.add(scheduler.run("AABBBCCCDDDEE", engine, CipherMode.ENCRYPT))
            assert engine.finished == list(permutation)

        assert outputs == {"aabbbcccdddee"}

    def test_worker_failure_propagates(self, scheduler):
        engine = RecordingEngine(failing="CC")

        with pytest.raises(RuntimeError, match="cannot transform CC"):
            scheduler.run("AABBCCDD", engine, CipherMode.ENCRYPT)

    def test_failure_does_not_cancel_siblings(self, scheduler):
        release = threading.Event()
        done = threading.Event()

        class SlowLastEngine(RecordingEngine):
            def encrypt(self, plaintext):
                result = super().encrypt(plaintext)
                if plaintext == "DD":
                    done.set()
                return result

        engine = SlowLastEngine(gates={"DD": release}, failing="AA")

        with pytest.raises(RuntimeError):
            scheduler.run("AABBCCDD", engine, CipherMode.ENCRYPT)

        # The slow worker is still running and finishes once released
        assert not done.is_set()
        release.set()
        assert done.wait(WAIT_SECONDS)
        assert "DD" in engine.finished

    def test_progress_reported_while_waiting(self):
        calls = []
        unblock = threading.Event()

        def progress(index, finished):
            calls.append((index, finished))
            if not finished:
                unblock.set()

        scheduler = ChunkScheduler(worker_count=4, poll_interval=0.01, progress_callback=progress)
        engine = RecordingEngine(gates={"AA": unblock})

        assert scheduler.run("AABBCCDD", engine, CipherMode.ENCRYPT) == "aabbccdd"
        assert (0, False) in calls
        assert [c for c in calls if c[1]] == [(0, True), (1, True), (2, True), (3, True)]

    def test_blocking_wait_without_polling(self):
        calls = []
        scheduler = ChunkScheduler(
            worker_count=2,
            poll_interval=None,
            progress_callback=lambda index, finished: calls.append((index, finished)),
        )

        assert scheduler.run("ABCDE", RecordingEngine(), CipherMode.ENCRYPT) == "abcde"
        assert calls == [(0, True), (1, True)]

    def test_configurable_worker_count(self):
        engine = RecordingEngine()
        scheduler = ChunkScheduler(worker_count=3, poll_interval=0.01)

        assert scheduler.run("ABCDEFG", engine, CipherMode.ENCRYPT) == "abcdefg"
        assert sorted(engine.finished) == ["AB", "CD", "EFG"]

    def test_zero_workers_rejected(self):
        with pytest.raises(ValueError):
            ChunkScheduler(worker_count=0)


class TestWithRealEngines:
    """The pipeline around the registered cipher engines."""

    @pytest.fixture
    def scheduler(self):
        return ChunkScheduler(worker_count=4, poll_interval=0.01)

    @pytest.fixture
    def plaintext(self):
        return "THEQUICKBROWNFOXJUMPSOVERTHELAZYDOG" * 3

    def test_caesar_matches_unchunked(self, scheduler, plaintext):
        """Caesar has no positional state, so chunking cannot change it."""
        cipher = construct(CipherType.CAESAR, "11")

        chunked = scheduler.run(plaintext, cipher, CipherMode.ENCRYPT)

        assert chunked == cipher.encrypt(plaintext)

    @pytest.mark.parametrize(
        "cipher_type, key",
        [(CipherType.CAESAR, "19"), (CipherType.VIGENERE, "LEMON"), (CipherType.VIGENERE, "")],
    )
    def test_roundtrip(self, scheduler, plaintext, cipher_type, key):
        cipher = construct(cipher_type, key)

        ciphertext = scheduler.run(plaintext, cipher, CipherMode.ENCRYPT)

        assert len(ciphertext) == len(plaintext)
        assert scheduler.run(ciphertext, cipher, CipherMode.DECRYPT) == plaintext

    def test_vigenere_key_restarts_per_chunk(self, scheduler):
        cipher = construct(CipherType.VIGENERE, "AB")

        assert cipher.encrypt("A" * 12) == "ABABABABABAB"
        assert scheduler.run("A" * 12, cipher, CipherMode.ENCRYPT) == "ABAABAABAABA"
