"""
Pipeline services for the cipher tool.

- ChunkScheduler splits text across worker threads and reassembles it
- CipherOrchestrator runs one command-line invocation end to end
"""

from mpags_cipher.services.pipeline.orchestrator import CipherOrchestrator
from mpags_cipher.services.pipeline.scheduler import ChunkScheduler, partition

__all__ = [
    "CipherOrchestrator",
    "ChunkScheduler",
    "partition",
]
