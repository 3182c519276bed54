"""Chunk transports."""

from .base import BaseChunkTransport
from .http import HttpChunkTransport

__all__ = ["BaseChunkTransport", "HttpChunkTransport"]
