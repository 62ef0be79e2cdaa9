"""Unified stdout streaming & capture of model output."""

import sys
from typing import Callable, Iterable, List, Optional, TextIO

class StreamHandler:
    """Collect response chunks, echoing them as they arrive."""

    def __init__(
        self,
        stream: bool = True,
        out: Optional[TextIO] = None,
        callback: Optional[Callable[[str], None]] = None,
    ):
        """Initialize the stream handler.

        Args:
            stream: Whether to echo chunks as they arrive
            out: Where to echo to (defaults to stdout at write time)
            callback: Optional callback for each chunk
        """
        self.stream = stream
        self.out = out
        self.callback = callback
        self._buffer: List[str] = []

    def write(self, text: str) -> None:
        """Write text to all configured outputs.

        Args:
            text: The chunk to echo, pass to the callback and collect
        """
        if self.stream:
            out = self.out or sys.stdout
            out.write(text)
            out.flush()
        if self.callback:
            self.callback(text)
        self._buffer.append(text)

    def consume(self, chunks: Iterable[str]) -> str:
        """Write every chunk and return the full text."""
        for chunk in chunks:
            self.write(chunk)
        return self.getvalue()

    def getvalue(self) -> str:
        """Get all written text.

        Returns:
            The concatenated chunks
        """
        return "".join(self._buffer)
