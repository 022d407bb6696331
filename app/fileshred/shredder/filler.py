"""Byte pattern generation for overwrite passes.

Fills reusable buffers with zeros, 0xFF bytes, or cryptographically
secure random bytes.
"""

import secrets
from collections.abc import Callable

from fileshred.shredder.errors import ConfigurationError
from fileshred.shredder.models import DEFAULT_CHUNK_SIZE, FillMode

# Source of random bytes: takes a length, returns that many bytes
RandomSource = Callable[[int], bytes]


def fill(buffer: bytearray, mode: FillMode, rng: RandomSource | None = None) -> None:
    """Fill a buffer in place according to the fill mode.

    Args:
        buffer: Buffer to overwrite.
        mode: Byte pattern to write.
        rng: Optional random source for RANDOM mode. Defaults to
            ``secrets.token_bytes``.

    Raises:
        ConfigurationError: If mode is FillMode.NONE.
    """
    size = len(buffer)
    if mode == FillMode.ZERO:
        buffer[:] = bytes(size)
    elif mode == FillMode.MAX:
        buffer[:] = b"\xff" * size
    elif mode == FillMode.RANDOM:
        buffer[:] = (rng or secrets.token_bytes)(size)
    else:
        raise ConfigurationError(f"Cannot fill buffer with mode {mode.value!r}")


class PatternFiller:
    """Produces fixed-size overwrite buffers for one fill mode.

    Args:
        mode: Byte pattern to produce.
        chunk_size: Size of the buffers in bytes.
        rng: Optional random source for RANDOM mode.
    """

    def __init__(
        self,
        mode: FillMode,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        rng: RandomSource | None = None,
    ) -> None:
        if mode == FillMode.NONE:
            raise ConfigurationError("No fill mode selected")
        if chunk_size < 1:
            raise ConfigurationError(f"chunk_size must be >= 1, got {chunk_size}")
        self._mode = mode
        self._chunk_size = chunk_size
        self._rng = rng

    @property
    def mode(self) -> FillMode:
        """The fill mode this filler produces."""
        return self._mode

    @property
    def chunk_size(self) -> int:
        """Size of the buffers in bytes."""
        return self._chunk_size

    def new_buffer(self) -> bytearray:
        """Allocate a chunk-sized buffer to be reused across fills."""
        return bytearray(self._chunk_size)

    def fill(self, buffer: bytearray) -> None:
        """Refill a buffer for the next chunk.

        Zero and max patterns never change between chunks, so they are
        only rewritten when the buffer does not already hold them.
        """
        if self._mode == FillMode.RANDOM:
            fill(buffer, self._mode, self._rng)
            return
        expected = 0x00 if self._mode == FillMode.ZERO else 0xFF
        if buffer.count(expected) != len(buffer):
            fill(buffer, self._mode)
