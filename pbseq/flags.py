"""
Flag (channel bitmask) conversion utilities.

An instruction's flags arrive in one of three shapes:

- ``int``: bitmask, bit i drives channel i (0b0101 -> channels 0 and 2)
- ``str``: '0'/'1' characters, the FIRST character is channel 0
  ("101" -> channels 0 and 2)
- sequence of ``int``: the active channel indices ([0, 2])

Note the two textual orders differ: the string "1100" is channels 0,1
while the integer 0b1100 is channels 2,3. Both decodings are kept as is.
"""
import re
from typing import Iterable, List, Sequence, Union

from .types.errors import InvalidFlags
from .types.settings import MAX_CHANNELS

FlagsInput = Union[int, str, Sequence[int]]

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_flags(flags: FlagsInput) -> None:
    """Raise InvalidFlags unless ``flags`` is one of the three accepted shapes."""
    if _is_int(flags):
        if flags < 0:
            raise InvalidFlags(f"Flag bitmask must be non-negative, got {flags}")
        return
    if isinstance(flags, str):
        return
    if isinstance(flags, (list, tuple)):
        for idx in flags:
            if not _is_int(idx):
                raise InvalidFlags(f"Flag index list may only hold integers, got {idx!r}")
        return
    raise InvalidFlags(f"Unsupported flags value {flags!r} ({type(flags).__name__})")


def decode_flags(flags: FlagsInput, channel_count: int = MAX_CHANNELS) -> List[bool]:
    """
    Resolve flags into one boolean per channel.

    Args:
        flags: bitmask, '0'/'1' string or index list
        channel_count: Length of the result

    Returns:
        ``channel_count`` booleans, True where the channel is active

    Examples:
        decode_flags(0b101, 4)   # [True, False, True, False]
        decode_flags("101", 4)   # [True, False, True, False]
        decode_flags([0, 9], 4)  # [True, False, False, False]
    """
    validate_flags(flags)
    result = [False] * channel_count

    if _is_int(flags):
        for i in range(channel_count):
            result[i] = bool(flags & (1 << i))
    elif isinstance(flags, str):
        for i, char in enumerate(flags[:channel_count]):
            result[i] = char == "1"
    else:
        for idx in flags:
            if 0 <= idx < channel_count:
                result[idx] = True

    return result


def encode_bitmask(indices: Iterable[int], channel_count: int = MAX_CHANNELS) -> int:
    """OR together ``1 << idx``; indices outside [0, channel_count) are dropped."""
    mask = 0
    for idx in indices:
        if 0 <= idx < channel_count:
            mask |= 1 << idx
    return mask


def toggle_bit(mask: int, index: int, channel_count: int = MAX_CHANNELS) -> int:
    """Flip one channel bit, returning a new mask.

    Indices outside [0, channel_count) leave the mask unchanged.
    """
    if not 0 <= index < channel_count:
        return mask
    return mask ^ (1 << index)


def parse_typed_list(text: str, max_channels: int = MAX_CHANNELS) -> int:
    """
    Parse an editor entry like "0, 2, 5" into a bitmask.

    Entries that do not start with an integer, and integers outside
    [0, max_channels), are discarded. Never raises; garbage yields 0.
    """
    if not isinstance(text, str):
        return 0
    indices = []
    for part in text.split(","):
        match = _INT_PREFIX.match(part.strip())
        if match:
            indices.append(int(match.group(1)))
    return encode_bitmask(indices, max_channels)


def to_bitmask(flags: FlagsInput, channel_count: int = MAX_CHANNELS) -> int:
    """Normalize any accepted flags shape to an integer bitmask.

    Integers pass through unchanged; strings and index lists are limited to
    ``channel_count`` channels.
    """
    validate_flags(flags)
    if _is_int(flags):
        return flags
    if isinstance(flags, str):
        return encode_bitmask(
            (i for i, char in enumerate(flags) if char == "1"), channel_count
        )
    return encode_bitmask(flags, channel_count)


def active_indices(mask: int, channel_count: int = MAX_CHANNELS) -> List[int]:
    """Ascending list of set bit positions below ``channel_count``."""
    return [i for i in range(channel_count) if (mask >> i) & 1]


def format_hex(mask: int) -> str:
    """'0x' plus at least six upper-case hex digits, e.g. 0x00000A."""
    return f"0x{mask:06X}"


def format_binary(mask: int, width: int = MAX_CHANNELS) -> str:
    """'0b' plus the mask zero-padded to ``width`` binary digits."""
    return f"0b{mask:0{width}b}"
