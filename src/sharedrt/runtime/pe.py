"""PE header sniffing to tell 32-bit from 64-bit launchers.

Only a handful of header fields are read; the file is never loaded or run.
"""

import struct
from pathlib import Path
from typing import BinaryIO, Optional, Union

DOS_MAGIC = 0x5A4D  # "MZ"
PE_SIGNATURE = 0x00004550  # "PE\0\0"
PE_OFFSET_POINTER = 0x3C
COFF_HEADER_SIZE = 0x14
OPTIONAL_MAGIC_PE32 = 0x10B
OPTIONAL_MAGIC_PE32_PLUS = 0x20B

_BITNESS_BY_MAGIC = {
    OPTIONAL_MAGIC_PE32: 32,
    OPTIONAL_MAGIC_PE32_PLUS: 64,
}


def _read(f: BinaryIO, fmt: str) -> Optional[int]:
    size = struct.calcsize(fmt)
    data = f.read(size)
    if len(data) != size:
        return None
    return struct.unpack(fmt, data)[0]


def get_pe_bitness(path: Union[str, Path]) -> Optional[int]:
    """Get the bitness of a PE executable.

    Args:
        path: Path to the executable

    Returns:
        32 or 64, or None if the file isn't a PE32/PE32+ image

    Raises:
        OSError: If the file can't be opened or read
    """
    with open(path, "rb") as f:
        if _read(f, "<H") != DOS_MAGIC:
            return None

        f.seek(PE_OFFSET_POINTER)
        pe_offset = _read(f, "<I")
        if pe_offset is None:
            return None
        f.seek(pe_offset)
        if _read(f, "<I") != PE_SIGNATURE:
            return None

        f.seek(COFF_HEADER_SIZE, 1)
        magic = _read(f, "<H")
        return _BITNESS_BY_MAGIC.get(magic)
