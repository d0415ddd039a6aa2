"""
Neander Memory Image Format
===========================

Reading and writing the `.mem` memory image loaded by the Neander
simulator.

File Format
-----------
```
Offset  Size  Description
------  ----  -----------
0       4     Magic: $03 'N' 'D' 'R'
4       512   256 memory cells, 2 bytes each (low byte, then $00)
```

The file is always exactly 516 bytes. Cells past the end of the assembled
program are zero.
"""

from dataclasses import dataclass, field
from pathlib import Path
import logging

from neander_asm.errors import ImageFormatError, ImageOverflowError, ImageWriteError

logger = logging.getLogger(__name__)


MEM_MAGIC = bytes([0x03, 0x4E, 0x44, 0x52])
CELL_COUNT = 256
CELL_SIZE = 2
DATA_SIZE = CELL_COUNT * CELL_SIZE
MEM_SIZE = len(MEM_MAGIC) + DATA_SIZE

DEFAULT_OUTPUT = "output.mem"


# =============================================================================
# Memory Image
# =============================================================================

@dataclass
class MemImage:
    """
    A Neander memory image.

    Attributes:
        data: The cell area (up to 512 bytes, unpadded)
    """
    data: bytes = b""
    MAGIC: bytes = field(default=MEM_MAGIC, repr=False, init=False)

    def __post_init__(self) -> None:
        if len(self.data) > DATA_SIZE:
            raise ImageOverflowError(len(self.data), DATA_SIZE)

    def to_bytes(self) -> bytes:
        """Serialize to the 516-byte file layout."""
        return self.MAGIC + bytes(self.data).ljust(DATA_SIZE, b"\x00")

    @property
    def cells(self) -> list[int]:
        """The 256 memory cell values (low bytes only)."""
        padded = bytes(self.data).ljust(DATA_SIZE, b"\x00")
        return list(padded[::CELL_SIZE])

    @classmethod
    def from_bytes(cls, data: bytes) -> "MemImage":
        """
        Parse a memory image from file contents.

        Raises:
            ImageFormatError: If the length or magic header is wrong, or a
                              cell has a non-zero high byte
        """
        if len(data) != MEM_SIZE:
            raise ImageFormatError(
                f"memory image must be {MEM_SIZE} bytes, got {len(data)}"
            )
        if data[:len(MEM_MAGIC)] != MEM_MAGIC:
            raise ImageFormatError(f"invalid memory image magic: {data[:4]!r}")
        for offset in range(len(MEM_MAGIC) + 1, MEM_SIZE, CELL_SIZE):
            if data[offset]:
                cell = (offset - len(MEM_MAGIC)) // CELL_SIZE
                raise ImageFormatError(
                    f"cell ${cell:02X} has non-zero high byte ${data[offset]:02X}"
                )
        return cls(data=data[len(MEM_MAGIC):])

    @classmethod
    def from_file(cls, filepath: str | Path) -> "MemImage":
        """Read and parse a memory image file."""
        return cls.from_bytes(Path(filepath).read_bytes())


# =============================================================================
# Image Writer
# =============================================================================

def build_image(code: bytes) -> bytes:
    """
    Wrap assembled code in the memory image layout.

    Args:
        code: The output buffer produced by pass 2

    Returns:
        Exactly MEM_SIZE bytes: magic header, code, zero padding

    Raises:
        ImageOverflowError: If code is longer than the 512-byte cell area
    """
    return MemImage(data=bytes(code)).to_bytes()


def write_image(code: bytes, filepath: str | Path = DEFAULT_OUTPUT) -> None:
    """
    Write assembled code as a memory image file.

    The image is built before the file is opened, so an oversized program
    never truncates an existing file.

    Raises:
        ImageOverflowError: If code does not fit in the image
        ImageWriteError: If the file cannot be created or written
    """
    image = build_image(code)

    try:
        with open(filepath, "wb") as f:
            f.write(image)
    except OSError as e:
        raise ImageWriteError(str(filepath), e.strerror or str(e)) from e

    logger.info(f"Wrote {len(image)} byte memory image to {filepath}")


def validate_mem(data: bytes) -> bool:
    """
    Check whether data is a well-formed memory image.

    Returns:
        True if valid, False otherwise (the reason is logged at DEBUG)

    Example:
        >>> with open("output.mem", "rb") as f:
        ...     ok = validate_mem(f.read())
    """
    if len(data) != MEM_SIZE:
        logger.debug(f"Image validation failed: {len(data)} bytes, expected {MEM_SIZE}")
        return False

    if data[:len(MEM_MAGIC)] != MEM_MAGIC:
        logger.debug(f"Image validation failed: invalid magic {data[:4]!r}")
        return False

    # High bytes of every cell are always zero
    if any(data[len(MEM_MAGIC) + 1::CELL_SIZE]):
        logger.debug("Image validation failed: non-zero cell high byte")
        return False

    logger.debug("Image validation passed")
    return True
