"""
Segment file locations.

A LogFilePath names one physical segment file and the logical offset of the
first record stored in it. The offset labels records on read; it is never
used as a byte position.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class LogFilePath:
    """
    Location of a single segment file.

    Attributes:
        path: File-system path of the segment
        offset: Logical offset of the first record in the segment
    """

    path: Path
    offset: int = 0

    SEGMENT_FILE_SUFFIX = ".log"
    OFFSET_PADDING = 20

    def __post_init__(self) -> None:
        """Validate and normalize fields."""
        if self.offset < 0:
            raise ValueError(f"Offset must be non-negative, got {self.offset}")
        object.__setattr__(self, "path", Path(self.path))

    @classmethod
    def for_partition(
        cls,
        base_dir: Union[str, Path],
        topic: str,
        partition: int,
        offset: int,
        extension: str = "",
    ) -> "LogFilePath":
        """
        Build the conventional path of a partition segment.

        Layout: base_dir/<topic>/partition-<partition>/<offset:020d>.log<extension>

        Args:
            base_dir: Root directory holding all topics
            topic: Topic name
            partition: Partition number
            offset: Starting offset of the segment
            extension: Suffix appended after .log (e.g. a codec extension)

        Returns:
            LogFilePath for the segment
        """
        if partition < 0:
            raise ValueError(f"Partition must be non-negative, got {partition}")
        if offset < 0:
            raise ValueError(f"Offset must be non-negative, got {offset}")

        filename = f"{str(offset).zfill(cls.OFFSET_PADDING)}{cls.SEGMENT_FILE_SUFFIX}{extension}"
        return cls(
            path=Path(base_dir) / topic / f"partition-{partition}" / filename,
            offset=offset,
        )

    @classmethod
    def parse(cls, path: Union[str, Path]) -> "LogFilePath":
        """
        Recover the starting offset from a segment file name.

        Args:
            path: Path whose name starts with the zero-padded offset

        Returns:
            LogFilePath for the segment

        Raises:
            ValueError: If the file name does not start with an offset
        """
        path = Path(path)
        stem = path.name.split(".", 1)[0]
        if not stem.isdigit():
            raise ValueError(f"Not a segment file name: {path.name}")
        return cls(path=path, offset=int(stem))

    def __str__(self) -> str:
        return str(self.path)
