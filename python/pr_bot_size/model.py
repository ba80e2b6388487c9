from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FileRecord:
    relative_path: str
    size_in_bytes: int
    gzip_size_in_bytes: int


@dataclass(frozen=True)
class ComparisonRecord:
    relative_path: str
    size_in_bytes: int
    gzip_size_in_bytes: int
    is_new_file: bool
    previous_size: int | None
    size_difference_in_bytes: float
    size_difference_percent: float

    @property
    def is_changed(self) -> bool:
        return not self.is_new_file and self.size_difference_in_bytes != 0


@dataclass(frozen=True)
class SizeReport:
    pretty_log: str
    markdown_log: str
