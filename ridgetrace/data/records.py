"""
Scan records for traced fingerprint images.

A scan record describes one trace run: which file was traced, by whom,
with which parameters, and a summary of the result. Records carry no
pixel data.
"""

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from ridgetrace.tracing.binarization import ridge_coverage
from ridgetrace.tracing.raster import Raster
from ridgetrace.utils.io import load_json, save_json


@dataclass
class ScanRecord:
    """
    Summary of a single trace run.

    Attributes:
        file_name: Name of the source image file
        operator: Name of the operator who ran the trace
        threshold: Threshold used for binarization
        invert: Whether the output polarity was inverted
        width: Raster width in pixels
        height: Raster height in pixels
        ridge_coverage: Fraction of pixels classified as ridge
        output_path: Where the traced image was written, if anywhere
        subject_name: Optional subject details
        subject_email: Optional subject details
        subject_mobile: Optional subject details
        notes: Free-form notes
        id: Unique record identifier
        timestamp: ISO 8601 creation time
    """
    file_name: str
    operator: str
    threshold: float
    invert: bool
    width: int
    height: int
    ridge_coverage: float
    output_path: Optional[str] = None
    subject_name: Optional[str] = None
    subject_email: Optional[str] = None
    subject_mobile: Optional[str] = None
    notes: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())

    @classmethod
    def from_trace(
        cls,
        file_name: str,
        operator: str,
        traced: Raster,
        threshold: float,
        invert: bool = False,
        **details: Any
    ) -> "ScanRecord":
        """
        Build a record from a traced raster.

        Args:
            file_name: Name of the source image file
            operator: Operator name
            traced: Output of the trace pipeline
            threshold: Threshold the raster was traced with
            invert: Invert flag the raster was traced with
            **details: Optional subject fields, notes and output_path

        Returns:
            New ScanRecord
        """
        return cls(
            file_name=file_name,
            operator=operator,
            threshold=float(threshold),
            invert=bool(invert),
            width=traced.width,
            height=traced.height,
            ridge_coverage=ridge_coverage(traced, invert),
            **details
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScanRecord":
        """
        Create a record from a dictionary, ignoring unknown keys.

        Raises:
            KeyError: If a required field is missing
        """
        known = {name: data[name] for name in cls.__dataclass_fields__ if name in data}
        return cls(**known)


class ScanHistory:
    """
    Ordered collection of scan records, newest first.
    """

    def __init__(self, records: Optional[List[ScanRecord]] = None):
        self._records: List[ScanRecord] = list(records or [])

    def add(self, record: ScanRecord) -> None:
        """Insert a record at the front of the history."""
        self._records.insert(0, record)

    def remove(self, record_id: str) -> bool:
        """
        Remove a record by id.

        Returns:
            True if a record was removed
        """
        before = len(self._records)
        self._records = [r for r in self._records if r.id != record_id]
        return len(self._records) < before

    def get(self, record_id: str) -> Optional[ScanRecord]:
        for record in self._records:
            if record.id == record_id:
                return record
        return None

    def filter_by_operator(self, operator: str) -> List[ScanRecord]:
        """Records created by the given operator, newest first."""
        return [r for r in self._records if r.operator == operator]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ScanRecord]:
        return iter(self._records)

    def save(self, path: Union[str, Path]) -> None:
        """Write the history to a JSON file."""
        save_json([r.to_dict() for r in self._records], path)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ScanHistory":
        """
        Read a history from a JSON file.

        A missing file yields an empty history.
        """
        path = Path(path)
        if not path.exists():
            return cls()
        return cls([ScanRecord.from_dict(item) for item in load_json(path)])
