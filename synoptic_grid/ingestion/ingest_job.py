from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Tuple
from .archive_reader import ArchiveReader
from .normalizer import DailyResultNormalizer
from .schema import DailyDocument
from .validator import DataValidator
from ..core import characteristics
from ..core.errors import MalformedInput, SynopticGridError
from ..core.models import DailyParseResult, RawObservation
from ..transformation.timeline import PlaceTimeline, PlaceTimelineBuilder
from ..utils.logging import get_logger

logger = get_logger(__name__)

@dataclass
class IngestStats:
    files: int = 0
    unreadable_files: int = 0
    documents: int = 0
    accepted: int = 0
    rejected: int = 0

class IngestJob:
    """First pass: archive documents -> immutable PlaceTimeline.

    A document that fails anywhere (unreadable, unparseable value, schema
    violation, unknown characteristic or wind direction) is rejected as a
    whole; it never aborts the run.
    """

    def __init__(
        self,
        normalizer: DailyResultNormalizer,
        validator: DataValidator,
        reader: Optional[ArchiveReader] = None,
    ):
        self.normalizer = normalizer
        self.validator = validator
        self.reader = reader
        self.stats = IngestStats()

    def run(self) -> PlaceTimeline:
        if self.reader is None:
            raise ValueError("IngestJob.run() needs an ArchiveReader")

        builder = PlaceTimelineBuilder()
        for path in self.reader.list_files():
            self.stats.files += 1
            try:
                documents = self.reader.read(path)
            except MalformedInput as e:
                self.stats.unreadable_files += 1
                logger.error(f"Failed to read archive file: {e}")
                continue
            sources = [str(path)] if len(documents) == 1 else [f"{path}#{i}" for i in range(len(documents))]
            self._ingest(zip(sources, documents), builder)

        return self._finish(builder)

    def ingest_documents(self, documents: Iterable[Tuple[str, Dict[str, Any]]]) -> PlaceTimeline:
        builder = PlaceTimelineBuilder()
        self._ingest(documents, builder)
        return self._finish(builder)

    def to_daily_result(self, record: Dict[str, Any], source_id: str) -> DailyParseResult:
        normalized = self.normalizer.normalize(record, source_id)
        doc, err = self.validator.validate(normalized)
        if doc is None:
            raise MalformedInput(err, source_id)
        return self._convert(doc, source_id)

    def _ingest(self, documents: Iterable[Tuple[str, Dict[str, Any]]], builder: PlaceTimelineBuilder) -> None:
        for source_id, record in documents:
            self.stats.documents += 1
            try:
                result = self.to_daily_result(record, source_id)
            except SynopticGridError as e:
                self.stats.rejected += 1
                logger.warning(f"Rejected day: {e}")
                continue
            self.stats.accepted += 1
            builder.add(source_id, result)

    def _convert(self, doc: DailyDocument, source_id: str) -> DailyParseResult:
        observations = []
        for o in doc.observations:
            if o.time.date() != doc.date:
                logger.debug(f"Reading at {o.time} does not belong to {doc.date} ({source_id})")
            observations.append(RawObservation(
                time=o.time,
                characteristics=characteristics.encode(o.characteristics, source_id),
                temperature=o.temperature,
                wind_direction=o.wind_direction,
                wind_speed=o.wind_speed,
                pressure=o.pressure,
                humidity=o.humidity,
            ))
        return DailyParseResult(place=doc.place, date=doc.date, observations=tuple(observations))

    def _finish(self, builder: PlaceTimelineBuilder) -> PlaceTimeline:
        timeline = builder.build()
        s = self.stats
        logger.info(
            f"Ingested {s.accepted} day(s) ({s.rejected} rejected, {builder.duplicate_days} duplicate) "
            f"from {s.documents} document(s)"
        )
        if s.accepted == 0:
            logger.warning("No valid days to normalize.")
        return timeline
