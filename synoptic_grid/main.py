from synoptic_grid.config import Settings
from synoptic_grid.utils.logging import setup_logging

from synoptic_grid.ingestion.archive_reader import ArchiveReader
from synoptic_grid.ingestion.normalizer import DailyResultNormalizer
from synoptic_grid.ingestion.validator import DataValidator
from synoptic_grid.ingestion.ingest_job import IngestJob

from synoptic_grid.transformation.timeline import PlaceTimeline
from synoptic_grid.transformation.normalization_job import NormalizationJob, NormalizationReport

from synoptic_grid.export.csv_writer import CsvExporter

def ingest(s: Settings) -> PlaceTimeline:
    reader = ArchiveReader(s.archive_dir, s.archive_pattern)
    job = IngestJob(DailyResultNormalizer(), DataValidator(), reader)
    return job.run()

def normalize(s: Settings, timeline: PlaceTimeline) -> NormalizationReport:
    job = NormalizationJob(interpolation_enabled=s.interpolation_enabled)
    return job.run(timeline)

def export(s: Settings, report: NormalizationReport) -> None:
    CsvExporter(s.output_dir).write(report.records_by_place())

def main():
    s = Settings()
    setup_logging(s.log_level)
    timeline = ingest(s)
    report = normalize(s, timeline)
    export(s, report)

if __name__ == "__main__":
    main()
