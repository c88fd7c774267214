"""Service analytics entrypoint."""

from __future__ import annotations

from time import perf_counter
from typing import Optional

from service_analytics.application.case_pipeline import process_case_grid
from service_analytics.application.service_pipeline import build_dataset
from service_analytics.config import PipelineConfig, load_config
from service_analytics.errors import MissingMandatorySourceError
from service_analytics.infrastructure.report_exporter import save_summary_json
from service_analytics.infrastructure.source_repository import iter_service_sources, read_grid
from service_analytics.logging import configure_logging, get_logger

logger = get_logger(__name__)


def run(config: PipelineConfig) -> int:
    pipeline_start = perf_counter()
    stage_start = pipeline_start
    stage_timings: list[tuple[str, float]] = []

    def _mark(stage_name: str) -> None:
        nonlocal stage_start
        now = perf_counter()
        stage_timings.append((stage_name, now - stage_start))
        stage_start = now

    dataset = build_dataset(iter_service_sources(config.data_dir), config)
    _mark("build_dataset")
    save_summary_json(config.service_output_path, dataset.to_dict())
    logger.info("dataset_written", path=str(config.service_output_path), dates=dataset.dates)
    _mark("save_service_json")

    try:
        grid = read_grid(config.case_report_path)
    except MissingMandatorySourceError as exc:
        logger.error("mandatory_source_missing", path=str(exc.path))
        print(f"Error: {exc}")
        return 1
    _mark("read_case_grid")
    case_report = process_case_grid(
        grid,
        limits=config.limits,
        source_file=config.case_report_path.name,
        progress_every=config.progress_every,
    )
    _mark("process_case_grid")
    save_summary_json(config.case_output_path, case_report.to_dict())
    logger.info("case_report_written", path=str(config.case_output_path))
    _mark("save_case_json")
    total_elapsed = perf_counter() - pipeline_start

    print(
        "Summary prepared: "
        f"dates={len(dataset.dates)}, "
        f"files={dataset.files_processed}, "
        f"case_records={case_report.total_records}"
    )
    if dataset.dates:
        print(f"Dates processed: {', '.join(dataset.dates)}")
    stage_text = ", ".join([f"{name}={seconds:.3f}s" for name, seconds in stage_timings])
    print(f"Stage Timing: {stage_text}")
    print(f"Total Elapsed: {total_elapsed:.3f}s")
    print(f"Saved JSON: {config.service_output_path}")
    print(f"Saved JSON: {config.case_output_path}")
    return 0


def main(config: Optional[PipelineConfig] = None) -> int:
    cfg = config or load_config()
    configure_logging(cfg.log_level)
    return run(cfg)


if __name__ == "__main__":
    raise SystemExit(main())
