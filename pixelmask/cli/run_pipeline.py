import logging
import sys

from ..config import PipelineConfig
from ..models.artifact import PipelineReport
from ..pipeline.orchestrator import PipelineOrchestrator


def _configure_logging(level: str) -> None:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def print_report(report: PipelineReport) -> None:
    print(f"\n{'='*60}")
    print("PIPELINE STAGES")
    print(f"{'='*60}")
    for stage in report.stages:
        status = "SKIP" if stage.skipped else ("OK" if stage.ok else "FAIL")
        print(f"   [{status:4}] {stage.name}: {stage.message}")

    print(f"\n{'='*60}")
    print("VERIFICATION")
    print(f"{'='*60}")
    for check in report.verifications:
        print(f"   [{'PASS' if check.passed else 'FAIL'}] {check.detail}")
    print(f"{'='*60}\n")


def main() -> int:
    """Run the whole pipeline. Exit code 0 only when every verification passes."""
    try:
        config = PipelineConfig.from_env()
    except ValueError as err:
        print(f"Invalid configuration: {err}", file=sys.stderr)
        return 2

    _configure_logging(config.log_level)
    print(f"\nStarting pipeline in {config.data_dir.resolve()}...")

    report = PipelineOrchestrator(config).run()
    print_report(report)

    if report.all_verified:
        print("Pipeline complete: recovered image and mask logs verified.")
        return 0
    print("Pipeline complete with verification failures.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
