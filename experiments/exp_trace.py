"""
Experiment: Ridge Tracing

Traces one image or a directory of fingerprint images into binary
ridge maps (black ridges on white, or the inverse) and records a scan
history entry for every traced file.

Expected Results:
- Clean ink or optical captures produce continuous ridge lines at
  thresholds around 20-40
- Low thresholds pick up sensor noise, high thresholds break ridges
"""

import sys
import argparse
from pathlib import Path
from typing import List, Optional

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ridgetrace.data.records import ScanHistory, ScanRecord
from ridgetrace.tracing import RidgeTracer, TraceError
from ridgetrace.utils.config import DEFAULT_CONFIG, Config, load_config
from ridgetrace.utils.io import discover_images, load_raster, save_raster
from ridgetrace.utils.logger import ExperimentLogger, ProgressTracker


def collect_inputs(input_path: Path) -> List[Path]:
    """
    Resolve the images to trace.

    Args:
        input_path: Image file or directory

    Returns:
        List of image paths

    Raises:
        FileNotFoundError: If the input does not exist
    """
    if not input_path.exists():
        raise FileNotFoundError(f"Input not found: {input_path}")

    if input_path.is_dir():
        return discover_images(input_path)

    return [input_path]


def run_experiment(
    input_path: str,
    output_dir: Optional[str] = None,
    config_path: Optional[str] = None,
    threshold: Optional[float] = None,
    invert: Optional[bool] = None,
    operator: str = "operator",
    history_file: Optional[str] = None,
    log_dir: Optional[str] = None
) -> List[ScanRecord]:
    """
    Run ridge tracing over an image or directory.

    Command line values take precedence over the configuration file.

    Args:
        input_path: Image file or directory of images
        output_dir: Directory for traced images
        config_path: Optional path to config file
        threshold: Threshold override
        invert: Invert override
        operator: Operator name written to each record
        history_file: Scan history JSON override
        log_dir: Log directory override

    Returns:
        Records for every successfully traced image
    """
    config: Config = load_config(config_path) if config_path else DEFAULT_CONFIG

    threshold = config.processing.threshold if threshold is None else threshold
    invert = config.processing.invert if invert is None else invert
    output_path = Path(output_dir or config.data.output_dir)
    history_path = Path(history_file or config.data.history_file)

    images = collect_inputs(Path(input_path))

    if threshold < 0:
        raise ValueError(f"threshold must be >= 0 (got {threshold})")

    logger = ExperimentLogger(
        "ridge_trace",
        log_dir=log_dir or config.logging.log_dir,
        level=config.logging.level
    )
    try:
        logger.info("Starting ridge tracing")

        if config.processing.contrast is not None:
            logger.warning("'contrast' is set in the configuration but is not used by the tracer")

        logger.log_params({
            'input': str(input_path),
            'output_dir': str(output_path),
            'threshold': threshold,
            'invert': invert,
            'operator': operator,
        })
        logger.info(f"Found {len(images)} images")

        tracer = RidgeTracer(threshold=threshold, invert=invert)
        history = ScanHistory.load(history_path)
        records: List[ScanRecord] = []
        progress = ProgressTracker(len(images), logger)

        for step, image_path in enumerate(images):
            try:
                raster = load_raster(image_path)
                traced = tracer(raster)
                saved = save_raster(traced, output_path / f"{image_path.stem}_trace.png")
            except (TraceError, ValueError, FileNotFoundError) as exc:
                logger.log_failure(image_path.name, str(exc))
                progress.update()
                continue

            record = ScanRecord.from_trace(
                file_name=image_path.name,
                operator=operator,
                traced=traced,
                threshold=threshold,
                invert=invert,
                output_path=str(saved)
            )
            history.add(record)
            records.append(record)

            logger.log_metric("ridge_coverage", record.ridge_coverage, step=step)
            progress.update()

        elapsed = progress.finish()
        history.save(history_path)

        logger.log_results({
            'traced': len(records),
            'failed': len(images) - len(records),
            'elapsed_seconds': elapsed,
            'history_file': str(history_path),
        })

        if config.logging.save_results:
            logger.save_metrics()
    finally:
        logger.close()

    return records


def main():
    parser = argparse.ArgumentParser(
        description="Trace fingerprint ridges into binary images"
    )
    parser.add_argument(
        "--input",
        type=str,
        required=True,
        help="Image file or directory of images"
    )
    parser.add_argument(
        "--output_dir",
        type=str,
        default=None,
        help="Output directory for traced images"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to configuration file (e.g. configs/trace.yaml)"
    )
    parser.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Edge threshold; gradient magnitudes above it are ridges"
    )
    parser.add_argument(
        "--invert",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Draw ridges white on black (--no-invert overrides the config)"
    )
    parser.add_argument(
        "--operator",
        type=str,
        default="operator",
        help="Operator name recorded in the scan history"
    )

    args = parser.parse_args()

    records = run_experiment(
        input_path=args.input,
        output_dir=args.output_dir,
        config_path=args.config,
        threshold=args.threshold,
        invert=args.invert,
        operator=args.operator
    )

    print("\n" + "=" * 60)
    print("RIDGE TRACE RESULTS")
    print("=" * 60)

    for record in records:
        print(f"\n{record.file_name}:")
        print(f"  Size: {record.width}x{record.height}")
        print(f"  Ridge coverage: {record.ridge_coverage * 100:.2f}%")
        print(f"  Output: {record.output_path}")


if __name__ == "__main__":
    main()
