"""
Logging utilities for the ridge trace framework.

Provides structured logging for trace runs, with parameter and metric
tracking and JSON persistence of run summaries.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logger(
    name: str,
    level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None,
    console_output: bool = True
) -> logging.Logger:
    """
    Configure a standard library logger.

    Existing handlers on the named logger are replaced.

    Args:
        name: Logger name
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file to also write log records to
        console_output: Whether to write records to stdout

    Returns:
        Configured logging.Logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


class ExperimentLogger:
    """
    Logger for tracking trace runs and their results.

    Combines standard Python logging with per-run metric tracking
    and result persistence.

    Attributes:
        name: Logger name (typically the run name)
        log_dir: Directory for log files
        logger: Python logger instance
        metrics: Dictionary storing run metrics
    """

    def __init__(
        self,
        name: str,
        log_dir: Union[str, Path] = "logs",
        level: str = "INFO",
        console_output: bool = True,
        file_output: bool = True
    ):
        """
        Initialize the run logger.

        Args:
            name: Name of the run/logger
            log_dir: Directory for log files
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            console_output: Whether to output to console
            file_output: Whether to output to file
        """
        self.name = name
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.metrics: Dict[str, Any] = {}
        self.failures: List[Dict[str, str]] = []
        self.start_time = datetime.now()

        self.log_file: Optional[Path] = None
        if file_output:
            timestamp = self.start_time.strftime('%Y%m%d_%H%M%S')
            self.log_file = self.log_dir / f"{name}_{timestamp}.log"

        self.logger = setup_logger(
            name,
            level=level,
            log_file=self.log_file,
            console_output=console_output
        )

    def debug(self, message: str) -> None:
        """Log debug message."""
        self.logger.debug(message)

    def info(self, message: str) -> None:
        """Log info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log error message."""
        self.logger.error(message)

    def log_metric(self, name: str, value: float, step: Optional[int] = None) -> None:
        """
        Log a metric value.

        Args:
            name: Metric name
            value: Metric value
            step: Optional step number (e.g. image index)
        """
        if name not in self.metrics:
            self.metrics[name] = []

        entry = {'value': value, 'timestamp': datetime.now().isoformat()}
        if step is not None:
            entry['step'] = step

        self.metrics[name].append(entry)
        self.debug(f"Metric {name}: {value:.6f}" + (f" (step {step})" if step is not None else ""))

    def log_params(self, params: Dict[str, Any]) -> None:
        """
        Log run parameters.

        Args:
            params: Dictionary of parameter names and values
        """
        self.metrics['params'] = params
        self.info(f"Parameters: {json.dumps(params, indent=2, default=str)}")

    def log_failure(self, item: str, reason: str) -> None:
        """
        Record an item that could not be processed.

        Args:
            item: Identifier of the failed item (e.g. file name)
            reason: Error description
        """
        self.failures.append({'item': item, 'reason': reason})
        self.error(f"Processing failed for {item}: {reason}")

    def log_results(self, results: Dict[str, Any]) -> None:
        """
        Log final run results.

        Args:
            results: Dictionary of result names and values
        """
        self.metrics['results'] = results
        self.info("Final Results:")
        for key, value in results.items():
            if isinstance(value, float):
                self.info(f"  {key}: {value:.6f}")
            else:
                self.info(f"  {key}: {value}")

    def save_metrics(self, filename: Optional[str] = None) -> Path:
        """
        Save all logged metrics to a JSON file.

        Args:
            filename: Optional custom filename

        Returns:
            Path to the saved metrics file
        """
        if filename is None:
            timestamp = self.start_time.strftime('%Y%m%d_%H%M%S')
            filename = f"{self.name}_{timestamp}_metrics.json"

        filepath = self.log_dir / filename

        output = {
            'run_name': self.name,
            'start_time': self.start_time.isoformat(),
            'end_time': datetime.now().isoformat(),
            'metrics': self.metrics,
            'failures': self.failures
        }

        with open(filepath, 'w') as f:
            json.dump(output, f, indent=2, default=str)

        self.info(f"Metrics saved to {filepath}")
        return filepath

    def close(self) -> None:
        """Detach and close all handlers."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)


class ProgressTracker:
    """
    Track progress of a batch of trace jobs.

    Provides timing estimates and progress reporting.
    """

    def __init__(self, total: int, logger: Optional[ExperimentLogger] = None):
        """
        Initialize progress tracker.

        Args:
            total: Total number of items to process
            logger: Optional logger for output
        """
        self.total = total
        self.current = 0
        self.start_time = datetime.now()
        self.logger = logger

    def update(self, n: int = 1) -> None:
        """
        Update progress by n items.

        Args:
            n: Number of items completed
        """
        self.current += n

        if self.logger and self.current % max(1, self.total // 20) == 0:
            elapsed = (datetime.now() - self.start_time).total_seconds()
            rate = self.current / elapsed if elapsed > 0 else 0
            eta = (self.total - self.current) / rate if rate > 0 else 0

            self.logger.info(
                f"Progress: {self.current}/{self.total} "
                f"({100*self.current/self.total:.1f}%) "
                f"ETA: {eta:.1f}s"
            )

    def finish(self) -> float:
        """
        Mark the batch as complete.

        Returns:
            Total elapsed time in seconds
        """
        elapsed = (datetime.now() - self.start_time).total_seconds()
        if self.logger:
            self.logger.info(f"Completed {self.current}/{self.total} items in {elapsed:.2f}s")
        return elapsed
