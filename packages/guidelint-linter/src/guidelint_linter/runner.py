import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Sequence

from .discovery import SourceFile
from .engine import LinterEngine
from .models import CheckResult, LintRun

logger = logging.getLogger(__name__)


class CancellationToken:
    """Signals a running LintRunner to stop at the next file boundary"""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class LintRunner:
    """Checks many files concurrently; each file's pipeline is independent"""

    def __init__(self, engine: LinterEngine, jobs: int | None = None):
        self.engine = engine
        self.jobs = jobs or min(32, (os.cpu_count() or 1) + 4)

    def _check(self, source_file: SourceFile, token: CancellationToken) -> CheckResult | None:
        if token.cancelled:
            return None
        return self.engine.check_file(source_file.path, source_file.language)

    def run(self, files: Sequence[SourceFile], cancel_token: CancellationToken | None = None) -> LintRun:
        """Check files, returning results in input order whatever the completion order"""
        token = cancel_token or CancellationToken()
        results: dict[int, CheckResult] = {}

        if self.jobs == 1 or len(files) <= 1:
            for index, source_file in enumerate(files):
                result = self._check(source_file, token)
                if result is None:
                    break
                results[index] = result
        else:
            with ThreadPoolExecutor(max_workers=self.jobs) as pool:
                futures = {
                    pool.submit(self._check, source_file, token): index
                    for index, source_file in enumerate(files)
                }
                try:
                    for future in as_completed(futures):
                        if future.cancelled():
                            continue
                        result = future.result()
                        if result is not None:
                            results[futures[future]] = result
                        if token.cancelled:
                            for pending in futures:
                                pending.cancel()
                except KeyboardInterrupt:
                    token.cancel()
                    for pending in futures:
                        pending.cancel()
                    # in-flight files finish; their results are complete and kept
                    for future in futures:
                        if future.cancelled():
                            continue
                        result = future.result()
                        if result is not None:
                            results[futures[future]] = result

        ordered = [results[index] for index in sorted(results)]
        failed = sum(1 for result in ordered if not result.passed)
        logger.info(
            "Checked %d of %d files, %d with violations%s",
            len(ordered),
            len(files),
            failed,
            " (cancelled)" if token.cancelled else "",
        )
        return LintRun(results=ordered, cancelled=token.cancelled)
