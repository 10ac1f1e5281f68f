"""
================================================================================
Failure Artifact Capture
================================================================================

Screenshot-on-failure for the pytest failure hook.

capture() never raises: a reporting problem (no session, closed page,
read-only filesystem) must not mask or replace the original test failure.

================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from loguru import logger

from .reporting import attach_png, attach_text
from .session import BrowserSession


MAX_NAME_ATTEMPTS = 100


@dataclass(frozen=True)
class FailureArtifact:
    """
    Screenshot taken for one failure event.

    Attributes:
        test_identifier: Test that failed
        timestamp: Capture time
        image: PNG bytes
        storage_path: Where the PNG was written
    """
    test_identifier: str
    timestamp: datetime
    image: bytes
    storage_path: Path


def safe_file_stem(test_identifier: str) -> str:
    """Turn a pytest node id into a file-name-safe stem."""
    stem = re.sub(r"[^A-Za-z0-9_.-]+", "_", test_identifier).strip("_.")
    return stem or "unnamed_test"


class FailureArtifactCapture:
    """
    Captures a screenshot of the session's page when a test fails.

    Files are named `<test_identifier>_<YYYYMMDD_HHMMSS>.png` inside
    `output_dir`, which is created on demand. Each artifact is written once
    with exclusive creation and never overwritten.
    """

    def __init__(
        self,
        session: Optional[BrowserSession],
        output_dir: Path,
        attach_to_allure: bool = True,
    ):
        self.session = session
        self.output_dir = Path(output_dir)
        self.attach_to_allure = attach_to_allure

    def capture(self, test_identifier: str) -> Optional[FailureArtifact]:
        """
        Capture and persist a failure screenshot.

        Args:
            test_identifier: Test name or node id

        Returns:
            The written FailureArtifact, or None if anything went wrong
        """
        try:
            return self._capture(test_identifier)
        except Exception as e:
            logger.error(f"Failed to capture failure screenshot for {test_identifier}: {e}")
            return None

    def _capture(self, test_identifier: str) -> Optional[FailureArtifact]:
        if self.session is None or not self.session.is_active:
            logger.warning(f"No active browser page for {test_identifier}; screenshot skipped")
            return None

        image = self.session.page.screenshot(full_page=True)
        timestamp = datetime.now()

        self.output_dir.mkdir(parents=True, exist_ok=True)
        stem = f"{safe_file_stem(test_identifier)}_{timestamp.strftime('%Y%m%d_%H%M%S')}"
        storage_path = self._write_once(stem, image)

        if self.attach_to_allure:
            try:
                attach_png(image, name="Failure Screenshot")
                attach_text(self.session.page.url, name="Current URL")
            except Exception as e:
                logger.error(f"Failed to attach failure screenshot to Allure: {e}")

        logger.info(f"Screenshot captured and saved successfully: {storage_path}")
        return FailureArtifact(
            test_identifier=test_identifier,
            timestamp=timestamp,
            image=image,
            storage_path=storage_path,
        )

    def _write_once(self, stem: str, image: bytes) -> Path:
        """
        Write `image` to a file that did not exist before.

        Colliding names (same sanitized stem in the same second) get a
        `_<n>` suffix; existing files are never overwritten.
        """
        for attempt in range(MAX_NAME_ATTEMPTS):
            suffix = f"_{attempt}" if attempt else ""
            storage_path = self.output_dir / f"{stem}{suffix}.png"
            try:
                with open(storage_path, "xb") as f:
                    f.write(image)
            except FileExistsError:
                continue
            return storage_path
        raise FileExistsError(f"No free file name for {stem} after {MAX_NAME_ATTEMPTS} attempts")


__all__ = [
    "FailureArtifact",
    "FailureArtifactCapture",
    "safe_file_stem",
]
