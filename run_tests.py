#!/usr/bin/env python3
# ================================================================================
# Test Runner Script
# ================================================================================
#
# Entry point for running the demoqa UI automation suites.
#
# Features:
#   - Run framework unit tests (no browser needed)
#   - Run browser end-to-end tests against the live site
#   - Parallel execution with pytest-xdist
#   - Allure report generation
#
# Usage:
#   python run_tests.py --suite unit
#   python run_tests.py --suite ui --browser firefox --tags smoke
#   python run_tests.py --suite all --parallel 4 --no-allure
#
# ================================================================================

import argparse
import shutil
import subprocess
import sys
from datetime import datetime
from pathlib import Path
from typing import List

from loguru import logger


# Configure logging
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    level="INFO"
)


SUITE_PATHS = {
    "unit": "testsuites/unit",
    "ui": "testsuites/ui_testing/tests",
    "all": "testsuites/",
}


class TestRunner:
    """
    Builds and executes the pytest command for a suite.

    Browser suites always pass --run-e2e; without it the e2e tests are
    collected but skipped.
    """

    def __init__(
        self,
        suite: str = "all",
        tags: List[str] = None,
        parallel: int = 1,
        browser: str = "chromium",
        headless: bool = True,
        allure_report: bool = True,
        verbose: bool = False
    ):
        """
        Args:
            suite: Test suite to run - "unit", "ui", "all"
            tags: List of pytest markers to filter tests
            parallel: Number of parallel workers
            browser: Browser for UI tests - "chromium", "firefox", "webkit"
            headless: Run browser in headless mode
            allure_report: Generate Allure report
            verbose: Enable verbose output
        """
        self.suite = suite
        self.tags = tags or []
        self.parallel = parallel
        self.browser = browser
        self.headless = headless
        self.allure_report = allure_report
        self.verbose = verbose

        self.root_dir = Path(__file__).parent
        self.reports_dir = self.root_dir / "reports"
        self.allure_results = self.reports_dir / "allure-results"
        self.allure_report_dir = self.reports_dir / "allure-report"

    @property
    def uses_browser(self) -> bool:
        return self.suite in ("ui", "all")

    def run(self) -> int:
        """
        Execute the test run.

        Returns:
            pytest exit code
        """
        logger.info("=" * 60)
        logger.info("Starting Test Execution")
        logger.info("=" * 60)
        logger.info(f"Suite: {self.suite}")
        logger.info(f"Tags: {self.tags or 'All'}")
        logger.info(f"Parallel Workers: {self.parallel}")
        if self.uses_browser:
            logger.info(f"Browser: {self.browser}")
            logger.info(f"Headless: {self.headless}")
        logger.info("=" * 60)

        self._prepare_environment()

        cmd = self.build_pytest_command()
        logger.info(f"Executing: {' '.join(cmd)}")

        try:
            exit_code = subprocess.run(cmd, cwd=str(self.root_dir)).returncode
        except OSError as e:
            logger.error(f"Test execution failed: {e}")
            exit_code = 1

        if self.allure_report:
            self._generate_allure_report()

        self._print_summary(exit_code)
        return exit_code

    def _prepare_environment(self) -> None:
        """Create report directories and drop stale Allure results."""
        if self.allure_report and self.allure_results.exists():
            shutil.rmtree(self.allure_results)
        self.allure_results.mkdir(parents=True, exist_ok=True)
        (self.reports_dir / "screenshots").mkdir(parents=True, exist_ok=True)
        logger.debug("Environment prepared")

    def build_pytest_command(self) -> List[str]:
        """Build the pytest command with all options."""
        cmd = [sys.executable, "-m", "pytest", SUITE_PATHS[self.suite]]

        if self.tags:
            cmd.extend(["-m", " or ".join(self.tags)])

        if self.parallel > 1:
            cmd.extend(["-n", str(self.parallel)])

        if self.allure_report:
            cmd.extend(["--alluredir", str(self.allure_results)])

        cmd.append("-v" if self.verbose else "-q")

        if self.uses_browser:
            cmd.extend(["--run-e2e", f"--browser={self.browser}"])
            if not self.headless:
                cmd.append("--headed")

        return cmd

    def _generate_allure_report(self) -> None:
        """Generate Allure HTML report and point allure-report at it."""
        logger.info("Generating Allure report...")

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        report_path = self.reports_dir / f"allure-report-{timestamp}"
        try:
            subprocess.run([
                "allure", "generate",
                str(self.allure_results),
                "-o", str(report_path),
                "--clean"
            ], check=True)
        except FileNotFoundError:
            logger.warning("Allure CLI not found. Please install Allure to generate reports.")
            return
        except subprocess.CalledProcessError as e:
            logger.error(f"Failed to generate Allure report: {e}")
            return

        latest_link = self.allure_report_dir
        if latest_link.is_symlink():
            latest_link.unlink()
        elif latest_link.exists():
            shutil.rmtree(latest_link)
        latest_link.symlink_to(report_path.name)

        logger.info(f"Report generated: {report_path}")

    def _print_summary(self, exit_code: int) -> None:
        """Print test execution summary."""
        logger.info("=" * 60)
        if exit_code == 0:
            logger.info("✅ TEST EXECUTION COMPLETED SUCCESSFULLY")
        else:
            logger.error(f"❌ TEST EXECUTION FAILED (exit code: {exit_code})")

        if self.allure_report:
            logger.info(f"📊 Report available at: {self.allure_report_dir}")
        if exit_code != 0 and self.uses_browser:
            logger.info(f"📷 Failure screenshots: {self.reports_dir / 'screenshots'}")

        logger.info("=" * 60)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="demoqa UI Automation Test Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Framework unit tests only (no browser)
  python run_tests.py --suite unit

  # P0 smoke tests in parallel
  python run_tests.py --suite ui --tags P0 smoke --parallel 4

  # UI tests with visible browser
  python run_tests.py --suite ui --no-headless --browser firefox
        """
    )

    parser.add_argument(
        "--suite",
        choices=sorted(SUITE_PATHS),
        default="all",
        help="Test suite to run (default: all)"
    )

    parser.add_argument(
        "--tags",
        nargs="+",
        default=[],
        help="Pytest markers to filter tests (e.g., P0 smoke alerts)"
    )

    parser.add_argument(
        "--parallel", "-n",
        type=int,
        default=1,
        help="Number of parallel workers (default: 1)"
    )

    parser.add_argument(
        "--browser",
        choices=["chromium", "firefox", "webkit"],
        default="chromium",
        help="Browser for UI tests (default: chromium)"
    )

    parser.add_argument(
        "--no-headless",
        action="store_true",
        help="Run browser in headed mode (visible)"
    )

    parser.add_argument(
        "--no-allure",
        action="store_true",
        help="Disable Allure report generation"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    args = parser.parse_args()

    runner = TestRunner(
        suite=args.suite,
        tags=args.tags,
        parallel=args.parallel,
        browser=args.browser,
        headless=not args.no_headless,
        allure_report=not args.no_allure,
        verbose=args.verbose
    )
    sys.exit(runner.run())


if __name__ == "__main__":
    main()
