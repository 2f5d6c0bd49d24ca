"""
Pytest Configuration and Fixtures

This module provides:
- Markers for the system test categories
- A timestamped results file under test_results/
- Shared fixtures (sample ideas, store, virtual clock, controller)
"""

import sys
from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# Import test configuration
from tests.test_config import (
    CONFIG, EXPECTED, TEST_DATA, MESSAGES, TEST_CATEGORIES,
    get_all_sample_records,
)

RESULTS_DIR = PROJECT_ROOT / "test_results"

MARKERS = {
    "config_validation": "Configuration validation tests",
    "store_invariants": "Data Store invariant tests",
    "carousel_behavior": "Carousel controller scenario tests",
    "cli_behavior": "CLI interface tests",
}

STATUS_SYMBOLS = {"passed": "✓", "failed": "✗", "skipped": "○"}


# =============================================================================
# RESULTS REPORT
# =============================================================================

@dataclass
class RecordedTest:
    nodeid: str
    outcome: str
    duration: float
    message: str = ""

    @property
    def module(self) -> str:
        """File stem without the test_ prefix, e.g. "data_store"."""
        return Path(self.nodeid.split("::")[0]).stem.replace("test_", "", 1)

    @property
    def label(self) -> str:
        return self.nodeid.split("::")[-1].replace("test_", "", 1).replace("_", " ")


@dataclass
class ResultLog:
    """Test outcomes for one session, grouped by module."""

    started: datetime = field(default_factory=datetime.now)
    finished: Optional[datetime] = None
    tests: List[RecordedTest] = field(default_factory=list)

    def record(self, report) -> None:
        self.tests.append(RecordedTest(
            nodeid=report.nodeid,
            outcome=report.outcome,
            duration=report.duration,
            message=str(report.longrepr) if report.longrepr else "",
        ))

    def counts(self) -> Counter:
        return Counter(test.outcome for test in self.tests)

    def by_module(self) -> Dict[str, List[RecordedTest]]:
        grouped = defaultdict(list)
        for test in self.tests:
            grouped[test.module].append(test)
        return dict(sorted(grouped.items()))

    def pass_rate(self) -> float:
        return self.counts()["passed"] / max(len(self.tests), 1) * 100


_log = ResultLog()


def format_report(log: ResultLog) -> str:
    """Render the session as plain text, one block per test module."""
    counts = log.counts()
    elapsed = ((log.finished or datetime.now()) - log.started).total_seconds()

    lines = [
        "=" * 80,
        "SPARKDECK - TEST RESULTS REPORT",
        "=" * 80,
        f"Run Date:  {log.started:%Y-%m-%d %H:%M:%S}  ({elapsed:.2f}s)",
        f"Totals:    {len(log.tests)} run, {counts['passed']} passed, "
        f"{counts['failed']} failed, {counts['skipped']} skipped "
        f"({log.pass_rate():.1f}% pass)",
    ]

    for module, tests in log.by_module().items():
        info = TEST_CATEGORIES.get(module, {})
        lines += ["", "-" * 80, info.get("name", module.replace("_", " ").title())]
        if info.get("description"):
            lines.append(f"  {info['description']}")
        for risk in info.get("protects_against", []):
            lines.append(f"  guards: {risk}")
        for test in tests:
            symbol = STATUS_SYMBOLS.get(test.outcome, "?")
            lines.append(f"    {symbol} {test.label:<60} {test.duration * 1000:>6.0f}ms")

    failures = [test for test in log.tests if test.outcome == "failed"]
    if failures:
        lines += ["", "=" * 80, "FAILURES", "=" * 80]
        for test in failures:
            lines += ["", f"FAILED: {test.nodeid}"]
            lines += [f"  {line}" for line in test.message.splitlines()[:10]]

    lines += ["", "=" * 80]
    return "\n".join(lines)


# =============================================================================
# PYTEST HOOKS
# =============================================================================

def pytest_configure(config):
    for name, description in MARKERS.items():
        config.addinivalue_line("markers", f"{name}: {description}")
    _log.started = datetime.now()


def pytest_runtest_logreport(report):
    if report.when == "call" or (report.when == "setup" and report.skipped):
        _log.record(report)


def pytest_sessionfinish(session, exitstatus):
    _log.finished = datetime.now()
    RESULTS_DIR.mkdir(exist_ok=True)
    path = RESULTS_DIR / f"test_results_{_log.started:%Y%m%d_%H%M%S}.txt"
    path.write_text(format_report(_log), encoding="utf-8")

    counts = _log.counts()
    print(f"\n📄 Test results saved to: {path}")
    print(f"Total: {len(_log.tests)} | Passed: {counts['passed']} | "
          f"Failed: {counts['failed']} | Skipped: {counts['skipped']}")


# =============================================================================
# SHARED FIXTURES
# =============================================================================

@pytest.fixture
def sample_records():
    """Wire-format sample idea records."""
    return get_all_sample_records()


@pytest.fixture
def sample_ideas(sample_records):
    """Sample records parsed into Ideas, in file order."""
    from sparkdeck.models import Idea
    return [Idea.from_dict(record) for record in sample_records]


@pytest.fixture
def store(sample_ideas):
    """Data Store loaded with the sample ideas."""
    from sparkdeck.store import DataStore
    return DataStore(sample_ideas)


@pytest.fixture
def clock():
    """Virtual clock starting at t=0."""
    from sparkdeck.carousel import VirtualClock
    return VirtualClock()


@pytest.fixture
def controller(store, clock):
    """Carousel controller over the sample store."""
    from sparkdeck.carousel import CarouselController
    return CarouselController(
        store,
        clock=clock,
        animation_duration_ms=CONFIG["animation_duration_ms"],
        drag_threshold_px=CONFIG["drag_threshold_px"],
        item_width=CONFIG["item_width"],
        auto_rotate_interval_ms=CONFIG["auto_rotate_interval_ms"],
    )


@pytest.fixture
def catalog_file(tmp_path, sample_records):
    """Sample records written to a temporary catalog JSON file."""
    import json
    path = tmp_path / "ideas.json"
    path.write_text(json.dumps(sample_records), encoding="utf-8")
    return path


@pytest.fixture
def test_config():
    """Provide access to test configuration."""
    return CONFIG


@pytest.fixture
def expected_values():
    """Provide access to expected values."""
    return EXPECTED


@pytest.fixture
def test_data():
    """Provide access to test data."""
    return TEST_DATA


@pytest.fixture
def messages():
    """Provide access to expected messages."""
    return MESSAGES
