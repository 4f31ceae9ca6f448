import pytest

from core.demo_driver import build_default_plan
from core.exceptions import HealthCheckTimeoutError, MissingDependencyError
from core.models.metrics import MetricsSnapshot
from core.models.plan import LaunchMode, UpgradeStep


def _snapshot(java, boot, startup, memory):
    return MetricsSnapshot(java_version=java, spring_version=boot, startup_time_ms=startup, memory_used_bytes=memory)


def test_default_plan_matches_demo_sequence(demo_config):
    """Test the fixed upgrade sequence."""
    plan = build_default_plan(demo_config.java)

    assert len(plan) == 11
    assert [step.java_version for step in plan if step.java_version] == [
        "8.0.462-librca", "11.0.28-librca", "17.0.16-librca", "21.0.8-librca", "24.0.2-librca",
    ]
    assert plan[0].apply_upgrade is False
    assert all(step.apply_upgrade for step in plan[1:9])
    assert not plan[9].apply_upgrade and not plan[10].apply_upgrade
    assert {step.run_label for step in plan} == {"standard"}
    assert {step.launch_mode for step in plan} == {LaunchMode.STANDARD}


def test_run_step_order(demo_factory, event_log):
    """Test the per-step state machine order."""
    demo, _fakes, _printed = demo_factory([_snapshot("17.0.16", "3.0.0", 1000.0, 100)])
    step = UpgradeStep("Upgrade to Java 17", java_version="17.0.16-librca", apply_upgrade=True)

    demo.run_step(step)

    assert event_log.events == [
        "advisor", "use 17.0.16-librca", "start standard", "healthy", "capture", "stop java:8080",
    ]


def test_run_records_every_step_and_prints_final_summary(demo_factory, demo_config, event_log):
    """Test a full run with the default plan."""
    snapshots = [
        _snapshot("1.8.0_462", "2.7.3", 3000.0, 300),
        _snapshot("11.0.28", "2.7.3", 2700.0, 280),
        _snapshot("17.0.16", "2.7.3", 2400.0, 270),
        _snapshot("17.0.16", "3.0.13", 2200.0, 250),
        _snapshot("17.0.16", "3.1.12", 2100.0, 240),
        _snapshot("17.0.16", "3.2.12", 2000.0, 230),
        _snapshot("17.0.16", "3.3.13", 1900.0, 220),
        _snapshot("17.0.16", "3.4.7", 1800.0, 210),
        _snapshot("17.0.16", "3.5.4", 1700.0, 200),
        _snapshot("21.0.8", "3.5.4", 1500.0, 190),
        _snapshot("24.0.2", "3.5.4", 1400.0, 180),
    ]
    demo, fakes, printed = demo_factory(snapshots)

    recorder = demo.run()

    assert len(recorder) == 11
    assert event_log.events[:3] == ["install", "reset", f"clone {demo_config.app.repo_url}"]
    assert event_log.events.count("advisor") == 8
    assert event_log.events.count("stop java:8080") == 11
    assert fakes['shell'].checked == ["git", "mvnd", "advisor"]
    assert printed[-3] == "#### Final Validation Summary\n"
    final_rows = printed[-2].splitlines()[2:]
    assert len(final_rows) == 11
    assert final_rows[-1].split()[4] == "-53.3%"
    assert final_rows[-1].split()[6] == "-40.0%"


def test_capture_prints_table_after_each_capture(demo_factory):
    """Test the validation table is shown after capturing."""
    demo, _fakes, printed = demo_factory([_snapshot("17.0.1", "3.1.0", 1000.0, 204857600)])

    demo.capture_metrics("standard")

    assert "#### Application Validation Metrics\n" in printed
    table = printed[printed.index("#### Application Validation Metrics\n") + 1]
    assert len(table.splitlines()) == 3


def test_missing_dependency_stops_before_any_work(demo_factory, event_log):
    """Test that missing tools fail fast."""
    demo, _fakes, _printed = demo_factory([_snapshot("8", "2.7.3", 1.0, 1)], available=("git", "mvnd"))

    with pytest.raises(MissingDependencyError) as exc_info:
        demo.run()

    assert "advisor not found" in exc_info.value.message
    assert event_log.events == []


def test_failed_health_check_still_stops_application(demo_factory, event_log):
    """Test that the app is stopped when it never becomes healthy."""
    demo, fakes, _printed = demo_factory([_snapshot("8", "2.7.3", 1.0, 1)])
    fakes['actuator'].fail_health = True

    with pytest.raises(HealthCheckTimeoutError):
        demo.run_step(UpgradeStep("Baseline", java_version="8.0.462-librca"))

    assert event_log.events[-1] == "stop java:8080"
    assert "capture" not in event_log.events


def test_talking_point_pauses_and_clears(demo_factory, demo_config):
    """Test presenter pauses between steps."""
    demo_config.presentation.step_pause = 2.5
    demo_config.presentation.clear_screen = True
    demo, _fakes, printed = demo_factory([_snapshot("8", "2.7.3", 1.0, 1)])
    pauses = []
    demo._sleep = pauses.append

    demo.talking_point()

    assert pauses == [2.5]
    assert printed == ["\033[H\033[2J"]
