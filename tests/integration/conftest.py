import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pytest
import requests

PROJECT_ROOT = Path(__file__).resolve().parents[2]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from core.config import Config, JavaConfig, AppConfig, PollingConfig, PresentationConfig  # noqa: E402
from core.models.metrics import MetricsSnapshot  # noqa: E402


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Optional[Dict[str, Any]] = None) -> None:
        self.status_code = status_code
        self._payload = payload if payload is not None else {}

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self) -> Dict[str, Any]:
        return self._payload

    def raise_for_status(self) -> None:
        if not self.ok:
            raise requests.exceptions.HTTPError(f"HTTP {self.status_code}")


class FakeSession:
    """Serves queued responses per URL; an exception in the queue is raised."""

    def __init__(self) -> None:
        self.headers: Dict[str, str] = {}
        self.routes: Dict[str, List[Any]] = {}
        self.requested: List[str] = []

    def add(self, url: str, *responses: Any) -> None:
        self.routes.setdefault(url, []).extend(responses)

    def get(self, url: str, timeout: float = None) -> FakeResponse:
        self.requested.append(url)
        queue = self.routes.get(url)
        if not queue:
            raise requests.exceptions.ConnectionError(f"Connection refused: {url}")
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeShell:
    def __init__(self, available: Sequence[str] = ("git", "mvnd", "advisor")) -> None:
        self.available = set(available)
        self.checked: List[str] = []
        self.cwd = Path(".")

    def which(self, tool: str) -> Optional[str]:
        return f"/usr/bin/{tool}" if tool in self.available else None

    def check_dependencies(self, tools: Sequence[str]) -> None:
        from core.exceptions import MissingDependencyError
        for tool in tools:
            self.checked.append(tool)
            if tool not in self.available:
                raise MissingDependencyError(tool)


class EventLog:
    def __init__(self) -> None:
        self.events: List[str] = []

    def add(self, event: str) -> None:
        self.events.append(event)


class FakeSdkman:
    def __init__(self, log: EventLog) -> None:
        self.log = log
        self.installed: List[str] = []

    def install_all(self, versions: Sequence[str]) -> None:
        self.installed.extend(versions)
        self.log.add("install")

    def use(self, version: str) -> None:
        self.log.add(f"use {version}")


class FakeAdvisor:
    def __init__(self, log: EventLog) -> None:
        self.log = log

    def apply_next_upgrade(self) -> None:
        self.log.add("advisor")


class FakeAppRunner:
    def __init__(self, log: EventLog) -> None:
        self.log = log

    def start(self, mode) -> None:
        self.log.add(f"start {mode.value}")

    def java_version(self) -> str:
        return 'openjdk version "17.0.16"'


class FakeActuator:
    """Returns the queued snapshots in order, repeating the last one."""

    def __init__(self, log: EventLog, snapshots: List[MetricsSnapshot]) -> None:
        self.log = log
        self.snapshots = list(snapshots)
        self.fail_health = False

    def wait_until_healthy(self, policy, sleep=None) -> None:
        self.log.add("healthy")
        if self.fail_health:
            from core.exceptions import HealthCheckTimeoutError
            raise HealthCheckTimeoutError("health", policy.timeout, 1)

    def snapshot(self) -> MetricsSnapshot:
        self.log.add("capture")
        return self.snapshots.pop(0) if len(self.snapshots) > 1 else self.snapshots[0]


class FakeProcessController:
    def __init__(self, log: EventLog) -> None:
        self.log = log

    def stop(self, name: str, port: int) -> int:
        self.log.add(f"stop {name}:{port}")
        return 1


class FakeWorkspace:
    def __init__(self, log: EventLog) -> None:
        self.log = log

    def reset(self) -> None:
        self.log.add("reset")

    def clone(self, shell, repo_url: str) -> None:
        self.log.add(f"clone {repo_url}")


@pytest.fixture
def demo_config() -> Config:
    return Config(
        java=JavaConfig(),
        app=AppConfig(),
        polling=PollingConfig(health_interval=0.01, health_timeout=1.0),
        presentation=PresentationConfig(),
    )


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def event_log() -> EventLog:
    return EventLog()


@pytest.fixture
def demo_factory(demo_config, event_log):
    """Build an UpgradeDemo wired to fakes; returns (demo, fakes, printed lines)."""
    from core.demo_driver import UpgradeDemo

    def _factory(snapshots: List[MetricsSnapshot], available: Sequence[str] = ("git", "mvnd", "advisor")):
        printed: List[str] = []
        fakes = {
            'shell': FakeShell(available),
            'sdkman': FakeSdkman(event_log),
            'advisor': FakeAdvisor(event_log),
            'app_runner': FakeAppRunner(event_log),
            'actuator': FakeActuator(event_log, snapshots),
            'process_controller': FakeProcessController(event_log),
            'workspace': FakeWorkspace(event_log),
        }
        demo = UpgradeDemo(demo_config, out=printed.append, sleep=lambda _: None, **fakes)
        return demo, fakes, printed

    return _factory
