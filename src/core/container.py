#!/usr/bin/env python3
"""
Dependency Injection Container

Wires the demo collaborators (shell runner, SDKMAN, advisor, application
runner, actuator client, process controller) from configuration so
commands never instantiate them directly.
"""

import logging
from typing import Any, Callable, Dict, Optional, TypeVar
from functools import wraps

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Container:
    """Name-to-factory registry with singleton support."""

    def __init__(self):
        self._factories: Dict[str, Callable] = {}
        self._singletons: Dict[str, Any] = {}

    def register_singleton(self, service_name: str, factory: Callable[[], T]) -> None:
        """Register a service created once and reused."""
        self._factories[service_name] = singleton(factory)
        self._singletons.pop(service_name, None)

    def register_factory(self, service_name: str, factory: Callable[[], T]) -> None:
        """Register a service created anew on every get()."""
        self._factories[service_name] = factory

    def register_instance(self, service_name: str, instance: T) -> None:
        """Register a pre-built instance (tests use this to inject fakes)."""
        self._singletons[service_name] = instance

    def get(self, service_name: str) -> Any:
        """
        Get service instance by name.

        Raises:
            KeyError: If service is not registered
        """
        if service_name in self._singletons:
            return self._singletons[service_name]

        if service_name not in self._factories:
            raise KeyError(f"Service '{service_name}' not registered")

        factory = self._factories[service_name]
        instance = factory()
        if getattr(factory, '_is_singleton', False):
            self._singletons[service_name] = instance
            logger.debug(f"Created singleton instance for '{service_name}'")
        return instance

    def has(self, service_name: str) -> bool:
        return service_name in self._factories or service_name in self._singletons

    def clear(self) -> None:
        self._factories.clear()
        self._singletons.clear()


def singleton(factory_func: Callable[[], T]) -> Callable[[], T]:
    """Mark a factory function as singleton."""
    @wraps(factory_func)
    def wrapper():
        return factory_func()

    wrapper._is_singleton = True
    return wrapper


# Global container instance
_container: Optional[Container] = None


def get_container() -> Container:
    """Get global container instance."""
    global _container
    if _container is None:
        _container = Container()
        _setup_default_services(_container)
    return _container


def reset_container() -> None:
    """Reset global container (useful for testing)."""
    global _container
    if _container:
        _container.clear()
    _container = None


def _setup_default_services(container: Container) -> None:
    """Register the demo collaborators, all built from the shared config."""

    def create_config_manager():
        from core.config import get_config_manager
        return get_config_manager()

    def create_config():
        return container.get('config_manager').get_config()

    def create_shell():
        from core.shell import ShellRunner
        return ShellRunner()

    def create_sdkman():
        from integrations.sdkman import SdkmanClient
        config = container.get('config')
        return SdkmanClient(container.get('shell'), sdkman_dir=config.java.sdkman_dir)

    def create_advisor():
        from integrations.advisor import AdvisorClient
        return AdvisorClient(container.get('shell'))

    def create_app_runner():
        from core.app_runner import ApplicationRunner
        app = container.get('config').app
        return ApplicationRunner(
            container.get('shell'),
            jar_name=app.jar_name,
            build_command=app.build_command,
            aot_build_command=app.aot_build_command,
        )

    def create_actuator():
        from integrations.actuator_client import ActuatorClient
        config = container.get('config')
        return ActuatorClient(config.app.base_url, timeout=config.polling.request_timeout)

    def create_process_controller():
        from core.process_control import ProcessController
        config = container.get('config')
        polling = config.polling
        return ProcessController(
            host=config.app.host,
            process_interval=polling.process_interval,
            port_interval=polling.port_interval,
            grace_period=polling.stop_grace,
            timeout=polling.stop_timeout,
        )

    def create_workspace():
        from core.workspace import Workspace
        return Workspace(container.get('config').app.work_dir)

    def create_metrics_recorder():
        from core.metrics_recorder import MetricsRecorder
        return MetricsRecorder()

    def create_demo():
        from core.demo_driver import UpgradeDemo
        return UpgradeDemo(
            container.get('config'),
            shell=container.get('shell'),
            sdkman=container.get('sdkman'),
            advisor=container.get('advisor'),
            app_runner=container.get('app_runner'),
            actuator=container.get('actuator'),
            process_controller=container.get('process_controller'),
            workspace=container.get('workspace'),
            recorder=container.get('metrics_recorder'),
        )

    container.register_singleton('config_manager', create_config_manager)
    container.register_singleton('config', create_config)
    container.register_singleton('shell', create_shell)
    container.register_singleton('sdkman', create_sdkman)
    container.register_singleton('advisor', create_advisor)
    container.register_singleton('app_runner', create_app_runner)
    container.register_singleton('actuator', create_actuator)
    container.register_singleton('process_controller', create_process_controller)
    container.register_singleton('workspace', create_workspace)

    # Each demo gets its own recorder
    container.register_factory('metrics_recorder', create_metrics_recorder)
    container.register_factory('demo', create_demo)

    logger.debug("Default services registered in container")
