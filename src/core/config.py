#!/usr/bin/env python3
"""
Centralized Configuration Manager

Provides a single source of truth for the demo configuration: Java
candidates, sample application settings, polling deadlines and logging.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, List

from core.env_loader import load_env_file, get_env_var, get_env_bool
from core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class JavaConfig:
    """SDKMAN Java candidates used by the demo, oldest first."""
    java_8: str = "8.0.462-librca"
    java_11: str = "11.0.28-librca"
    java_17: str = "17.0.16-librca"
    java_21: str = "21.0.8-librca"
    java_24: str = "24.0.2-librca"
    sdkman_dir: Optional[str] = None

    def all_versions(self) -> List[str]:
        """All candidates in install order."""
        return [self.java_8, self.java_11, self.java_17, self.java_21, self.java_24]


@dataclass
class AppConfig:
    """Sample application and how to build and reach it."""
    work_dir: str = "upgrade-example"
    repo_url: str = "https://github.com/dashaun/spring-petclinic.git"
    jar_name: str = "spring-petclinic-2.7.3-spring-boot.jar"
    build_command: str = "mvnd -q clean package -DskipTests"
    aot_build_command: str = "./mvnw -q -Pnative clean package -DskipTests"
    host: str = "localhost"
    port: int = 8080
    process_name: str = "java"
    required_tools: List[str] = field(default_factory=lambda: ["git", "mvnd", "advisor"])

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"


@dataclass
class PollingConfig:
    """Fixed poll intervals and deadlines (seconds)."""
    health_interval: float = 1.0
    health_timeout: float = 300.0
    process_interval: float = 0.1
    port_interval: float = 0.5
    stop_grace: float = 1.0
    stop_timeout: float = 60.0
    request_timeout: float = 5.0


@dataclass
class PresentationConfig:
    """Talking-point behaviour between demo steps."""
    clear_screen: bool = False
    step_pause: float = 0.0
    log_level: str = "INFO"
    verbose_logging: bool = False


@dataclass
class Config:
    """Master configuration container."""
    java: JavaConfig
    app: AppConfig
    polling: PollingConfig
    presentation: PresentationConfig


class ConfigManager:
    """Manages demo configuration with validation and environment loading."""

    def __init__(self, env_file_path: str = ".env", load_env: bool = True):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to .env file relative to project root
            load_env: Whether to read the .env file at all
        """
        self._config: Optional[Config] = None
        if load_env:
            load_env_file(env_file_path)

    def get_config(self, force_reload: bool = False) -> Config:
        """
        Get demo configuration.

        Args:
            force_reload: Force reloading configuration from environment

        Returns:
            Complete configuration object
        """
        if self._config is None or force_reload:
            self._config = self._build_config()
        return self._config

    def _build_config(self) -> Config:
        """Build configuration from environment variables."""
        defaults_java = JavaConfig()
        java_config = JavaConfig(
            java_8=get_env_var('JAVA_8_VERSION', defaults_java.java_8),
            java_11=get_env_var('JAVA_11_VERSION', defaults_java.java_11),
            java_17=get_env_var('JAVA_17_VERSION', defaults_java.java_17),
            java_21=get_env_var('JAVA_21_VERSION', defaults_java.java_21),
            java_24=get_env_var('JAVA_24_VERSION', defaults_java.java_24),
            sdkman_dir=get_env_var('SDKMAN_DIR')
        )

        defaults_app = AppConfig()
        tools = get_env_var('REQUIRED_TOOLS')
        app_config = AppConfig(
            work_dir=get_env_var('DEMO_WORK_DIR', defaults_app.work_dir),
            repo_url=get_env_var('DEMO_REPO_URL', defaults_app.repo_url),
            jar_name=get_env_var('DEMO_JAR_NAME', defaults_app.jar_name),
            build_command=get_env_var('BUILD_COMMAND', defaults_app.build_command),
            aot_build_command=get_env_var('AOT_BUILD_COMMAND', defaults_app.aot_build_command),
            host=get_env_var('APP_HOST', defaults_app.host),
            port=self._get_int('APP_PORT', defaults_app.port),
            process_name=get_env_var('APP_PROCESS_NAME', defaults_app.process_name),
            required_tools=[t.strip() for t in tools.split(',') if t.strip()] if tools else defaults_app.required_tools
        )

        polling_config = PollingConfig(
            health_interval=self._get_float('HEALTH_INTERVAL', 1.0),
            health_timeout=self._get_float('HEALTH_TIMEOUT', 300.0),
            process_interval=self._get_float('PROCESS_INTERVAL', 0.1),
            port_interval=self._get_float('PORT_INTERVAL', 0.5),
            stop_grace=self._get_float('STOP_GRACE', 1.0),
            stop_timeout=self._get_float('STOP_TIMEOUT', 60.0),
            request_timeout=self._get_float('REQUEST_TIMEOUT', 5.0)
        )

        presentation_config = PresentationConfig(
            clear_screen=get_env_bool('DEMO_CLEAR_SCREEN', False),
            step_pause=self._get_float('DEMO_STEP_PAUSE', 0.0),
            log_level=get_env_var('LOG_LEVEL', 'INFO').upper(),
            verbose_logging=get_env_bool('VERBOSE_LOGGING', False)
        )

        config = Config(
            java=java_config,
            app=app_config,
            polling=polling_config,
            presentation=presentation_config
        )

        self._validate_config(config)
        return config

    def _get_int(self, key: str, default: int) -> int:
        value = get_env_var(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(key, f"expected an integer, got '{value}'")

    def _get_float(self, key: str, default: float) -> float:
        value = get_env_var(key)
        if value is None:
            return default
        try:
            return float(value)
        except ValueError:
            raise ConfigurationError(key, f"expected a number, got '{value}'")

    def _validate_config(self, config: Config) -> None:
        """Validate configuration values."""
        errors = []

        if not 0 < config.app.port < 65536:
            errors.append("APP_PORT must be between 1 and 65535")

        if not config.app.jar_name.endswith('.jar'):
            errors.append("DEMO_JAR_NAME must name a .jar file")

        for name in ('health_interval', 'process_interval', 'port_interval',
                     'health_timeout', 'stop_timeout', 'request_timeout'):
            if getattr(config.polling, name) <= 0:
                errors.append(f"{name.upper()} must be greater than 0")

        if config.polling.stop_grace < 0 or config.presentation.step_pause < 0:
            errors.append("STOP_GRACE and DEMO_STEP_PAUSE cannot be negative")

        valid_log_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if config.presentation.log_level not in valid_log_levels:
            errors.append(f"LOG_LEVEL must be one of: {', '.join(valid_log_levels)}")

        if errors:
            raise ConfigurationError('config', '; '.join(errors))

        logger.debug("Configuration validation passed")

    def update_logging(self) -> None:
        """Configure logging based on current configuration."""
        config = self.get_config()

        numeric_level = getattr(logging, config.presentation.log_level)
        logging.getLogger().setLevel(numeric_level)

        if config.presentation.verbose_logging:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
        else:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

        for handler in logging.getLogger().handlers:
            handler.setLevel(numeric_level)
            formatter = logging.Formatter(format_str, datefmt='%Y-%m-%d %H:%M:%S')
            handler.setFormatter(formatter)


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager() -> ConfigManager:
    """Get global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager
