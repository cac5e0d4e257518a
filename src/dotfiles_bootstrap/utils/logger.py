"""Universal logging configuration for the dotfiles bootstrapper."""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Dict, Any

import yaml
from rich.logging import RichHandler
from rich.console import Console


class OperatorLineFilter(logging.Filter):
    """Drops records the status reporter has already shown to the operator."""

    def filter(self, record: logging.LogRecord) -> bool:
        return not getattr(record, "operator_line", False)


class LoggerManager:
    """Manages application-wide logging configuration."""

    _instance: Optional['LoggerManager'] = None
    _initialized: bool = False

    def __new__(cls) -> 'LoggerManager':
        """Singleton pattern to ensure single logger manager instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize logger manager (singleton safe)."""
        if not self._initialized:
            self.config_dir: Optional[Path] = None
            self.debug_mode: bool = False
            self.console: Optional[Console] = None
            self._loggers: Dict[str, logging.Logger] = {}
            LoggerManager._initialized = True

    def initialize(self, config_dir: Path, debug: bool = False,
                   console: Optional[Console] = None,
                   logs_dir: Path = Path("logs")) -> None:
        """Initialize the logging system.

        Args:
            config_dir: Configuration directory path
            debug: Enable debug mode
            console: Rich console instance for consistent output
            logs_dir: Directory receiving the rotating log file
        """
        self.config_dir = config_dir
        self.debug_mode = debug
        self.console = console or Console(stderr=True)

        logs_dir.mkdir(parents=True, exist_ok=True)

        self._configure_root_logger(logs_dir)

        logger = self.get_logger("dotfiles_bootstrap.logger")
        logger.debug(f"Logging system initialized (log directory: {logs_dir})")
        if debug:
            logger.debug("Debug mode enabled")

    def _load_logging_config(self) -> Dict[str, Any]:
        """Load logging configuration from YAML file.

        Returns:
            Logging configuration dictionary
        """
        config = self._get_default_config()
        if self.config_dir is None:
            return config

        config_file = self.config_dir / "logging.yaml"
        if config_file.exists():
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    overrides = yaml.safe_load(f) or {}
                for key, value in overrides.items():
                    # format and modules are merged key by key
                    if isinstance(value, dict) and isinstance(config.get(key), dict):
                        config[key].update(value)
                    else:
                        config[key] = value
            except (OSError, yaml.YAMLError) as e:
                # Fallback to default if config file is invalid
                print(f"Warning: Failed to load logging config, using default: {e}")

        return config

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default logging configuration.

        Returns:
            Default logging configuration dictionary
        """
        return {
            'level': 'DEBUG',
            'console_level': 'DEBUG' if self.debug_mode else 'ERROR',
            'file_level': 'DEBUG',
            'format': {
                'console': '%(message)s',
                'file': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            },
            'modules': {
                'dotfiles_bootstrap.modules': 'DEBUG' if self.debug_mode else 'INFO',
                'dotfiles_bootstrap.utils': 'DEBUG' if self.debug_mode else 'INFO'
            }
        }

    def _configure_root_logger(self, logs_dir: Path) -> None:
        """Configure the root logger with handlers.

        Args:
            logs_dir: Directory for log files
        """
        config = self._load_logging_config()

        # Clear existing handlers
        root_logger = logging.getLogger()
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            handler.close()

        root_logger.setLevel(getattr(logging, config['level']))

        # Console handler with Rich; lines already printed by the reporter are filtered out
        console_handler = RichHandler(
            console=self.console,
            rich_tracebacks=True,
            markup=False,
            show_path=self.debug_mode,
            show_time=False,
        )
        console_handler.setLevel(getattr(logging, config['console_level']))
        console_handler.setFormatter(logging.Formatter(config['format']['console']))
        console_handler.addFilter(OperatorLineFilter())
        root_logger.addHandler(console_handler)

        # File handler for persistent logging
        log_file = logs_dir / "dotfiles_bootstrap.log"
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10*1024*1024,  # 10MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setLevel(getattr(logging, config['file_level']))
        file_handler.setFormatter(logging.Formatter(config['format']['file']))
        root_logger.addHandler(file_handler)

        for module_name, level in config.get('modules', {}).items():
            logging.getLogger(module_name).setLevel(getattr(logging, level))

    def get_logger(self, name: str) -> logging.Logger:
        """Get a logger instance for the specified name.

        Args:
            name: Logger name (typically module name)

        Returns:
            Logger instance
        """
        if name not in self._loggers:
            self._loggers[name] = logging.getLogger(name)
        return self._loggers[name]


# Global logger manager instance
logger_manager = LoggerManager()


def init_logging(config_dir: Path, debug: bool = False,
                 console: Optional[Console] = None,
                 logs_dir: Path = Path("logs")) -> None:
    """Initialize the logging system.

    Args:
        config_dir: Configuration directory path
        debug: Enable debug mode
        console: Rich console instance
        logs_dir: Directory for the log file
    """
    logger_manager.initialize(config_dir, debug, console, logs_dir)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logger_manager.get_logger(name)


def get_module_logger(module_name: str) -> logging.Logger:
    """Get a module-specific logger.

    Args:
        module_name: Module name

    Returns:
        Module logger
    """
    return get_logger(f"dotfiles_bootstrap.modules.{module_name}")


def get_utils_logger(util_name: str) -> logging.Logger:
    """Get a utility-specific logger.

    Args:
        util_name: Utility name

    Returns:
        Utils logger
    """
    return get_logger(f"dotfiles_bootstrap.utils.{util_name}")
