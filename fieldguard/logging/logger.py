import logging
import sys

_CONTEXT_KEYS = ("field", "rule", "table", "column", "path")


class _ContextFormatter(logging.Formatter):
    """Appends known ``extra`` context as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = [
            f"{key}={getattr(record, key)}" for key in _CONTEXT_KEYS if hasattr(record, key)
        ]
        if context:
            line = f"{line} {' '.join(context)}"
        return line


class Log:
    """Centralized logging for the validation engine.

    Context keyword arguments (``field``, ``rule``, ``table``, ``column``,
    ``path``) are attached to the record and rendered after the message.
    """

    _logger: logging.Logger = logging.getLogger("fieldguard")

    @classmethod
    def configure(cls, log_level: str, app_env: str = "dev") -> None:
        """Set the level and attach one stdout handler.

        Outside ``dev`` the logger name is included so fieldguard lines can be
        told apart in a shared application log.
        """
        cls._logger.setLevel(log_level.upper())
        if cls._logger.handlers:
            return
        fmt = "%(asctime)s [%(levelname)s] %(message)s"
        if app_env != "dev":
            fmt = "%(asctime)s %(name)s [%(levelname)s] %(message)s"
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_ContextFormatter(fmt))
        cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        """Log an info message."""
        cls._logger.info(message, extra=context)

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        """Log an error message."""
        cls._logger.error(message, extra=context)

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        """Log a warning message."""
        cls._logger.warning(message, extra=context)

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        """Log a debug message."""
        cls._logger.debug(message, extra=context)
