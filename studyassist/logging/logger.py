import logging
import sys


class Log:
    """Process-wide logger; keyword fields are rendered as ``key=value`` pairs."""

    _logger: logging.Logger = logging.getLogger("studyassist")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **fields: object) -> None:
        """Log at INFO with fields appended."""
        cls._logger.info(cls._render(message, fields))

    @classmethod
    def error(cls, message: str, **fields: object) -> None:
        """Log at ERROR with fields appended."""
        cls._logger.error(cls._render(message, fields))

    @classmethod
    def warning(cls, message: str, **fields: object) -> None:
        """Log at WARNING with fields appended."""
        cls._logger.warning(cls._render(message, fields))

    @classmethod
    def debug(cls, message: str, **fields: object) -> None:
        """Log at DEBUG with fields appended."""
        cls._logger.debug(cls._render(message, fields))

    @staticmethod
    def _render(message: str, fields: dict[str, object]) -> str:
        if not fields:
            return message
        pairs = " ".join(f"{key}={value!r}" for key, value in fields.items())
        return f"{message} {pairs}"
