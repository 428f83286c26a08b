import logging
import sys
from functools import lru_cache
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Directorio de logs (backend/logs/)
_LOG_DIR = Path(__file__).parent.parent.parent / "logs"

# Símbolos para visualizar el flujo
FLOW_SYMBOLS = {
    "start": "╔",
    "node": "║",
    "arrow": "→",
    "end": "╚",
    "route": "◆",
}


def _configure_root_logger(level: LogLevel, log_to_file: bool = True) -> None:
    """Configura el logger raíz con handlers de consola y archivo."""
    root = logging.getLogger()
    if root.handlers:
        return

    # Silenciar loggers ruidosos de terceros
    noisy_loggers = [
        "watchfiles",
        "watchfiles.main",
        "httpx",
        "httpcore",
        "tzlocal",
        "dateparser",
    ]
    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    formatter = logging.Formatter(_LOG_FORMAT, _DATE_FORMAT)

    # Handler de consola (stdout)
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    # Handler de archivo con rotación diaria (mantiene 7 días)
    if log_to_file:
        try:
            _LOG_DIR.mkdir(exist_ok=True)
            file_handler = TimedRotatingFileHandler(
                _LOG_DIR / "milestone_scheduler.log",
                when="midnight",
                interval=1,
                backupCount=7,
                encoding="utf-8",
            )
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError:
            # Si falla la creación del archivo, solo usar consola
            pass

    root.setLevel(level)


@lru_cache(maxsize=128)
def get_logger(name: str) -> logging.Logger:
    """
    Retorna un logger configurado para el módulo especificado.

    Uso:
        from app.core.logging import get_logger
        logger = get_logger(__name__)
        logger.info("Mensaje")
    """
    from app.core.config import settings

    _configure_root_logger(settings.log_level, settings.log_to_file)
    return logging.getLogger(name)


class TimelineLogger:
    """Logger especializado para trazabilidad de sesiones de timeline."""

    def __init__(self, scope: str):
        self._logger = get_logger(f"timeline.{scope}")
        self.scope = scope

    def session_loaded(self, project_id: str, milestones: int, generated: bool) -> None:
        """Log carga de una sesión de proyecto."""
        origin = "generated from catalog" if generated else "provided by caller"
        self._logger.info("=" * 70)
        self._logger.info(f"{FLOW_SYMBOLS['start']}══ TIMELINE LOADED ════════════════════════════════════════════════")
        self._logger.info(f"{FLOW_SYMBOLS['node']} Project: {project_id}")
        self._logger.info(f"{FLOW_SYMBOLS['node']} Milestones: {milestones} ({origin})")
        self._logger.info("=" * 70)

    def edit(self, project_id: str, operation: str, milestone_id: str | None = None) -> None:
        target = milestone_id or "-"
        self._logger.debug(
            f"{FLOW_SYMBOLS['node']} [{operation.upper()}] {FLOW_SYMBOLS['arrow']} "
            f"project={project_id} milestone={target}"
        )

    def persistence_notified(self, project_id: str, milestones: int) -> None:
        """Log notificación al callback de persistencia."""
        self._logger.info(
            f"{FLOW_SYMBOLS['route']} PERSIST: project={project_id} | {milestones} milestones"
        )

    def error(self, operation: str, error: Exception) -> None:
        self._logger.error(
            f"{FLOW_SYMBOLS['node']} [{operation.upper()}] ERROR: {type(error).__name__}: {error}",
            exc_info=True,
        )

    def debug(self, operation: str, message: str) -> None:
        self._logger.debug(f"{FLOW_SYMBOLS['node']} [{operation}] {message}")
