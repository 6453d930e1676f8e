# ============================================================================
# File:       dbmanager/handlers/log_handler.py
# Purpose:    Writing log lines by level (DEBUG, INFO, ... CRITICAL)
# ============================================================================

import os
from datetime import datetime
from dbmanager.config.env import EnvLoader

LEVELS = {
    "DEBUG": 10,
    "INFO": 20,
    "SUCCESS": 25,
    "WARNING": 30,
    "ERROR": 40,
    "CRITICAL": 50,
}


class LogHandler:
    default_log_file_path = "data/logs/dbmanager.log"

    @staticmethod
    def log_file_path() -> str:
        return EnvLoader.get("LOG_FILE_PATH", LogHandler.default_log_file_path) or LogHandler.default_log_file_path

    @staticmethod
    def threshold() -> int:
        name = (EnvLoader.get("LOG_LEVEL", "info") or "info").strip().upper()
        return LEVELS.get(name, LEVELS["INFO"])

    @staticmethod
    def enabled(level: str) -> bool:
        return LEVELS.get((level or "").upper(), LEVELS["INFO"]) >= LogHandler.threshold()

    @staticmethod
    def _ensure_log_dir(path: str):
        try:
            os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        except OSError as e:
            print(f"Cannot create log directory: {e}")

    @staticmethod
    def _write(level, message):
        if not LogHandler.enabled(level):
            return
        path = LogHandler.log_file_path()
        try:
            LogHandler._ensure_log_dir(path)
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            log_entry = f"[{level.upper()}] {timestamp} - {message}\n"
            with open(path, "a", encoding="utf-8") as f:
                f.write(log_entry)
        except OSError as e:
            print(f"Logging failed: {e}")

    @staticmethod
    def debug(message):
        LogHandler._write("DEBUG", message)

    @staticmethod
    def info(message):
        LogHandler._write("INFO", message)

    @staticmethod
    def warning(message):
        LogHandler._write("WARNING", message)

    @staticmethod
    def success(message):
        LogHandler._write("SUCCESS", message)

    @staticmethod
    def error(message):
        LogHandler._write("ERROR", message)

    @staticmethod
    def critical(message):
        LogHandler._write("CRITICAL", message)
