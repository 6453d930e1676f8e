# ========================================================================
# File:       dbmanager/handlers/error_handler.py
# Purpose:    Formats and prepares errors for the ErrorManager
# ========================================================================

import traceback


class ErrorHandler:
    @staticmethod
    def format_error(error: Exception) -> str:
        return f"{type(error).__name__}: {str(error)}"

    @staticmethod
    def get_traceback(error: Exception) -> str:
        # works outside of an except block too (callbacks, futures)
        return "".join(traceback.format_exception(type(error), error, error.__traceback__))
