#------------------------------------------------------------
#                          errors.py
#        Exception types raised across the analyzer.

from typing import Optional


class AnalyzerError(Exception):
    pass


class ConfigurationError(AnalyzerError):
    pass


class SourceError(AnalyzerError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code
