"""Exceptions raised while turning a keyword CSV into a page."""


class KeywordsPageError(Exception):
    """Base class; anything raised from here ends the run."""


class ConfigError(KeywordsPageError):
    pass


class InputFileError(KeywordsPageError):
    pass


class CsvParseError(KeywordsPageError):
    def __init__(self, message: str, line: int | None = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class RenderError(KeywordsPageError):
    pass
