"""
Исключения для домена Layout.

Ядро вывода раскладки почти ничего не бросает: пустой список = no-op.
Ошибки возникают на границах: разбор форматов, файлы, пресеты.
"""


class LayoutError(Exception):
    """Базовое исключение для ошибок домена Layout."""

    def __init__(self, message: str, component: str = None, original_error: Exception = None):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Layout Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class EmptyLayoutError(LayoutError):
    """Операция не определена для пустого набора клавиш (например, bounding box)."""
    pass


class LayoutParseError(LayoutError):
    """Не удалось разобрать внешний формат раскладки."""
    pass


class LayoutValidationError(LayoutError):
    """Геометрия клавиши некорректна (нулевой размер, NaN и т.п.)."""
    pass


class LayoutConfigurationError(LayoutError):
    """Ошибка конфигурации домена Layout."""
    pass


class PresetNotFoundError(LayoutError):
    """Пресет с таким именем не найден."""
    pass


class LayoutFileSystemError(LayoutError):
    """Ошибка файловой системы в домене Layout."""
    pass


class LayoutFileNotFoundError(LayoutFileSystemError):
    """Файл не найден."""
    pass


class LayoutFileWriteError(LayoutFileSystemError):
    """Ошибка чтения/записи файла."""
    pass
