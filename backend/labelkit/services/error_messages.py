"""
Дружелюбные сообщения об ошибках.

Вместо технических сообщений пользователь видит понятные подсказки.
"""


class FriendlyError:
    """Человекопонятная ошибка с подсказкой."""

    def __init__(self, message: str, hint: str | None = None, details: str | None = None):
        self.message = message
        self.hint = hint
        self.details = details  # Техническая инфа для поддержки

    def to_dict(self) -> dict:
        result = {"message": self.message}
        if self.hint:
            result["hint"] = self.hint
        if self.details:
            result["details"] = self.details
        return result


# === Предпросмотр ===

NO_PREVIEW_DATA = FriendlyError(
    message="Нет данных для запроса",
    hint="Передайте ZPL код (zplString) или шаблон (template) вместе с dpi",
)

PREVIEW_FAILED = FriendlyError(
    message="Не удалось получить предпросмотр",
    hint="Сервис предпросмотра недоступен. Попробуйте ещё раз через минуту",
)

INVALID_PREVIEW_REQUEST = FriendlyError(
    message="Неверный формат данных. Ожидается либо zplString + dpi, либо template + dpi",
)

CUSTOM_TEMPLATE_NOT_FOUND = FriendlyError(
    message="Пользовательский шаблон не найден",
    hint="Создайте шаблон в редакторе этикеток",
)


# === Шаблоны ===

TEMPLATE_NOT_FOUND = FriendlyError(
    message="Шаблон этикетки не найден",
)

INVALID_LABEL_SIZE = FriendlyError(
    message="Размер этикетки указан неверно",
    hint="Ширина, высота и DPI должны быть больше нуля",
)


# === Документы и печать ===

NO_SCAN_DATA = FriendlyError(
    message="Отсутствуют данные для генерации",
    hint="Отсканируйте код маркировки ещё раз",
)

PRODUCT_NOT_FOUND = FriendlyError(
    message="Продукт не найден",
    hint="Обновите каталог товаров из личного кабинета Wildberries",
)

BARCODE_REQUIRED = FriendlyError(
    message="Требуются параметры `barcode` или `code`",
)

PRINTER_UNAVAILABLE = FriendlyError(
    message="Принтер этикеток недоступен",
    hint="Проверьте, что принтер включён и подключён к сети",
)

PRINTER_NOT_CONFIGURED = FriendlyError(
    message="Принтер этикеток не настроен",
    hint="Укажите PRINTER_HOST в .env",
)


# === Авторизация ===

UNAUTHORIZED = FriendlyError(
    message="Необходимо войти в систему",
)


# === Серверные ошибки ===

INTERNAL_ERROR = FriendlyError(
    message="Внутренняя ошибка сервера",
    hint="Попробуйте ещё раз. Если ошибка повторяется, обратитесь в поддержку",
)
