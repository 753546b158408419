"""
Нормализация ввода со сканера.

Сканер эмулирует клавиатуру: при русской раскладке в ОС код маркировки
приходит кириллицей. Перекладываем символы обратно на латинскую раскладку
и достаём из кода EAN-13 для дубликата этикетки.
"""

import re

from labelkit.models.label_types import ScanClassification

# ЙЦУКЕН -> QWERTY (по физическим клавишам)
LAYOUT_MAP: dict[str, str] = {
    "й": "q", "ц": "w", "у": "e", "к": "r", "е": "t", "н": "y", "г": "u", "ш": "i", "щ": "o", "з": "p",
    "х": "[", "ъ": "]", "ф": "a", "ы": "s", "в": "d", "а": "f", "п": "g", "р": "h", "о": "j", "л": "k",
    "д": "l", "ж": ";", "э": "'", "я": "z", "ч": "x", "с": "c", "м": "v", "и": "b", "т": "n", "ь": "m",
    "б": ",", "ю": ".", "Ё": "~", "ё": "`",
    # Заглавные буквы
    "Й": "Q", "Ц": "W", "У": "E", "К": "R", "Е": "T", "Н": "Y", "Г": "U", "Ш": "I", "Щ": "O", "З": "P",
    "Х": "{", "Ъ": "}", "Ф": "A", "Ы": "S", "В": "D", "А": "F", "П": "G", "Р": "H", "О": "J", "Л": "K",
    "Д": "L", "Ж": ":", "Э": '"', "Я": "Z", "Ч": "X", "С": "C", "М": "V", "И": "B", "Т": "N", "Ь": "M",
    "Б": "<", "Ю": ">",
}

_LAYOUT_TABLE = str.maketrans(LAYOUT_MAP)

# EAN-13 внутри кода маркировки: после "010" идут 13 цифр GTIN
EAN13_START = 3
EAN13_END = 16
MIN_SCAN_LENGTH = EAN13_END + 1

EAN13_RE = re.compile(r"\d{13}", re.ASCII)
_GTIN_WITH_TAIL_RE = re.compile(r"010(\d+)[a-zA-Z]", re.ASCII)
_GTIN_RE = re.compile(r"010(\d+)", re.ASCII)


def convert_layout(text: str) -> str:
    """Заменить кириллицу на символы латинской раскладки с учётом регистра."""
    return text.translate(_LAYOUT_TABLE)


def classify_scan(raw: str) -> ScanClassification | None:
    """
    Разобрать строку сканирования.

    Args:
        raw: Содержимое поля ввода после нормализации раскладки

    Returns:
        ScanClassification или None, если код слишком короткий для дубликата
        (нужно минимум 3 + 13 символов и хотя бы один после)
    """
    code = raw.strip()
    if len(code) < MIN_SCAN_LENGTH:
        return None

    candidate = code[EAN13_START:EAN13_END]
    if not EAN13_RE.fullmatch(candidate):
        return ScanClassification(canonical_code=code)

    return ScanClassification(canonical_code=code, ean13_candidate=candidate)


def is_valid_ean13(barcode: str) -> bool:
    """Проверить формат и контрольную цифру EAN-13."""
    if not EAN13_RE.fullmatch(barcode):
        return False

    total = 0
    for i, digit in enumerate(barcode[:12]):
        total += int(digit) if i % 2 == 0 else int(digit) * 3
    check = (10 - total % 10) % 10
    return check == int(barcode[12])


def extract_barcode(scanned: str) -> str:
    """
    Извлечь цифры штрихкода из отсканированной строки.

    - только цифры: это и есть штрихкод
    - код маркировки "010<цифры><буква>...": цифры GTIN
    - ничего не подошло: строка как есть
    """
    if scanned.isascii() and scanned.isdigit():
        return scanned

    match = _GTIN_WITH_TAIL_RE.search(scanned) or _GTIN_RE.search(scanned)
    if match:
        return match.group(1)

    return scanned
