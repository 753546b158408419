"""Тесты нормализации ввода со сканера."""

import pytest

from labelkit.services.scan_input import (
    LAYOUT_MAP,
    classify_scan,
    convert_layout,
    extract_barcode,
    is_valid_ean13,
)

VALID_CODE = "010467004977480221JNlMVstBYYuQ91EE0692Wh0KGcGm6HpwZf+7aWtp/DaNgFU="


class TestConvertLayout:
    def test_russian_layout_to_latin(self):
        """Код, набранный при русской раскладке, возвращается в латиницу."""
        assert convert_layout("йцукен") == "qwerty"
        assert convert_layout("ЙЦУКЕН") == "QWERTY"

    def test_punctuation_keys(self):
        assert convert_layout("хъжэбю") == "[];',."

    def test_digits_and_latin_untouched(self):
        assert convert_layout(VALID_CODE) == VALID_CODE

    def test_mixed(self):
        assert convert_layout("0104600000000008215Фи") == "0104600000000008215Ab"

    def test_every_mapped_char_is_single_ascii(self):
        for source, target in LAYOUT_MAP.items():
            assert len(source) == 1
            assert len(target) == 1 and target.isascii()


class TestClassifyScan:
    def test_marking_code_with_gtin(self):
        result = classify_scan(VALID_CODE)

        assert result is not None
        assert result.canonical_code == VALID_CODE
        assert result.ean13_candidate == "4670049774802"

    def test_strips_whitespace(self):
        result = classify_scan(f"  {VALID_CODE}\n")

        assert result.canonical_code == VALID_CODE

    def test_too_short(self):
        """Меньше 17 символов — не код маркировки."""
        assert classify_scan("0104670049774802") is None
        assert classify_scan("") is None
        assert classify_scan("   ") is None

    def test_any_prefix(self):
        """GTIN берётся по позиции, префикс не проверяется."""
        result = classify_scan("abc0123456789012junk")

        assert result.ean13_candidate == "0123456789012"

    def test_fifteen_chars(self):
        assert classify_scan("abc012345678901") is None

    def test_minimum_length(self):
        result = classify_scan("01046700497748021")

        assert result.ean13_candidate == "4670049774802"

    def test_no_digits_at_gtin_position(self):
        result = classify_scan("ABCDEFGHIJKLMNOPQRSTUVWXYZ")

        assert result is not None
        assert result.ean13_candidate is None

    @pytest.mark.parametrize("digit", ["٣", "３"])
    def test_non_ascii_digits_rejected(self, digit):
        code = "010" + digit * 13 + "21ABC"

        assert classify_scan(code).ean13_candidate is None


class TestEan13:
    def test_valid_checksum(self):
        assert is_valid_ean13("4670049774802") is True
        assert is_valid_ean13("4600000000008") is True

    def test_invalid_checksum(self):
        assert is_valid_ean13("4670049774803") is False

    def test_wrong_length(self):
        assert is_valid_ean13("467004977480") is False
        assert is_valid_ean13("46700497748021") is False


class TestExtractBarcode:
    def test_plain_digits(self):
        assert extract_barcode("4670049774802") == "4670049774802"

    def test_marking_code(self):
        assert extract_barcode("0104670049774802abc") == "4670049774802"

    def test_marking_code_without_letters(self):
        assert extract_barcode("0104670049774802") == "4670049774802"

    def test_unknown(self):
        assert extract_barcode("ART-001") == "ART-001"
