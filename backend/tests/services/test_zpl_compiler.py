"""Тесты генерации ZPL из шаблона и задания для принтера."""

import logging

import pytest

from labelkit.models.label_types import (
    ElementPosition,
    ElementType,
    LabelElement,
    LabelSize,
    LabelTemplate,
    PrintPayload,
)
from labelkit.services.label_size import create_default_elements, get_default_label_size
from labelkit.services.zpl_compiler import (
    PLACEHOLDER_DATAMATRIX,
    TemplateError,
    build_print_job,
    compile_template,
)

VALID_CODE = "010467004977480221JNlMVstBYYuQ91EE0692Wh0KGcGm6HpwZf+7aWtp/DaNgFU="
EAN13 = "4670049774802"


def make_template(elements=None, label_size=None) -> LabelTemplate:
    return LabelTemplate(
        id="tpl-1",
        owner_id="owner-1",
        name="Тестовый",
        elements=elements if elements is not None else create_default_elements(),
        label_size=label_size or get_default_label_size(),
    )


class TestCompileTemplate:
    """Тесты compile_template."""

    def test_default_template(self):
        """Шаблон по умолчанию: заголовок, пять элементов в порядке списка, конец."""
        zpl = compile_template(make_template())

        assert zpl == (
            "^XA^PW464^LL320^CI28"
            "^FO10,10^A0N,20,20^FDНазвание товара^FS"
            "^FO10,70^A0N,20,20^FDАртикул: 123456^FS"
            "^FO10,130^A0N,20,20^FDАртикул продавца: ^FS"
            "^FO10,165^A0N,20,20^FDART-001^FS"
            "^FO10,220^A0N,20,20^FDРазмер: 42^FS"
            f"^FO270,120^BXN,5,200^FD{PLACEHOLDER_DATAMATRIX}^FS"
            "^XZ"
        )

    def test_deterministic(self):
        template = make_template()
        assert compile_template(template) == compile_template(template)

    def test_no_visible_elements(self, caplog):
        """Без видимых элементов — только заголовок и конец, с предупреждением."""
        elements = create_default_elements()
        for element in elements:
            element.visible = False

        with caplog.at_level(logging.WARNING):
            zpl = compile_template(make_template(elements=elements))

        assert zpl == "^XA^PW464^LL320^CI28^XZ"
        assert "не содержит видимых элементов" in caplog.text

    def test_empty_elements(self):
        assert compile_template(make_template(elements=[])) == "^XA^PW464^LL320^CI28^XZ"

    def test_hidden_element_skipped(self):
        elements = create_default_elements()
        elements[0].visible = False

        zpl = compile_template(make_template(elements=elements))

        assert "Название товара" not in zpl
        assert "Артикул: 123456" in zpl

    def test_missing_label_size(self):
        template = make_template()
        template.label_size = None

        with pytest.raises(TemplateError):
            compile_template(template)

    def test_coordinates_rounded(self):
        element = LabelElement(
            id="name",
            type=ElementType.PRODUCT_NAME,
            position=ElementPosition(x=10.5, y=20.4),
        )

        zpl = compile_template(make_template(elements=[element]))

        assert "^FO11,20^A0N,20,20^FDНазвание товара^FS" in zpl

    def test_default_font_sizes(self):
        """Без font_size: название 20, остальные текстовые элементы 16."""
        elements = [
            LabelElement(id="a", type=ElementType.PRODUCT_NAME, position=ElementPosition(x=0, y=0)),
            LabelElement(id="b", type=ElementType.PRODUCT_SIZE, position=ElementPosition(x=0, y=50)),
        ]

        zpl = compile_template(make_template(elements=elements))

        assert "^FO0,0^A0N,20,20^FD" in zpl
        assert "^FO0,50^A0N,16,16^FDРазмер: 42^FS" in zpl

    def test_datamatrix_module_from_height(self):
        element = LabelElement(
            id="dm",
            type=ElementType.DATA_MATRIX,
            position=ElementPosition(x=300, y=100, width=8, height=8),
        )

        zpl = compile_template(make_template(elements=[element]))

        assert "^FO300,100^BXN,8,200^FD" in zpl

    def test_label_size_in_header(self):
        template = make_template(elements=[])
        template.label_size = LabelSize(width=799, height=480, width_mm=100, height_mm=60, dpi=203)

        assert compile_template(template).startswith("^XA^PW799^LL480^CI28")


class TestBuildPrintJob:
    """Тесты build_print_job."""

    def test_scanned_ean13(self):
        """Отсканирован EAN-13: печатаем его, контрольную цифру считает принтер."""
        zpl = build_print_job(PrintPayload(scanned_data=EAN13))

        assert zpl == "^XA^FO55,20^BY4^BEN,240,Y,N^FD467004977480^FS^XZ"

    def test_scanned_ean13_count(self):
        zpl = build_print_job(PrintPayload(scanned_data=EAN13, ean13_count=3))

        assert zpl.count("^BEN") == 3

    def test_datamatrix_with_product(self):
        payload = PrintPayload(
            scanned_data=VALID_CODE,
            product_name="Футболка",
            product_size="48",
            nm_id="123456",
            vendor_code="ART-1",
        )

        zpl = build_print_job(payload)

        assert zpl.count("^XA") == 1
        assert f"^BXN,5,200^FD{VALID_CODE}^FS" in zpl
        assert "^FO10,10^FDФутболка^FS" in zpl
        assert "^FDАртикул: 123456^FS" in zpl
        assert "^FO10,165^FDART-1^FS" in zpl
        assert "^FDРазмер: 48^FS" in zpl

    def test_datamatrix_with_embedded_ean13(self):
        """Код маркировки с GTIN: DataMatrix + запрошенное количество EAN-13."""
        payload = PrintPayload(scanned_data=VALID_CODE, data_matrix_count=2, ean13_count=1)

        zpl = build_print_job(payload)

        assert zpl.count("^BXN") == 2
        assert zpl.count("^BEN") == 1
        assert zpl.endswith("^FD467004977480^FS^XZ")

    def test_datamatrix_without_ean13_count(self):
        zpl = build_print_job(PrintPayload(scanned_data=VALID_CODE))

        assert zpl.count("^BXN") == 1
        assert "^BEN" not in zpl

    def test_diff_ean13(self):
        """Отдельный EAN-13 печатается первым, встроенный не дублируется."""
        payload = PrintPayload(
            scanned_data=VALID_CODE,
            diff_ean13="4600000000008",
            ean13_count=2,
        )

        zpl = build_print_job(payload)

        assert zpl.startswith("^XA^FO55,20^BY4^BEN,240,Y,N^FD460000000000^FS^XZ")
        assert zpl.count("^BEN") == 2
        assert zpl.count("^BXN") == 1
        assert "467004977480" not in zpl.replace(VALID_CODE, "")
