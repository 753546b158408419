"""
API генерации PDF дубликата этикетки.

POST — PDF для печати из браузера/станции сканирования.
GET ?barcode= — название и размер товара для подписи.
"""

import logging
import time

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse, Response

from labelkit.api.dependencies import get_document_generator, get_product_repository
from labelkit.models.schemas import PrintRequest
from labelkit.repositories import ProductRepository
from labelkit.services.document_generator import DocumentGenerator
from labelkit.services.error_messages import INTERNAL_ERROR, NO_SCAN_DATA, PRODUCT_NOT_FOUND
from labelkit.services.scan_input import extract_barcode

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/generate-pdf", tags=["Documents"])


@router.post("")
async def generate_pdf(
    body: PrintRequest,
    generator: DocumentGenerator = Depends(get_document_generator),
) -> Response:
    """
    Сгенерировать PDF 58x40 мм.

    13 цифр — EAN-13, иначе DataMatrix с названием и размером товара.
    """
    if not body.scanned_data:
        return JSONResponse(
            {"success": False, "error": NO_SCAN_DATA.message},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    payload = body.to_payload()
    try:
        pdf_bytes = generator.generate(
            payload.scanned_data,
            product_name=payload.product_name,
            product_size=payload.product_size,
            options=payload.options,
        )
    except ValueError as e:
        logger.warning(f"[PDF] Не удалось сгенерировать документ: {e}")
        return JSONResponse(
            {"success": False, "error": str(e)},
            status_code=status.HTTP_400_BAD_REQUEST,
        )
    except Exception as e:
        logger.exception(f"[PDF] Ошибка генерации PDF: {e}")
        return JSONResponse(
            {"success": False, "error": INTERNAL_ERROR.message},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="barcode-{int(time.time() * 1000)}.pdf"'
        },
    )


@router.get("")
async def get_product_for_label(
    barcode: str | None = Query(default=None),
    products: ProductRepository = Depends(get_product_repository),
) -> JSONResponse:
    """Найти товар по баркоду: название и размер, соответствующий баркоду."""
    if not barcode:
        return JSONResponse(
            {"success": False, "error": "barcode is required"},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    barcode = extract_barcode(barcode)
    card = await products.find_by_barcode(barcode)
    if card is None:
        return JSONResponse(
            {"success": False, "error": PRODUCT_NOT_FOUND.message},
            status_code=status.HTTP_404_NOT_FOUND,
        )

    info = card.to_product_info(barcode)
    return JSONResponse({"success": True, "product": {"title": info.title, "size": info.size}})
