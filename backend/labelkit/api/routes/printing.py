"""
API прямой печати на сетевой принтер этикеток.

POST — собрать ZPL задание по сканированию и отправить на принтер.
GET ?barcode= — данные товара для этикетки DataMatrix.
GET ?code= — сканировался ли код раньше (контроль повторной печати).
"""

import logging

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from labelkit.api.dependencies import get_product_repository, get_scan_history
from labelkit.config import get_settings
from labelkit.models.schemas import PrintRequest
from labelkit.repositories import ProductRepository, ScanHistoryRepository
from labelkit.services.error_messages import (
    BARCODE_REQUIRED,
    NO_SCAN_DATA,
    PRINTER_NOT_CONFIGURED,
    PRINTER_UNAVAILABLE,
    PRODUCT_NOT_FOUND,
)
from labelkit.services.raw_printer import PrinterError, send_zpl
from labelkit.services.scan_input import extract_barcode
from labelkit.services.zpl_compiler import build_print_job

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/print", tags=["Print"])


@router.post("")
async def print_labels(
    body: PrintRequest,
    history: ScanHistoryRepository = Depends(get_scan_history),
) -> JSONResponse:
    """Напечатать этикетки по отсканированному коду."""
    if not body.scanned_data:
        return JSONResponse(
            {"success": False, "error": NO_SCAN_DATA.message},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    settings = get_settings()
    if not settings.printer_host:
        logger.error("[PRINT] PRINTER_HOST не задан")
        return JSONResponse(
            {"success": False, "error": PRINTER_NOT_CONFIGURED.message},
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    payload = body.to_payload()
    await history.record(payload.scanned_data)

    zpl = build_print_job(payload)

    try:
        await send_zpl(
            settings.printer_host,
            zpl,
            port=settings.printer_port,
            timeout=settings.printer_timeout,
        )
    except PrinterError as e:
        logger.error(f"[PRINT] {e}")
        return JSONResponse(
            {"success": False, "error": PRINTER_UNAVAILABLE.message},
            status_code=status.HTTP_502_BAD_GATEWAY,
        )

    return JSONResponse({"success": True})


@router.get("")
async def lookup(
    barcode: str | None = Query(default=None),
    code: str | None = Query(default=None),
    products: ProductRepository = Depends(get_product_repository),
    history: ScanHistoryRepository = Depends(get_scan_history),
) -> JSONResponse:
    """Данные товара по баркоду или история сканирования кода."""
    if barcode:
        barcode = extract_barcode(barcode)
        card = await products.find_by_barcode(barcode)
        if card is None:
            return JSONResponse(
                {"success": False, "error": PRODUCT_NOT_FOUND.message},
                status_code=status.HTTP_404_NOT_FOUND,
            )
        info = card.to_product_info(barcode)
        return JSONResponse(
            {
                "success": True,
                "product": {
                    "title": info.title,
                    "size": info.size,
                    "nmId": info.nm_id,
                    "vendorCode": info.vendor_code,
                },
            }
        )

    if code:
        record = await history.find(code)
        if record is None:
            return JSONResponse({"success": True, "scannedBefore": False})
        return JSONResponse(
            {
                "success": True,
                "scannedBefore": True,
                "lastScannedAt": record.scanned_at.isoformat(),
                "count": record.count,
            }
        )

    return JSONResponse(
        {"success": False, "error": BARCODE_REQUIRED.message},
        status_code=status.HTTP_400_BAD_REQUEST,
    )
