import logging
from fastapi import APIRouter, HTTPException, Response, status

from .exceptions import ReportGenerationFailed
from . import service as report_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/reports",
    tags=["Reports"],
    responses={404: {"description": "Not found"}},
)


@router.get(
    "/products/pdf",
    response_class=Response,
    summary="Download the product inventory report as a PDF",
    responses={200: {"content": {"application/pdf": {}}}},
)
async def download_products_report():
    try:
        document = await report_service.generate_products_report()
    except ReportGenerationFailed as e:
        logger.error(f"Error generating products PDF: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate products report.",
        )
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f"attachment; filename={document.filename}"},
    )
