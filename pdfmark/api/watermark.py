from io import BytesIO

from fastapi import APIRouter, File, HTTPException, Response, UploadFile, status

from pdfmark.core.config import get_settings
from pdfmark.core.errors import PageOutOfRangeError, PdfMarkError
from pdfmark.core.logging import configure_logging
from pdfmark.services.watermark_service import watermark
from pdfmark.utils.file_utils import ensure_pdf, output_filename

router = APIRouter(prefix="/pdf/watermark", tags=["PDF Watermark"])

logger = configure_logging()


def _read_upload(upload: UploadFile, limit: int) -> bytes:
    data = upload.file.read(limit + 1)
    if len(data) > limit:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"{upload.filename or 'upload'} exceeds {limit} bytes.",
        )
    return data


def _error_response(exc: PdfMarkError) -> HTTPException:
    code = (
        status.HTTP_422_UNPROCESSABLE_CONTENT
        if isinstance(exc, PageOutOfRangeError)
        else status.HTTP_400_BAD_REQUEST
    )
    return HTTPException(status_code=code, detail={"error": exc.code, "message": str(exc)})


@router.post("", summary="Stamp the pages listed in a CSV file and return the new PDF")
def commit_watermark(
    file: UploadFile = File(..., description="PDF to watermark."),
    instructions: UploadFile = File(..., description="CSV with page,watermark_text rows."),
) -> Response:
    ensure_pdf(file)
    limit = get_settings().max_upload_bytes

    csv_data = _read_upload(instructions, limit)
    pdf_data = _read_upload(file, limit)

    buffer = BytesIO()
    try:
        watermark(buffer, pdf_data, csv_data)
    except PdfMarkError as exc:
        logger.info("Rejected watermark request for %s: %s", file.filename, exc)
        raise _error_response(exc) from exc

    output_name = output_filename(file.filename)
    logger.info("Watermarked %s (%s bytes)", file.filename, len(buffer.getvalue()))
    return Response(
        content=buffer.getvalue(),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{output_name}"'},
    )

