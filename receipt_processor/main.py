import json
import logging
import time
import uuid
from typing import Dict
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from .config import load_settings
from .errors import INVALID_RECEIPT_MESSAGE, NOT_FOUND_MESSAGE, InvalidInput, NotFound
from .models import ErrorResponse, PointsResponse, ProcessResponse, RawReceiptRequest
from .service import ReceiptService
from .store import ReceiptStore


settings = load_settings()

app = FastAPI(title="Receipt Processor API")

service = ReceiptService(ReceiptStore())


logger = logging.getLogger("receipt_processor")
logging.basicConfig(level=settings.log_level, format="%(message)s")


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    rid = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    start = time.time()
    status = 500
    try:
        response: Response = await call_next(request)
        status = response.status_code
    finally:
        duration_ms = int((time.time() - start) * 1000)
        logger.info(json.dumps({
            "request_id": rid,
            "endpoint": request.url.path,
            "method": request.method,
            "status": status,
            "latency_ms": duration_ms,
        }))
    response.headers["X-Request-ID"] = rid
    return response


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
    body = ErrorResponse(detail=INVALID_RECEIPT_MESSAGE, errors=exc.violations)
    return JSONResponse(status_code=400, content=body.model_dump(mode="json"))


@app.exception_handler(RequestValidationError)
async def undecodable_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(json.dumps({"event": "undecodable_request", "endpoint": request.url.path, "errors": len(exc.errors())}))
    body = ErrorResponse(detail=INVALID_RECEIPT_MESSAGE)
    return JSONResponse(status_code=400, content=body.model_dump(mode="json"))


@app.exception_handler(NotFound)
async def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
    body = ErrorResponse(detail=NOT_FOUND_MESSAGE)
    return JSONResponse(status_code=404, content=body.model_dump(mode="json"))


@app.exception_handler(Exception)
async def unclassified_error_handler(request: Request, exc: Exception) -> JSONResponse:
    body = ErrorResponse(detail="internal server error")
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


@app.get("/health")
def health() -> Dict[str, bool]:
    return {"ok": True}


@app.post("/receipts/process", response_model=ProcessResponse)
def process_receipt_endpoint(req: RawReceiptRequest) -> ProcessResponse:
    return ProcessResponse(id=service.process_receipt(req))


@app.get("/receipts/{receipt_id}/points", response_model=PointsResponse)
def get_points_endpoint(receipt_id: str) -> PointsResponse:
    return PointsResponse(points=service.get_points(receipt_id))


