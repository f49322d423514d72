"""Runtime entrypoint that layers custom behaviour on the generated FastAPI app."""

from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from gateway_api import main as generated_main
from gateway_api.config.settings import get_api_settings
from gateway_api.db.migrations import upgrade_database
from gateway_api.http.errors import error_payload

LOGGER = logging.getLogger(__name__)

app = generated_main.app

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_api_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg")}
        for error in exc.errors()
    ]
    message = "; ".join(
        f"{'.'.join(item['loc'][1:]) or item['loc'][0]}: {item['msg']}" for item in errors if item["loc"]
    ) or "Invalid request."
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": error_payload(message, status_code=status.HTTP_400_BAD_REQUEST, details={"errors": errors})},
    )


@app.on_event("startup")
def _startup() -> None:
    upgrade_database()
    LOGGER.info("Gateway access API ready")
