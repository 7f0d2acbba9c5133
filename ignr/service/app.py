"""FastAPI application entrypoint for ignr service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..errors import IgnrError
from ..models import GenerateOutcome, GenerateRequest
from ..orchestrator import Orchestrator


class GeneratePayload(BaseModel):
    path: str
    add: List[str] = []
    no_detect: bool = False
    depth: int = 10
    append: bool = False
    print_only: bool = True
    force: bool = False


class GenerateResponse(BaseModel):
    detected: List[str]
    content: str
    missing: List[str] = []
    path: Optional[str] = None
    written: bool = False
    message: Optional[str] = None


class TemplatesResponse(BaseModel):
    templates: List[str]


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator.from_environment()


async def _in_executor(func: Callable[[], Any]) -> Any:
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, func)


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing ignr operations."""

    app = FastAPI(title="ignr service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        # Lazy-instantiate per request so configuration edits are picked up.
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/generate", response_model=GenerateResponse)
    async def generate(
        payload: GeneratePayload,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        request = GenerateRequest(
            directory=Path(payload.path),
            add=list(payload.add),
            no_detect=payload.no_detect,
            depth=payload.depth,
            append=payload.append,
            print_only=payload.print_only,
            force=payload.force,
        )
        outcome: GenerateOutcome = await _in_executor(lambda: orchestrator.run_generate(request))
        return GenerateResponse(
            detected=outcome.tags,
            content=outcome.content,
            missing=outcome.missing,
            path=str(outcome.path) if outcome.path is not None else None,
            written=outcome.written,
            message=outcome.message,
        )

    @app.get("/templates", response_model=TemplatesResponse)
    async def templates(
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> TemplatesResponse:
        names = await _in_executor(orchestrator.run_list)
        return TemplatesResponse(templates=names)

    @app.exception_handler(FileNotFoundError)
    async def file_not_found_handler(
        _: Any, exc: FileNotFoundError
    ) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(IgnrError)
    async def ignr_error_handler(_: Any, exc: IgnrError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(host: str = "127.0.0.1", port: int = 8000) -> None:  # pragma: no cover - integration path
    import uvicorn

    uvicorn.run(create_app(), host=host, port=port)
