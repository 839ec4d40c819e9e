"""
HTTP endpoint for the map client

    uvicorn road_density.server:app --port 3001
"""

import uuid
from typing import Optional

from fastapi import FastAPI
from starlette.responses import JSONResponse
from loguru import logger

from . import __version__
from .errors import InvalidInput, RequestCancelled
from .models import ProcessAreaRequest
from .pipeline import RequestSupervisor


def create_app(supervisor: Optional[RequestSupervisor] = None) -> FastAPI:
    app = FastAPI(title="road-density", version=__version__)
    app.state.supervisor = supervisor or RequestSupervisor()

    @app.get("/health")
    def health():
        return {"status": "ok", "version": __version__}

    @app.post("/process-area")
    def process_area(body: ProcessAreaRequest):
        # Anonymous requests never supersede each other, even behind a shared address
        client_id = body.client_id or f"anonymous-{uuid.uuid4().hex}"
        try:
            result = app.state.supervisor.process_area(client_id, body.polygon)
        except InvalidInput as e:
            logger.warning(f"Rejected polygon from {client_id}: {e}")
            return JSONResponse(status_code=400, content={"error": str(e)})
        except RequestCancelled:
            return JSONResponse(status_code=409, content={"error": "Request superseded"})
        except Exception as e:
            logger.error(f"Server error: {e}")
            return JSONResponse(status_code=500, content={"error": "Internal error"})
        return result.to_response()

    return app


app = create_app()
