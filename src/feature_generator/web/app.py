"""HTTP front end: endpoint listing and feature generation for the web form."""

import logging
import sys

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from feature_generator import __version__
from feature_generator.config import GeneratorConfig
from feature_generator.context import SpecContext
from feature_generator.errors import SelectionError
from feature_generator.generator.feature import ExistsAction, FeatureGenerator, LayerSelection
from feature_generator.web.page import INDEX_HTML

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger(__name__)


class GenerateRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    feature_name: str = Field("", alias="featureName")
    selected_indices: list[int] = Field(default_factory=list, alias="selectedIndices")
    layers: LayerSelection = Field(default_factory=LayerSelection)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(context: SpecContext, config: GeneratorConfig) -> FastAPI:
    """Build the app around one loaded spec; nothing is shared beyond ``context``."""
    app = FastAPI(title="Flutter Feature Generator", version=__version__)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    generator = FeatureGenerator(context, config)

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'][1:]) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )
        return _error(400, f"Invalid request: {details}")

    @app.get("/", response_class=HTMLResponse)
    def index() -> str:
        return INDEX_HTML

    @app.get("/api/endpoints")
    def list_endpoints() -> list[dict]:
        return [
            {
                "index": n.index,
                "tag": n.tag,
                "method": n.endpoint.method.upper(),
                "path": n.endpoint.path,
                "summary": n.endpoint.summary,
                "operationId": n.endpoint.operation_id,
                "hasRequestBody": n.endpoint.request_body is not None,
                "responseCount": len(n.endpoint.responses),
            }
            for n in context.catalog.numbered()
        ]

    @app.post("/api/generate")
    def generate(body: GenerateRequest):
        name = body.feature_name.strip()
        try:
            config.validate_feature_name(name)
            if not body.layers.selected():
                raise SelectionError("At least one layer must be selected")
            endpoints = context.catalog.select(body.selected_indices)
            is_update = generator.feature_exists(name)
            result = generator.generate(name, endpoints, body.layers, on_exists=ExistsAction.APPEND)
        except SelectionError as e:
            return _error(400, str(e))
        except Exception as e:
            logger.exception("Feature generation failed for %s", name)
            return _error(500, f"Failed to generate feature: {e}")

        if result.nothing_to_do:
            message = f'All selected endpoints already exist in feature "{name}". Nothing to do.'
        elif is_update:
            message = f'Feature "{name}" updated with new endpoints!'
        else:
            message = f'Feature "{name}" generated successfully!'
        logger.info("%s (%d endpoint(s))", message, result.endpoint_count)

        return {
            "success": True,
            "message": message,
            "featureName": name,
            "endpointCount": result.endpoint_count,
            "location": config.feature_location(name),
            "isUpdate": is_update,
            "generatedLayers": body.layers.model_dump(by_alias=True),
            "warnings": result.warnings,
        }

    @app.get("/api/swagger/raw")
    def swagger_raw() -> dict:
        return context.document

    return app
