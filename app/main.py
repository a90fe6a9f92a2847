from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional
import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.langchain_service import LangChainSummaryGenerator, SummaryGenerator
from app.schemas import ErrorResponse, SalesInsightsResponse
from app.services.sales_analyzer import (
    SalesValidationError,
    build_prompt,
    compute_insights,
    validate_sales,
)

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Fail before serving anything when the credential is missing
    if getattr(app.state, "generator", None) is None:
        settings = get_settings()
        configure_logging(settings.log_level)
        app.state.generator = LangChainSummaryGenerator.from_settings(settings)
    logger.info("Sales insights service ready")
    yield


# Dependency for the shared summary generator
def get_generator(request: Request) -> SummaryGenerator:
    return request.app.state.generator


def create_app(generator: Optional[SummaryGenerator] = None) -> FastAPI:
    app = FastAPI(
        title="Sales Insights API",
        description="Aggregates sales records and summarizes them with an LLM",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.generator = generator

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.post(
        "/sales/insights",
        response_model=SalesInsightsResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def sales_insights(
        request: Request,
        generator: SummaryGenerator = Depends(get_generator),
    ):
        """
        Compute sales insights and an AI-written summary.

        Expects a JSON array such as
        ``[{"category": "Electronics", "amount": 100}, ...]``.
        """
        try:
            payload = await request.json()
            records = validate_sales(payload)
            logger.info(f"Computing insights for {len(records)} sale records")

            insights = compute_insights(records)
            summary = await generator.generate(build_prompt(insights))

            return JSONResponse(
                content={
                    "insights": insights.model_dump(by_alias=True),
                    "summary": summary,
                }
            )
        except SalesValidationError as e:
            logger.warning(f"Rejected sales payload: {e.message}")
            return JSONResponse(status_code=400, content={"error": e.message})
        except Exception as e:
            logger.error(f"Error processing sales insights: {e}", exc_info=True)
            return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR_MESSAGE})

    @app.get("/health")
    async def health_check():
        """Service health check endpoint"""
        return {"status": "healthy", "timestamp": datetime.now().isoformat()}

    return app


app = create_app()
