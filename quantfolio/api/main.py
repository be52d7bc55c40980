"""
QuantFolio FastAPI application.

REST endpoints exposing the quantum-inspired Sharpe ratio optimizer and
portfolio metrics to the dashboard.
"""

import asyncio
import logging
import threading
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ..data.models import Asset, get_sample_assets
from ..monitoring import PerformanceMonitor
from ..optimization import (
    DegenerateVolatilityError,
    OptimizationCancelledError,
    PortfolioConstraints,
    QuantumInspiredOptimizer,
    allocation_values,
    calculate_portfolio_metrics,
)
from .config import settings
from .deps import (
    OptimizationManager,
    get_logger,
    get_optimization_manager,
    get_performance_monitor,
)
from .models import (
    AssetModel,
    ErrorResponse,
    HealthResponse,
    MetricsRequest,
    MetricsResponse,
    OptimizationResponse,
    OptimizationStatus,
    PerformanceResponse,
    PortfolioResult,
    SharpeOptimizationRequest,
    TimingStatsModel,
)

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()), format=settings.log_format
)

logger = get_logger(__name__)

# Worker threads for optimizer runs
optimization_executor = ThreadPoolExecutor(
    max_workers=settings.max_concurrent_optimizations,
    thread_name_prefix="optimizer",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown."""
    logger.info("Starting QuantFolio application...")

    yield

    logger.info("Shutting down QuantFolio application...")
    get_performance_monitor().log_all_metrics()
    optimization_executor.shutdown(wait=False, cancel_futures=True)


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description=settings.app_description,
    docs_url=settings.docs_url,
    redoc_url=settings.redoc_url,
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=settings.allowed_methods,
    allow_headers=settings.allowed_headers,
)


# Exception handlers
@app.exception_handler(ValueError)
async def value_error_handler(request, exc):
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error="Invalid input", detail=str(exc)).model_dump(),
    )


@app.exception_handler(DegenerateVolatilityError)
async def degenerate_volatility_handler(request, exc):
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(
            error="Degenerate volatility", detail=str(exc)
        ).model_dump(),
    )


@app.exception_handler(OptimizationCancelledError)
async def optimization_cancelled_handler(request, exc):
    return JSONResponse(
        status_code=504,
        content=ErrorResponse(
            error="Optimization cancelled", detail=str(exc)
        ).model_dump(),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    logger.error(f"Unhandled exception: {exc}")
    return JSONResponse(
        status_code=500,
        content=ErrorResponse(
            error="Internal server error",
            detail="An unexpected error occurred" if not settings.debug else str(exc),
        ).model_dump(),
    )


def _to_assets(models: List[AssetModel]) -> List[Asset]:
    return [
        Asset(
            symbol=model.symbol,
            name=model.name,
            expected_return=model.expected_return,
            volatility=model.volatility,
            price=model.price,
        )
        for model in models
    ]


def _risk_free_rate(requested: Optional[float]) -> float:
    return settings.default_risk_free_rate if requested is None else requested


# Health check endpoint
@app.get("/health", response_model=HealthResponse)
async def health_check(
    optimization_manager: OptimizationManager = Depends(get_optimization_manager),
):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        timestamp=datetime.now(timezone.utc).isoformat(),
        active_optimizations=len(optimization_manager.running_optimizations),
    )


# Root endpoint
@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": settings.app_description,
        "docs": f"{settings.docs_url}",
        "health": "/health",
    }


@app.post(
    f"{settings.api_prefix}/optimize/sharpe", response_model=OptimizationResponse
)
async def optimize_sharpe(
    request: SharpeOptimizationRequest,
    optimization_manager: OptimizationManager = Depends(get_optimization_manager),
    monitor: PerformanceMonitor = Depends(get_performance_monitor),
):
    """Maximize the Sharpe ratio with the quantum-inspired optimizer."""
    optimization_id = str(uuid.uuid4())

    # Check if we can start new optimization
    if not optimization_manager.can_start_optimization():
        raise HTTPException(
            status_code=429,
            detail="Maximum concurrent optimizations reached. Please try again later.",
        )

    optimization_manager.start_optimization(optimization_id, len(request.assets))
    cancel_event = threading.Event()

    try:
        assets = _to_assets(request.assets)
        constraints = None
        if request.constraints:
            constraints = PortfolioConstraints(
                min_weight=request.constraints.min_weight,
                max_weight=request.constraints.max_weight,
            )

        optimizer = QuantumInspiredOptimizer(
            risk_free_rate=_risk_free_rate(request.risk_free_rate),
            max_iterations=request.max_iterations or settings.default_max_iterations,
            tolerance=request.tolerance or settings.default_tolerance,
            timer=monitor,
        )

        # The event stops the worker between iterations
        future = optimization_executor.submit(
            optimizer.optimize_portfolio, assets, constraints, cancel_event.is_set
        )
    except Exception:
        optimization_manager.finish_optimization(optimization_id)
        raise

    # The slot is held until the worker thread returns, even after a timeout
    future.add_done_callback(
        lambda _: optimization_manager.finish_optimization(optimization_id)
    )

    start_time = time.time()
    try:
        result = await asyncio.wait_for(
            asyncio.wrap_future(future), timeout=settings.max_optimization_time
        )
    except asyncio.TimeoutError:
        cancel_event.set()
        logger.warning(
            f"Optimization {optimization_id} exceeded "
            f"{settings.max_optimization_time}s and was cancelled"
        )
        raise HTTPException(
            status_code=504,
            detail="Optimization exceeded the maximum optimization time",
        )
    solve_time = time.time() - start_time

    portfolio = PortfolioResult(
        weights=result.optimal_weights.tolist(),
        weights_by_symbol=result.weights_by_symbol(),
        allocation_values=allocation_values(assets, result.optimal_weights),
        expected_return=result.expected_return,
        volatility=result.volatility,
        sharpe_ratio=result.sharpe_ratio,
        convergence_data=list(result.convergence_data),
        iterations=result.iterations,
        converged=result.converged,
    )

    return OptimizationResponse(
        optimization_id=optimization_id,
        status=OptimizationStatus.COMPLETED,
        solve_time=solve_time,
        success=True,
        portfolio=portfolio,
    )


@app.post(f"{settings.api_prefix}/portfolio/metrics", response_model=MetricsResponse)
async def portfolio_metrics(request: MetricsRequest):
    """Evaluate a caller-supplied allocation."""
    metrics = calculate_portfolio_metrics(
        _to_assets(request.assets),
        request.weights,
        _risk_free_rate(request.risk_free_rate),
    )
    return MetricsResponse(**metrics.to_dict())


@app.get(f"{settings.api_prefix}/assets/sample", response_model=List[AssetModel])
async def sample_assets():
    """Demonstration asset universe."""
    return [AssetModel(**asset.to_dict()) for asset in get_sample_assets()]


@app.get(f"{settings.api_prefix}/performance", response_model=PerformanceResponse)
async def performance_metrics(
    monitor: PerformanceMonitor = Depends(get_performance_monitor),
):
    """Timing summary of optimizer calls served by this process."""
    return PerformanceResponse(
        operations={
            operation: TimingStatsModel(**asdict(stats))
            for operation, stats in monitor.get_all_metrics().items()
        }
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "quantfolio.api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
