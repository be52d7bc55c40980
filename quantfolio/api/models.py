"""
Pydantic models for API request/response validation.
"""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator


class OptimizationStatus(str, Enum):
    """Optimization status values."""

    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


# Request Models


class AssetModel(BaseModel):
    """Asset specification."""

    symbol: str = Field(..., min_length=1)
    name: str = ""
    expected_return: float
    volatility: float = Field(..., ge=0)
    price: float = Field(100.0, gt=0)


class PortfolioConstraintsModel(BaseModel):
    """Weight bounds applied to every asset."""

    min_weight: float = Field(0.0, ge=0, le=1)
    max_weight: float = Field(1.0, ge=0, le=1)

    @model_validator(mode="after")
    def max_weight_valid(self):
        if self.max_weight < self.min_weight:
            raise ValueError("max_weight must be >= min_weight")
        return self


class SharpeOptimizationRequest(BaseModel):
    """Sharpe ratio optimization request."""

    assets: List[AssetModel] = Field(..., min_length=2)
    constraints: Optional[PortfolioConstraintsModel] = None
    risk_free_rate: Optional[float] = Field(None, ge=-1, le=1)
    max_iterations: Optional[int] = Field(None, ge=1, le=10000)
    tolerance: Optional[float] = Field(None, gt=0)

    @model_validator(mode="after")
    def symbols_unique(self):
        symbols = [asset.symbol for asset in self.assets]
        if len(set(symbols)) != len(symbols):
            raise ValueError("asset symbols must be unique")
        return self


class MetricsRequest(BaseModel):
    """Metrics request for a caller-supplied allocation."""

    assets: List[AssetModel] = Field(..., min_length=1)
    weights: List[float]
    risk_free_rate: Optional[float] = Field(None, ge=-1, le=1)

    @model_validator(mode="after")
    def weights_match_assets(self):
        if len(self.weights) != len(self.assets):
            raise ValueError(f"Expected {len(self.assets)} weights")
        return self


# Response Models


class MetricsResponse(BaseModel):
    """Portfolio metrics."""

    expected_return: float
    volatility: float
    sharpe_ratio: float


class PortfolioResult(BaseModel):
    """Optimized portfolio."""

    weights: List[float]
    weights_by_symbol: Dict[str, float]
    allocation_values: Dict[str, float]
    expected_return: float
    volatility: float
    sharpe_ratio: float
    convergence_data: List[float]
    iterations: int
    converged: bool


class OptimizationResponse(BaseModel):
    """Optimization response."""

    optimization_id: str
    status: OptimizationStatus
    solve_time: float
    success: bool
    message: Optional[str] = None
    portfolio: Optional[PortfolioResult] = None


class TimingStatsModel(BaseModel):
    """Timing summary for one operation, in milliseconds."""

    avg: float
    min: float
    max: float
    count: int


class PerformanceResponse(BaseModel):
    """Timing summary per operation."""

    operations: Dict[str, TimingStatsModel]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str
    active_optimizations: int


class ErrorResponse(BaseModel):
    """Error response model."""

    error: str
    detail: Optional[str] = None
    optimization_id: Optional[str] = None
