"""
FastAPI Application - Maker Wealth API

Provides REST access to market-maker balances aggregated across chains.

Supported Chain Families:
    - zkSync Lite, Loopring, Starknet, ImmutableX, dYdX
    - Metis and generic EVM chains via node RPC

Usage:
    uvicorn app.main:app --reload --host 0.0.0.0 --port 8000

Docs:
    - Swagger: http://localhost:8000/docs
    - ReDoc: http://localhost:8000/redoc
"""

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from typing import Dict, List, Optional
from contextlib import asynccontextmanager
from pydantic import BaseModel
import asyncio

from core.config import settings, validate_configuration
from core.errors import InvalidArgument
from core.logging import logger
from core.schemas import ChainBalanceRequest
from services.wealth_service import WealthService, get_wealth_service


class SnapshotResponse(BaseModel):
    """Result of a fetch-and-persist snapshot."""

    maker_address: str
    rows_written: int
    chains: List[ChainBalanceRequest]


# ============================================
# Lifespan Management
# ============================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle application startup and shutdown."""
    logger.info("=== Application Starting ===")
    try:
        validate_configuration()
        await service().adapters.initialize_all()
        logger.info("=== Started Successfully ===")
    except Exception as e:
        logger.error(f"Startup failed: {e}")
        raise

    yield

    logger.info("=== Shutting Down ===")
    try:
        await service().adapters.shutdown_all()
        logger.info("=== Shutdown Complete ===")
    except Exception as e:
        logger.error(f"Shutdown error: {e}")


# ============================================
# FastAPI Application
# ============================================

app = FastAPI(
    title="Maker Wealth API",
    description=(
        "Aggregated token balances of market-maker addresses across L1s and L2s.\n\n"
        "## REST Endpoints\n"
        "- `GET /wealth/{maker_address}` - Balances per chain (normalized decimal strings)\n"
        "- `POST /wealth/{maker_address}/snapshot` - Fetch balances and persist them\n"
        "- `GET /makers` - Maker addresses known to the registry\n"
        "- `GET /chains` - Chain ID to adapter routing table\n"
        "- `GET /health` - Health check\n\n"
        "A balance of `null` means the balance could not be determined; `\"0\"` is a real zero."
    ),
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


def service() -> WealthService:
    return get_wealth_service()


# ============================================
# System Endpoints
# ============================================

@app.get("/", tags=["System"])
async def root():
    return {
        "service": "maker-wealth",
        "docs": "/docs",
        "adapters": service().adapters.list_adapters(),
    }


@app.get("/health", tags=["System"])
async def health():
    adapters = await service().adapters.health_check_all()
    status = "ok" if all(adapters.values()) else "degraded"
    return {"status": status, "environment": settings.environment, "adapters": adapters}


@app.get("/chains", tags=["System"])
async def chains() -> Dict[int, Optional[str]]:
    return service().adapters.routing_table()


# ============================================
# Maker Wealth Endpoints
# ============================================

@app.get("/makers", tags=["Makers"])
async def makers() -> List[str]:
    try:
        return await service().registry.get_maker_addresses()
    except FileNotFoundError as e:
        logger.error(f"Maker list unavailable: {e}")
        raise HTTPException(status_code=503, detail="Maker list unavailable")


async def fetch_or_raise(svc: WealthService, maker_address: str, timeout: Optional[float]) -> List[ChainBalanceRequest]:
    """Run fetch_wealth, mapping its failures to HTTP errors."""
    try:
        return await svc.fetch_wealth(maker_address, timeout=timeout)
    except InvalidArgument as e:
        raise HTTPException(status_code=400, detail=str(e))
    except asyncio.TimeoutError:
        raise HTTPException(status_code=504, detail="Balance aggregation timed out")
    except FileNotFoundError as e:
        logger.error(f"Maker list unavailable: {e}")
        raise HTTPException(status_code=503, detail="Maker list unavailable")


@app.get("/wealth/{maker_address}", response_model=List[ChainBalanceRequest], tags=["Makers"])
async def get_wealth(
    maker_address: str,
    timeout: Optional[float] = Query(None, gt=0, description="Overall deadline in seconds")
):
    return await fetch_or_raise(service(), maker_address, timeout)


@app.post("/wealth/{maker_address}/snapshot", response_model=SnapshotResponse, tags=["Makers"])
async def snapshot_wealth(
    maker_address: str,
    timeout: Optional[float] = Query(None, gt=0, description="Overall deadline in seconds")
):
    svc = service()
    requests = await fetch_or_raise(svc, maker_address, timeout)

    try:
        await svc.persist_wealth(requests)
    except Exception as e:
        logger.error(f"Failed to persist wealth for {maker_address}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to persist wealth: {str(e)}")

    rows = sum(len(request.balances) for request in requests)
    logger.info(f"Saved {rows} wealth row(s) for {maker_address}")
    return SnapshotResponse(maker_address=maker_address, rows_written=rows, chains=requests)
