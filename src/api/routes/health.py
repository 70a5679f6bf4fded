"""Health check endpoint."""

import logging
from datetime import datetime, timezone
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.indexes import ensure_all_indexes

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


def _check_indexes(request: Request, mongo_client) -> dict:
    """Report the unique email index, retrying the build if startup missed it."""
    # Not set when the app runs without its lifespan (e.g. TestClient without a context)
    ready = getattr(request.app.state, "indexes_ready", None)
    if ready is False:
        ready = ensure_all_indexes(mongo_client[DATABASE_NAME])
        request.app.state.indexes_ready = ready
        if ready:
            logger.info("MongoDB indexes created on health check")

    if ready is False:
        return {"status": "unhealthy", "message": "Unique email index missing"}
    return {"status": "healthy", "message": "Indexes ready"}


@router.get("")
def health(request: Request):
    """Health check endpoint with store and index status."""
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
        "services": {}
    }
    services = health_status["services"]

    try:
        mongo_client = get_mongodb_client()
        if mongo_client:
            mongo_client.admin.command('ping')
            services["mongodb"] = {
                "status": "healthy",
                "message": "Connection successful"
            }
            services["indexes"] = _check_indexes(request, mongo_client)
        else:
            services["mongodb"] = {
                "status": "unhealthy",
                "message": "Connection failed or not configured"
            }
    except PyMongoError as e:
        logger.warning("MongoDB health check failed", extra={"error": str(e)[:200]})
        services["mongodb"] = {
            "status": "unhealthy",
            "message": f"Connection error: {str(e)[:200]}"
        }

    healthy = all(s["status"] == "healthy" for s in services.values())
    if not healthy:
        health_status["status"] = "degraded"

    return JSONResponse(
        content=health_status,
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE
    )
