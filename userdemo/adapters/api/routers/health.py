# userdemo\adapters\api\routers\health.py
from datetime import datetime, timezone
from typing import Dict

import structlog
from fastapi import APIRouter, Depends, Response, status

from userdemo.adapters.api.dependencies import (
    get_calculator,
    get_service_name,
    get_user_service,
)
from userdemo.core.ports.calculator import ICalculator
from userdemo.core.ports.user_service import IUserService

logger = structlog.get_logger()

router = APIRouter(prefix="/health", tags=["System"])


@router.get("/live", status_code=status.HTTP_200_OK)
def liveness_probe(service: str = Depends(get_service_name)) -> Dict[str, str]:
    """
    Liveness Probe.
    Returns 200 OK if the process is serving requests.
    """
    return {
        "status": "UP",
        "service": service,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/ready", status_code=status.HTTP_200_OK)
def readiness_probe(
    response: Response,
    calculator: ICalculator = Depends(get_calculator),
    user_service: IUserService = Depends(get_user_service),
) -> Dict[str, str]:
    """
    Readiness Probe.
    Exercises both services; 503 if either misbehaves.
    """
    health_status = {
        "calculator": "down",
        "user_service": "down",
    }

    try:
        if calculator.add(1, 1) == 2:
            health_status["calculator"] = "up"
    except Exception as e:
        logger.error("health_check_failed", component="calculator", error=str(e))

    try:
        if user_service.get_user_by_id(0).id == 0:
            health_status["user_service"] = "up"
    except Exception as e:
        logger.error("health_check_failed", component="user_service", error=str(e))

    if not all(state == "up" for state in health_status.values()):
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        logger.warning("readiness_probe_failed", status=health_status)

    return health_status
