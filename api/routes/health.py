from typing import Annotated

from fastapi import APIRouter, Depends, status

from api.dependencies import get_engine
from api.schemas import HealthResponse
from application.engine import CurrencyEngine

router = APIRouter(prefix='/api', tags=['health'])


@router.get('/health', response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health(engine: Annotated[CurrencyEngine, Depends(get_engine)]) -> HealthResponse:
	return HealthResponse(
		status='healthy',
		base_currency=engine.base_currency,
		rates_stored=len(engine.rate_store),
		last_update=engine.last_update,
	)
