from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from collectmyitem.bookings.store import BookingStore, get_store
from collectmyitem.health.service import health_store_info
from collectmyitem.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])

@router.get("")
def health_root():
    return {"ok": True}

@router.get("/store")
def health_store(store: BookingStore = Depends(get_store)):
    info = health_store_info(store)
    return JSONResponse(info, status_code=200 if info.get("readable") else 503)

@router.get("/rate-limit")
def health_rate_limit(request: Request):
    return rate_limit_health_info(request)
