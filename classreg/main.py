"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from classreg.config import settings
from classreg.database import Base, engine

# Import routers
from classreg.routers import events, registrations, payments, checkout, reconciliations

# Import all models so Base.metadata knows about them
from classreg.models.event import Event                              # noqa: F401
from classreg.models.registration import Registration                # noqa: F401
from classreg.models.payment import Payment                          # noqa: F401
from classreg.models.reconciliation import PaymentReconciliation     # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Class Registration",
    description="Event listing, registration and payment for the New Retirement Rules class",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(registrations.router, prefix="/api/registrations", tags=["Registrations"])
app.include_router(payments.router, prefix="/api/payments", tags=["Payments"])
app.include_router(checkout.router, prefix="/api/checkout", tags=["Checkout"])
app.include_router(reconciliations.router, prefix="/api/reconciliations", tags=["Reconciliations"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
