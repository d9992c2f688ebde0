"""FastAPI dependencies wiring request handlers to the gateway and provider."""
from fastapi import Depends
from sqlalchemy.orm import Session

from classreg.config import settings
from classreg.database import get_db
from classreg.services.checkout_service import CheckoutProvider, StripeCheckoutProvider
from classreg.stores.interfaces import PersistenceGateway
from classreg.stores.sqlalchemy_store import SQLAlchemyGateway


def get_gateway(db: Session = Depends(get_db)) -> PersistenceGateway:
    return SQLAlchemyGateway(db)


def get_checkout_provider() -> CheckoutProvider:
    return StripeCheckoutProvider(settings)
