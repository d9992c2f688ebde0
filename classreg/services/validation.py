"""Schema validation for incoming form data.

Converts pydantic errors into a ``ValidationError`` that names every failing
field (by its input key) with a message a person filling the form can act on.
"""
from typing import Any, Mapping

from pydantic import BaseModel, ValidationError as PydanticValidationError

from classreg.errors import ValidationError
from classreg.schemas.payment import PaymentCreate
from classreg.schemas.registration import RegistrationCreate

REGISTRATION_MESSAGES = {
    "eventId": "Please select an event",
    "firstName": "First name is required",
    "lastName": "Last name is required",
    "address": "Address is required",
    "city": "City is required",
    "state": "State is required",
    "zipCode": "Zip code is required",
    "phone": "Phone number is required",
    "email": "Invalid email address",
    "guestName": "Guest name must be text",
    "confirmEvent": "Please confirm your event selection",
}

PAYMENT_MESSAGES = {
    "registrationId": "Registration is required",
    "firstName": "First name is required",
    "lastName": "Last name is required",
    "address": "Address is required",
    "city": "City is required",
    "state": "State is required",
    "zipCode": "Zip code is required",
    "cardType": "Card type is required",
    "cardNumber": "Card number must be 13 to 19 characters",
    "expirationMonth": "Month is required",
    "expirationYear": "Year is required",
    "securityCode": "Security code must be 3 or 4 characters",
}


def _validate(schema: type[BaseModel], data: Any, messages: Mapping[str, str]):
    if not isinstance(data, Mapping):
        raise ValidationError({"__root__": "Expected an object"})
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        fields = {}
        for err in exc.errors():
            key = str(err["loc"][0]) if err["loc"] else "__root__"
            fields.setdefault(key, messages.get(key, err["msg"]))
        raise ValidationError(fields) from exc


def validate_registration(data: Any) -> RegistrationCreate:
    return _validate(RegistrationCreate, data, REGISTRATION_MESSAGES)


def validate_payment(data: Any) -> PaymentCreate:
    return _validate(PaymentCreate, data, PAYMENT_MESSAGES)
