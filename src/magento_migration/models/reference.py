# models/reference.py
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, ConfigDict

class ReferenceEntity(BaseModel):
    """Target-system entity found in a reference table."""
    model_config = ConfigDict(from_attributes=True)

    id: str

class Country(ReferenceEntity):
    iso: str
    iso3: Optional[str] = None

class Currency(ReferenceEntity):
    iso_code: str

class Language(ReferenceEntity):
    locale_code: str

class Tax(ReferenceEntity):
    tax_rate: Decimal

class StateMachine(ReferenceEntity):
    technical_name: str

class StateMachineState(ReferenceEntity):
    state_machine_id: str
    technical_name: str
