"""This module defines the bounded integer types used in request bodies.

Identifiers live in 32-bit ``SERIAL``/``INTEGER`` columns and amounts in
``BIGINT`` columns, so values outside those ranges are rejected while the
body is decoded instead of reaching the database driver.
"""

from typing import Annotated

from pydantic import Field

MIN_RECORD_ID = -(2**31)
MAX_RECORD_ID = 2**31 - 1
MIN_AMOUNT = -(2**63)
MAX_AMOUNT = 2**63 - 1

RecordId = Annotated[int, Field(ge=MIN_RECORD_ID, le=MAX_RECORD_ID)]
Amount = Annotated[int, Field(ge=MIN_AMOUNT, le=MAX_AMOUNT)]
EntryAmount = Annotated[int, Field(ge=0, le=MAX_AMOUNT)]
