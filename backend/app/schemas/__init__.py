"""Pydantic schemas module.

This module contains Pydantic models used for:
- Seed files written by the ingestion pipeline
- Data transfer between the pipeline and the database build step

Naming convention:
- Schema suffix to distinguish from the parser's frozen dataclasses
"""

from app.schemas.statute import DefinitionSchema, ParsedActSchema, ProvisionSchema

__all__ = [
    # Statute seed schemas
    "ParsedActSchema",
    "ProvisionSchema",
    "DefinitionSchema",
]
