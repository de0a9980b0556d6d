"""Pydantic schemas for statute seed files.

Seed files are the interchange format between the ingestion pipeline and the
database build step. Field names, nesting, and provision/definition order
are compared against this exact shape downstream, so field declaration order
here is significant.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from pipeline.justice.catalog import LegalStatus
from pipeline.justice.documents import (
    MAX_CONTENT_LENGTH,
    ParsedAct,
    ParsedDefinition,
    ParsedProvision,
)


class ProvisionSchema(BaseModel):
    """A section or schedule provision."""

    provision_ref: str = Field(..., description="Unique key, e.g. 's5' or 'sched-schedule1-4.1'")
    chapter: str | None = Field(None, description="Part/Division or schedule label")
    section: str = Field(..., description="Section number or schedule suffix")
    title: str = Field("", description="Marginal note or schedule heading")
    content: str = Field(..., max_length=MAX_CONTENT_LENGTH)

    @classmethod
    def from_parsed(cls, provision: ParsedProvision) -> ProvisionSchema:
        return cls(
            provision_ref=provision.provision_ref,
            chapter=provision.chapter,
            section=provision.section,
            title=provision.title,
            content=provision.content,
        )

    def to_parsed(self) -> ParsedProvision:
        return ParsedProvision(
            provision_ref=self.provision_ref,
            chapter=self.chapter,
            section=self.section,
            title=self.title,
            content=self.content,
        )


class DefinitionSchema(BaseModel):
    """A defined term."""

    term: str
    definition: str
    source_provision: str | None = None

    @classmethod
    def from_parsed(cls, definition: ParsedDefinition) -> DefinitionSchema:
        return cls(
            term=definition.term,
            definition=definition.definition,
            source_provision=definition.source_provision,
        )


class ParsedActSchema(BaseModel):
    """One seed file: an Act with its provisions and definitions."""

    id: str
    type: str = "statute"
    title: str
    title_en: str
    short_name: str
    status: LegalStatus
    issued_date: str
    in_force_date: str
    url: str
    description: str | None = None
    provisions: list[ProvisionSchema] = Field(default_factory=list)
    definitions: list[DefinitionSchema] = Field(default_factory=list)

    @classmethod
    def from_parsed(cls, act: ParsedAct) -> ParsedActSchema:
        return cls(
            id=act.id,
            type=act.type,
            title=act.title,
            title_en=act.title_en,
            short_name=act.short_name,
            status=act.status,
            issued_date=act.issued_date,
            in_force_date=act.in_force_date,
            url=act.url,
            description=act.description,
            provisions=[ProvisionSchema.from_parsed(p) for p in act.provisions],
            definitions=[DefinitionSchema.from_parsed(d) for d in act.definitions],
        )

    def to_seed_json(self) -> str:
        """Serialize to seed JSON (2-space indent, optional fields omitted when unset)."""
        return self.model_dump_json(indent=2, exclude_none=True)

    def get_provision(self, provision_ref: str) -> ProvisionSchema | None:
        for provision in self.provisions:
            if provision.provision_ref == provision_ref:
                return provision
        return None
