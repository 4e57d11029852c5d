from __future__ import annotations

from pydantic import BaseModel, Field

from pharma_core.lookup.models import ResolutionResult


class CodeEntryOut(BaseModel):
    code: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)


class LookupResponse(BaseModel):
    results: list[CodeEntryOut]
    source: str

    @classmethod
    def from_result(cls, result: ResolutionResult) -> "LookupResponse":
        return cls(
            results=[CodeEntryOut(code=e.code, description=e.description) for e in result.entries],
            source=result.source,
        )


class ICD10SearchResponse(BaseModel):
    results: list[CodeEntryOut]
    total: int
    query: str


class IndicationOut(BaseModel):
    icd10_code: str
    indication: str


class IndicationsResponse(BaseModel):
    icd10_mappings: list[IndicationOut]


class DrugSuggestion(BaseModel):
    id: str
    name: str
    generic: str = ""
    strength: str = ""
    form: str = ""


class DrugSuggestionsResponse(BaseModel):
    drugs: list[DrugSuggestion]
