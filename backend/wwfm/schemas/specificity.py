from pydantic import BaseModel


class SpecificityCheck(BaseModel):
    is_specific: bool = True
    is_googleable: bool = True
    passes_filters: bool = True
    failure_reasons: list[str] = []

    @property
    def is_valid(self) -> bool:
        return self.is_specific and self.is_googleable and self.passes_filters


class SpecificityRequest(BaseModel):
    name: str


class InvalidSolution(BaseModel):
    name: str
    reasons: list[str]


class ValidationStats(BaseModel):
    total: int
    valid: int
    invalid: int
    pass_rate: float  # percentage, 0-100


class ValidationReport(BaseModel):
    valid: list[str]
    invalid: list[InvalidSolution]
    stats: ValidationStats


class ValidationRequest(BaseModel):
    names: list[str]
