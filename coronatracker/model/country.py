"""CountryRecord - one country's case statistics."""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CountryRecord(BaseModel):
    """Immutable snapshot of a country's confirmed cases and deaths.

    `code` is the unique key (ISO-3166 alpha-2 style, e.g. "DK").
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, max_length=100)
    code: str = Field(min_length=1, max_length=8)
    confirmed: int = Field(default=0, ge=0)
    deaths: int = Field(default=0, ge=0)

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("code", mode="before")
    @classmethod
    def _normalize_code(cls, value):
        if isinstance(value, str):
            value = value.strip().upper()
        return value

    def with_counts(self, confirmed: int, deaths: int) -> "CountryRecord":
        """Copy of this record with new case counts, validated."""
        return CountryRecord(name=self.name, code=self.code, confirmed=confirmed, deaths=deaths)
