from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Account(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    code: str
    title: str
    tags: list[str] = Field(default_factory=list, validation_alias=AliasChoices("tag_list", "tags"))
    iban: str | None = None


class AccountCreate(BaseModel):
    code: str = Field(..., min_length=1, max_length=20, pattern=r"^\S+$")
    title: str = Field(..., min_length=1, max_length=255)
    tags: list[str] = Field(default_factory=list, description="e.g. ['invoice:payment']")
    iban: str | None = Field(None, max_length=34)
