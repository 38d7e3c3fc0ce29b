from pydantic import BaseModel, Field, field_validator

from search_portal.services.search_combinations import SearchMode


class Notice(BaseModel):
    """User-facing, non-blocking notification."""

    title: str
    description: str
    variant: str = "default"  # default | destructive


class SearchStringOut(BaseModel):
    id: str
    string_value: str
    translations: dict[str, str] = Field(default_factory=dict)
    is_active: bool = True
    has_operators: bool = False
    created_at: str | None = None


class BucketCreate(BaseModel):
    bucket_name: str = Field(min_length=1, max_length=200)
    string_ids: list[str]

    @field_validator("bucket_name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Bucket name is required")
        return v

    @field_validator("string_ids")
    @classmethod
    def at_least_one_string(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("Select at least one string")
        return list(dict.fromkeys(v))


class BucketOut(BaseModel):
    id: str
    bucket_name: str
    string_ids: list[str]
    strings: list[str] = Field(default_factory=list)  # resolved string values, dangling ids dropped
    created_at: str | None = None


class SearchRequest(BaseModel):
    names: list[str] = Field(default_factory=list)
    current_name: str = ""
    bulk_names: str = ""
    selected_bucket_ids: list[str] = Field(default_factory=list)
    mode: SearchMode = SearchMode.auto


class LinksRequest(BaseModel):
    strings: list[str] = Field(default_factory=list)
    names: list[str] = Field(default_factory=list)
    mode: SearchMode = SearchMode.combined


class SearchLinkOut(BaseModel):
    label: str
    query: str
    url: str


class SearchResultData(BaseModel):
    search_strings: list[str]
    search_names: list[str]


class SearchExecuteResponse(BaseModel):
    result: SearchResultData
    links: list[SearchLinkOut]
    copy_text: str
    notices: list[Notice] = Field(default_factory=list)


class HistoryItem(BaseModel):
    id: str
    search_strings: list[str]
    search_names: list[str]
    results_count: int | None = 0
    created_at: str | None = None
    user_id: str | None = None
    username: str = "Unknown User"
    replay_link: str
