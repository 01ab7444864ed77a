from pydantic import BaseModel, ConfigDict, Field

class InsightRequest(BaseModel):
    """Payload of the text-generation flow; field names match the wire format."""
    model_config = ConfigDict(populate_by_name=True)

    dataset_summary: str = Field(alias="datasetSummary")
    user_prompt: str | None = Field(default=None, alias="userPrompt")

class InsightResponse(BaseModel):
    insights: str
    cached: bool = False
    etag: str | None = None
