from pydantic import BaseModel, ConfigDict, Field


class AnalyzeRequest(BaseModel):
    # Presence of resumeText is checked by the route so a missing field is a 400
    model_config = ConfigDict(populate_by_name=True)

    resume_text: str | None = Field(
        None, alias="resumeText", description="Plain text resume content"
    )
    job_description_text: str | None = Field(
        None, alias="jobDescriptionText", description="Optional job description text"
    )
