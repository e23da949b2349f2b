from pydantic import BaseModel, ConfigDict, Field


class LeaderboardEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str
    first_name: str = Field(alias="firstName")
    last_name: str = Field(alias="lastName")
    done: int = Field(description="Number of distinct questions completed.")
