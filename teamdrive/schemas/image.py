from pydantic import BaseModel, Field


class ImageResponse(BaseModel):
    url: str = Field(..., description="Public URL of the image")
    path: str = Field(..., description="Object name; keep it to delete the image later")
