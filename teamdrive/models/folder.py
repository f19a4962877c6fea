from typing import Annotated, List, Optional
from beanie import Document, Indexed
from pydantic import BaseModel, Field
from pymongo import ASCENDING, IndexModel

from teamdrive.consts import FolderType
from teamdrive.models.time_mixin import TimeMixin


class FolderPathItem(BaseModel):
    """One ancestor entry of a materialized folder path"""

    id: str = Field(..., description="Ancestor folder id")
    name: str = Field(..., description="Ancestor folder name")


class Folder(Document, TimeMixin):
    """Folder of a team's virtual filesystem. The id is generated by the caller before insert."""

    team_id: Annotated[str, Indexed(str)] = Field(..., description="Team that owns the folder")
    name: str = Field(..., description="Display name")
    type: FolderType = Field(default=FolderType.DEFAULT, description="Folder type: root or default")
    path: List[FolderPathItem] = Field(default_factory=list, description="Ancestors from root to parent")
    parent_folder: Optional[str] = Field(None, description="Parent folder id, empty for root")

    class Settings:
        name = "folders"
        indexes = [
            IndexModel(
                [("team_id", ASCENDING), ("type", ASCENDING)],
                name="unique_team_root",
                unique=True,
                partialFilterExpression={"type": FolderType.ROOT.value},
            ),
            IndexModel([("team_id", ASCENDING), ("parent_folder", ASCENDING)], name="team_parent"),
        ]
