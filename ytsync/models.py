from pydantic import BaseModel, Field
from typing import List, Set

class ChannelConfig(BaseModel):
    name: str
    channel_id: str

class SyncSettings(BaseModel):
    max_total_videos: int = Field(100, ge=1)
    page_size: int = Field(50, ge=1, le=50)
    throttle_seconds: float = Field(0.35, ge=0)
    dry_run: bool = False

class AppConfig(BaseModel):
    notion_token: str
    notion_database_id: str
    youtube_api_key: str
    channels: List[ChannelConfig]
    settings: SyncSettings = Field(default_factory=SyncSettings)

class VideoItem(BaseModel):
    video_id: str
    title: str
    published_at: str = Field(..., description="ISO-8601 UTC, as returned by the playlist snippet")
    channel: str
    length_seconds: int = Field(0, ge=0)

    @property
    def url(self) -> str:
        return f"https://www.youtube.com/watch?v={self.video_id}"

class SyncState(BaseModel):
    """Known video ids and the number of rows written during one run."""
    known_ids: Set[str] = Field(default_factory=set)
    inserted: int = 0

    def record(self, video_id: str):
        self.known_ids.add(video_id)
        self.inserted += 1
