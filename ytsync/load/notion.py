import requests
from typing import Optional, Set
from datetime import datetime, timezone
from ..models import VideoItem

VIDEO_ID_PROPERTY = "Video ID"

def utc_now_iso() -> str:
    """Current UTC instant as YYYY-MM-DDTHH:MM:SS.mmmZ."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"

class NotionLoader:
    def __init__(self, token: str, database_id: str, timeout: int = 30):
        self.token = token
        self.database_id = self._format_uuid(database_id)
        self.timeout = timeout
        self.headers = {
            "Authorization": f"Bearer {token}",
            "Notion-Version": "2022-06-28",
            "Content-Type": "application/json"
        }
        self.base_url = "https://api.notion.com/v1"

    def _format_uuid(self, uuid_str: str) -> str:
        if len(uuid_str) == 32 and "-" not in uuid_str:
            return f"{uuid_str[:8]}-{uuid_str[8:12]}-{uuid_str[12:16]}-{uuid_str[16:20]}-{uuid_str[20:]}"
        return uuid_str

    def fetch_existing_video_ids(self) -> Set[str]:
        """Walks the whole database and collects the stored video ids."""
        ids = set()
        has_more = True
        next_cursor = None
        url = f"{self.base_url}/databases/{self.database_id}/query"

        while has_more:
            payload = {"page_size": 100}
            if next_cursor:
                payload["start_cursor"] = next_cursor

            response = requests.post(url, headers=self.headers, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()

            for page in data.get("results", []):
                video_id = self._video_id_of(page)
                if video_id:
                    ids.add(video_id)

            has_more = data.get("has_more", False)
            next_cursor = data.get("next_cursor")

        return ids

    def _video_id_of(self, page: dict) -> Optional[str]:
        rich_text = page.get("properties", {}).get(VIDEO_ID_PROPERTY, {}).get("rich_text") or []
        if not rich_text:
            return None
        return rich_text[0].get("plain_text")

    def build_properties(self, item: VideoItem, imported_at: str) -> dict:
        return {
            "Name": {"title": [{"text": {"content": item.title[:2000]}}]},
            "Publish Date": {"date": {"start": item.published_at}},
            "Channel": {"select": {"name": item.channel}},
            "Video URL": {"url": item.url},
            VIDEO_ID_PROPERTY: {"rich_text": [{"text": {"content": item.video_id}}]},
            "Length": {"number": item.length_seconds},
            "Imported At": {"date": {"start": imported_at}},
        }

    def insert_item(self, item: VideoItem) -> str:
        """Creates one page for the video and returns its Notion page id."""
        payload = {
            "parent": {"database_id": self.database_id},
            "icon": {"type": "emoji", "emoji": "🎥"},
            "properties": self.build_properties(item, utc_now_iso())
        }
        response = requests.post(f"{self.base_url}/pages", headers=self.headers, json=payload, timeout=self.timeout)
        response.raise_for_status()
        return response.json().get("id", "")
