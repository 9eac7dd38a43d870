import re
from typing import Dict, List, Optional, Set
from googleapiclient.discovery import build
from ..exceptions import ChannelNotFoundError
from ..models import VideoItem

DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")

def build_client(api_key: str):
    return build("youtube", "v3", developerKey=api_key)

def parse_iso_duration(duration: Optional[str]) -> int:
    """PT1H2M3S -> 3723. Anything without a PT component (P0D, '', None) is 0."""
    match = DURATION_RE.search(duration or "")
    if not match:
        return 0
    hours, minutes, seconds = (int(g or 0) for g in match.groups())
    return hours * 3600 + minutes * 60 + seconds

def get_uploads_playlist_id(youtube, channel_id: str) -> str:
    """Resolves a channel to its 'uploads' playlist."""
    response = youtube.channels().list(
        part="contentDetails",
        id=channel_id
    ).execute()
    items = response.get("items", [])
    if not items:
        raise ChannelNotFoundError(f"No channel found for id {channel_id}")
    return items[0]["contentDetails"]["relatedPlaylists"]["uploads"]

def get_playlist_page(youtube, playlist_id: str, page_token: Optional[str] = None, page_size: int = 50) -> dict:
    return youtube.playlistItems().list(
        part="snippet",
        playlistId=playlist_id,
        maxResults=page_size,
        pageToken=page_token
    ).execute()

def published_items(page: dict, channel_name: str, known_ids: Set[str], now: str) -> List[VideoItem]:
    """Videos on a playlist page that are already public and not yet recorded.

    `now` must be in the same fixed-width UTC format YouTube uses, so a plain
    string comparison orders the timestamps.
    """
    items = []
    for res in page.get("items", []):
        snippet = res["snippet"]
        published_at = snippet.get("publishedAt")
        if not published_at or not published_at < now:
            continue

        video_id = snippet["resourceId"]["videoId"]
        if video_id in known_ids:
            continue

        items.append(VideoItem(
            video_id=video_id,
            title=snippet.get("title", ""),
            published_at=published_at,
            channel=channel_name
        ))
    return items

def get_durations(youtube, video_ids: List[str]) -> Dict[str, int]:
    """Length in seconds per video id; ids absent from the response are left out."""
    if not video_ids:
        return {}
    response = youtube.videos().list(
        part="contentDetails",
        id=",".join(video_ids)
    ).execute()
    return {
        v["id"]: parse_iso_duration(v.get("contentDetails", {}).get("duration"))
        for v in response.get("items", [])
    }
