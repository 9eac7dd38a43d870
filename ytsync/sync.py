import time
from typing import Callable, List, Optional

from .extract.youtube import get_durations, get_playlist_page, get_uploads_playlist_id, published_items
from .load.notion import NotionLoader, utc_now_iso
from .models import ChannelConfig, SyncSettings, SyncState, VideoItem

def cap_reached(state: SyncState, settings: SyncSettings) -> bool:
    return state.inserted >= settings.max_total_videos

def write_item(
    loader: NotionLoader,
    item: VideoItem,
    state: SyncState,
    settings: SyncSettings,
    sleep: Callable[[float], None] = time.sleep,
):
    if settings.dry_run:
        print(f"    - [Dry Run] {item.title[:40]}... ({item.length_seconds}s)")
    else:
        print(f"    - Inserting: {item.title[:40]}...")
        loader.insert_item(item)
    state.record(item.video_id)
    if not settings.dry_run:
        # Notion allows roughly three requests per second per integration.
        sleep(settings.throttle_seconds)

def sync_channel(
    youtube,
    loader: NotionLoader,
    channel: ChannelConfig,
    state: SyncState,
    settings: SyncSettings,
    now: Callable[[], str] = utc_now_iso,
    sleep: Callable[[float], None] = time.sleep,
):
    """Backfills one channel's uploads playlist, newest first.

    Stops at the end of the playlist, at the global cap, or at the first page
    with nothing new on it. The last rule assumes older pages were covered by
    earlier runs; a page made only of known videos ends the walk even if
    unrecorded videos sit further back.
    """
    print(f"Fetching uploads from: {channel.name} (ID: {channel.channel_id})...")
    playlist_id = get_uploads_playlist_id(youtube, channel.channel_id)
    next_page_token = None

    while not cap_reached(state, settings):
        page = get_playlist_page(youtube, playlist_id, next_page_token, settings.page_size)
        batch = published_items(page, channel.name, state.known_ids, now())

        if not batch:
            print(f"  - {channel.name}: caught up.")
            break

        batch = batch[:settings.max_total_videos - state.inserted]
        print(f"  - {len(batch)} new videos on this page")
        durations = get_durations(youtube, [v.video_id for v in batch])

        for item in batch:
            item.length_seconds = durations.get(item.video_id, 0)
            write_item(loader, item, state, settings, sleep)

        next_page_token = page.get("nextPageToken")
        if not next_page_token:
            break

def run_sync(
    youtube,
    loader: NotionLoader,
    channels: List[ChannelConfig],
    settings: SyncSettings,
    known_ids: Optional[set] = None,
    now: Callable[[], str] = utc_now_iso,
    sleep: Callable[[float], None] = time.sleep,
) -> SyncState:
    """Loads the snapshot (unless given) and walks every channel in order."""
    if known_ids is None:
        known_ids = loader.fetch_existing_video_ids()
    print(f"  - {len(known_ids)} videos already in Notion")

    state = SyncState(known_ids=set(known_ids))
    for channel in channels:
        if cap_reached(state, settings):
            print(f"  - Reached limit of {settings.max_total_videos} videos, stopping.")
            break
        sync_channel(youtube, loader, channel, state, settings, now, sleep)
    return state
