import pytest

NOW = "2025-01-01T00:00:00.000Z"


def entry(video_id, published_at="2024-06-01T12:00:00Z", title=None):
    return {
        "snippet": {
            "title": title or f"Video {video_id}",
            "publishedAt": published_at,
            "resourceId": {"kind": "youtube#video", "videoId": video_id},
        }
    }


class _Request:
    def __init__(self, response):
        self._response = response

    def execute(self):
        return self._response


class _Resource:
    def __init__(self, handler):
        self._handler = handler

    def list(self, **kwargs):
        return _Request(self._handler(**kwargs))


class FakeYouTube:
    """In-memory stand-in for the googleapiclient youtube v3 resource.

    uploads: channel id -> uploads playlist id
    pages: playlist id -> list of pages, each a list of playlist entries
    durations: video id -> ISO-8601 duration
    """

    def __init__(self, uploads=None, pages=None, durations=None):
        self.uploads = uploads or {}
        self.pages = pages or {}
        self.durations = durations or {}
        self.calls = []

    def channels(self):
        return _Resource(self._channels)

    def playlistItems(self):
        return _Resource(self._playlist_items)

    def videos(self):
        return _Resource(self._videos)

    def _channels(self, part, id):
        self.calls.append(("channels", id))
        if id not in self.uploads:
            return {"items": []}
        return {"items": [{"contentDetails": {"relatedPlaylists": {"uploads": self.uploads[id]}}}]}

    def _playlist_items(self, part, playlistId, maxResults, pageToken=None):
        self.calls.append(("playlistItems", playlistId, pageToken))
        pages = self.pages.get(playlistId, [[]])
        index = int(pageToken) if pageToken else 0
        response = {"items": pages[index]}
        if index + 1 < len(pages):
            response["nextPageToken"] = str(index + 1)
        return response

    def _videos(self, part, id):
        ids = id.split(",")
        self.calls.append(("videos", ids))
        return {
            "items": [
                {"id": vid, "contentDetails": {"duration": self.durations[vid]}}
                for vid in ids if vid in self.durations
            ]
        }

    def calls_of(self, kind):
        return [c for c in self.calls if c[0] == kind]


class FakeLoader:
    def __init__(self, existing=None):
        self.existing = set(existing or [])
        self.inserted = []

    def fetch_existing_video_ids(self):
        return set(self.existing)

    def insert_item(self, item):
        self.inserted.append(item.model_copy())
        self.existing.add(item.video_id)
        return f"page-{item.video_id}"


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def fake_sleep(sleeps):
    return sleeps.append
