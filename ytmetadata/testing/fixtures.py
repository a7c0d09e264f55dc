"""Demo video records for test mode.

These are shaped like ``videos.list`` items with ``part=snippet`` so the
whole chain can run without an API key or network access. Used when
YTMETA_TESTING_TEST_MODE=true.
"""

import copy
from typing import Any, Dict, Optional

# Demo video: Rick Astley - Never Gonna Give You Up
RICK_ASTLEY_VIDEO: Dict[str, Any] = {
    "kind": "youtube#video",
    "etag": "demo-etag-dQw4w9WgXcQ",
    "id": "dQw4w9WgXcQ",
    "snippet": {
        "publishedAt": "2009-10-25T06:57:33Z",
        "channelId": "UCuAXFkgsw1L7xaCfnd5JJOw",
        "title": "Rick Astley - Never Gonna Give You Up (Official Music Video)",
        "description": (
            "The official music video for Never Gonna Give You Up by Rick Astley.\n\n"
            "The song was a worldwide number-one hit."
        ),
        "channelTitle": "Rick Astley",
        "categoryId": "10",
        "liveBroadcastContent": "none",
    },
}

# Demo video: Me at the zoo
ZOO_VIDEO: Dict[str, Any] = {
    "kind": "youtube#video",
    "etag": "demo-etag-jNQXAC9IVRw",
    "id": "jNQXAC9IVRw",
    "snippet": {
        "publishedAt": "2005-04-24T03:31:52Z",
        "channelId": "UC4QobU6STFB0P71PMvOGN5A",
        "title": "Me at the zoo",
        "description": "The first video on YouTube.",
        "channelTitle": "jawed",
        "categoryId": "1",
        "liveBroadcastContent": "none",
    },
}

DEMO_VIDEOS: Dict[str, Dict[str, Any]] = {
    RICK_ASTLEY_VIDEO["id"]: RICK_ASTLEY_VIDEO,
    ZOO_VIDEO["id"]: ZOO_VIDEO,
}


def get_demo_video(video_id: str) -> Optional[Dict[str, Any]]:
    """
    Get a copy of a demo video record.

    Args:
        video_id: Video identifier

    Returns:
        Video item, or None for unknown IDs
    """
    video = DEMO_VIDEOS.get(video_id)
    return copy.deepcopy(video) if video is not None else None
