"""
In-memory buffer of recent studio posts received from Telegram.
"""
import threading
from collections import deque
from typing import Any, Deque, Dict, List

from core.entities import StudioPost

DEFAULT_CAPACITY = 50
MEDIA_ROUTE = "/tg/file/{file_id}"
SOURCE_LABEL = "Azad Studio"


class StudioBuffer:
    """
    Bounded most-recent-first store of StudioPost.

    Pushing beyond capacity drops the oldest post. Nothing is persisted;
    the buffer lives as long as the application that owns it.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self.capacity = capacity
        self._posts: Deque[StudioPost] = deque(maxlen=capacity)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._posts)

    def push(self, post: StudioPost) -> None:
        with self._lock:
            # appendleft on a full deque drops the rightmost (oldest) post
            self._posts.appendleft(post)

    def snapshot(self) -> List[Dict[str, Any]]:
        """Copies of the buffered posts, newest first, with media URLs resolved."""
        with self._lock:
            posts = list(self._posts)

        out = []
        for post in posts:
            item = post.to_dict()
            item["mediaUrl"] = MEDIA_ROUTE.format(file_id=post.file_id) if post.file_id else None
            item["source"] = SOURCE_LABEL
            out.append(item)
        return out
