import logging
import queue
import threading
import uuid
from typing import Dict, Optional, Set

from .events import ScoreUpdate, match_channel

logger = logging.getLogger(__name__)


class Subscriber:
    """
    Inbox of one connected viewer.
    
    The publisher only ever calls ``offer``, which never blocks: a full inbox
    drops the event and a closed inbox refuses it.
    """
    
    def __init__(self, maxsize: int = 100):
        self.id = uuid.uuid4().hex[:12]
        self.channels: Set[str] = set()
        self.closed = False
        self._queue = queue.Queue(maxsize=maxsize)
    
    def offer(self, event: ScoreUpdate) -> bool:
        if self.closed:
            return False
        try:
            self._queue.put_nowait(event)
        except queue.Full:
            logger.warning(f"Subscriber {self.id} is lagging, dropped event for {event.channel}")
            return False
        return True
    
    def next_event(self, timeout: float = None) -> Optional[ScoreUpdate]:
        """Wait up to ``timeout`` seconds; None on timeout or after close."""
        if self.closed and self._queue.empty():
            return None
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None
    
    def close(self):
        self.closed = True
        try:
            # Wake a reader blocked in next_event
            self._queue.put_nowait(None)
        except queue.Full:
            pass


class ScoreBroadcaster:
    """
    Process-local fan-out of score updates.
    
    Keeps ``channel name -> subscribers`` for every match somebody is watching.
    Subscriptions are not persisted and not authorized: anyone may watch any
    match, and whoever connects after an update has to re-read the match.
    """
    
    def __init__(self, queue_size: int = 100):
        self.queue_size = queue_size
        self._channels: Dict[str, Set[Subscriber]] = {}
        self._subscribers: Dict[str, Subscriber] = {}
        self._lock = threading.Lock()
    
    def subscribe(self, match_id, subscriber: Subscriber = None) -> Subscriber:
        """Add ``subscriber`` (or a new one) to the channel of ``match_id``."""
        if subscriber is None:
            subscriber = Subscriber(maxsize=self.queue_size)
        
        channel = match_channel(match_id)
        with self._lock:
            self._subscribers[subscriber.id] = subscriber
            self._channels.setdefault(channel, set()).add(subscriber)
            subscriber.channels.add(channel)
        
        logger.info(f"Subscriber {subscriber.id} joined {channel}")
        return subscriber
    
    def unsubscribe(self, subscriber: Subscriber, match_id=None):
        """Leave one channel, or every channel when ``match_id`` is None."""
        with self._lock:
            if match_id is None:
                channels = list(subscriber.channels)
            else:
                channels = [match_channel(match_id)]
            
            for channel in channels:
                members = self._channels.get(channel)
                if members is not None:
                    members.discard(subscriber)
                    if not members:
                        del self._channels[channel]
                subscriber.channels.discard(channel)
            if match_id is None:
                self._subscribers.pop(subscriber.id, None)
        
        if match_id is None:
            subscriber.close()
        logger.info(f"Subscriber {subscriber.id} left {', '.join(channels) or 'no channels'}")
    
    def get_subscriber(self, subscriber_id: str) -> Optional[Subscriber]:
        with self._lock:
            return self._subscribers.get(subscriber_id)
    
    def subscriber_count(self, match_id) -> int:
        with self._lock:
            return len(self._channels.get(match_channel(match_id), ()))
    
    def publish(self, match_id, match: dict) -> ScoreUpdate:
        """Send a score update to everyone watching ``match_id``."""
        event = ScoreUpdate(match_id=match_id, match=match)
        
        with self._lock:
            targets = list(self._channels.get(event.channel, ()))
        
        delivered = 0
        for subscriber in targets:
            if subscriber.closed:
                self.unsubscribe(subscriber)
                continue
            if subscriber.offer(event):
                delivered += 1
        
        logger.info(f"Broadcast {event.channel} to {delivered}/{len(targets)} subscribers")
        return event
    
    def close(self):
        """Disconnect every subscriber."""
        with self._lock:
            subscribers = {s for members in self._channels.values() for s in members}
            self._channels.clear()
            subscribers.update(self._subscribers.values())
            self._subscribers.clear()
        
        for subscriber in subscribers:
            subscriber.channels.clear()
            subscriber.close()
