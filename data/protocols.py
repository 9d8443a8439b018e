"""
Data Layer Protocol Definitions

This module defines typing.Protocol interfaces for the collaborators the
feed repository depends on. These protocols enable dependency injection,
so the repository can be exercised without real storage or devices.

Protocols defined:
- KeyValueStore: simple get/set/delete storage keyed by tuples
- FriendGraph: answers whether one user counts as another's friend
- ProfilePictureLookup: fetches a user's profile picture
- Recorder: audio capture and live transcription
"""

from typing import Any, Hashable, Iterable, List, Optional, Protocol, Set


class KeyValueStore(Protocol):
    """Protocol defining simple key-value storage.

    Keys are structured tuples such as ("comment_like", comment_id, viewer_id)
    rather than concatenated strings, so distinct ids cannot collide.
    No transactions are offered.
    """

    def get(self, key: Hashable, default: Any = None) -> Any:
        """Return the stored value, or default if the key is absent."""
        ...

    def set(self, key: Hashable, value: Any) -> None:
        """Store value under key, replacing any previous value."""
        ...

    def delete(self, key: Hashable) -> None:
        """Remove key. Removing an absent key is not an error."""
        ...

    def keys(self) -> Iterable[Hashable]:
        """All keys currently stored."""
        ...


class FriendGraph(Protocol):
    """Protocol for the friend relation used by feed filtering.

    Implementations may be symmetric sets, directed request-based graphs,
    or anything else; the filtering logic only asks is_friend().
    """

    def is_friend(self, viewer_id: str, other_id: str) -> bool:
        """True if other_id counts as a friend when viewer_id looks at the feed."""
        ...

    def friends_of(self, viewer_id: str) -> Set[str]:
        """The effective friend ids for viewer_id."""
        ...


class ProfilePictureLookup(Protocol):
    """Protocol for fetching a user's profile picture."""

    def fetch(self, user_id: str) -> Optional[bytes]:
        """Return image bytes, or None if the user has no picture."""
        ...


class Recorder(Protocol):
    """Protocol for the audio recorder used before a response is shared.

    The recorder keeps a bounded amplitude history (each sample in
    [0.1, 1.0]) and a transcript that updates while recording and is
    frozen when stop() is called.
    """

    amplitudes: List[float]
    transcript: str

    def start(self, transcribe: bool = True) -> None:
        ...

    def stop(self) -> None:
        ...

    def start_recording_to_file(self) -> None:
        ...

    def stop_recording_to_file(self) -> Optional[str]:
        """Stop file recording and return the audio path, or None if it was discarded."""
        ...
