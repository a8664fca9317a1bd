import json
import random
import string
import threading
from typing import Any, Dict, List, Optional, Sequence

from colored_logger import get_colored_logger
from .models import Document, Tag
from .storage import KeyValueStorage, MemoryStorage

logger = get_colored_logger(__name__)

DEFAULT_TAG_COLOR = "#3b82f6"
DEFAULT_KEY_PREFIX = "doc_tags_"
TAG_ID_LENGTH = 9


def generate_tag_id(length: int = TAG_ID_LENGTH) -> str:
    """Random lower-case base-36 identifier."""
    alphabet = string.ascii_lowercase + string.digits
    return "".join(random.choices(alphabet, k=length))


class TagStore:
    """
    Per-document tag assignments kept in a key-value storage.

    Each document's tags live under their own key as a JSON list of
    {id, name, color} objects. Storage errors (including a corrupt JSON
    record) are not caught here: callers filtering by tag need to know when
    the tag data could not be read.
    """

    def __init__(
        self,
        storage: KeyValueStorage = None,
        default_color: str = DEFAULT_TAG_COLOR,
        key_prefix: str = DEFAULT_KEY_PREFIX,
    ):
        """
        Initialize the tag store.

        Args:
            storage: Key-value medium. If None, an in-memory one is used.
            default_color: Color given to tags created without one
            key_prefix: Prefix of the per-document storage keys
        """
        self.storage = storage if storage is not None else MemoryStorage()
        self.default_color = default_color
        self.key_prefix = key_prefix

        # One lock per document id around read-modify-write cycles
        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    @classmethod
    def from_config(
        cls, config: Dict[str, Any], storage: KeyValueStorage = None
    ) -> "TagStore":
        tag_config = config.get("tags", {})
        return cls(
            storage=storage,
            default_color=tag_config.get("default_color", DEFAULT_TAG_COLOR),
            key_prefix=tag_config.get("key_prefix", DEFAULT_KEY_PREFIX),
        )

    def create_tag(self, name: str, color: Optional[str] = None) -> Tag:
        """
        Allocate a new tag with a random id.

        Nothing is stored until the tag is applied to a document, and no
        de-duplication by name takes place.
        """
        if color is None:
            color = self.default_color
        return Tag(id=generate_tag_id(), name=name, color=color)

    def tag(self, doc_id: str, tag: Tag) -> bool:
        """
        Attach a tag to a document.

        Returns:
            True if the tag was added, False if a tag with the same id was
            already attached
        """
        with self._lock_for(doc_id):
            tags = self.tags_for(doc_id)
            if any(existing.id == tag.id for existing in tags):
                logger.debug("Document %s already has tag %s", doc_id, tag.id)
                return False

            tags.append(tag)
            self._write(doc_id, tags)

        logger.debug("Tagged document %s with '%s' (%s)", doc_id, tag.name, tag.id)
        return True

    def untag(self, doc_id: str, tag_id: str) -> bool:
        """
        Detach a tag from a document by id.

        Returns:
            True if a tag was removed, False if it was not attached
        """
        with self._lock_for(doc_id):
            tags = self.tags_for(doc_id)
            remaining = [tag for tag in tags if tag.id != tag_id]
            if len(remaining) == len(tags):
                return False

            self._write(doc_id, remaining)

        logger.debug("Removed tag %s from document %s", tag_id, doc_id)
        return True

    def tags_for(self, doc_id: str) -> List[Tag]:
        """Tags attached to a document, empty if none were ever recorded."""
        stored = self.storage.get(self._key(doc_id))
        if not stored:
            return []
        return [Tag.from_dict(item) for item in json.loads(stored)]

    def all_tags(self) -> List[Tag]:
        """
        Every tag attached to any document, de-duplicated by id.

        The first record seen for an id wins; two tags sharing a name but not
        an id are both returned.
        """
        tags: Dict[str, Tag] = {}
        for key in self.storage.keys(self.key_prefix):
            stored = self.storage.get(key)
            if not stored:
                continue
            for item in json.loads(stored):
                tag = Tag.from_dict(item)
                if tag.id not in tags:
                    tags[tag.id] = tag

        return list(tags.values())

    def find_tag(self, name: str) -> Optional[Tag]:
        """First tag in all_tags() order with exactly this name."""
        for tag in self.all_tags():
            if tag.name == name:
                return tag
        return None

    def has_any_tag(self, doc_id: str, tag_names: Sequence[str]) -> bool:
        """True if the document carries a tag whose name is in tag_names."""
        wanted = set(tag_names)
        return any(tag.name in wanted for tag in self.tags_for(doc_id))

    def filter_by_tag(
        self, documents: Sequence[Document], tag_name: str
    ) -> List[Document]:
        """Documents carrying a tag named tag_name, in input order."""
        return [doc for doc in documents if self.has_any_tag(doc.id, [tag_name])]

    def _key(self, doc_id: str) -> str:
        return f"{self.key_prefix}{doc_id}"

    def _write(self, doc_id: str, tags: List[Tag]) -> None:
        self.storage.set(self._key(doc_id), json.dumps([t.to_dict() for t in tags]))

    def _lock_for(self, doc_id: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._locks.get(doc_id)
            if lock is None:
                lock = self._locks[doc_id] = threading.Lock()
            return lock
