"""Grouping of a stream of frames into frame sets."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, Optional, Tuple

from .config import GroupingConfig
from .errors import DuplicateInstanceIdentifierError, FrameSetError, InsertFailure, MissingInstanceIdentifierError
from .frame_set import FrameSet
from .source import Frame, as_attribute_source
from .sop_class import is_image_storage
from .tags import SOP_CLASS_UID, SOP_INSTANCE_UID


logger = logging.getLogger(__name__)


class FrameSetCollection:
    """Frame sets in the order their distinguishing signatures first appeared.

    Each incoming frame goes to the first frame set it is eligible for, or
    starts a new one.  SOP Instance UIDs are unique across the collection.
    """

    def __init__(self, config: Optional[GroupingConfig] = None) -> None:
        self.config = config or GroupingConfig()
        self.frame_sets: list[FrameSet] = []
        self.failures: list[InsertFailure] = []
        self.skipped = 0
        self._instance_uids: set[str] = set()

    def insert(self, frame: Frame) -> Optional[FrameSet]:
        """Place *frame* into a frame set and return it.

        Returns None when the frame is skipped by the image storage filter.
        Raises FrameSetError subclasses when the frame cannot be grouped.
        """

        source = as_attribute_source(frame)

        if self.config.image_storage_only and not is_image_storage(source.single_value(SOP_CLASS_UID)):
            logger.debug("Skipping non-image SOP Class %s", source.single_value(SOP_CLASS_UID) or "<missing>")
            self.skipped += 1
            return None

        instance_uid = source.single_value(SOP_INSTANCE_UID)
        if not instance_uid:
            raise MissingInstanceIdentifierError()
        if instance_uid in self._instance_uids:
            raise DuplicateInstanceIdentifierError(instance_uid)

        for frame_set in self.frame_sets:
            if frame_set.eligible(source):
                frame_set.insert(source)
                break
        else:
            frame_set = FrameSet(source)
            self.frame_sets.append(frame_set)
            logger.debug("Started frame set %d with instance %s", len(self.frame_sets) - 1, instance_uid)

        self._instance_uids.add(instance_uid)
        return frame_set

    def insert_all(self, frames: Iterable[Frame]) -> "FrameSetCollection":
        """Insert every frame, recording failures and carrying on with the rest."""

        return self.insert_labeled((None, frame) for frame in frames)

    def insert_labeled(self, labeled_frames: Iterable[Tuple[Optional[str], Frame]]) -> "FrameSetCollection":
        """Like insert_all() for ``(label, frame)`` pairs; the label is kept on failures."""

        for index, (label, frame) in enumerate(labeled_frames):
            try:
                self.insert(frame)
            except FrameSetError as exc:
                if self.config.raise_on_error:
                    raise
                logger.warning("Frame %s not grouped: %s", label or index, exc)
                self.failures.append(InsertFailure(index=index, error=exc, label=label))
        return self

    @property
    def number_of_frames(self) -> int:
        return sum(frame_set.number_of_frames for frame_set in self.frame_sets)

    def __len__(self) -> int:
        return len(self.frame_sets)

    def __iter__(self) -> Iterator[FrameSet]:
        return iter(self.frame_sets)

    def __getitem__(self, index: int) -> FrameSet:
        return self.frame_sets[index]

    def __str__(self) -> str:
        return "".join(f"Frame set [{index}]:\n{frame_set}" for index, frame_set in enumerate(self.frame_sets))


def build_frame_sets(frames: Iterable[Frame], config: Optional[GroupingConfig] = None) -> FrameSetCollection:
    return FrameSetCollection(config).insert_all(frames)
