"""A set of frames that share the characteristics needed to be handled as one entity.

Frames join a frame set when their distinguishing signature (patient, study,
equipment, pixel grid, geometry ...) matches exactly.  While frames stream in,
the frame set keeps a running guess of which attributes have the same value in
every frame.  The first read after an insertion finalizes that guess into a
partition:

* ``shared`` attributes, present with one value in every frame;
* ``per-frame`` attributes, everything else, kept per SOP Instance UID;
* a frame order by (SeriesNumber, InstanceNumber, SOPInstanceUID).

The partition is memoized until the next insertion.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping

from pydicom.datadict import keyword_for_tag
from pydicom.tag import BaseTag

from .errors import DuplicateInstanceIdentifierError, MissingInstanceIdentifierError
from .extraction import AttributeMap, extract_distinguishing, extract_per_frame
from .ordering import sort_instances
from .source import Frame, as_attribute_source
from .tags import SOP_INSTANCE_UID


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Partition:
    """Finalized view of a frame set; only ever built whole."""

    shared: Mapping[BaseTag, str]
    per_frame_tags: tuple[BaseTag, ...]
    per_frame_by_instance: Mapping[str, Mapping[BaseTag, str]]
    sorted_instances: tuple[str, ...]


class FrameSet:
    """Frames with identical distinguishing attributes, partitioned into shared and per-frame data."""

    def __init__(self, frame: Frame) -> None:
        source = as_attribute_source(frame)
        self._keywords: dict[BaseTag, str] = {}
        self._distinguishing: AttributeMap = extract_distinguishing(source, self._keywords)
        self._per_frame_by_instance: dict[str, AttributeMap] = {}
        self._shared: AttributeMap = {}
        self._shared_count: dict[BaseTag, int] = {}
        self._evicted: set[BaseTag] = set()
        self._number_of_frames = 0
        self._partition: Partition | None = None
        self.insert(source)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def eligible(self, frame: Frame) -> bool:
        """True if *frame* has exactly this frame set's distinguishing values."""

        return extract_distinguishing(as_attribute_source(frame)) == self._distinguishing

    def insert(self, frame: Frame) -> str:
        """Add a frame that is already known to be eligible.

        Returns the SOP Instance UID the frame was stored under.  Nothing is
        modified when the frame is rejected.
        """

        source = as_attribute_source(frame)
        instance_uid = source.single_value(SOP_INSTANCE_UID)
        if not instance_uid:
            raise MissingInstanceIdentifierError()
        if instance_uid in self._per_frame_by_instance:
            raise DuplicateInstanceIdentifierError(instance_uid)

        candidates = extract_per_frame(source, self._keywords)
        self._number_of_frames += 1
        self._per_frame_by_instance[instance_uid] = candidates
        for tag, value in candidates.items():
            # SOPInstanceUID stays per-frame even in a single frame set; sorting needs it.
            if tag != SOP_INSTANCE_UID:
                self._accumulate_shared(tag, value)
        self._partition = None
        return instance_uid

    def _accumulate_shared(self, tag: BaseTag, value: str) -> None:
        if tag in self._evicted:
            return
        if tag not in self._shared:
            # Either a genuinely shared tag seen for the first time, or one that was
            # absent from earlier frames; the frame count check in finalize() drops the latter.
            self._shared[tag] = value
            self._shared_count[tag] = 1
        elif self._shared[tag] == value:
            self._shared_count[tag] += 1
        else:
            del self._shared[tag]
            del self._shared_count[tag]
            self._evicted.add(tag)

    # ------------------------------------------------------------------
    # Partitioning
    # ------------------------------------------------------------------

    def finalize(self) -> Partition:
        """Partition the frames into shared and per-frame attributes and sort them."""

        if self._partition is not None:
            return self._partition

        shared = {
            tag: value
            for tag, value in sorted(self._shared.items())
            if self._shared_count[tag] >= self._number_of_frames
        }

        remaining_by_instance: dict[str, AttributeMap] = {}
        per_frame_tags: set[BaseTag] = set()
        for instance_uid in sorted(self._per_frame_by_instance):
            remaining = {
                tag: value
                for tag, value in self._per_frame_by_instance[instance_uid].items()
                if tag not in shared
            }
            remaining_by_instance[instance_uid] = remaining
            per_frame_tags.update(remaining)

        self._partition = Partition(
            shared=MappingProxyType(shared),
            per_frame_tags=tuple(sorted(per_frame_tags)),
            per_frame_by_instance=MappingProxyType(
                {uid: MappingProxyType(values) for uid, values in remaining_by_instance.items()}
            ),
            sorted_instances=tuple(sort_instances(remaining_by_instance)),
        )
        logger.debug(
            "Partitioned frame set of %d frames: %d shared, %d per-frame tags",
            self._number_of_frames,
            len(shared),
            len(per_frame_tags),
        )
        return self._partition

    @property
    def is_partitioned(self) -> bool:
        return self._partition is not None

    @property
    def number_of_frames(self) -> int:
        return self._number_of_frames

    # ------------------------------------------------------------------
    # Read accessors (each finalizes first)
    # ------------------------------------------------------------------

    def distinguishing_tags(self) -> tuple[BaseTag, ...]:
        self.finalize()
        return tuple(self._distinguishing)

    def distinguishing_attributes(self) -> Mapping[BaseTag, str]:
        self.finalize()
        return MappingProxyType(self._distinguishing)

    def shared_tags(self) -> tuple[BaseTag, ...]:
        return tuple(self.finalize().shared)

    def shared_attributes(self) -> Mapping[BaseTag, str]:
        return self.finalize().shared

    def per_frame_tags(self) -> tuple[BaseTag, ...]:
        return self.finalize().per_frame_tags

    def per_frame_attributes(self, instance_uid: str) -> Mapping[BaseTag, str]:
        return self.finalize().per_frame_by_instance[instance_uid]

    def sorted_instance_identifiers(self) -> tuple[str, ...]:
        return self.finalize().sorted_instances

    def frames(self) -> Iterator[tuple[str, Mapping[BaseTag, str]]]:
        """Yield ``(instance_uid, per-frame attributes)`` in frame order."""

        partition = self.finalize()
        for instance_uid in partition.sorted_instances:
            yield instance_uid, partition.per_frame_by_instance[instance_uid]

    def size(self) -> int:
        return len(self.finalize().sorted_instances)

    def __len__(self) -> int:
        return self.size()

    def keyword(self, tag: BaseTag) -> str:
        return self._keywords.get(tag) or keyword_for_tag(tag)

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _format_entry(self, tag: BaseTag, value: str) -> str:
        return f"{tag} {self.keyword(tag)} = {value}"

    def __str__(self) -> str:
        partition = self.finalize()
        lines = [f"\tNumber of frames: {self._number_of_frames}", "\tDistinguishing:"]
        lines.extend(f"\t\t{self._format_entry(tag, value)}" for tag, value in self._distinguishing.items())
        lines.append("\tShared:")
        lines.extend(f"\t\t\t{self._format_entry(tag, value)}" for tag, value in partition.shared.items())
        lines.append("\tPer-Frame:")
        lines.extend(f"\t\t{tag} {self.keyword(tag)}" for tag in partition.per_frame_tags)
        for index, (_, attributes) in enumerate(self.frames()):
            lines.append(f"\tFrame [{index}]:")
            lines.extend(f"\t\t\t{self._format_entry(tag, value)}" for tag, value in attributes.items())
        lines.append("\tFrame order:")
        lines.extend(
            f"\t\tFrame [{index}]: {instance_uid}" for index, instance_uid in enumerate(partition.sorted_instances)
        )
        return "\n".join(lines) + "\n"

    def __repr__(self) -> str:
        return f"<FrameSet frames={self._number_of_frames} partitioned={self.is_partitioned}>"
