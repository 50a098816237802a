"""Tests for FrameSet partitioning, ordering and rendering."""

import pytest
from pydicom.dataset import Dataset
from pydicom.tag import Tag

from framesets import DuplicateInstanceIdentifierError, FrameSet, MissingInstanceIdentifierError
from framesets.extraction import extract_per_frame
from framesets.source import MappingAttributeSource, as_attribute_source
from framesets.tags import ACQUISITION_DATE_TIME, DISTINGUISHING_TAGS, SOP_INSTANCE_UID


INSTANCE_NUMBER = Tag("InstanceNumber")
SERIES_DESCRIPTION = Tag("SeriesDescription")


def _frame_set(frames):
    frame_set = FrameSet(frames[0])
    for frame in frames[1:]:
        frame_set.insert(frame)
    return frame_set


class TestSingleFrame:
    def test_everything_but_instance_uid_is_shared(self, make_frame):
        frame_set = FrameSet(make_frame("1.1"))

        assert frame_set.per_frame_tags() == (SOP_INSTANCE_UID,)
        shared = frame_set.shared_attributes()
        assert SOP_INSTANCE_UID not in shared
        assert shared[INSTANCE_NUMBER] == "1"
        assert shared[SERIES_DESCRIPTION] == "T1 Weighted"
        assert shared[ACQUISITION_DATE_TIME] == ""
        assert frame_set.sorted_instance_identifiers() == ("1.1",)
        assert frame_set.size() == 1
        assert len(frame_set) == 1

    def test_distinguishing_tags(self, make_frame):
        frame_set = FrameSet(make_frame("1.1"))
        assert set(frame_set.distinguishing_tags()) == DISTINGUISHING_TAGS
        assert frame_set.distinguishing_attributes()[Tag("Rows")] == "256"


class TestPartition:
    def test_two_frames_differing_in_instance_number(self, make_frame):
        frame_set = _frame_set([make_frame("1.2", InstanceNumber=2), make_frame("1.1", InstanceNumber=1)])

        assert frame_set.per_frame_tags() == (SOP_INSTANCE_UID, INSTANCE_NUMBER)
        assert frame_set.sorted_instance_identifiers() == ("1.1", "1.2")
        shared = frame_set.shared_attributes()
        assert shared[Tag("SeriesNumber")] == "10"
        assert shared[Tag("SeriesInstanceUID")] == "1.2.3.4.5.6"
        assert INSTANCE_NUMBER not in shared

    def test_shared_tags_removed_from_every_frame(self, make_frame):
        frame_set = _frame_set([make_frame("1.1"), make_frame("1.2", InstanceNumber=2)])
        shared = set(frame_set.shared_tags())
        for instance_uid, attributes in frame_set.frames():
            assert shared.isdisjoint(attributes)
            assert attributes[SOP_INSTANCE_UID] == instance_uid
        assert shared.isdisjoint(frame_set.per_frame_tags())

    def test_per_frame_union_matches_instance_maps(self, make_frame):
        frame_set = _frame_set(
            [
                make_frame("1.1"),
                make_frame("1.2", InstanceNumber=2, EchoTime=60.0),
                make_frame("1.3", InstanceNumber=3),
            ]
        )
        union = set()
        for _, attributes in frame_set.frames():
            union.update(attributes)
        assert set(frame_set.per_frame_tags()) == union
        assert Tag("EchoTime") in union

    def test_all_frames_identical_except_uid(self, make_frame):
        frame_set = _frame_set([make_frame("1.1"), make_frame("1.2"), make_frame("1.3")])
        assert frame_set.per_frame_tags() == (SOP_INSTANCE_UID,)
        assert frame_set.sorted_instance_identifiers() == ("1.1", "1.2", "1.3")

    def test_tag_only_in_first_frame_is_not_shared(self, make_frame):
        frame_set = _frame_set(
            [
                make_frame("1.1", ImageComments="first only"),
                make_frame("1.2"),
                make_frame("1.3"),
            ]
        )
        comments = Tag("ImageComments")
        assert comments not in frame_set.shared_attributes()
        assert comments in frame_set.per_frame_tags()
        assert frame_set.per_frame_attributes("1.1")[comments] == "first only"
        assert comments not in frame_set.per_frame_attributes("1.2")

    def test_empty_values_count_as_shared(self, make_frame):
        frame_set = _frame_set([make_frame("1.1", ImageComments=""), make_frame("1.2", ImageComments="")])
        assert frame_set.shared_attributes()[Tag("ImageComments")] == ""

    def test_eviction_is_permanent(self, make_frame):
        frame_set = _frame_set(
            [
                make_frame("1.1", SeriesDescription="A"),
                make_frame("1.2", SeriesDescription="B"),
                make_frame("1.3", SeriesDescription="A"),
            ]
        )
        assert SERIES_DESCRIPTION not in frame_set.shared_attributes()
        assert frame_set.per_frame_attributes("1.3")[SERIES_DESCRIPTION] == "A"

        frame_set.insert(make_frame("1.4", SeriesDescription="A"))

        assert SERIES_DESCRIPTION not in frame_set.shared_attributes()
        assert SERIES_DESCRIPTION in frame_set.per_frame_tags()
        assert frame_set.per_frame_attributes("1.4")[SERIES_DESCRIPTION] == "A"
        assert frame_set.per_frame_attributes("1.2")[SERIES_DESCRIPTION] == "B"

    def test_sequences_never_partitioned(self, make_frame):
        ds = make_frame("1.1")
        item = Dataset()
        item.ReferencedSOPInstanceUID = "9.9"
        ds.ReferencedImageSequence = [item]
        frame_set = FrameSet(ds)
        sequence = Tag("ReferencedImageSequence")
        assert sequence not in frame_set.shared_attributes()
        assert sequence not in frame_set.per_frame_tags()

    def test_shared_values_match_every_frame(self, make_frame):
        frames = [make_frame("1.1"), make_frame("1.2", InstanceNumber=2), make_frame("1.3", EchoTime=45.0)]
        frame_set = _frame_set(frames)
        originals = [extract_per_frame(as_attribute_source(frame)) for frame in frames]
        for tag, value in frame_set.shared_attributes().items():
            assert all(original[tag] == value for original in originals)


class TestAcquisitionDateTime:
    def test_synthesized_value_migrates_to_shared(self, make_frame):
        frame_set = _frame_set(
            [
                make_frame("1.1", AcquisitionDate="20240101", AcquisitionTime="123000"),
                make_frame("1.2", AcquisitionDate="20240101", AcquisitionTime="123000", InstanceNumber=2),
            ]
        )
        assert frame_set.shared_attributes()[ACQUISITION_DATE_TIME] == "20240101123000"
        assert Tag("AcquisitionDate") not in frame_set.shared_attributes()

    def test_differing_synthesized_values_are_per_frame(self, make_frame):
        frame_set = _frame_set(
            [
                make_frame("1.1", AcquisitionDate="20240101", AcquisitionTime="123000"),
                make_frame("1.2", AcquisitionDate="20240101", AcquisitionTime="123005"),
            ]
        )
        assert ACQUISITION_DATE_TIME in frame_set.per_frame_tags()
        assert frame_set.per_frame_attributes("1.2")[ACQUISITION_DATE_TIME] == "20240101123005"


class TestOrdering:
    def test_series_then_instance_then_uid(self, make_frame):
        frame_set = _frame_set(
            [
                make_frame("1.1", SeriesNumber=5, InstanceNumber=1),
                make_frame("1.2", SeriesNumber=5, InstanceNumber=2),
                make_frame("1.3", SeriesNumber=2, InstanceNumber=1),
            ]
        )
        assert frame_set.sorted_instance_identifiers() == ("1.3", "1.1", "1.2")

    def test_missing_numbers_sort_first(self, make_frame):
        frame_set = _frame_set(
            [
                make_frame("1.1", InstanceNumber=1),
                make_frame("1.2", InstanceNumber=None),
            ]
        )
        assert frame_set.sorted_instance_identifiers() == ("1.2", "1.1")

    def test_malformed_number_keeps_frame(self):
        base = {"Modality": "CT", "SeriesNumber": "1"}
        frame_set = _frame_set(
            [
                MappingAttributeSource({**base, "SOPInstanceUID": "2.1", "InstanceNumber": "3"}),
                MappingAttributeSource({**base, "SOPInstanceUID": "2.2", "InstanceNumber": "three"}),
            ]
        )
        assert frame_set.sorted_instance_identifiers() == ("2.2", "2.1")
        assert frame_set.size() == 2


class TestInsertion:
    def test_missing_instance_uid_on_construction(self, make_frame):
        with pytest.raises(MissingInstanceIdentifierError):
            FrameSet(make_frame(None))

    def test_missing_instance_uid_leaves_state_untouched(self, make_frame):
        frame_set = FrameSet(make_frame("1.1"))
        frame_set.finalize()
        with pytest.raises(MissingInstanceIdentifierError):
            frame_set.insert(make_frame(None))
        assert frame_set.number_of_frames == 1
        assert frame_set.is_partitioned

    def test_empty_instance_uid_is_missing(self, make_frame):
        frame_set = FrameSet(make_frame("1.1"))
        with pytest.raises(MissingInstanceIdentifierError):
            frame_set.insert(make_frame(""))

    def test_duplicate_instance_uid_rejected(self, make_frame):
        frame_set = FrameSet(make_frame("1.1"))
        with pytest.raises(DuplicateInstanceIdentifierError) as excinfo:
            frame_set.insert(make_frame("1.1"))
        assert excinfo.value.instance_uid == "1.1"
        assert frame_set.number_of_frames == 1
        assert frame_set.size() == 1

    def test_insert_returns_instance_uid(self, make_frame):
        frame_set = FrameSet(make_frame("1.1"))
        assert frame_set.insert(make_frame("1.2")) == "1.2"

    def test_insert_after_read_reopens_partition(self, make_frame):
        frame_set = _frame_set([make_frame("1.1"), make_frame("1.2", InstanceNumber=2)])
        assert SERIES_DESCRIPTION in frame_set.shared_attributes()

        frame_set.insert(make_frame("1.3", InstanceNumber=3, SeriesDescription="T2 Weighted"))
        assert not frame_set.is_partitioned

        assert SERIES_DESCRIPTION not in frame_set.shared_attributes()
        assert frame_set.per_frame_attributes("1.1")[SERIES_DESCRIPTION] == "T1 Weighted"
        assert frame_set.per_frame_attributes("1.3")[SERIES_DESCRIPTION] == "T2 Weighted"
        assert frame_set.size() == 3


class TestEligibility:
    def test_matching_signature(self, make_frame):
        frame_set = FrameSet(make_frame("1.1"))
        assert frame_set.eligible(make_frame("1.2", InstanceNumber=2))

    def test_differing_rows(self, make_frame):
        frame_set = FrameSet(make_frame("1.1", Rows=512))
        assert not frame_set.eligible(make_frame("1.2", Rows=768))

    def test_eligible_does_not_mutate(self, make_frame):
        frame_set = FrameSet(make_frame("1.1"))
        partition = frame_set.finalize()
        frame_set.eligible(make_frame("1.2", Modality="CT"))
        assert frame_set.number_of_frames == 1
        assert frame_set.finalize() is partition


class TestFinalize:
    def test_idempotent(self, make_frame):
        frame_set = _frame_set([make_frame("1.1"), make_frame("1.2", InstanceNumber=2)])
        first = frame_set.finalize()
        assert frame_set.finalize() is first
        assert frame_set.sorted_instance_identifiers() is first.sorted_instances
        assert frame_set.shared_tags() == frame_set.shared_tags()

    def test_not_partitioned_until_read(self, make_frame):
        frame_set = FrameSet(make_frame("1.1"))
        assert not frame_set.is_partitioned
        frame_set.per_frame_tags()
        assert frame_set.is_partitioned

    def test_views_are_read_only(self, make_frame):
        frame_set = FrameSet(make_frame("1.1"))
        with pytest.raises(TypeError):
            frame_set.shared_attributes()[SOP_INSTANCE_UID] = "x"
        with pytest.raises(TypeError):
            frame_set.per_frame_attributes("1.1")[SOP_INSTANCE_UID] = "x"


class TestRendering:
    def test_sections_in_order(self, make_frame):
        frame_set = _frame_set([make_frame("1.2", InstanceNumber=2), make_frame("1.1", InstanceNumber=1)])
        text = str(frame_set)
        headers = [
            "\tNumber of frames: 2",
            "\tDistinguishing:",
            "\tShared:",
            "\tPer-Frame:",
            "\tFrame [0]:",
            "\tFrame [1]:",
            "\tFrame order:",
        ]
        positions = [text.index(header) for header in headers]
        assert positions == sorted(positions)

    def test_entries(self, make_frame):
        frame_set = _frame_set([make_frame("1.2", InstanceNumber=2), make_frame("1.1", InstanceNumber=1)])
        lines = str(frame_set).splitlines()
        assert "\t\t(0008,0060) Modality = MR" in lines
        assert "\t\t\t(0008,103E) SeriesDescription = T1 Weighted" in lines
        assert "\t\t(0008,0018) SOPInstanceUID" in lines
        assert "\t\t(0020,0013) InstanceNumber" in lines
        assert "\t\tFrame [0]: 1.1" in lines
        assert "\t\tFrame [1]: 1.2" in lines

    def test_frame_blocks_follow_sorted_order(self, make_frame):
        frame_set = _frame_set([make_frame("1.2", InstanceNumber=2), make_frame("1.1", InstanceNumber=1)])
        lines = str(frame_set).splitlines()
        block = lines[lines.index("\tFrame [0]:") + 1 : lines.index("\tFrame [1]:")]
        assert block == ["\t\t\t(0008,0018) SOPInstanceUID = 1.1", "\t\t\t(0020,0013) InstanceNumber = 1"]

    def test_rendering_is_stable(self, make_frame):
        frame_set = _frame_set([make_frame("1.1"), make_frame("1.2", InstanceNumber=2)])
        assert str(frame_set) == str(frame_set)

    def test_repr_does_not_finalize(self, make_frame):
        frame_set = FrameSet(make_frame("1.1"))
        assert repr(frame_set) == "<FrameSet frames=1 partitioned=False>"
        assert not frame_set.is_partitioned
