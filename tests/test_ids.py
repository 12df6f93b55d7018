"""Tests for synthetic id generation."""

from renpy_transcoder.ids import SequentialIds


def test_sequential_ids_count_per_kind():
    ids = SequentialIds()
    assert ids("element") == "element-0"
    assert ids("element") == "element-1"
    assert ids("choice") == "choice-0"
    assert ids("element") == "element-2"


def test_instances_are_independent():
    a = SequentialIds()
    b = SequentialIds()
    a("element")
    assert b("element") == "element-0"
