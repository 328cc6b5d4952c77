"""Tests for tag input normalization and wholesale replacement."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from securezone.core.errors import NotFoundError, ValidationError
from securezone.models import Tag
from securezone.repositories.tag_repo import TagRepository
from securezone.services.tags import parse_tags


def test_array_and_string_forms_are_equivalent() -> None:
    assert parse_tags(["x", " y ", ""]) == ["x", "y"]
    assert parse_tags("x, y ,") == ["x", "y"]


@pytest.mark.parametrize("raw", [None, "", "  ,  ,", [], ["", "   "]])
def test_blank_inputs_normalize_to_no_tags(raw) -> None:
    assert parse_tags(raw) == []


def test_duplicates_and_order_are_kept() -> None:
    assert parse_tags("fire, smoke, fire") == ["fire", "smoke", "fire"]


def test_list_elements_are_not_split_on_commas() -> None:
    assert parse_tags(["a, b"]) == ["a, b"]


@pytest.mark.parametrize("raw", [42, {"tags": "a"}, ["a", 3], 1.5])
def test_malformed_shapes_are_rejected(raw) -> None:
    with pytest.raises(ValidationError):
        parse_tags(raw)


def test_overlong_tag_is_rejected() -> None:
    with pytest.raises(ValidationError):
        parse_tags("ok, " + "x" * 11, max_length=10)


def _tag_names(db_session, report_id: int) -> list[str]:
    stmt = select(Tag.name).where(Tag.report_id == report_id).order_by(Tag.id)
    return list(db_session.execute(stmt).scalars())


def test_replace_is_total_overwrite(db_session, tag_synchronizer, report) -> None:
    tag_synchronizer.replace_tags(db_session, report.id, ["a", "b"])

    updated = tag_synchronizer.replace_tags(db_session, report.id, "c")

    assert [tag.name for tag in updated.tags] == ["c"]
    assert _tag_names(db_session, report.id) == ["c"]


def test_replace_with_empty_string_clears(db_session, tag_synchronizer, report) -> None:
    tag_synchronizer.replace_tags(db_session, report.id, "a, b")

    updated = tag_synchronizer.replace_tags(db_session, report.id, "")

    assert updated.tags == []
    assert _tag_names(db_session, report.id) == []


def test_replace_on_missing_report(db_session, tag_synchronizer) -> None:
    with pytest.raises(NotFoundError):
        tag_synchronizer.replace_tags(db_session, 31337, "a")


def test_malformed_input_leaves_tags_untouched(db_session, tag_synchronizer, report) -> None:
    tag_synchronizer.replace_tags(db_session, report.id, ["keep"])

    with pytest.raises(ValidationError):
        tag_synchronizer.replace_tags(db_session, report.id, 7)

    assert _tag_names(db_session, report.id) == ["keep"]


def test_insert_failure_rolls_back_delete(db_session, tag_synchronizer, report, monkeypatch) -> None:
    tag_synchronizer.replace_tags(db_session, report.id, ["old"])

    def _fail(self, report_id, names):
        raise OperationalError("INSERT INTO tag", {}, Exception("disk full"))

    monkeypatch.setattr(TagRepository, "insert_many", _fail)

    with pytest.raises(OperationalError):
        tag_synchronizer.replace_tags(db_session, report.id, ["new"])

    assert _tag_names(db_session, report.id) == ["old"]
