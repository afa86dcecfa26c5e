# /tests/test_form_service.py

import pytest
from unittest.mock import AsyncMock, MagicMock

from school_console.errors import ConflictError, ValidationError
from school_console.models.resource_model import ResourceType
from school_console.services.collaborators import NotifyKind
from school_console.services.entity_forms import FORM_DEFINITIONS, build_entity_form
from school_console.services.form_helpers.schema import array, field
from school_console.services.form_helpers.validators import PATTERNS, email, pattern, required
from school_console.services.form_service import NestedFormModel, populate_from_record, submit
from school_console.services.virtual_fields import apply_virtual_fields


@pytest.fixture
def guardian_form():
    """A three-level form with five leaves: name, guardian.{name, contact.{phone, email}}, tags.0"""
    return NestedFormModel.build({
        "name": field("", required()),
        "guardian": {
            "name": field(""),
            "contact": {
                "phone": field("", pattern(PATTERNS["PHONE"], "phone number")),
                "email": field("", email()),
            },
        },
        "tags": array(field(""), initial=1),
    })


def test_a_new_form_is_pristine(guardian_form):
    assert guardian_form.touched is False
    assert guardian_form.dirty is False
    assert guardian_form.valid is False
    assert guardian_form.errors() == {"name": {"required": True}}
    assert guardian_form.visible_errors() == {}


def test_mark_all_touched_reaches_every_depth(guardian_form):
    guardian_form.mark_all_touched()

    assert guardian_form.touched is True
    for path in ("name", "guardian.name", "guardian.contact.phone", "guardian.contact.email", "tags.0"):
        assert guardian_form.get(path).is_touched is True
    assert guardian_form.get("guardian.contact").touched is True
    print("\n✅ SUCCESS: test_mark_all_touched_reaches_every_depth passed.")


def test_mark_all_touched_reaches_lists_nested_in_deep_groups():
    form = NestedFormModel.build({
        "a": {"b": {"c": array(field("", required()), initial=2), "d": field("")}},
        "e": field(""),
    })
    assert form.get("a.b.c").touched is False

    form.mark_all_touched()

    for path in ("a.b.c.0", "a.b.c.1", "a.b.d", "e"):
        assert form.get(path).is_touched is True
    assert form.get("a.b.c").touched is True
    assert form.touched is True
    assert set(form.visible_errors()) == {"a.b.c.0", "a.b.c.1"}


def test_empty_patch_changes_nothing(guardian_form):
    before = guardian_form.to_value()
    guardian_form.patch({})
    assert guardian_form.to_value() == before
    assert guardian_form.dirty is False


def test_patch_merges_without_clearing_siblings(guardian_form):
    guardian_form.patch({"guardian": {"contact": {"phone": "9876543210"}}})
    guardian_form.patch({"guardian": {"name": "Meera"}})

    value = guardian_form.to_value()
    assert value["guardian"] == {"name": "Meera", "contact": {"phone": "9876543210", "email": ""}}
    assert guardian_form.dirty is False


def test_patch_with_missing_nested_object_keeps_the_shape(guardian_form):
    guardian_form.patch({"name": "Asha", "guardian": None, "tags": None})
    value = guardian_form.to_value()
    assert value["guardian"]["contact"] == {"phone": "", "email": ""}
    assert value["tags"] == [""]
    assert guardian_form.valid is True


def test_patch_resizes_lists(guardian_form):
    guardian_form.patch({"tags": ["a", "b", "c"]})
    assert guardian_form.to_value()["tags"] == ["a", "b", "c"]

    guardian_form.patch({"tags": ["z"]})
    assert guardian_form.to_value()["tags"] == ["z"]

    guardian_form.patch({"tags": []})
    assert guardian_form.to_value()["tags"] == []


def test_patch_rejects_mismatched_shapes(guardian_form):
    with pytest.raises(TypeError):
        guardian_form.patch({"guardian": "not a mapping"})
    with pytest.raises(TypeError):
        guardian_form.patch({"tags": "abc"})


def test_edits_mark_dirty_and_revalidate(guardian_form):
    guardian_form.set_value("guardian.contact.email", "not-an-email")
    assert guardian_form.dirty is True
    assert guardian_form.errors()["guardian.contact.email"] == {"email": True}

    guardian_form.set_value("guardian.contact.email", "meera@example.com")
    assert "guardian.contact.email" not in guardian_form.errors()

    with pytest.raises(TypeError):
        guardian_form.set_value("guardian", "x")
    with pytest.raises(KeyError):
        guardian_form.get("guardian.missing")


def test_touched_never_reverts(guardian_form):
    guardian_form.touch("name")
    guardian_form.set_value("name", "Asha")
    guardian_form.patch({"name": "Ravi"})
    assert guardian_form.get("name").is_touched is True


def test_visible_errors_only_for_touched_fields(guardian_form):
    guardian_form.set_value("guardian.contact.phone", "12")
    assert guardian_form.visible_errors() == {}

    guardian_form.touch("guardian")
    assert guardian_form.visible_errors() == {"guardian.contact.phone": "Invalid phone number format"}

    guardian_form.mark_all_touched()
    assert guardian_form.visible_errors()["name"] == "This field is required"


def test_reset_restores_a_pristine_tree(guardian_form):
    guardian_form.patch({"name": "Asha", "tags": ["a", "b"]})
    guardian_form.mark_all_touched()
    guardian_form.reset()
    assert guardian_form.to_value()["tags"] == [""]
    assert guardian_form.touched is False


def test_build_requires_a_group():
    with pytest.raises(TypeError):
        NestedFormModel.build(array(field("")))


@pytest.mark.asyncio
async def test_invalid_submit_touches_everything_and_skips_persist(guardian_form):
    persist = AsyncMock()
    notify = MagicMock(return_value=None)

    result = await submit(guardian_form, persist, notify)

    assert result.ok is False
    assert isinstance(result.error, ValidationError)
    assert result.error.invalid_paths == ["name"]
    assert guardian_form.touched is True
    persist.assert_not_awaited()
    notify.assert_not_called()


@pytest.mark.asyncio
async def test_valid_submit_persists_the_flattened_value(guardian_form):
    persist = AsyncMock(return_value={"_id": "stu_9"})
    notify = MagicMock(return_value=None)
    guardian_form.patch({"name": "Asha", "tags": ["x"]})

    result = await submit(guardian_form, persist, notify, entity_label="Student")

    assert result.ok is True
    assert result.value == {"_id": "stu_9"}
    persist.assert_awaited_once_with(None, {
        "name": "Asha",
        "guardian": {"name": "", "contact": {"phone": "", "email": ""}},
        "tags": ["x"],
    })
    notify.assert_called_once_with("Student created successfully", NotifyKind.SUCCESS)


@pytest.mark.asyncio
async def test_failed_submit_notifies_once_and_keeps_the_form(guardian_form):
    persist = AsyncMock(side_effect=ConflictError())
    notify = MagicMock(return_value=None)
    guardian_form.patch({"name": "Asha"})
    before = guardian_form.to_value()

    result = await submit(guardian_form, persist, notify, record_id="stu_1", entity_label="Student")

    assert isinstance(result.error, ConflictError)
    persist.assert_awaited_once()
    notify.assert_called_once_with("Conflict. The resource already exists.", NotifyKind.ERROR)
    assert guardian_form.to_value() == before


@pytest.mark.asyncio
async def test_update_message_uses_updated(guardian_form):
    notify = MagicMock(return_value=None)
    guardian_form.patch({"name": "Asha"})
    await submit(guardian_form, AsyncMock(return_value={}), notify, record_id="stu_1", entity_label="Class")
    notify.assert_called_once_with("Class updated successfully", NotifyKind.SUCCESS)


def test_populate_course_reduces_references_and_drops_virtual_fields():
    record = apply_virtual_fields(ResourceType.COURSE, {
        "_id": "crs_7",
        "courseName": "Algorithms",
        "courseCode": "CS301",
        "creditHours": 4,
        "department": {"_id": "dep_1", "departmentName": "Computer Science"},
        "semester": "Fall",
        "year": 2025,
        "maxStudents": 40,
        "enrolledStudents": 12,
        "prerequisites": [{"_id": "crs_1", "courseCode": "CS101"}, "crs_2"],
        "status": "Active",
    })
    form = build_entity_form(ResourceType.COURSE)

    populate_from_record(form, record, FORM_DEFINITIONS[ResourceType.COURSE].references)

    value = form.to_value()
    assert value["courseCode"] == "CS301"
    assert value["department"] == "dep_1"
    assert value["prerequisites"] == ["crs_1", "crs_2"]
    assert value["resources"] == []
    assert "enrollmentRate" not in value
    assert form.valid is True
    assert form.dirty is False
