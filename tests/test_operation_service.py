"""Tests for the operation directory and nutritionist invitations."""

import pytest

from feedlot.core.errors import NotFoundError, ValidationError
from feedlot.models.nutritionist import NutritionistStatus
from feedlot.models.operation import InviteCode
from feedlot.schemas.nutritionist import NutritionistInvite
from feedlot.schemas.operation import OperationCreate, OperationUpdate
from feedlot.services import nutritionist_service, operation_service, report_service

from .conftest import OPERATOR, OTHER_OPERATOR


def _operation_in(invite_code="RANCH2025", operator_email=OPERATOR):
    return OperationCreate(
        name="Rolling Hills Feedlot",
        operator_email=operator_email,
        location="Garden City, KS",
        invite_code=invite_code,
    )


@pytest.fixture
def invite_code(db):
    db.add(InviteCode(code="RANCH2025", operator_email=OPERATOR))
    db.commit()


class TestInviteCodes:
    def test_matching_code_and_email(self, db, invite_code):
        assert operation_service.validate_invite_code(db, "RANCH2025", OPERATOR)

    def test_code_for_another_email(self, db, invite_code):
        assert not operation_service.validate_invite_code(db, "RANCH2025", OTHER_OPERATOR)

    def test_unknown_code(self, db, invite_code):
        assert not operation_service.validate_invite_code(db, "NOPE", OPERATOR)


class TestCreateOperation:
    def test_creates_operation(self, db, ids, invite_code):
        operation = operation_service.create_operation(db, _operation_in(), ids=ids)

        assert operation.operation_id == "OP-001"
        assert operation.setup_date is not None
        assert operation_service.resolve_operation_id(db, OPERATOR) == "OP-001"

    def test_invalid_code_rejected(self, db, ids, invite_code):
        with pytest.raises(ValidationError):
            operation_service.create_operation(db, _operation_in(invite_code="NOPE"), ids=ids)

    def test_one_operation_per_email(self, db, ids, invite_code):
        operation_service.create_operation(db, _operation_in(), ids=ids)
        with pytest.raises(ValidationError):
            operation_service.create_operation(db, _operation_in(), ids=ids)

    def test_unknown_operator_has_no_operation(self, db):
        with pytest.raises(NotFoundError):
            operation_service.resolve_operation_id(db, OTHER_OPERATOR)


class TestUpdateOperation:
    def test_partial_update(self, db, operation):
        updated = operation_service.update_operation(
            db, operation.operation_id, OperationUpdate(location="Dodge City, KS")
        )

        assert updated.location == "Dodge City, KS"
        assert updated.name == "Rolling Hills Feedlot"

    def test_missing_operation(self, db):
        with pytest.raises(NotFoundError):
            operation_service.update_operation(db, "OP-404", OperationUpdate(name="X"))


class TestNutritionists:
    def test_invite_then_accept(self, db, ids):
        invited = nutritionist_service.invite_nutritionist(
            db,
            NutritionistInvite(
                personal_name="Dr. Sarah Johnson",
                business_name="Prairie Nutrition Solutions",
                operator_email=OPERATOR,
            ),
            ids=ids,
        )
        assert invited.status == NutritionistStatus.INVITED
        assert invited.display_name == "Prairie Nutrition Solutions"

        accepted = report_service.accept_nutritionist_invitation(db, invited.nutritionist_id, OPERATOR)

        assert accepted.status == NutritionistStatus.ACTIVE
        assert accepted.accepted_at is not None

    def test_accept_is_idempotent(self, db, ids):
        invited = nutritionist_service.invite_nutritionist(
            db, NutritionistInvite(personal_name="Mike Rodriguez", operator_email=OPERATOR), ids=ids
        )
        first = report_service.accept_nutritionist_invitation(db, invited.nutritionist_id, OPERATOR)
        accepted_at = first.accepted_at

        second = report_service.accept_nutritionist_invitation(db, invited.nutritionist_id, OPERATOR)

        assert second.accepted_at == accepted_at

    def test_other_operator_cannot_accept(self, db, ids):
        invited = nutritionist_service.invite_nutritionist(
            db, NutritionistInvite(personal_name="Mike Rodriguez", operator_email=OPERATOR), ids=ids
        )
        with pytest.raises(NotFoundError):
            report_service.accept_nutritionist_invitation(db, invited.nutritionist_id, OTHER_OPERATOR)

    def test_listed_per_operator(self, db, ids):
        nutritionist_service.invite_nutritionist(
            db, NutritionistInvite(personal_name="Dr. Sarah Johnson", operator_email=OPERATOR), ids=ids
        )
        nutritionist_service.invite_nutritionist(
            db, NutritionistInvite(personal_name="Dr. Emily Chen", operator_email=OTHER_OPERATOR), ids=ids
        )

        assert [n.personal_name for n in report_service.nutritionists_by_operator(db, OPERATOR)] == [
            "Dr. Sarah Johnson"
        ]
