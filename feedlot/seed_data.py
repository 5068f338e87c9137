from datetime import date, datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from feedlot.db import Base, SessionLocal, engine
from feedlot.models.base import utcnow
from feedlot.models.feeding_plan import (
    ChangeType,
    FeedingPlan,
    FeedingSchedule,
    PlanStatus,
    ScheduleChange,
)
from feedlot.models.nutritionist import Nutritionist, NutritionistStatus
from feedlot.models.operation import InviteCode
from feedlot.models.pen import CattleType, Pen, PenStatus, WeightRecord

SAMPLE_OPERATOR = "johnrob1880@gmail.com"


def create_tables() -> None:
    # Por si el esquema no está creado aún
    Base.metadata.create_all(bind=engine)


def _ingredient(name, category, amount, percentage, unit="lbs", nutrition=None):
    ingredient = {
        "name": name,
        "category": category,
        "amount": amount,
        "unit": unit,
        "percentage": percentage,
        "nutritional_value": None,
    }
    if nutrition:
        protein, fat, fiber, moisture = nutrition
        ingredient["nutritional_value"] = {
            "protein": protein,
            "fat": fat,
            "fiber": fiber,
            "moisture": moisture,
        }
    return ingredient


def _nutrition(protein, fat, fiber, moisture):
    return {"protein": protein, "fat": fat, "fiber": fiber, "moisture": moisture}


def seed_invite_codes(db: Session) -> None:
    if db.query(InviteCode).count() > 0:
        return

    # Los códigos los emite un sistema externo
    db.add_all(
        [
            InviteCode(code="RANCH2025", operator_email=SAMPLE_OPERATOR),
            InviteCode(code="CATTLE123", operator_email="jane.smith@example.com"),
            InviteCode(code="FEEDLOT456", operator_email="bob.johnson@example.com"),
            InviteCode(code="BEEF789", operator_email="mary.davis@example.com"),
        ]
    )
    db.commit()


def seed_nutritionists(db: Session, now: Optional[datetime] = None) -> None:
    if db.query(Nutritionist).count() > 0:
        return

    now = now or utcnow()
    nutritionists = [
        Nutritionist(
            nutritionist_id="NUT-001",
            personal_name="Dr. Sarah Johnson",
            business_name="Prairie Nutrition Solutions",
            operator_email=SAMPLE_OPERATOR,
            status=NutritionistStatus.INVITED,
            invited_at=now,
        ),
        Nutritionist(
            nutritionist_id="NUT-002",
            personal_name="Mike Rodriguez",
            business_name="Cattle Feed Experts Inc.",
            operator_email=SAMPLE_OPERATOR,
            status=NutritionistStatus.ACTIVE,
            invited_at=now - timedelta(days=7),
            accepted_at=now - timedelta(days=5),
        ),
        Nutritionist(
            nutritionist_id="NUT-003",
            personal_name="Dr. Emily Chen",
            business_name="Advanced Animal Nutrition",
            operator_email="jane.smith@example.com",
            status=NutritionistStatus.INVITED,
            invited_at=now,
        ),
    ]

    db.add_all(nutritionists)
    db.commit()


def seed_pens(db: Session) -> None:
    if db.query(Pen).count() > 0:
        return

    first_weighing = date(2025, 1, 1)
    second_weighing = date(2025, 1, 13)

    # Pen A-1: novillos cruzados, dos pesajes
    pen_a1 = Pen(
        pen_id="pen-001",
        name="Pen A-1",
        operator_email=SAMPLE_OPERATOR,
        nutritionist_id="NUT-001",
        capacity=25,
        current=23,
        status=PenStatus.ACTIVE,
        cattle_type=CattleType.STEERS,
        is_crossbred=True,
        feed_type="High Protein Mix",
        starting_weight=650,
        current_weight=890,
        market_weight=1350,
        average_daily_gain=3.2,
    )
    pen_a1.weight_history.extend(
        [
            WeightRecord(record_date=first_weighing, weight=650, recorded_by=SAMPLE_OPERATOR),
            WeightRecord(record_date=second_weighing, weight=890, recorded_by=SAMPLE_OPERATOR),
        ]
    )

    # Pen B-2: novillas
    pen_b2 = Pen(
        pen_id="pen-002",
        name="Pen B-2",
        operator_email=SAMPLE_OPERATOR,
        nutritionist_id="NUT-001",
        capacity=30,
        current=28,
        status=PenStatus.ACTIVE,
        cattle_type=CattleType.HEIFERS,
        is_crossbred=False,
        feed_type="Standard Grain Mix",
        starting_weight=550,
        current_weight=785,
        market_weight=1200,
        average_daily_gain=2.8,
    )
    pen_b2.weight_history.extend(
        [
            WeightRecord(record_date=first_weighing, weight=550, recorded_by=SAMPLE_OPERATOR),
            WeightRecord(record_date=second_weighing, weight=785, recorded_by=SAMPLE_OPERATOR),
        ]
    )

    # Pen C-1: vacío, en mantenimiento
    pen_c1 = Pen(
        pen_id="pen-003",
        name="Pen C-1",
        operator_email=SAMPLE_OPERATOR,
        capacity=20,
        current=0,
        status=PenStatus.MAINTENANCE,
        cattle_type=CattleType.MIXED,
        is_crossbred=True,
        feed_type="N/A",
        starting_weight=600,
        current_weight=600,
        market_weight=1275,
        average_daily_gain=3.0,
    )
    pen_c1.weight_history.append(
        WeightRecord(record_date=first_weighing, weight=600, recorded_by=SAMPLE_OPERATOR)
    )

    db.add_all([pen_a1, pen_b2, pen_c1])
    db.commit()


def _standard_growth_schedule(schedule_id: str, position: int, time: str) -> FeedingSchedule:
    return FeedingSchedule(
        schedule_id=schedule_id,
        position=position,
        time=time,
        total_amount=38,
        unit="lbs",
        ingredients=[
            _ingredient("Corn Silage", "Feedstuff", 22, 57.9, nutrition=("8.0%", "3.2%", "22%", "65%")),
            _ingredient("Cottonseed Meal", "Protein", 8, 21.1, nutrition=("41%", "5.8%", "12%", "10%")),
            _ingredient("Wheat Middlings", "Grain", 6, 15.8, nutrition=("17%", "4.2%", "9%", "12%")),
            _ingredient("Limestone", "Mineral", 1.5, 3.9),
            _ingredient("Trace Mineral Mix", "Supplement", 0.5, 1.3),
        ],
        total_nutrition=_nutrition("16.8%", "4.1%", "18.2%", "45.8%"),
    )


def seed_feeding_plans(db: Session, today: Optional[date] = None) -> None:
    if db.query(FeedingPlan).count() > 0:
        return

    today = today or date.today()

    high_protein = FeedingPlan(
        plan_id="PLAN-001",
        pen_id="pen-001",
        pen_name="Pen A-1",
        plan_name="High Protein Growth Phase",
        start_date=today - timedelta(days=15),
        days_to_feed=45,
        current_day=16,
        status=PlanStatus.ACTIVE,
        feed_type="High Protein Mix",
        operator_email=SAMPLE_OPERATOR,
    )
    high_protein.schedules.append(
        FeedingSchedule(
            schedule_id="SCH-001-1",
            position=0,
            time="7:00 AM",
            total_amount=45,
            unit="lbs",
            ingredients=[
                _ingredient("Corn Grain", "Grain", 20, 44.4, nutrition=("8.5%", "3.8%", "2.2%", "14%")),
                _ingredient("Soybean Meal", "Protein", 12, 26.7, nutrition=("48%", "1.5%", "7%", "12%")),
                _ingredient("Alfalfa Hay", "Feedstuff", 10, 22.2, nutrition=("17%", "2.5%", "25%", "10%")),
                _ingredient(
                    "Vitamin E Supplement", "Supplement", 2, 2.8,
                    unit="oz", nutrition=("0%", "0%", "0%", "0%"),
                ),
                _ingredient("Salt Mix", "Mineral", 1, 2.2),
            ],
            total_nutrition=_nutrition("18.2%", "2.8%", "8.5%", "12.5%"),
        )
    )

    standard_growth = FeedingPlan(
        plan_id="PLAN-002",
        pen_id="pen-002",
        pen_name="Pen B-2",
        plan_name="Standard Growth Program",
        start_date=today - timedelta(days=8),
        days_to_feed=60,
        current_day=9,
        status=PlanStatus.ACTIVE,
        feed_type="Standard Growth Mix",
        operator_email=SAMPLE_OPERATOR,
    )
    standard_growth.schedules.extend(
        [
            _standard_growth_schedule("SCH-002-1", 0, "6:30 AM"),
            _standard_growth_schedule("SCH-002-2", 1, "5:00 PM"),
        ]
    )

    finishing = FeedingPlan(
        plan_id="PLAN-003",
        pen_id="pen-003",
        pen_name="Pen C-1",
        plan_name="Finishing Ration Phase 1",
        start_date=today + timedelta(days=3),
        days_to_feed=30,
        current_day=0,
        status=PlanStatus.UPCOMING,
        feed_type="Finishing Ration",
        operator_email=SAMPLE_OPERATOR,
    )
    finishing.schedules.append(
        FeedingSchedule(
            schedule_id="SCH-003-1",
            position=0,
            time="8:00 AM",
            total_amount=52,
            unit="lbs",
            ingredients=[
                _ingredient("Rolled Barley", "Grain", 25, 48.1, nutrition=("11.5%", "2.1%", "5.8%", "12%")),
                _ingredient("Canola Meal", "Protein", 15, 28.8, nutrition=("36%", "3.5%", "11%", "12%")),
                _ingredient("Grass Hay", "Feedstuff", 8, 15.4, nutrition=("12%", "2.8%", "30%", "15%")),
                _ingredient("Molasses", "Supplement", 3, 5.8, nutrition=("3%", "0.1%", "0%", "25%")),
                _ingredient("Dicalcium Phosphate", "Mineral", 1, 1.9),
            ],
            total_nutrition=_nutrition("19.5%", "2.7%", "12.8%", "14.2%"),
        )
    )

    db.add_all([high_protein, standard_growth, finishing])
    db.commit()


def seed_schedule_changes(db: Session, today: Optional[date] = None) -> None:
    if db.query(ScheduleChange).count() > 0:
        return

    today = today or date.today()

    changes = [
        ScheduleChange(
            change_id="CHANGE-001",
            pen_id="pen-001",
            pen_name="Pen A-1",
            change_type=ChangeType.PLAN_END,
            change_date=today + timedelta(days=29),
            current_plan="High Protein Growth Phase",
            description="Current feeding plan will end, transition to finishing phase",
            operator_email=SAMPLE_OPERATOR,
        ),
        ScheduleChange(
            change_id="CHANGE-002",
            pen_id="pen-003",
            pen_name="Pen C-1",
            change_type=ChangeType.PLAN_START,
            change_date=today + timedelta(days=3),
            new_plan="Finishing Ration Phase 1",
            description="Begin new finishing ration feeding plan",
            operator_email=SAMPLE_OPERATOR,
        ),
        ScheduleChange(
            change_id="CHANGE-003",
            pen_id="pen-002",
            pen_name="Pen B-2",
            change_type=ChangeType.FEED_CHANGE,
            change_date=today + timedelta(days=2),
            current_plan="Standard Growth Program",
            description="Increase feed amount from 38 lbs to 42 lbs per feeding",
            operator_email=SAMPLE_OPERATOR,
        ),
    ]

    db.add_all(changes)
    db.commit()


def seed_all(db: Session, today: Optional[date] = None) -> None:
    seed_invite_codes(db)
    seed_nutritionists(db)
    seed_pens(db)
    seed_feeding_plans(db, today=today)
    seed_schedule_changes(db, today=today)


def main() -> None:
    create_tables()
    db = SessionLocal()
    try:
        seed_all(db)
        print("✅ Seed completado: invite codes, nutritionists, pens, plans y schedule changes.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
