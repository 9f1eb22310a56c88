"""Tests for building a weekly plan from service payloads."""
import pytest

from workout_scheduler_api.clients.base import DayDescriptor, GeneratedWeek, ServicePayloadError, WorkoutDetail
from workout_scheduler_api.models import DayStatus
from workout_scheduler_api.services.plan_builder import build_weekly_plan

from factories import DAY_LABELS, WEEK_START, sample_detail, week_day


def _details():
    return [sample_detail(offset) for offset in range(7)]


class TestBuildWeeklyPlan:
    def test_builds_seven_dated_days(self, generated_week):
        plan = build_weekly_plan(generated_week, _details(), week_start=WEEK_START, user_id="user-1")

        assert plan.id == f"week-{WEEK_START.isoformat()}"
        assert plan.user_id == "user-1"
        assert [day.id for day in plan.days] == [f"day-{i}" for i in range(7)]
        assert [day.label for day in plan.days] == DAY_LABELS
        assert [day.date for day in plan.days] == [week_day(i) for i in range(7)]
        assert all(day.status == DayStatus.PENDING for day in plan.days)

    def test_training_day_exercises(self, generated_week):
        plan = build_weekly_plan(generated_week, _details(), week_start=WEEK_START, user_id="user-1")

        tuesday = plan.find_day("day-2")
        assert tuesday.focus == "Full Body"
        assert [(e.id, e.name, e.duration) for e in tuesday.exercises] == [
            ("ex-2-0", "Squats 2", 30),
            ("ex-2-1", "Rowing 2", 45),
        ]
        assert (tuesday.exercises[0].sets, tuesday.exercises[0].reps) == (3, 10)
        assert tuesday.exercises[1].sets is None
        assert not any(e.completed for e in tuesday.exercises)

    def test_rest_day_drops_detail_exercises(self, generated_week):
        plan = build_weekly_plan(generated_week, _details(), week_start=WEEK_START, user_id="user-1")

        saturday = plan.find_day("day-6")
        assert saturday.is_rest_day is True
        assert saturday.exercises == []
        assert plan.total_planned_workouts == 6
        assert plan.completed_workouts == 0

    def test_zero_duration_means_rest(self):
        week_plan = [DayDescriptor(day=label, workout="Cardio", duration=0.75) for label in DAY_LABELS]
        week_plan[3] = DayDescriptor(day="Wednesday", workout="Cardio", duration=0)
        week = GeneratedWeek(week_plan=week_plan)

        plan = build_weekly_plan(week, _details(), week_start=WEEK_START, user_id="user-1")

        assert [day.id for day in plan.days if day.is_rest_day] == ["day-3"]
        assert plan.total_planned_workouts == 6

    def test_exercise_ids_are_unique(self, generated_week):
        plan = build_weekly_plan(generated_week, _details(), week_start=WEEK_START, user_id="user-1")

        assert len(plan.exercise_ids()) == 12

    def test_empty_detail_gives_empty_training_day(self, generated_week):
        details = _details()
        details[1] = WorkoutDetail()

        plan = build_weekly_plan(generated_week, details, week_start=WEEK_START, user_id="user-1")

        monday = plan.find_day("day-1")
        assert monday.is_rest_day is False
        assert monday.exercises == []

    def test_wrong_day_count_is_rejected(self, generated_week):
        short_week = generated_week.model_copy(update={"week_plan": generated_week.week_plan[:5]})

        with pytest.raises(ServicePayloadError, match="expected 7"):
            build_weekly_plan(short_week, _details(), week_start=WEEK_START, user_id="user-1")

    def test_missing_details_are_rejected(self, generated_week):
        with pytest.raises(ServicePayloadError):
            build_weekly_plan(generated_week, _details()[:6], week_start=WEEK_START, user_id="user-1")
