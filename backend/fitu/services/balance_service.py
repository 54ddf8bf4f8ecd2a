import logging
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fitu.crud import exercise_log as crud_exercise_log
from fitu.crud import food_entry as crud_food_entry
from fitu.crud import user as crud_user
from fitu.exceptions import CalculationError
from fitu.schemas.balance import BalanceSummary, DailyBalance, QuickStats, WeeklyBalance, WeeklyTotals
from fitu.utils.dates import day_window, local_today

logger = logging.getLogger(__name__)


def compute_daily_balance(day: date, food_calories: int, exercise_calories: int, daily_goal: int) -> DailyBalance:
    """
    Core formula: Net Calories = Food Calories - Exercise Calories,
    then compare Net against the daily goal. A goal of 0 means "no goal set".
    """
    net_calories = food_calories - exercise_calories
    calorie_balance = daily_goal - net_calories

    if daily_goal > 0:
        is_under_goal = net_calories <= daily_goal
        is_over_goal = not is_under_goal
        goal_percentage = round(net_calories / daily_goal * 100)
        status = "UNDER_GOAL" if is_under_goal else "OVER_GOAL"
    else:
        is_under_goal = True
        is_over_goal = False
        goal_percentage = 0
        status = "NO_GOAL_SET"

    return DailyBalance(
        date=day.isoformat(),
        food_calories=food_calories,
        exercise_calories=exercise_calories,
        net_calories=net_calories,
        daily_goal=daily_goal,
        calorie_balance=calorie_balance,
        is_under_goal=is_under_goal,
        is_over_goal=is_over_goal,
        goal_percentage=goal_percentage,
        status=status,
        remaining_calories=calorie_balance if (daily_goal > 0 and is_under_goal) else 0,
        excess_calories=abs(calorie_balance) if (daily_goal > 0 and is_over_goal) else 0,
    )


class BalanceService:
    """
    Read-only calorie balance calculations for a user.
    An unknown user is treated as a new account: zero calories, no goal.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_daily_food_calories(self, user_id: str, day: date) -> int:
        start, end = day_window(day)
        try:
            entries = crud_food_entry.get_food_entries_between(self.db, user_id, start, end)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to read food entries for user {user_id} on {day}: {e}")
            raise CalculationError(f"Error calculating daily food calories: {e}", user_id, day) from e

        return round(sum(entry.total_calories for entry in entries))

    def get_daily_exercise_calories(self, user_id: str, day: date) -> int:
        start, end = day_window(day)
        try:
            logs = crud_exercise_log.get_exercise_logs_between(self.db, user_id, start, end)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to read exercise logs for user {user_id} on {day}: {e}")
            raise CalculationError(f"Error calculating daily exercise calories: {e}", user_id, day) from e

        return round(sum(log.calories_burned or 0 for log in logs))

    def get_user_daily_goal(self, user_id: str) -> int:
        """Daily calorie goal, or 0 when unset, unknown or unreadable."""
        try:
            user = crud_user.get_user(self.db, user_id)
        except Exception as e:
            self.db.rollback()
            logger.warning(f"Could not fetch daily goal for user {user_id}, defaulting to 0: {e}")
            return 0

        if not user or not user.daily_calorie_goal:
            return 0
        return int(user.daily_calorie_goal)

    def calculate_daily_balance(self, user_id: str, day: Optional[date] = None) -> DailyBalance:
        day = day or local_today()

        food_calories = self.get_daily_food_calories(user_id, day)
        exercise_calories = self.get_daily_exercise_calories(user_id, day)
        daily_goal = self.get_user_daily_goal(user_id)

        return compute_daily_balance(day, food_calories, exercise_calories, daily_goal)

    def get_weekly_balance(self, user_id: str, week_start: Optional[date] = None) -> WeeklyBalance:
        """Balance for 7 consecutive days starting at `week_start`."""
        week_start = week_start or local_today()

        daily_balances = [
            self.calculate_daily_balance(user_id, week_start + timedelta(days=offset))
            for offset in range(7)
        ]

        totals = WeeklyTotals()
        for day in daily_balances:
            totals.total_food += day.food_calories
            totals.total_exercise += day.exercise_calories
            totals.total_net += day.net_calories
            totals.days_under_goal += 1 if day.is_under_goal else 0
            totals.days_over_goal += 1 if day.is_over_goal else 0

        return WeeklyBalance(
            week_start=week_start.isoformat(),
            daily_balances=daily_balances,
            weekly_totals=totals,
            weekly_average_net=round(totals.total_net / 7),
            success_rate=round(totals.days_under_goal / 7 * 100),
        )

    def get_summary(self, user_id: str, today: Optional[date] = None) -> BalanceSummary:
        balance = self.calculate_daily_balance(user_id, today)

        quick_stats = QuickStats(
            calories_remaining=balance.remaining_calories,
            calories_over=balance.excess_calories,
            can_eat_more=balance.is_under_goal and balance.daily_goal > 0,
            goal_completion="No goal set" if balance.daily_goal == 0 else f"{balance.goal_percentage}% of goal",
            net_calories_today=balance.net_calories,
        )
        return BalanceSummary(today=balance, quick_stats=quick_stats)
